"""Default allocator for dynstr buffers.

Storage is a plain ``bytearray``. An optional ``max_size`` caps any single
buffer, which bounds growth and gives tests a deterministic way to trigger
allocation failure. A real ``MemoryError`` from the interpreter is reported
the same way.

Example:
    >>> from dynstr.allocator import HeapAllocator
    >>> alloc = HeapAllocator(max_size=8)
    >>> buf = alloc.allocate(4)
    >>> alloc.live_bytes
    4
    >>> alloc.resize(buf, 16)
    Traceback (most recent call last):
    ...
    dynstr.errors.AllocationError: Cannot grow buffer past max. size 8 bytes (requested 16 bytes)

"""

from __future__ import annotations

from typing import Final

from dynstr.errors import AllocationError
from dynstr.utils.logger import get_logger

logger = get_logger(__name__)

UNLIMITED: Final = None


class HeapAllocator:
    """bytearray-backed allocator with optional size cap and accounting.

    Attributes:
        max_size: Largest buffer this allocator hands out (None = unlimited)
        live_bytes: Bytes currently handed out and not yet released
        allocations: Number of successful fresh allocations
        releases: Number of buffers given back

    Thread Safety:
        Not thread-safe. Accounting counters are plain attributes.

    """

    __slots__ = ("allocations", "live_bytes", "max_size", "releases")

    def __init__(self, max_size: int | None = UNLIMITED) -> None:
        if max_size is not None and max_size < 0:
            raise ValueError(f"max_size must be non-negative, got {max_size}")
        self.max_size = max_size
        self.live_bytes = 0
        self.allocations = 0
        self.releases = 0

    def _check_size(self, size: int, action: str) -> None:
        if size < 0:
            raise AllocationError(f"Cannot {action} a negative size", requested=size)
        if self.max_size is not None and size > self.max_size:
            logger.debug("Refusing to %s %d bytes (max_size=%d)", action, size, self.max_size)
            raise AllocationError(
                f"Cannot {action} buffer past max. size {self.max_size} bytes", requested=size
            )

    def allocate(self, size: int) -> bytearray:
        """Return a fresh zero-filled buffer of ``size`` bytes.

        Raises:
            AllocationError: If ``size`` exceeds ``max_size`` or memory is exhausted
        """
        self._check_size(size, "allocate")
        try:
            buf = bytearray(size)
        except MemoryError as e:
            logger.debug("Out of memory allocating %d bytes", size)
            raise AllocationError("Out of memory", requested=size) from e
        self.live_bytes += size
        self.allocations += 1
        return buf

    def resize(self, buf: bytearray, size: int) -> bytearray:
        """Resize ``buf`` in place, preserving up to ``min(len(buf), size)`` bytes.

        New space is zero-filled. ``buf`` is untouched on failure.

        Raises:
            AllocationError: If ``size`` exceeds ``max_size`` or memory is exhausted
        """
        self._check_size(size, "grow")
        old = len(buf)
        if size > old:
            try:
                buf.extend(bytes(size - old))
            except MemoryError as e:
                logger.debug("Out of memory growing buffer to %d bytes", size)
                raise AllocationError("Out of memory", requested=size) from e
        elif size < old:
            del buf[size:]
        self.live_bytes += size - old
        return buf

    def release(self, buf: bytearray) -> None:
        """Give ``buf`` back. Its contents are cleared."""
        self.live_bytes -= len(buf)
        self.releases += 1
        buf.clear()

    def __repr__(self) -> str:
        return (
            f"HeapAllocator(max_size={self.max_size!r}, live_bytes={self.live_bytes}, "
            f"allocations={self.allocations}, releases={self.releases})"
        )


__all__ = ["HeapAllocator", "UNLIMITED"]
