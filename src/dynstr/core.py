"""Dynamic string engine.

A DynStr owns one growable, NUL-terminated byte buffer and its logical
length. Text is added with printf-style ``append``/``prepend``; the engine
measures the rendering first, grows the buffer exactly as much as needed,
then renders into the reserved region.

States:
    Empty: no buffer, length 0 (after construction, ``init()`` or ``free()``)
    Populated: buffer of at least ``length + 1`` bytes, ``buf[length] == 0``

Every fallible operation returns a :class:`~dynstr.errors.DynStrErr`. A
failed operation leaves the string byte-for-byte and length-for-length as it
was before the call.

Example:
    >>> from dynstr import DynStr
    >>> d = DynStr()
    >>> d.append("id=%d", 7)
    <DynStrErr.OK: 0>
    >>> d.prepend("prefix-")
    <DynStrErr.OK: 0>
    >>> d.data, d.length
    (b'prefix-id=7', 11)

Thread Safety:
    A DynStr is not safe for concurrent mutation. Guard shared instances
    externally.

"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from dynstr.config import get_buffer_config
from dynstr.errors import AllocationError, DynStrErr, FormattingError
from dynstr.profiling import get_buffer_accumulator
from dynstr.protocols import Allocator, Formatter, Template, Values


class DynStr:
    """Growable, NUL-terminated byte string.

    The allocator and formatter are resolved once, at construction, from the
    arguments or else from the active :class:`~dynstr.config.BufferConfig`.

    Attributes:
        allocator: Storage owner for this string's buffer
        formatter: Measure/render collaborator for formatted operations
        encoding: Codec used by decode() and str(), fixed at construction

    """

    __slots__ = ("_buf", "_len", "allocator", "encoding", "formatter")

    def __init__(
        self,
        *,
        allocator: Allocator | None = None,
        formatter: Formatter | None = None,
    ) -> None:
        config = get_buffer_config()
        self.allocator: Allocator = allocator if allocator is not None else config.make_allocator()
        self.formatter: Formatter = formatter if formatter is not None else config.make_formatter()
        self.encoding: str = getattr(self.formatter, "encoding", None) or config.encoding
        self.init()

    def init(self) -> None:
        """Set this string to the Empty state.

        Drops the buffer reference without returning it to the allocator;
        use :meth:`free` to release a Populated string.
        """
        self._buf: bytearray | None = None
        self._len = 0

    # =========================================================================
    # Read access
    # =========================================================================

    @property
    def data(self) -> bytes:
        """Content bytes without the terminator (``b""`` when Empty)."""
        if self._buf is None:
            return b""
        return bytes(self._buf[: self._len])

    @property
    def raw(self) -> bytes:
        """Content bytes followed by the terminator (``b""`` when Empty)."""
        if self._buf is None:
            return b""
        return bytes(self._buf[: self._len + 1])

    @property
    def length(self) -> int:
        """Number of content bytes, terminator excluded."""
        return self._len

    @property
    def capacity(self) -> int:
        """Bytes currently allocated (0 when Empty)."""
        return 0 if self._buf is None else len(self._buf)

    @property
    def is_empty(self) -> bool:
        """True only in the Empty state (no buffer and zero length)."""
        return self._buf is None and self._len == 0

    def decode(self, encoding: str | None = None, errors: str = "strict") -> str:
        """Decode the content, defaulting to the encoding captured at construction."""
        return self.data.decode(encoding or self.encoding, errors)

    def __len__(self) -> int:
        return self._len

    def __bytes__(self) -> bytes:
        return self.data

    def __str__(self) -> str:
        return self.decode()

    def __eq__(self, other: object) -> bool:
        if isinstance(other, DynStr):
            return self.data == other.data
        if isinstance(other, (bytes, bytearray)):
            return self.data == bytes(other)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        if self._buf is None:
            return "DynStr(<empty>)"
        return f"DynStr({self.data!r}, length={self._len})"

    # =========================================================================
    # Mutation
    # =========================================================================

    def append(self, template: Template, *values: Any) -> DynStrErr:
        """Append ``template % values`` to the end of the string.

        Args:
            template: printf-style template (str or bytes)
            *values: Values substituted into the template

        Returns:
            OK, FORMAT if the template cannot be rendered, or ALLOC if the
            buffer cannot grow. The string is unchanged on failure.
        """
        return self.vappend(template, values)

    def vappend(self, template: Template, values: Values | Iterable[Any]) -> DynStrErr:
        """Like :meth:`append`, taking the values as a single sequence or mapping.

        A ``str`` or ``bytes`` object passed as ``values`` is treated as one
        value, so ``vappend("%s", "ab")`` appends ``b"ab"``.
        """
        args = _replayable(values)
        result, n = self._append(template, args)
        _record("appends", result, n)
        return result

    def prepend(self, template: Template, *values: Any) -> DynStrErr:
        """Insert ``template % values`` before the current content.

        Returns:
            OK, FORMAT or ALLOC, with the same failure guarantees as append.
        """
        return self.vprepend(template, values)

    def vprepend(self, template: Template, values: Values | Iterable[Any]) -> DynStrErr:
        """Like :meth:`prepend`, taking the values as a single sequence or mapping."""
        args = _replayable(values)
        result, n = self._prepend(template, args)
        _record("prepends", result, n)
        return result

    def dup(self, src: DynStr) -> DynStrErr:
        """Copy ``src`` into this string, which must be Empty.

        Equivalent to ``self.append(b"%s", src.data)`` but copies the bytes
        directly instead of going through the formatter.

        Returns:
            OK, INIT if this string is not Empty, SRC if ``src`` has no
            content, or ALLOC if the copy cannot be allocated.
        """
        result, n = self._dup(src)
        _record("dups", result, n)
        return result

    def free(self) -> None:
        """Release the buffer and return to the Empty state.

        Safe to call repeatedly; a no-op when already Empty.
        """
        if self._buf is not None:
            self.allocator.release(self._buf)
            _record("frees", DynStrErr.OK)
        self.init()

    def _measure(self, template: Template, args: Values) -> int | None:
        try:
            return self.formatter.measure(template, args)
        except FormattingError:
            return None

    def _render(self, buf: bytearray, start: int, n: int, template: Template, args: Values) -> bool:
        try:
            with memoryview(buf) as view, view[start : start + n] as region:
                written = self.formatter.render(region, template, args)
        except FormattingError:
            return False
        return written == n

    def _grow(self, size: int) -> bytearray:
        if self._buf is None:
            return self.allocator.allocate(size)
        if len(self._buf) >= size:
            return self._buf
        return self.allocator.resize(self._buf, size)

    def _shrink(self, buf: bytearray, size: int) -> bytearray:
        # A refused shrink keeps the larger buffer; capacity may exceed length + 1.
        try:
            return self.allocator.resize(buf, size)
        except AllocationError:
            buf[size:] = bytes(len(buf) - size)
            return buf

    def _append(self, template: Template, args: Values) -> tuple[DynStrErr, int]:
        n = self._measure(template, args)
        if n is None:
            return DynStrErr.FORMAT, 0

        old_len = self._len
        was_empty = self._buf is None
        try:
            buf = self._grow(old_len + n + 1)
        except AllocationError:
            return DynStrErr.ALLOC, 0
        self._buf = buf

        if not self._render(buf, old_len, n, template, args):
            if was_empty:
                self.allocator.release(buf)
                self._buf = None
            else:
                self._buf = self._shrink(buf, old_len + 1)
                self._buf[old_len] = 0
            return DynStrErr.FORMAT, 0

        buf[old_len + n] = 0
        self._len = old_len + n
        return DynStrErr.OK, n

    def _prepend(self, template: Template, args: Values) -> tuple[DynStrErr, int]:
        n = self._measure(template, args)
        if n is None:
            return DynStrErr.FORMAT, 0

        old_len = self._len
        old_buf = self._buf
        try:
            buf = self.allocator.allocate(old_len + n + 1)
        except AllocationError:
            return DynStrErr.ALLOC, 0

        # Old content goes to the tail first, new text to [0, n) after.
        if old_buf is not None:
            buf[n : n + old_len] = old_buf[:old_len]
        buf[n + old_len] = 0

        if not self._render(buf, 0, n, template, args):
            self.allocator.release(buf)
            return DynStrErr.FORMAT, 0

        if old_buf is not None:
            self.allocator.release(old_buf)
        self._buf = buf
        self._len = old_len + n
        return DynStrErr.OK, n

    def _dup(self, src: DynStr) -> tuple[DynStrErr, int]:
        if not self.is_empty:
            return DynStrErr.INIT, 0
        if src._buf is None or not src._len:
            return DynStrErr.SRC, 0

        size = src._len + 1
        try:
            buf = self.allocator.allocate(size)
        except AllocationError:
            return DynStrErr.ALLOC, 0
        buf[:size] = src._buf[:size]
        self._buf = buf
        self._len = src._len
        return DynStrErr.OK, src._len


def dup(dst: DynStr, src: DynStr) -> DynStrErr:
    """Copy ``src`` into the Empty string ``dst``. See :meth:`DynStr.dup`."""
    return dst.dup(src)


def _replayable(values: Values | Iterable[Any]) -> Values:
    # Measure and render each walk the values; one-shot iterables are frozen.
    # A lone str or bytes is one value, not a sequence of characters.
    if isinstance(values, (str, bytes, bytearray)):
        return (values,)
    if isinstance(values, (tuple, Mapping)):
        return values
    return tuple(values)


def _record(op: str, result: DynStrErr, nbytes: int = 0) -> None:
    acc = get_buffer_accumulator()
    if acc is not None:
        acc.record(op, result, nbytes)


__all__ = ["DynStr", "dup"]
