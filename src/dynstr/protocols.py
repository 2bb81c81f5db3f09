"""Protocols for dynstr collaborators.

Defines the two external capabilities the engine relies on: a formatter
that can measure and render a template, and an allocator that owns the
backing storage.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Protocol

Template = str | bytes
Values = Sequence[Any] | Mapping[str, Any]


class Formatter(Protocol):
    """Two-phase formatting contract.

    ``measure`` must not write anything; ``render`` writes into a region
    that the caller already sized from a previous ``measure`` call. The
    same ``values`` are passed to both calls, so implementations must not
    consume them destructively.

    Thread Safety:
        Implementations must be stateless or use only local variables.

    """

    def measure(self, template: Template, values: Values) -> int:
        """Return the number of bytes ``template % values`` would occupy.

        Raises:
            FormattingError: If the template/value combination is malformed
        """
        ...

    def render(self, region: memoryview, template: Template, values: Values) -> int:
        """Write the rendering into ``region`` and return the bytes written.

        Raises:
            FormattingError: If rendering fails or does not fit ``region``
        """
        ...


class Allocator(Protocol):
    """Owner of the byte storage behind a dynamic string.

    Every method either succeeds or raises ``AllocationError`` without
    touching the buffer it was given.
    """

    def allocate(self, size: int) -> bytearray:
        """Return a fresh zero-filled buffer of ``size`` bytes."""
        ...

    def resize(self, buf: bytearray, size: int) -> bytearray:
        """Resize ``buf`` to ``size`` bytes, preserving its leading content.

        May return ``buf`` itself or a new object.
        """
        ...

    def release(self, buf: bytearray) -> None:
        """Give ``buf`` back to the allocator."""
        ...
