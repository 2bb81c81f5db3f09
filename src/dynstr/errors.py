"""Result codes and exception classes for dynstr.

Every fallible :class:`~dynstr.core.DynStr` operation returns a
:class:`DynStrErr` instead of raising. Exceptions only travel across the
collaborator seams (allocator and formatter), where the engine catches them
and maps them back to a result code.

Example:
    >>> from dynstr import DynStr, DynStrErr
    >>> d = DynStr()
    >>> d.append("id=%d", 7)
    <DynStrErr.OK: 0>
    >>> d.append("%d", "not a number") is DynStrErr.FORMAT
    True
"""

from __future__ import annotations

from enum import IntEnum


class DynStrErr(IntEnum):
    """Closed set of results returned by dynamic string operations.

    Following the tradition, success is always zero. Error values are
    guaranteed to be non-zero but their ordering might change, so compare
    against the member names instead of their integer equivalents.
    """

    OK = 0
    ALLOC = 1
    INIT = 2
    SRC = 3
    FORMAT = 4

    @property
    def ok(self) -> bool:
        """True when the operation succeeded."""
        return self is DynStrErr.OK

    def check(self) -> None:
        """Raise the matching exception unless this result is ``OK``.

        Raises:
            DynStrError: Subclass matching the failure kind
        """
        if self is DynStrErr.OK:
            return
        raise _EXCEPTIONS[self](_MESSAGES[self])


class DynStrError(Exception):
    """Base exception for all dynstr errors.

    Attributes:
        code: Result code this exception maps to
    """

    code: DynStrErr = DynStrErr.OK

    def __init__(self, message: str = "") -> None:
        self.message = message or _MESSAGES.get(self.code, "")
        super().__init__(self.message)


class AllocationError(DynStrError):
    """Backing allocator could not satisfy a growth or allocation request."""

    code = DynStrErr.ALLOC

    def __init__(self, message: str = "", requested: int | None = None) -> None:
        """Initialize allocation error.

        Args:
            message: Error description
            requested: Number of bytes that were requested (optional)
        """
        self.requested = requested
        if requested is not None and message:
            message = f"{message} (requested {requested} bytes)"
        super().__init__(message)


class FormattingError(DynStrError):
    """Template and values could not be measured or rendered."""

    code = DynStrErr.FORMAT

    def __init__(self, message: str = "", template: str | bytes | None = None) -> None:
        """Initialize formatting error.

        Args:
            message: Error description
            template: The offending template (optional)
        """
        self.template = template
        if template is not None and message:
            message = f"{message} in template {template!r}"
        super().__init__(message)


class InvalidStateError(DynStrError):
    """Duplication target was not Empty."""

    code = DynStrErr.INIT


class InvalidSourceError(DynStrError):
    """Duplication source was unallocated or had no content."""

    code = DynStrErr.SRC


_MESSAGES: dict[DynStrErr, str] = {
    DynStrErr.ALLOC: "Allocation failed",
    DynStrErr.INIT: "Destination string is not empty",
    DynStrErr.SRC: "Source string has no data",
    DynStrErr.FORMAT: "Formatting failed",
}

_EXCEPTIONS: dict[DynStrErr, type[DynStrError]] = {
    DynStrErr.ALLOC: AllocationError,
    DynStrErr.INIT: InvalidStateError,
    DynStrErr.SRC: InvalidSourceError,
    DynStrErr.FORMAT: FormattingError,
}


__all__ = [
    "AllocationError",
    "DynStrErr",
    "DynStrError",
    "FormattingError",
    "InvalidSourceError",
    "InvalidStateError",
]
