"""printf-style formatting collaborator.

Implements the measure/render contract on top of Python's ``%`` operator.
``str`` templates are formatted as text and encoded; ``bytes`` templates are
formatted as bytes directly, so ``%s`` then expects bytes-like values.

Example:
    >>> from dynstr.formatting import PrintfFormatter
    >>> fmt = PrintfFormatter()
    >>> fmt.measure("id=%d", (7,))
    4
    >>> buf = bytearray(4)
    >>> fmt.render(memoryview(buf), "id=%d", (7,))
    4
    >>> bytes(buf)
    b'id=7'

"""

from __future__ import annotations

from collections.abc import Mapping

from dynstr.errors import FormattingError
from dynstr.protocols import Template, Values
from dynstr.utils.logger import get_logger

logger = get_logger(__name__)


class PrintfFormatter:
    """Formatter backed by the ``%`` operator.

    A single ``Mapping`` value selects named substitution
    (``"%(key)s"``); any other value list is used positionally.

    Thread Safety:
        Stateless apart from immutable encoding settings.

    """

    __slots__ = ("encoding", "errors")

    def __init__(self, encoding: str = "utf-8", errors: str = "strict") -> None:
        """Initialize formatter.

        Args:
            encoding: Codec applied to ``str`` templates after formatting
            errors: Codec error policy (see ``str.encode``)
        """
        self.encoding = encoding
        self.errors = errors

    def format(self, template: Template, values: Values) -> bytes:
        """Render ``template`` against ``values`` to a new bytes object.

        Raises:
            FormattingError: If the combination cannot be rendered
        """
        args = _arguments(values)
        try:
            if isinstance(template, str):
                return (template % args).encode(self.encoding, self.errors)
            if isinstance(template, (bytes, bytearray)):
                return bytes(template % args)
        except (TypeError, ValueError, KeyError) as e:
            logger.debug("Cannot format %r: %s", template, e)
            raise FormattingError(str(e), template=template) from e
        raise FormattingError(
            f"template must be str or bytes, not {type(template).__name__}"
        )

    def measure(self, template: Template, values: Values) -> int:
        """Return the byte count of the rendering, writing nothing."""
        return len(self.format(template, values))

    def render(self, region: memoryview, template: Template, values: Values) -> int:
        """Write the rendering into ``region``.

        Args:
            region: Writable destination, at least as large as the measured size
            template: printf-style template
            values: Values consumed by the template

        Returns:
            Number of bytes written

        Raises:
            FormattingError: If rendering fails or does not fit ``region``
        """
        data = self.format(template, values)
        n = len(data)
        if n > len(region):
            raise FormattingError(
                f"rendered {n} bytes into a {len(region)}-byte region", template=template
            )
        region[:n] = data
        return n

    def __repr__(self) -> str:
        return f"PrintfFormatter(encoding={self.encoding!r}, errors={self.errors!r})"


def _arguments(values: Values) -> tuple | Mapping:
    if isinstance(values, Mapping):
        return values
    if len(values) == 1 and isinstance(values[0], Mapping):
        return values[0]
    return tuple(values)


__all__ = ["PrintfFormatter"]
