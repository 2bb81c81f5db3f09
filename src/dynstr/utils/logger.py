"""Logger lookup for dynstr collaborators.

The engine itself never logs; only the allocator and formatter emit DEBUG
records when they refuse a request. All of them live under the ``dynstr``
logger, so one switch turns them on:

    >>> import logging
    >>> logging.getLogger("dynstr").setLevel(logging.DEBUG)
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Return the stdlib logger for ``name`` inside the ``dynstr`` namespace.

    Args:
        name: Module name (typically __name__); prefixed with "dynstr." if needed

    Example:
        >>> get_logger("dynstr.allocator").name
        'dynstr.allocator'
        >>> get_logger("plugin").name
        'dynstr.plugin'
    """
    if name != "dynstr" and not name.startswith("dynstr."):
        name = f"dynstr.{name}"
    return logging.getLogger(name)
