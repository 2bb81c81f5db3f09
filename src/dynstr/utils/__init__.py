"""Utility modules for dynstr.

Provides:
- logger: get_logger for logging
"""

from dynstr.utils.logger import get_logger

__all__ = [
    "get_logger",
]
