"""ContextVar-based buffer configuration for dynstr.

Provides thread-local configuration using Python's ContextVars (PEP 567).
A DynStr reads the active config once, when it is constructed, and keeps the
allocator and formatter it resolved for its whole lifetime.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed.

Usage:
    from dynstr import DynStr
    from dynstr.config import BufferConfig, buffer_config_context

    with buffer_config_context(BufferConfig(max_size=4096)):
        d = DynStr()  # refuses to grow past 4 KiB

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from dynstr.protocols import Allocator, Formatter


@dataclass(frozen=True, slots=True)
class BufferConfig:
    """Immutable buffer configuration.

    Attributes:
        encoding: Codec used to turn ``str`` renderings into bytes
        encoding_errors: Codec error policy for that conversion
        max_size: Cap on a single buffer in bytes (terminator included),
            None for unlimited. Ignored when ``allocator`` is given.
        allocator: Shared allocator for new strings (None = a fresh
            HeapAllocator per string)
        formatter: Shared formatter for new strings (None = PrintfFormatter
            built from ``encoding`` and ``encoding_errors``)

    """

    encoding: str = "utf-8"
    encoding_errors: str = "strict"
    max_size: int | None = None
    allocator: "Allocator | None" = None
    formatter: "Formatter | None" = None

    @classmethod
    def from_dict(cls, config_dict: dict) -> "BufferConfig":
        """Create BufferConfig from dictionary.

        Only includes keys that are valid BufferConfig fields; unknown keys
        are silently ignored.

        Example:
            >>> BufferConfig.from_dict({"max_size": 64, "unknown_key": 1}).max_size
            64

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)

    def make_allocator(self) -> "Allocator":
        """Return the configured allocator, or build a default one."""
        if self.allocator is not None:
            return self.allocator
        from dynstr.allocator import HeapAllocator

        return HeapAllocator(max_size=self.max_size)

    def make_formatter(self) -> "Formatter":
        """Return the configured formatter, or build a default one."""
        if self.formatter is not None:
            return self.formatter
        from dynstr.formatting import PrintfFormatter

        return PrintfFormatter(encoding=self.encoding, errors=self.encoding_errors)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: BufferConfig = BufferConfig()

_buffer_config: ContextVar[BufferConfig] = ContextVar(
    "buffer_config",
    default=_DEFAULT_CONFIG,
)


def get_buffer_config() -> BufferConfig:
    """Get current buffer configuration (thread-local)."""
    return _buffer_config.get()


def set_buffer_config(config: BufferConfig) -> None:
    """Set buffer configuration for current context.

    Args:
        config: BufferConfig instance to use for this context.

    """
    _buffer_config.set(config)


def reset_buffer_config() -> None:
    """Reset to default configuration."""
    _buffer_config.set(_DEFAULT_CONFIG)


@contextmanager
def buffer_config_context(config: BufferConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Restores the previous config even if an exception is raised.

    Example:
        >>> with buffer_config_context(BufferConfig(encoding="latin-1")):
        ...     get_buffer_config().encoding
        'latin-1'

    """
    previous = _buffer_config.get()
    _buffer_config.set(config)
    try:
        yield
    finally:
        _buffer_config.set(previous)


__all__ = [
    "BufferConfig",
    "buffer_config_context",
    "get_buffer_config",
    "reset_buffer_config",
    "set_buffer_config",
]
