"""
dynstr — Growable NUL-terminated byte strings for Python

Build strings piecewise with printf-style append and prepend, without doing
capacity arithmetic by hand. Allocation and formatting failures come back as
result codes, and a failed call never leaves a half-written string behind.

Quick Start:
    >>> from dynstr import DynStr, DynStrErr
    >>> d = DynStr()
    >>> d.append("id=%d", 7)
    <DynStrErr.OK: 0>
    >>> d.prepend("prefix-")
    <DynStrErr.OK: 0>
    >>> bytes(d)
    b'prefix-id=7'

    >>> # Deep copy without re-formatting
    >>> copy = DynStr()
    >>> copy.dup(d)
    <DynStrErr.OK: 0>
    >>> d.free(); copy.free()

Bounded Growth:
    >>> from dynstr import HeapAllocator
    >>> small = DynStr(allocator=HeapAllocator(max_size=4))
    >>> small.append("too long") is DynStrErr.ALLOC
    True
    >>> small.is_empty
    True

Installation:
    pip install dynstr              # Core (zero deps)
"""

from dynstr.allocator import UNLIMITED, HeapAllocator
from dynstr.config import (
    BufferConfig,
    buffer_config_context,
    get_buffer_config,
    reset_buffer_config,
    set_buffer_config,
)
from dynstr.core import DynStr, dup
from dynstr.errors import (
    AllocationError,
    DynStrErr,
    DynStrError,
    FormattingError,
    InvalidSourceError,
    InvalidStateError,
)
from dynstr.formatting import PrintfFormatter
from dynstr.profiling import BufferAccumulator, get_buffer_accumulator, profiled_buffers
from dynstr.protocols import Allocator, Formatter

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Core
    "DynStr",
    "dup",
    # Results and errors
    "DynStrErr",
    "DynStrError",
    "AllocationError",
    "FormattingError",
    "InvalidStateError",
    "InvalidSourceError",
    # Collaborators
    "Allocator",
    "Formatter",
    "HeapAllocator",
    "PrintfFormatter",
    "UNLIMITED",
    # Configuration (ContextVar-based)
    "BufferConfig",
    "get_buffer_config",
    "set_buffer_config",
    "reset_buffer_config",
    "buffer_config_context",
    # Profiling
    "BufferAccumulator",
    "profiled_buffers",
    "get_buffer_accumulator",
]
