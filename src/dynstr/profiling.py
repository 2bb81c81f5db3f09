"""dynstr BufferAccumulator — opt-in profiling for buffer operations.

This module provides accumulated metrics while strings are being built:
- Operation counts (append, prepend, dup, free)
- Bytes written into buffers
- Failures by result code

Zero overhead when disabled (get_buffer_accumulator() returns None).

Example:
    from dynstr import DynStr
    from dynstr.profiling import profiled_buffers

    with profiled_buffers() as metrics:
        d = DynStr()
        d.append("id=%d", 7)

    print(metrics.summary())
    # {"total_ms": 0.01, "appends": 1, "prepends": 0, ...}

"""

from collections import Counter
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, field
from time import perf_counter
from typing import Any

from dynstr.errors import DynStrErr


@dataclass
class BufferAccumulator:
    """Accumulated metrics for dynamic string operations.

    Attributes:
        start_time: Profiling start timestamp.
        appends: Successful append/vappend calls.
        prepends: Successful prepend/vprepend calls.
        dups: Successful dup calls.
        frees: free() calls that released a buffer.
        bytes_written: Content bytes added by successful operations.
        failures: Failed calls keyed by result code name.

    """

    start_time: float = field(default_factory=perf_counter)
    appends: int = 0
    prepends: int = 0
    dups: int = 0
    frees: int = 0
    bytes_written: int = 0
    failures: Counter[str] = field(default_factory=Counter)

    def record(self, op: str, result: DynStrErr, nbytes: int = 0) -> None:
        """Record one operation.

        Args:
            op: Counter name ("appends", "prepends", "dups" or "frees").
            result: Result returned to the caller.
            nbytes: Content bytes added on success.

        """
        if result is not DynStrErr.OK:
            self.failures[result.name] += 1
            return
        setattr(self, op, getattr(self, op) + 1)
        self.bytes_written += nbytes

    @property
    def total_duration_ms(self) -> float:
        """Total profiling duration in milliseconds."""
        return (perf_counter() - self.start_time) * 1000

    def summary(self) -> dict[str, Any]:
        """Get summary of buffer metrics."""
        return {
            "total_ms": round(self.total_duration_ms, 2),
            "appends": self.appends,
            "prepends": self.prepends,
            "dups": self.dups,
            "frees": self.frees,
            "bytes_written": self.bytes_written,
            "failures": dict(self.failures),
        }


_accumulator: ContextVar[BufferAccumulator | None] = ContextVar(
    "buffer_accumulator",
    default=None,
)


def get_buffer_accumulator() -> BufferAccumulator | None:
    """Get current accumulator (None if profiling disabled)."""
    return _accumulator.get()


@contextmanager
def profiled_buffers() -> Iterator[BufferAccumulator]:
    """Context manager for profiled buffer operations.

    Creates a BufferAccumulator and makes it available via
    get_buffer_accumulator() for the duration of the with block.

    Yields:
        BufferAccumulator populated by DynStr operations.

    """
    acc = BufferAccumulator()
    token: Token[BufferAccumulator | None] = _accumulator.set(acc)
    try:
        yield acc
    finally:
        _accumulator.reset(token)
