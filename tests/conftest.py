"""Shared fixtures: allocator and formatter doubles for failure injection."""

from __future__ import annotations

import pytest

from dynstr import DynStr, HeapAllocator, PrintfFormatter, reset_buffer_config
from dynstr.errors import AllocationError, FormattingError


class ArmedAllocator(HeapAllocator):
    """HeapAllocator that fails the next allocate/resize once armed."""

    def __init__(self) -> None:
        super().__init__()
        self.armed = False

    def _trip(self, size: int) -> None:
        if self.armed:
            self.armed = False
            raise AllocationError("Simulated allocation failure", requested=size)

    def allocate(self, size: int) -> bytearray:
        self._trip(size)
        return super().allocate(size)

    def resize(self, buf: bytearray, size: int) -> bytearray:
        self._trip(size)
        return super().resize(buf, size)


class BrokenRenderFormatter(PrintfFormatter):
    """Measures correctly, then fails while rendering.

    ``mode="raise"`` raises FormattingError after scribbling into the
    region; ``mode="short"`` writes one byte less than measured.
    """

    def __init__(self, mode: str = "raise") -> None:
        super().__init__()
        self.mode = mode

    def render(self, region: memoryview, template, values) -> int:
        region[:] = b"#" * len(region)
        if self.mode == "raise":
            raise FormattingError("Simulated render failure", template=template)
        return max(len(region) - 1, 0)


@pytest.fixture(autouse=True)
def _reset_config():
    yield
    reset_buffer_config()


@pytest.fixture
def allocator() -> HeapAllocator:
    return HeapAllocator()


@pytest.fixture
def armed_allocator() -> ArmedAllocator:
    return ArmedAllocator()


@pytest.fixture
def broken_render_formatter() -> BrokenRenderFormatter:
    return BrokenRenderFormatter()


@pytest.fixture
def short_render_formatter() -> BrokenRenderFormatter:
    return BrokenRenderFormatter(mode="short")


@pytest.fixture
def populated(allocator: HeapAllocator) -> DynStr:
    """A string holding b"hello"."""
    d = DynStr(allocator=allocator)
    d.append("hello")
    return d
