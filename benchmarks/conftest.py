"""Benchmark fixtures and configuration."""

from __future__ import annotations

import pytest

from dynstr import DynStr


@pytest.fixture(params=[16, 1024, 65536], ids=lambda n: f"{n}B")
def source(request) -> DynStr:
    """Source string of the parametrized size."""
    src = DynStr()
    src.append(b"%s", b"x" * request.param)
    return src
