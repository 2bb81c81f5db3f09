"""Benchmark dup() against re-formatting the same content.

dup() copies bytes directly; append(b"%s", src.data) goes through the
formatter's measure and render passes.

Run with:
    pytest benchmarks/benchmark_dup.py -v --benchmark-only

Or for quick comparison:
    python benchmarks/benchmark_dup.py
"""

import time

from dynstr import DynStr


def make_source(size: int) -> DynStr:
    src = DynStr()
    src.append(b"%s", b"x" * size)
    return src


def copy_with_dup(src: DynStr) -> None:
    dst = DynStr()
    dst.dup(src)
    dst.free()


def copy_with_append(src: DynStr) -> None:
    dst = DynStr()
    dst.append(b"%s", src.data)
    dst.free()


def time_copies(fn, src: DynStr, iterations: int = 10_000) -> float:
    start = time.perf_counter()
    for _ in range(iterations):
        fn(src)
    return (time.perf_counter() - start) / iterations


def main() -> None:
    print("=" * 60)
    print("dynstr copy benchmark")
    print("=" * 60)
    for size in (16, 1024, 65536):
        src = make_source(size)
        dup_time = time_copies(copy_with_dup, src)
        append_time = time_copies(copy_with_append, src)
        print(
            f"{size:>6} bytes  dup {dup_time * 1e6:8.2f}us  "
            f"append {append_time * 1e6:8.2f}us  ({append_time / dup_time:.1f}x)"
        )


# pytest-benchmark integration
try:
    import pytest

    @pytest.mark.benchmark(group="copy")
    def test_benchmark_dup(benchmark, source):
        benchmark(copy_with_dup, source)

    @pytest.mark.benchmark(group="copy")
    def test_benchmark_append(benchmark, source):
        benchmark(copy_with_append, source)

except ImportError:
    pass  # pytest not available


if __name__ == "__main__":
    main()
