"""Tests for the printf-style formatter."""

import pytest

from dynstr.errors import FormattingError
from dynstr.formatting import PrintfFormatter


@pytest.fixture
def fmt() -> PrintfFormatter:
    return PrintfFormatter()


class TestMeasure:
    def test_counts_bytes_not_characters(self, fmt: PrintfFormatter) -> None:
        assert fmt.measure("%s", ("é",)) == 2

    def test_positional(self, fmt: PrintfFormatter) -> None:
        assert fmt.measure("%d-%d", (10, 200)) == 6

    def test_named(self, fmt: PrintfFormatter) -> None:
        assert fmt.measure("%(a)s", {"a": "xyz"}) == 3

    def test_width(self, fmt: PrintfFormatter) -> None:
        assert fmt.measure("%8.3f", (3.14159,)) == 8

    def test_empty(self, fmt: PrintfFormatter) -> None:
        assert fmt.measure("", ()) == 0

    def test_malformed(self, fmt: PrintfFormatter) -> None:
        with pytest.raises(FormattingError) as info:
            fmt.measure("%d", ("x",))
        assert info.value.template == "%d"

    def test_bad_template_type(self, fmt: PrintfFormatter) -> None:
        with pytest.raises(FormattingError):
            fmt.measure(None, ())  # type: ignore[arg-type]


class TestRender:
    def test_writes_into_region(self, fmt: PrintfFormatter) -> None:
        buf = bytearray(b"........")
        view = memoryview(buf)
        assert fmt.render(view[2:6], "%s", ("abcd",)) == 4
        assert buf == bytearray(b"..abcd..")

    def test_region_too_small(self, fmt: PrintfFormatter) -> None:
        buf = bytearray(2)
        with pytest.raises(FormattingError):
            fmt.render(memoryview(buf), "abc", ())
        assert buf == bytearray(2)

    def test_bytes_template(self, fmt: PrintfFormatter) -> None:
        buf = bytearray(3)
        fmt.render(memoryview(buf), b"%s", (b"\x00\x01\x02",))
        assert buf == bytearray(b"\x00\x01\x02")


class TestEncoding:
    def test_custom_encoding(self) -> None:
        assert PrintfFormatter(encoding="latin-1").format("é", ()) == b"\xe9"

    def test_replace_errors(self) -> None:
        fmt = PrintfFormatter(encoding="ascii", errors="replace")
        assert fmt.format("caf%s", ("é",)) == b"caf?"

    def test_strict_errors(self) -> None:
        with pytest.raises(FormattingError):
            PrintfFormatter(encoding="ascii").format("é", ())

    def test_repr(self) -> None:
        assert repr(PrintfFormatter()) == "PrintfFormatter(encoding='utf-8', errors='strict')"
