"""Tests for dup(): preconditions, exact copy and independence."""

from dynstr import DynStr, DynStrErr, HeapAllocator, dup


class TestDupSuccess:
    def test_copies_content_and_length(self, populated: DynStr) -> None:
        dst = DynStr()
        assert dst.dup(populated) is DynStrErr.OK
        assert dst.data == b"hello"
        assert dst.length == 5
        assert dst.raw == populated.raw

    def test_allocates_exactly_length_plus_one(self, populated: DynStr) -> None:
        alloc = HeapAllocator()
        dst = DynStr(allocator=alloc)
        dst.dup(populated)
        assert dst.capacity == 6
        assert alloc.live_bytes == 6

    def test_module_level_function(self, populated: DynStr) -> None:
        dst = DynStr()
        assert dup(dst, populated) is DynStrErr.OK
        assert dst == populated

    def test_same_result_as_formatted_append(self, populated: DynStr) -> None:
        via_dup = DynStr()
        via_append = DynStr()
        via_dup.dup(populated)
        via_append.append(b"%s", populated.data)
        assert via_dup.raw == via_append.raw
        assert via_dup.length == via_append.length

    def test_source_after_free_and_reinit(self, populated: DynStr) -> None:
        dst = DynStr()
        dst.append("old")
        dst.free()
        assert dst.dup(populated) is DynStrErr.OK


class TestDupIndependence:
    def test_append_to_copy_leaves_source(self, populated: DynStr) -> None:
        dst = DynStr()
        dst.dup(populated)
        dst.append(" world")
        assert populated.data == b"hello"
        assert dst.data == b"hello world"

    def test_prepend_to_source_leaves_copy(self, populated: DynStr) -> None:
        dst = DynStr()
        dst.dup(populated)
        populated.prepend(">> ")
        assert dst.data == b"hello"

    def test_free_source_leaves_copy(self, populated: DynStr) -> None:
        dst = DynStr()
        dst.dup(populated)
        populated.free()
        assert dst.data == b"hello"


class TestDupPreconditions:
    def test_populated_destination_rejected(self, populated: DynStr) -> None:
        dst = DynStr()
        dst.append("keep")
        assert dst.dup(populated) is DynStrErr.INIT
        assert dst.data == b"keep"
        assert dst.length == 4

    def test_populated_empty_destination_rejected(self, populated: DynStr) -> None:
        """Zero length is not enough: the destination must hold no buffer."""
        dst = DynStr()
        dst.append("")
        assert dst.dup(populated) is DynStrErr.INIT
        assert dst.raw == b"\x00"

    def test_empty_source_rejected(self) -> None:
        dst = DynStr()
        assert dst.dup(DynStr()) is DynStrErr.SRC
        assert dst.is_empty

    def test_zero_length_source_rejected(self) -> None:
        src = DynStr()
        src.append("")
        dst = DynStr()
        assert dst.dup(src) is DynStrErr.SRC
        assert dst.is_empty

    def test_destination_checked_before_source(self) -> None:
        dst = DynStr()
        dst.append("x")
        assert dst.dup(DynStr()) is DynStrErr.INIT

    def test_allocation_failure_leaves_destination_empty(self, populated: DynStr) -> None:
        dst = DynStr(allocator=HeapAllocator(max_size=5))
        assert dst.dup(populated) is DynStrErr.ALLOC
        assert dst.is_empty
        assert populated.data == b"hello"
