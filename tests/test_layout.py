"""
Tests for the struct layout engine.
"""

import itertools

import numpy as np
import pytest

from structgrid.layout import (
    DEFAULT_FIELDS,
    FieldSize,
    PaddingSpan,
    compute_layout,
    field_name,
)


def all_field_lists(max_len=4):
    for n in range(max_len + 1):
        for combo in itertools.product(FieldSize.all(), repeat=n):
            yield list(combo)


# ============================================================
# FieldSize
# ============================================================

class TestFieldSize:

    def test_sizes_and_labels(self):
        assert [f.size for f in FieldSize.all()] == [1, 2, 4, 8, 16]
        assert [f.label for f in FieldSize.all()] == ["u8", "u16", "u32", "u64", "u128"]

    def test_ordering_by_width(self):
        assert FieldSize.U8 < FieldSize.U16 < FieldSize.U128
        assert max([FieldSize.U32, FieldSize.U64, FieldSize.U8]) is FieldSize.U64
        assert sorted([FieldSize.U128, FieldSize.U8, FieldSize.U32]) == [
            FieldSize.U8, FieldSize.U32, FieldSize.U128]

    def test_from_label(self):
        assert FieldSize.from_label("u64") is FieldSize.U64
        assert FieldSize.from_label(" U16 ") is FieldSize.U16

    def test_from_label_unknown(self):
        with pytest.raises(ValueError):
            FieldSize.from_label("i32")

    def test_next_larger_and_smaller_saturate(self):
        assert FieldSize.U8.next_larger() is FieldSize.U16
        assert FieldSize.U128.next_larger() is FieldSize.U128
        assert FieldSize.U16.next_smaller() is FieldSize.U8
        assert FieldSize.U8.next_smaller() is FieldSize.U8


class TestFieldName:

    def test_single_letters(self):
        assert field_name(0) == "a"
        assert field_name(1) == "b"
        assert field_name(25) == "z"

    def test_past_the_alphabet(self):
        assert field_name(26) == "aa"
        assert field_name(27) == "ab"
        assert field_name(26 + 26) == "ba"

    def test_names_are_unique(self):
        names = [field_name(i) for i in range(1000)]
        assert len(set(names)) == 1000


# ============================================================
# Concrete layouts
# ============================================================

class TestComputeLayout:

    def test_default_fields(self, default_layout):
        assert [f.offset for f in default_layout.fields] == [0, 16]
        assert default_layout.padding == (PaddingSpan(1, 15),)
        assert default_layout.total_size == 32
        assert default_layout.alignment == 16

    def test_mixed_fields(self, mixed_fields):
        layout = compute_layout(mixed_fields)
        assert [f.offset for f in layout.fields] == [0, 4, 6]
        assert layout.padding == (PaddingSpan(5, 1),)
        assert layout.total_size == 8
        assert layout.alignment == 4

    def test_tail_padding(self):
        layout = compute_layout([FieldSize.U64, FieldSize.U8])
        assert [f.offset for f in layout.fields] == [0, 8]
        assert layout.padding == (PaddingSpan(9, 7, trailing=True),)
        assert layout.total_size == 16

    def test_empty(self, empty_layout):
        assert empty_layout.fields == ()
        assert empty_layout.padding == ()
        assert empty_layout.total_size == 0
        assert empty_layout.alignment == 1
        assert empty_layout.is_empty

    def test_single_field_has_no_padding(self):
        layout = compute_layout([FieldSize.U32])
        assert layout.padding == ()
        assert layout.total_size == 4

    def test_default_field_list(self):
        assert list(DEFAULT_FIELDS) == [FieldSize.U8, FieldSize.U128]

    def test_idempotent(self, mixed_fields):
        assert compute_layout(mixed_fields) == compute_layout(mixed_fields)

    def test_does_not_modify_input(self, mixed_fields):
        before = list(mixed_fields)
        compute_layout(mixed_fields)
        assert mixed_fields == before

    def test_padding_bytes(self, default_layout):
        assert default_layout.padding_bytes == 15


# ============================================================
# Invariants over every short field list
# ============================================================

class TestLayoutInvariants:

    @pytest.mark.parametrize("fields", list(all_field_lists()), ids=lambda f: "-".join(map(str, f)) or "empty")
    def test_invariants(self, fields):
        layout = compute_layout(fields)

        expected_alignment = max(f.size for f in fields) if fields else 1
        assert layout.alignment == expected_alignment
        assert layout.total_size % layout.alignment == 0

        for placement in layout.fields:
            assert placement.offset % placement.size == 0

        spans = sorted(
            [(f.offset, f.end) for f in layout.fields] + [(p.start, p.end) for p in layout.padding]
        )
        cursor = 0
        for start, end in spans:
            assert start == cursor
            assert end > start
            cursor = end
        assert cursor == layout.total_size


# ============================================================
# Byte map, lookup and declaration text
# ============================================================

class TestByteMap:

    def test_byte_map(self, mixed_fields):
        layout = compute_layout(mixed_fields)
        np.testing.assert_array_equal(layout.byte_map(), [0, 0, 0, 0, 1, -1, 2, 2])

    def test_byte_map_empty(self, empty_layout):
        assert empty_layout.byte_map().shape == (0,)

    def test_field_at(self, default_layout):
        assert default_layout.field_at(0).name == "a"
        assert default_layout.field_at(5) is None
        assert default_layout.field_at(16).name == "b"
        assert default_layout.field_at(31).name == "b"
        assert default_layout.field_at(32) is None
        assert default_layout.field_at(-1) is None


class TestStructDeclaration:

    def test_declaration(self, default_layout):
        assert default_layout.struct_declaration() == [
            "#[repr(C)]",
            "struct MyStruct {",
            "    a: u8,",
            "    _: [u8; 15], // necessary padding for alignment",
            "    b: u128,",
            "}",
        ]

    def test_declaration_with_tail_padding(self):
        lines = compute_layout([FieldSize.U16, FieldSize.U8]).struct_declaration("Pair")
        assert lines[1] == "struct Pair {"
        assert lines[-2] == "    _: [u8; 1], // necessary padding for alignment"

    def test_empty_declaration(self, empty_layout):
        assert empty_layout.struct_declaration() == ["#[repr(C)]", "struct MyStruct {", "}"]

    def test_items_in_address_order(self, mixed_fields):
        items = compute_layout(mixed_fields).items()
        starts = [getattr(item, "offset", getattr(item, "start", None)) for item in items]
        assert starts == [0, 4, 5, 6]
