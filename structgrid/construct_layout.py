from construct import (
    BytesInteger,
    Int8ul,
    Int16ul,
    Int32ul,
    Int64ul,
    Padding,
    RawCopy,
    Struct,
)
from typing import Dict, List

from structgrid.layout import FieldSize, LayoutResult, PaddingSpan

PRIMITIVES = {
    FieldSize.U8: (Int8ul, "Int8ul"),
    FieldSize.U16: (Int16ul, "Int16ul"),
    FieldSize.U32: (Int32ul, "Int32ul"),
    FieldSize.U64: (Int64ul, "Int64ul"),
    FieldSize.U128: (BytesInteger(16, swapped=True), "BytesInteger(16, swapped=True)"),
}


def to_construct(layout: LayoutResult, raw_copy: bool = False) -> Struct:
    """
    Build a construct Struct matching the layout, with explicit Padding for
    every padding span. With raw_copy each field is wrapped in RawCopy so
    parsing reports its offsets.
    """
    subcons = []
    for item in layout.items():
        if isinstance(item, PaddingSpan):
            subcons.append(Padding(item.length))
        else:
            primitive = PRIMITIVES[item.field_size][0]
            if raw_copy:
                primitive = RawCopy(primitive)
            subcons.append(item.name / primitive)
    return Struct(*subcons)


def construct_source(layout: LayoutResult) -> str:
    lines = ["Struct("]
    for item in layout.items():
        if isinstance(item, PaddingSpan):
            lines.append(f"    Padding({item.length}),")
        else:
            lines.append(f"    \"{item.name}\" / {PRIMITIVES[item.field_size][1]},")
    lines.append(")")
    return "\n".join(lines)


def parse_sample(layout: LayoutResult, data: bytes) -> List[Dict]:
    """
    Parse one structure worth of little-endian bytes and return its fields
    as dictionaries with name, start, end and value.
    """
    parsed = to_construct(layout, raw_copy=True).parse(data)
    result = []
    for field in layout.fields:
        value = parsed[field.name]
        result.append({
            "name": field.name,
            "start": value.offset1,
            "end": value.offset2,
            "length": value.length,
            "value": value.value,
        })
    return result


def sample_bytes(layout: LayoutResult) -> bytes:
    """Counting pattern 00 01 02 ... covering one structure"""
    return bytes(i & 0xff for i in range(layout.total_size))


def sample_report(layout: LayoutResult) -> str:
    """Comment block showing where each field lands when the counting pattern is parsed"""
    data = sample_bytes(layout)
    lines = [f"# sample: {data.hex(' ') or '(empty)'}"]
    for field in parse_sample(layout, data):
        lines.append(f"# {field['name']} [{field['start']}:{field['end']}] = 0x{field['value']:x}")
    return "\n".join(lines)
