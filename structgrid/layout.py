"""
Layout engine for C-style structures.

Computes field offsets, alignment padding and tail padding for an ordered
list of unsigned integer fields, using natural alignment (a field of n bytes
starts at an address divisible by n).
"""

import string
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Tuple

import numpy as np


class FieldSize(Enum):
    """Unsigned integer field widths, in bytes"""
    U8 = 1
    U16 = 2
    U32 = 4
    U64 = 8
    U128 = 16

    @property
    def size(self) -> int:
        return self.value

    @property
    def label(self) -> str:
        return self.name.lower()

    def __str__(self):
        return self.label

    def __lt__(self, other):
        if not isinstance(other, FieldSize):
            return NotImplemented
        return self.value < other.value

    def __le__(self, other):
        if not isinstance(other, FieldSize):
            return NotImplemented
        return self.value <= other.value

    def __gt__(self, other):
        if not isinstance(other, FieldSize):
            return NotImplemented
        return self.value > other.value

    def __ge__(self, other):
        if not isinstance(other, FieldSize):
            return NotImplemented
        return self.value >= other.value

    @classmethod
    def all(cls) -> Tuple['FieldSize', ...]:
        return tuple(cls)

    @classmethod
    def from_label(cls, label: str) -> 'FieldSize':
        """Parse a size tag such as 'u32'"""
        try:
            return cls[label.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown field size tag: {label!r}") from None

    def next_larger(self) -> 'FieldSize':
        sizes = FieldSize.all()
        return sizes[min(sizes.index(self) + 1, len(sizes) - 1)]

    def next_smaller(self) -> 'FieldSize':
        sizes = FieldSize.all()
        return sizes[max(sizes.index(self) - 1, 0)]


DEFAULT_FIELDS = (FieldSize.U8, FieldSize.U128)


def field_name(index: int) -> str:
    """
    Positional field name: 0 -> 'a', 25 -> 'z', 26 -> 'aa', 27 -> 'ab', ...
    """
    letters = string.ascii_lowercase
    name = ""
    index += 1
    while index > 0:
        index, rem = divmod(index - 1, len(letters))
        name = letters[rem] + name
    return name


@dataclass(frozen=True)
class FieldPlacement:
    index: int
    size: int
    offset: int
    field_size: FieldSize

    @property
    def name(self) -> str:
        return field_name(self.index)

    @property
    def end(self) -> int:
        return self.offset + self.size


@dataclass(frozen=True)
class PaddingSpan:
    start: int
    length: int
    trailing: bool = False

    @property
    def end(self) -> int:
        return self.start + self.length


@dataclass(frozen=True)
class LayoutResult:
    fields: Tuple[FieldPlacement, ...]
    padding: Tuple[PaddingSpan, ...]
    total_size: int
    alignment: int

    @property
    def is_empty(self) -> bool:
        return self.total_size == 0

    @property
    def padding_bytes(self) -> int:
        return sum(span.length for span in self.padding)

    def items(self) -> List[object]:
        """Fields and padding spans in address order"""
        return sorted(list(self.fields) + list(self.padding), key=lambda item: item.end)

    def byte_map(self) -> np.ndarray:
        """
        Ownership of each byte in [0, total_size): the owning field index,
        or -1 for padding.
        """
        owners = np.full(self.total_size, -1, dtype=np.int32)
        for field in self.fields:
            owners[field.offset:field.end] = field.index
        return owners

    def field_at(self, offset: int) -> Optional[FieldPlacement]:
        """Field covering the given byte offset within one structure, if any"""
        if not 0 <= offset < self.total_size:
            return None
        owner = int(self.byte_map()[offset])
        if owner < 0:
            return None
        return self.fields[owner]

    def struct_declaration(self, struct_name: str = "MyStruct") -> List[str]:
        lines = ["#[repr(C)]", f"struct {struct_name} {{"]
        for item in self.items():
            if isinstance(item, PaddingSpan):
                lines.append(f"    _: [u8; {item.length}], // necessary padding for alignment")
            else:
                lines.append(f"    {item.name}: {item.field_size.label},")
        lines.append("}")
        return lines


def compute_layout(fields: Sequence[FieldSize]) -> LayoutResult:
    """
    Lay out fields in declaration order.

    Args:
        fields: Ordered field sizes, possibly empty

    Returns:
        LayoutResult with resolved offsets, padding spans, total size and alignment
    """
    placements = []
    padding = []
    offset = 0
    max_size = 0

    for index, field in enumerate(fields):
        size = field.size
        max_size = max(max_size, size)
        misalign = offset % size
        if misalign != 0:
            padding.append(PaddingSpan(offset, size - misalign))
            offset += size - misalign
        placements.append(FieldPlacement(index, size, offset, field))
        offset += size

    if max_size == 0:
        return LayoutResult((), (), 0, 1)

    misalign = offset % max_size
    if misalign != 0:
        padding.append(PaddingSpan(offset, max_size - misalign, trailing=True))
        offset += max_size - misalign

    return LayoutResult(tuple(placements), tuple(padding), offset, max_size)
