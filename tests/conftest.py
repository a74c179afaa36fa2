"""
Shared fixtures for the StructGrid tests.
"""

import pytest

from structgrid.layout import FieldSize, compute_layout


@pytest.fixture
def default_fields():
    return [FieldSize.U8, FieldSize.U128]


@pytest.fixture
def mixed_fields():
    return [FieldSize.U32, FieldSize.U8, FieldSize.U16]


@pytest.fixture
def default_layout(default_fields):
    return compute_layout(default_fields)


@pytest.fixture
def empty_layout():
    return compute_layout([])
