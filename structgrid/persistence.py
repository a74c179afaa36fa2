import json
import os
from typing import List, Sequence

from structgrid.layout import DEFAULT_FIELDS, FieldSize

DEFAULT_STATE_PATH = os.path.join(os.path.expanduser("~"), ".structgrid", "fields.json")


class FieldListError(ValueError):
    """Persisted field list could not be decoded"""


def encode_fields(fields: Sequence[FieldSize]) -> str:
    return json.dumps([f.label for f in fields])


def decode_fields(text: str) -> List[FieldSize]:
    try:
        tags = json.loads(text)
    except json.JSONDecodeError as e:
        raise FieldListError(f"Invalid field list JSON: {e}") from e
    if not isinstance(tags, list) or not all(isinstance(t, str) for t in tags):
        raise FieldListError("Field list must be a JSON list of size tags")
    try:
        return [FieldSize.from_label(t) for t in tags]
    except ValueError as e:
        raise FieldListError(str(e)) from e


def load_fields(path: str = DEFAULT_STATE_PATH) -> List[FieldSize]:
    """Load the saved field list, or the default list when nothing was saved yet"""
    if not os.path.exists(path):
        return list(DEFAULT_FIELDS)
    with open(path, "r", encoding="utf-8") as f:
        return decode_fields(f.read())


def save_fields(fields: Sequence[FieldSize], path: str = DEFAULT_STATE_PATH) -> str:
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(encode_fields(fields))
    return path
