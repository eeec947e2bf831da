from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Sequence

from ...domain.schema_defs import CHILD_ENTITY, IDENTIFYING_KEY, PARENT_ENTITY
from ...utils.normalize import clean_cell
from ..mapping.column_map import ColumnMapping

FieldValues = Dict[str, Optional[str]]


@dataclass(frozen=True)
class ExtractedRecord:
    parent: FieldValues
    child: Optional[FieldValues] = None


def extract_row(row: Sequence[str], mapping: ColumnMapping) -> ExtractedRecord:
    """Walk mapped columns in index order and fill the parent/child buckets.

    When several columns target the same field, the highest index wins.
    """
    parent: FieldValues = {}
    child: FieldValues = {}

    for col, path in sorted(mapping.fields().items()):
        if not path:
            continue
        entity, _, key = path.partition(".")
        value = clean_cell(row[col]) if col < len(row) else None
        if entity == PARENT_ENTITY:
            parent[key] = value
        elif entity == CHILD_ENTITY:
            child[key] = value

    if child.get(IDENTIFYING_KEY) is None:
        return ExtractedRecord(parent=parent, child=None)
    return ExtractedRecord(parent=parent, child=child)
