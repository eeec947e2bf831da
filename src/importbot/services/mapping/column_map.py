from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Mapping, Optional, Sequence, Tuple

import yaml

from ...domain.errors import UnknownColumnError, UnknownFieldError
from ...domain.schema_defs import DEFAULT_RULES, FIELD_PATHS, IDENTIFYING_FIELD, IGNORE
from ...utils.normalize import normalize_header


@dataclass(frozen=True)
class AutoMapRule:
    pattern: re.Pattern[str]
    field_path: str

    def matches(self, normalized_header: str) -> bool:
        return self.pattern.fullmatch(normalized_header) is not None


@dataclass(frozen=True)
class ColumnMapping:
    """Column index -> field path, split into auto-mapped and user-set entries.

    The effective path for a column is its override when one exists, else the
    auto-mapped path. An empty path means the column is ignored.
    """

    headers: Tuple[str, ...]
    auto: Mapping[int, str]
    overrides: Mapping[int, str] = field(default_factory=dict)

    def field_for(self, col: int) -> str:
        if col in self.overrides:
            return self.overrides[col]
        return self.auto.get(col, IGNORE)

    def fields(self) -> dict[int, str]:
        return {col: self.field_for(col) for col in range(len(self.headers))}

    def columns_for(self, field_path: str) -> List[int]:
        return [col for col, path in self.fields().items() if path == field_path]

    def is_valid(self, required: str = IDENTIFYING_FIELD) -> bool:
        return bool(self.columns_for(required))


def compile_rules(
    pairs: Iterable[Tuple[str, str]], known_fields: Iterable[str] = FIELD_PATHS
) -> List[AutoMapRule]:
    known = set(known_fields)
    rules: List[AutoMapRule] = []
    for pattern, field_path in pairs:
        if field_path not in known:
            raise UnknownFieldError(field_path)
        rules.append(AutoMapRule(pattern=re.compile(pattern), field_path=field_path))
    return rules


def load_rules(path: Path, known_fields: Iterable[str] = FIELD_PATHS) -> List[AutoMapRule]:
    """Load an ordered rule table from YAML.

    Expected shape::

        rules:
          - pattern: "nom|raison_sociale"
            field: prospect.nom
    """
    raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    entries = raw.get("rules", []) if isinstance(raw, dict) else []
    pairs: List[Tuple[str, str]] = []
    for entry in entries:
        if not isinstance(entry, dict):
            continue
        pattern = entry.get("pattern")
        field_path = entry.get("field")
        if not isinstance(pattern, str) or not isinstance(field_path, str):
            continue
        pairs.append((pattern, field_path))
    return compile_rules(pairs, known_fields)


DEFAULT_COMPILED_RULES: List[AutoMapRule] = compile_rules(DEFAULT_RULES)


def auto_map_header(header: str, rules: Sequence[AutoMapRule] = DEFAULT_COMPILED_RULES) -> str:
    key = normalize_header(header)
    for rule in rules:
        if rule.matches(key):
            return rule.field_path
    return IGNORE


def auto_map(
    headers: Sequence[str],
    rules: Sequence[AutoMapRule] = DEFAULT_COMPILED_RULES,
    previous: Optional[ColumnMapping] = None,
) -> ColumnMapping:
    """Build the heuristic mapping for a header row.

    Overrides carried by ``previous`` survive as long as their column still
    exists in ``headers``.
    """
    auto = {col: auto_map_header(h, rules) for col, h in enumerate(headers)}
    overrides: dict[int, str] = {}
    if previous is not None:
        overrides = {c: p for c, p in previous.overrides.items() if 0 <= c < len(headers)}
    return ColumnMapping(headers=tuple(headers), auto=auto, overrides=overrides)


def set_override(
    mapping: ColumnMapping,
    col: int,
    field_path: str,
    known_fields: Iterable[str] = FIELD_PATHS,
) -> ColumnMapping:
    if not 0 <= col < len(mapping.headers):
        raise UnknownColumnError(col, len(mapping.headers))
    if field_path not in set(known_fields):
        raise UnknownFieldError(field_path)
    overrides = dict(mapping.overrides)
    overrides[col] = field_path
    return ColumnMapping(headers=mapping.headers, auto=mapping.auto, overrides=overrides)


def is_mapping_valid(mapping: ColumnMapping, required: str = IDENTIFYING_FIELD) -> bool:
    return mapping.is_valid(required)
