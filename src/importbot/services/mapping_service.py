from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Sequence

from ..domain.schema_defs import FIELD_PATHS, IDENTIFYING_FIELD, label_for
from .mapping.column_map import (
    DEFAULT_COMPILED_RULES,
    AutoMapRule,
    ColumnMapping,
    auto_map,
    load_rules,
    set_override,
)


class MappingService:
    """Auto-mapping plus user overrides over a fixed set of field paths."""

    def __init__(
        self,
        logger: logging.Logger,
        rules: Sequence[AutoMapRule] = DEFAULT_COMPILED_RULES,
    ) -> None:
        self.logger = logger
        self.rules: List[AutoMapRule] = list(rules)

    def load_rules(self, path: Path) -> None:
        self.logger.info("Loading auto-map rules", extra={"path": str(path)})
        self.rules = load_rules(path, FIELD_PATHS)
        self.logger.info("Loaded auto-map rules", extra={"entries": len(self.rules)})

    def auto_map(
        self, headers: Sequence[str], previous: Optional[ColumnMapping] = None
    ) -> ColumnMapping:
        mapping = auto_map(headers, self.rules, previous)
        for col, header in enumerate(headers):
            path = mapping.field_for(col)
            if path:
                self.logger.info(f"  '{header}' -> {label_for(path)}")
            else:
                self.logger.info(f"  '{header}' -> ignored")
        if not mapping.is_valid():
            self.logger.warning(f"No column mapped to {IDENTIFYING_FIELD}; import is blocked")
        return mapping

    def set_override(self, mapping: ColumnMapping, col: int, field_path: str) -> ColumnMapping:
        updated = set_override(mapping, col, field_path, FIELD_PATHS)
        self.logger.info(
            "Mapping override",
            extra={"column": col, "header": mapping.headers[col], "field": field_path},
        )
        return updated
