from __future__ import annotations

import logging
from typing import List, Sequence

from ..domain.errors import ValidationError
from .mapping.column_map import ColumnMapping
from .validation.extract import extract_row
from .validation.rules import validate_record


class ValidateService:
    """Lightweight service for row extraction and validation."""

    def __init__(self, logger: logging.Logger) -> None:
        self.logger = logger

    def validate_table(
        self, rows: Sequence[Sequence[str]], mapping: ColumnMapping
    ) -> List[ValidationError]:
        """Validate every data row without persisting. Returns issues in line order."""
        issues: List[ValidationError] = []
        for i, row in enumerate(rows[1:]):
            issue = validate_record(extract_row(row, mapping), i + 2)
            if issue is not None:
                issues.append(issue)
        self.logger.info(
            "Validated rows",
            extra={"rows": max(len(rows) - 1, 0), "invalid": len(issues)},
        )
        return issues
