from __future__ import annotations

import asyncio
import inspect
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional, Sequence, Union

from ...domain.errors import (
    EmptyInputError,
    ErrorCategory,
    InvalidMappingError,
    ValidationError,
)
from ...domain.schema_defs import IDENTIFYING_FIELD
from ..mapping.column_map import ColumnMapping
from ..persist.port import PersistPort
from ..validation.extract import FieldValues, extract_row
from ..validation.rules import validate_record
from .report import ImportReport, ReportBuilder

ProgressCallback = Callable[[int, int], Union[None, Awaitable[None]]]


@dataclass(frozen=True)
class BatchImporter:
    """Sequential, cooperatively yielding import loop.

    Row ``i + 1`` never starts before row ``i``'s persistence calls resolve,
    so at most one write is in flight and every reported line is unambiguous.
    """

    logger: logging.Logger
    yield_every: int = 10
    max_errors: int = 50

    async def run(
        self,
        table: Sequence[Sequence[str]],
        mapping: ColumnMapping,
        persist: PersistPort,
        on_progress: Optional[ProgressCallback] = None,
    ) -> ImportReport:
        if len(table) < 2:
            raise EmptyInputError(len(table))
        if not mapping.is_valid():
            raise InvalidMappingError(IDENTIFYING_FIELD)

        data_rows = table[1:]
        total = len(data_rows)
        report = ReportBuilder(total=total)
        self.logger.info("Import started", extra={"rows": total})

        for i, row in enumerate(data_rows):
            line = i + 2  # line 1 is the header
            record = extract_row(row, mapping)
            issue = validate_record(record, line)
            if issue is not None:
                report.skip(issue)
                self._log_issue(report, issue)
            else:
                parent_id, created = await self._create_parent(
                    persist, record.parent, line, report
                )
                if created and record.child is not None and parent_id:
                    await self._create_child(persist, parent_id, record.child, line, report)

            if on_progress is not None:
                res = on_progress(i + 1, total)
                if inspect.isawaitable(res):
                    await res
            if self.yield_every > 0 and (i + 1) % self.yield_every == 0:
                await asyncio.sleep(0)

        result = report.build()
        self.logger.info(
            "Import finished",
            extra={
                "rows": total,
                "parents": result.parents,
                "children": result.children,
                "errors": len(result.issues),
            },
        )
        return result

    async def _create_parent(
        self, persist: PersistPort, fields: FieldValues, line: int, report: ReportBuilder
    ) -> tuple[Optional[str], bool]:
        try:
            res = await persist.create_parent(fields)
        except Exception as exc:
            self._record(report, ValidationError(line, str(exc), ErrorCategory.PERSIST_PARENT))
            return None, False
        if res.error is not None:
            self._record(
                report, ValidationError(line, res.error.message, ErrorCategory.PERSIST_PARENT)
            )
            return None, False
        report.add_parent()
        self.logger.debug("Parent created", extra={"line": line, "id": res.id})
        return res.id, True

    async def _create_child(
        self,
        persist: PersistPort,
        parent_id: str,
        fields: FieldValues,
        line: int,
        report: ReportBuilder,
    ) -> None:
        try:
            res = await persist.create_child(parent_id, fields)
        except Exception as exc:
            self._record(report, ValidationError(line, str(exc), ErrorCategory.PERSIST_CHILD))
            return
        if res.error is not None:
            self._record(
                report, ValidationError(line, res.error.message, ErrorCategory.PERSIST_CHILD)
            )
            return
        report.add_child()

    def _record(self, report: ReportBuilder, issue: ValidationError) -> None:
        report.add_issue(issue)
        self._log_issue(report, issue)

    def _log_issue(self, report: ReportBuilder, issue: ValidationError) -> None:
        if len(report.issues) <= self.max_errors:
            self.logger.warning(
                str(issue), extra={"line": issue.line, "code": issue.category.value}
            )
