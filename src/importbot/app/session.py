from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..domain.errors import EmptyInputError, InvalidMappingError, SessionBusyError
from ..domain.schema_defs import IDENTIFYING_FIELD
from ..services.importer.report import ImportReport
from ..services.io_csv import InputTable
from ..services.mapping.column_map import ColumnMapping


class SessionStatus(str, Enum):
    EMPTY = "empty"
    LOADED = "loaded"
    RUNNING = "running"
    DONE = "done"


@dataclass
class ImportSession:
    """State of one import: the loaded table, its mapping and run status.

    Owned by the caller and passed to each stage. While a run is in flight the
    session refuses a new load, a reset, or a mapping change.
    """

    table: Optional[InputTable] = None
    mapping: Optional[ColumnMapping] = None
    status: SessionStatus = SessionStatus.EMPTY
    report: Optional[ImportReport] = None

    @property
    def busy(self) -> bool:
        return self.status is SessionStatus.RUNNING

    def _ensure_idle(self, action: str) -> None:
        if self.busy:
            raise SessionBusyError(f"Cannot {action} while an import is running")

    def load(self, table: InputTable, mapping: ColumnMapping) -> None:
        """Replace table and mapping wholesale; nothing from a prior file is kept."""
        self._ensure_idle("load a new file")
        if len(table.rows) < 2:
            raise EmptyInputError(len(table.rows))
        self.table = table
        self.mapping = mapping
        self.report = None
        self.status = SessionStatus.LOADED

    def update_mapping(self, mapping: ColumnMapping) -> None:
        self._ensure_idle("change the mapping")
        if self.table is None:
            raise RuntimeError("No file loaded")
        self.mapping = mapping

    def can_start(self) -> bool:
        return (
            self.status in (SessionStatus.LOADED, SessionStatus.DONE)
            and self.mapping is not None
            and self.mapping.is_valid()
        )

    def start(self) -> tuple[InputTable, ColumnMapping]:
        self._ensure_idle("start another import")
        if self.table is None or self.mapping is None:
            raise RuntimeError("No file loaded")
        if not self.mapping.is_valid():
            raise InvalidMappingError(IDENTIFYING_FIELD)
        self.status = SessionStatus.RUNNING
        self.report = None
        return self.table, self.mapping

    def finish(self, report: Optional[ImportReport]) -> None:
        """Close the run. ``None`` means it failed before producing a report."""
        self.report = report
        self.status = SessionStatus.DONE if report is not None else SessionStatus.LOADED

    def reset(self) -> None:
        self._ensure_idle("reset")
        self.table = None
        self.mapping = None
        self.report = None
        self.status = SessionStatus.EMPTY
