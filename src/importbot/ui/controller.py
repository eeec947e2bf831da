from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from ..app.container import Container, build_container
from ..app.session import ImportSession
from ..config import Config
from ..domain.errors import ImportBotError
from ..services.importer.batch import ProgressCallback
from ..services.importer.report import ImportReport
from ..services.io_csv import InputTable
from ..services.persist.memory_store import InMemoryStore
from ..services.persist.port import PersistPort


logger = logging.getLogger("importbot.ui.controller")


@dataclass(frozen=True)
class UiRunResult:
    report: Optional[ImportReport]
    error: Optional[str] = None


@dataclass
class UiController:
    """UI-agnostic driver for one import session.

    Views call into this object; it never touches widgets.
    """

    cfg: Config = field(default_factory=Config)
    persist: PersistPort = field(default_factory=InMemoryStore)
    session: ImportSession = field(default_factory=ImportSession)
    logger: logging.Logger = field(default_factory=lambda: logging.getLogger("importbot.ui"))
    container: Optional[Container] = None

    def __post_init__(self) -> None:
        if self.container is None:
            self.container = build_container("importbot", self.cfg)

    @property
    def services(self) -> Container:
        if self.container is None:
            raise RuntimeError("Controller has no service container")
        return self.container

    def load_upload(self, name: str, data: bytes) -> InputTable:
        """Parse an uploaded file and replace the session's table and mapping.

        Raises ``SessionBusyError`` while a run is in flight and
        ``EmptyInputError`` when the file has no data rows.
        """
        table = self.services.io.read_upload(name, data)
        mapping = self.services.mapping.auto_map(table.header)
        self.session.load(table, mapping)
        return table

    def set_override(self, col: int, field_path: str) -> None:
        if self.session.mapping is None:
            raise RuntimeError("No file loaded")
        mapping = self.services.mapping.set_override(self.session.mapping, col, field_path)
        self.session.update_mapping(mapping)

    def can_start(self) -> bool:
        return self.session.can_start()

    async def run_import(self, on_progress: Optional[ProgressCallback] = None) -> UiRunResult:
        try:
            table, mapping = self.session.start()
        except ImportBotError as exc:
            return UiRunResult(report=None, error=str(exc))
        report: Optional[ImportReport] = None
        try:
            self.logger.info("UI starting import", extra={"file": table.name})
            report = await self.services.importer.run(
                table.rows, mapping, self.persist, on_progress
            )
            return UiRunResult(report=report)
        except Exception as exc:
            self.logger.exception("UI import error: %s", exc)
            return UiRunResult(report=None, error=str(exc))
        finally:
            self.session.finish(report)

    def export_records(self, out_dir: Path) -> Optional[Path]:
        if not isinstance(self.persist, InMemoryStore):
            return None
        out = out_dir / "records.xlsx"
        self.persist.export_excel(out)
        return out

    def reset(self) -> None:
        self.session.reset()
