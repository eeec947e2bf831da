from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Mapping, Optional, Sequence

from ..config import Config
from ..domain.errors import ImportBotError
from ..services.importer.report import ImportReport, ReportBuilder
from ..services.mapping.column_map import ColumnMapping
from ..services.output.manifest_writer import write_manifest
from ..services.output.report_writer import write_report
from ..services.persist.memory_store import InMemoryStore
from ..services.persist.port import PersistPort
from .container import Container
from .run_manager import start_run
from .session import ImportSession


def _now() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


@dataclass(frozen=True)
class RunOutcome:
    code: int
    run_dir: Path
    report: Optional[ImportReport] = None
    error: Optional[str] = None


class _ProgressLogger:
    """Logs roughly every tenth of the run, plus the final row."""

    def __init__(self, logger: logging.Logger) -> None:
        self.logger = logger

    def __call__(self, done: int, total: int) -> None:
        step = max(total // 10, 1)
        if done == total or done % step == 0:
            self.logger.info(f"Progress: {done}/{total} rows")


@dataclass(frozen=True)
class Orchestrator:
    container: Container
    cfg: Config
    logger: logging.Logger

    def run(
        self,
        input_path: Path,
        out_dir: Path,
        overrides: Optional[Mapping[int, str]] = None,
        persist: Optional[PersistPort] = None,
    ) -> int:
        """
        CSV pipeline: parse -> auto-map (+ overrides) -> import -> report.

        Exit codes: 0 clean, 1 completed with row errors, 2 fatal input or
        mapping error, 3 unexpected failure.
        """
        outcome = asyncio.run(self.execute(input_path, out_dir, overrides, persist))
        return outcome.code

    async def execute(
        self,
        input_path: Path,
        out_dir: Path,
        overrides: Optional[Mapping[int, str]] = None,
        persist: Optional[PersistPort] = None,
    ) -> RunOutcome:
        run_ctx = start_run(out_dir)
        started = _now()
        session = ImportSession()

        try:
            # 1. Parse
            table = self.container.io.read_csv(input_path)

            # 2. Map
            mapping = self.container.mapping.auto_map(table.header)
            for col, field_path in (overrides or {}).items():
                mapping = self.container.mapping.set_override(mapping, col, field_path)
            session.load(table, mapping)

            # 3. Import (or validate only)
            loaded, mapping = session.start()
            store = persist if persist is not None else InMemoryStore()
            report: Optional[ImportReport] = None
            try:
                if self.cfg.dry_run:
                    self.logger.info("Dry run: validating rows, nothing will be created")
                    report = self._dry_run(loaded.rows, mapping)
                else:
                    report = await self.container.importer.run(
                        loaded.rows, mapping, store, _ProgressLogger(self.logger)
                    )
            finally:
                session.finish(report)

            # 4. Outputs
            if not self.cfg.dry_run and self.cfg.export_records:
                if isinstance(store, InMemoryStore):
                    store.export_excel(run_ctx.run_dir / "records.xlsx")
            write_report(report, run_ctx.run_dir / "import_report.xlsx", self.logger)
            write_manifest(
                run_dir=run_ctx.run_dir,
                input_path=input_path,
                separator=table.separator,
                mapping=mapping,
                report=report,
                started_at=started,
                finished_at=_now(),
                cfg=self.cfg,
                logger=self.logger,
            )

            self.logger.info(
                f"Import completed: {report.parents} prospect(s), {report.children} contact(s), "
                f"{len(report.issues)} error(s)"
            )
            return RunOutcome(code=0 if report.ok else 1, run_dir=run_ctx.run_dir, report=report)

        except ImportBotError as e:
            self.logger.error(f"Import aborted: {e}")
            return RunOutcome(code=2, run_dir=run_ctx.run_dir, error=str(e))
        except Exception as e:
            self.logger.error(f"Pipeline failed: {e}", exc_info=True)
            return RunOutcome(code=3, run_dir=run_ctx.run_dir, error=str(e))

    def _dry_run(self, rows: Sequence[Sequence[str]], mapping: ColumnMapping) -> ImportReport:
        builder = ReportBuilder(total=len(rows) - 1)
        for issue in self.container.validate.validate_table(rows, mapping):
            builder.skip(issue)
            if len(builder.issues) <= self.cfg.max_errors:
                self.logger.warning(str(issue))
        return builder.build()
