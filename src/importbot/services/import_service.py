from __future__ import annotations

import logging
from typing import Optional, Sequence

from .importer.batch import BatchImporter, ProgressCallback
from .importer.report import ImportReport
from .mapping.column_map import ColumnMapping
from .persist.port import PersistPort


class ImportService:
    def __init__(self, logger: logging.Logger, yield_every: int = 10, max_errors: int = 50) -> None:
        self.logger = logger
        self.importer = BatchImporter(logger=logger, yield_every=yield_every, max_errors=max_errors)

    async def run(
        self,
        rows: Sequence[Sequence[str]],
        mapping: ColumnMapping,
        persist: PersistPort,
        on_progress: Optional[ProgressCallback] = None,
    ) -> ImportReport:
        return await self.importer.run(rows, mapping, persist, on_progress)
