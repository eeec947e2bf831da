from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List

from .parsing.csv_parser import RawTable, Separator, decode_bytes, detect_separator, parse_csv


@dataclass(frozen=True)
class InputTable:
    name: str
    rows: RawTable
    separator: Separator

    @property
    def header(self) -> List[str]:
        return self.rows[0] if self.rows else []

    @property
    def data_rows(self) -> int:
        return max(len(self.rows) - 1, 0)


def read_csv_text(name: str, text: str) -> InputTable:
    sep = detect_separator(text.split("\n", 1)[0])
    return InputTable(name=name, rows=parse_csv(text), separator=sep)


def read_csv_bytes(name: str, data: bytes) -> InputTable:
    return read_csv_text(name, decode_bytes(data))


def read_csv_file(path: Path) -> InputTable:
    return read_csv_bytes(path.name, path.read_bytes())


class IOService:
    def __init__(self, logger: logging.Logger) -> None:
        self.logger = logger

    def read_csv(self, path: Path) -> InputTable:
        self.logger.info("Reading CSV", extra={"path": str(path)})
        table = read_csv_file(path)
        self._log_parsed(table)
        return table

    def read_upload(self, name: str, data: bytes) -> InputTable:
        self.logger.info("Reading uploaded CSV", extra={"file": name, "size": len(data)})
        table = read_csv_bytes(name, data)
        self._log_parsed(table)
        return table

    def _log_parsed(self, table: InputTable) -> None:
        self.logger.info(
            f"Parsed {table.data_rows} data rows",
            extra={
                "file": table.name,
                "separator": table.separator,
                "columns": len(table.header),
            },
        )
