from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

from ..domain.schema_defs import FIELDS, label_for
from ..services.importer.report import ImportReport
from ..services.mapping.column_map import ColumnMapping


@dataclass(frozen=True)
class PreviewModel:
    headers: List[str]
    rows: List[List[str]]
    total_rows: int

    @property
    def hint(self) -> str:
        return f"{self.total_rows} row(s) detected."


@dataclass(frozen=True)
class MappingRow:
    col: int
    header: str
    field_path: str
    label: str
    overridden: bool


@dataclass(frozen=True)
class ProgressModel:
    done: int
    total: int

    @property
    def fraction(self) -> float:
        return self.done / self.total if self.total else 0.0

    @property
    def percent(self) -> int:
        return round(self.fraction * 100)

    @property
    def label(self) -> str:
        return f"{self.done} / {self.total} row(s) processed"

    @property
    def status(self) -> str:
        return f"{self.label} ({self.percent}%)"


def preview_model(rows: Sequence[Sequence[str]], limit: int = 5) -> PreviewModel:
    """Header plus the first ``limit`` data rows, padded to the header width."""
    if not rows:
        return PreviewModel(headers=[], rows=[], total_rows=0)
    headers = list(rows[0])
    body = [
        [r[i] if i < len(r) else "" for i in range(len(headers))] for r in rows[1 : limit + 1]
    ]
    return PreviewModel(headers=headers, rows=body, total_rows=len(rows) - 1)


def field_options() -> dict[str, str]:
    """Select options in catalog order: field path -> label."""
    return {f.path: f.label for f in FIELDS}


def mapping_rows(mapping: ColumnMapping) -> List[MappingRow]:
    out: List[MappingRow] = []
    for col, header in enumerate(mapping.headers):
        path = mapping.field_for(col)
        out.append(
            MappingRow(
                col=col,
                header=header,
                field_path=path,
                label=label_for(path),
                overridden=col in mapping.overrides,
            )
        )
    return out


def report_lines(report: ImportReport) -> List[str]:
    lines = [
        f"✅ {report.parents} prospect(s) created",
        f"👤 {report.children} contact(s) created",
    ]
    if report.issues:
        lines.append(f"⚠️ {len(report.issues)} error(s)")
    return lines
