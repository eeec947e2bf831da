from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd

from ..importer.report import ImportReport


def report_frames(report: ImportReport) -> dict[str, pd.DataFrame]:
    summary = pd.DataFrame(
        [
            {"Metric": "Data rows", "Value": report.total},
            {"Metric": "Prospects created", "Value": report.parents},
            {"Metric": "Contacts created", "Value": report.children},
            {"Metric": "Rows rejected by validation", "Value": report.skipped},
            {"Metric": "Prospect create failures", "Value": report.parent_failures},
            {"Metric": "Contact create failures", "Value": report.child_failures},
        ]
    )
    errors = pd.DataFrame(
        [
            {"Line": i.line, "Code": i.category.value, "Message": str(i)}
            for i in report.issues
        ],
        columns=["Line", "Code", "Message"],
    )
    return {"Summary": summary, "Errors": errors}


def write_report(report: ImportReport, out_path: Path, logger: logging.Logger) -> None:
    """Write the run report as an Excel workbook with Summary and Errors tables."""
    from openpyxl.styles import Alignment, Font
    from openpyxl.utils import get_column_letter
    from openpyxl.worksheet.table import Table, TableStyleInfo

    out_path.parent.mkdir(parents=True, exist_ok=True)
    logger.info(f"Writing {out_path.name}", extra={"path": str(out_path)})

    with pd.ExcelWriter(out_path, engine="openpyxl") as writer:
        for sheet_name, df in report_frames(report).items():
            df.to_excel(writer, sheet_name=sheet_name, index=False)
            ws = writer.sheets[sheet_name]

            # Excel refuses a table with no data rows
            if len(df):
                ref = f"A1:{get_column_letter(len(df.columns))}{len(df) + 1}"
                table = Table(displayName=sheet_name, ref=ref)
                table.tableStyleInfo = TableStyleInfo(
                    name="TableStyleMedium2",
                    showFirstColumn=False,
                    showLastColumn=False,
                    showRowStripes=True,
                    showColumnStripes=False,
                )
                ws.add_table(table)

            for idx, header in enumerate(df.columns, start=1):
                col = get_column_letter(idx)
                width = 80 if header == "Message" else max(14, min(40, len(str(header)) + 2))
                ws.column_dimensions[col].width = width
                cell = ws.cell(row=1, column=idx)
                cell.alignment = Alignment(horizontal="left")
                cell.font = Font(bold=True)
