from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd
import yaml

from importbot.config import Config
from importbot.domain.errors import ErrorCategory, ValidationError
from importbot.services.importer.report import ReportBuilder
from importbot.services.mapping.column_map import auto_map
from importbot.services.output.manifest_writer import write_manifest
from importbot.services.output.report_writer import report_frames, write_report


def _report():
    b = ReportBuilder(total=2)
    b.add_parent()
    b.skip(ValidationError(3, "invalid email (x).", ErrorCategory.INVALID_EMAIL))
    return b.build()


def test_report_frames() -> None:
    frames = report_frames(_report())
    summary = frames["Summary"].set_index("Metric")["Value"]
    assert summary["Data rows"] == 2
    assert summary["Prospects created"] == 1
    errors = frames["Errors"]
    assert list(errors.columns) == ["Line", "Code", "Message"]
    assert errors.loc[0, "Code"] == "INVALID_EMAIL"
    assert errors.loc[0, "Message"] == "Line 3: invalid email (x)."


def test_write_report_with_and_without_errors(tmp_path: Path) -> None:
    logger = logging.getLogger("test")
    out = tmp_path / "import_report.xlsx"
    write_report(_report(), out, logger)
    assert pd.read_excel(out, sheet_name="Errors").shape[0] == 1

    clean = tmp_path / "clean.xlsx"
    write_report(ReportBuilder(total=1).build(), clean, logger)
    assert pd.read_excel(clean, sheet_name="Errors").empty


def test_write_manifest_creates_file(tmp_path: Path) -> None:
    run_dir = tmp_path / "run"
    run_dir.mkdir()
    src = tmp_path / "in.csv"
    src.write_text("nom;email\nAcme;a@acme.fr\n", encoding="utf-8")

    path = write_manifest(
        run_dir=run_dir,
        input_path=src,
        separator=";",
        mapping=auto_map(["nom", "email", "divers"]),
        report=_report(),
        started_at="2024-01-01T00:00:00Z",
        finished_at="2024-01-01T00:01:00Z",
        cfg=Config(),
        logger=logging.getLogger("test"),
    )

    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    assert data["parameters"]["separator"] == ";"
    assert data["parameters"]["mapping"] == {0: "prospect.nom", 1: "prospect.email"}
    assert data["report"]["parents"] == 1
    assert len(data["inputs"]["csv"]["sha256"]) == 64
