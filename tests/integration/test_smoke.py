from __future__ import annotations

import argparse
from pathlib import Path

import pandas as pd
import pytest
import yaml

from importbot.config import Config
from importbot.main import parse_override, run_pipeline


def write_csv(path: Path, text: str) -> Path:
    path.write_text(text, encoding="utf-8")
    return path


def only_run_dir(out: Path) -> Path:
    runs = [p for p in out.iterdir() if p.is_dir()]
    assert len(runs) == 1
    return runs[0]


def test_clean_import(tmp_path: Path) -> None:
    src = write_csv(
        tmp_path / "prospects.csv",
        "Raison sociale;SIRET;Email;Contact Nom;Contact Prénom\n"
        "Acme;123 456 789;hello@acme.fr;Durand;Ana\n"
        'Globex;;"info@globex.com";;\n',
    )
    out = tmp_path / "runs"

    code = run_pipeline(src, out)
    assert code == 0

    run_dir = only_run_dir(out)
    for name in ("latest_run.log", "logs.jsonl", "import_report.xlsx", "records.xlsx"):
        assert (run_dir / name).exists(), name

    prospects = pd.read_excel(run_dir / "records.xlsx", sheet_name="Prospects")
    assert list(prospects["nom"]) == ["Acme", "Globex"]
    contacts = pd.read_excel(run_dir / "records.xlsx", sheet_name="Contacts")
    assert contacts.loc[0, "prenom"] == "Ana"

    manifest = yaml.safe_load((run_dir / "run_manifest.yaml").read_text(encoding="utf-8"))
    assert manifest["report"] == {
        "parents": 2,
        "children": 1,
        "errors": [],
        "total": 2,
        "skipped": 0,
    }
    assert manifest["parameters"]["separator"] == ";"


def test_row_errors_exit_one(tmp_path: Path) -> None:
    src = write_csv(
        tmp_path / "prospects.csv",
        "nom,siret,email\nAcme,123,a@acme.fr\nGlobex,,g@globex.com\n,,x@y.fr\n",
    )
    out = tmp_path / "runs"
    assert run_pipeline(src, out) == 1

    report = pd.read_excel(only_run_dir(out) / "import_report.xlsx", sheet_name="Errors")
    assert list(report["Message"]) == [
        "Line 2: invalid identifier (123).",
        "Line 4: missing name.",
    ]


def test_header_only_file_is_fatal(tmp_path: Path) -> None:
    src = write_csv(tmp_path / "empty.csv", "nom;email\n")
    out = tmp_path / "runs"
    assert run_pipeline(src, out) == 2
    assert not (only_run_dir(out) / "import_report.xlsx").exists()


def test_unmapped_name_is_fatal_until_overridden(tmp_path: Path) -> None:
    src = write_csv(tmp_path / "odd.csv", "col_a;col_b\nAcme;x\n")
    assert run_pipeline(src, tmp_path / "a") == 2
    assert run_pipeline(src, tmp_path / "b", overrides={0: "prospect.nom"}) == 0


def test_dry_run_creates_nothing(tmp_path: Path) -> None:
    src = write_csv(tmp_path / "p.csv", "nom;email\nAcme;bad\nGlobex;g@globex.com\n")
    out = tmp_path / "runs"
    assert run_pipeline(src, out, Config(dry_run=True)) == 1

    run_dir = only_run_dir(out)
    assert not (run_dir / "records.xlsx").exists()
    manifest = yaml.safe_load((run_dir / "run_manifest.yaml").read_text(encoding="utf-8"))
    assert manifest["report"]["parents"] == 0
    assert manifest["report"]["errors"] == ["Line 2: invalid email (bad)."]


def test_parse_override() -> None:
    assert parse_override("2=prospect.nom") == (2, "prospect.nom")
    assert parse_override(" 1 = ") == (1, "")
    with pytest.raises(argparse.ArgumentTypeError):
        parse_override("prospect.nom")
    with pytest.raises(argparse.ArgumentTypeError):
        parse_override("x=prospect.nom")
