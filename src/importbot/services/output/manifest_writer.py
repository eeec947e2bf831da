from __future__ import annotations

import logging
from pathlib import Path
from typing import cast

import pandas as pd

from ...config import Config
from ..importer.report import ImportReport
from ..mapping.column_map import ColumnMapping
from .utils import sha256_file
from ...types import (
    Manifest,
    ManifestEnvironment,
    ManifestInputs,
    ManifestInputsEntry,
    ManifestParameters,
)


def write_manifest(
    *,
    run_dir: Path,
    input_path: Path,
    separator: str,
    mapping: ColumnMapping,
    report: ImportReport,
    started_at: str,
    finished_at: str,
    cfg: Config,
    logger: logging.Logger,
) -> Path:
    import platform
    import sys
    import yaml

    inputs: ManifestInputs = {
        "csv": cast(
            ManifestInputsEntry, {"path": str(input_path), "sha256": sha256_file(input_path)}
        ),
    }

    params: ManifestParameters = {
        "yield_every": cfg.yield_every,
        "max_errors": cfg.max_errors,
        "dry_run": cfg.dry_run,
        "separator": separator,
        "mapping": {col: path for col, path in mapping.fields().items() if path},
    }

    env: ManifestEnvironment = {
        "python": sys.version.split()[0],
        "platform": platform.platform(),
        "pandas": pd.__version__,
    }

    manifest: Manifest = {
        "pipeline_version": cfg.pipeline_version,
        "started_at": started_at,
        "finished_at": finished_at,
        "inputs": inputs,
        "parameters": params,
        "environment": env,
        "report": report.to_dict(),
    }

    out_path = run_dir / "run_manifest.yaml"
    logger.info("Writing run_manifest.yaml", extra={"path": str(out_path)})
    with out_path.open("w", encoding="utf-8") as f:
        yaml.safe_dump(manifest, f, sort_keys=False, allow_unicode=True)
    return out_path
