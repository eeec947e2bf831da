from __future__ import annotations

from typing import List, TypedDict


class ReportDict(TypedDict):
    parents: int
    children: int
    errors: List[str]
    total: int
    skipped: int


class ManifestInputsEntry(TypedDict):
    path: str
    sha256: str


class ManifestInputs(TypedDict):
    csv: ManifestInputsEntry


class ManifestParameters(TypedDict):
    yield_every: int
    max_errors: int
    dry_run: bool
    separator: str
    mapping: dict[int, str]


class ManifestEnvironment(TypedDict):
    python: str
    platform: str
    pandas: str


class Manifest(TypedDict):
    pipeline_version: str
    started_at: str
    finished_at: str
    inputs: ManifestInputs
    parameters: ManifestParameters
    environment: ManifestEnvironment
    report: ReportDict


class ConfigOverrides(TypedDict, total=False):
    pipeline_version: str
    yield_every: int
    max_errors: int
    preview_rows: int
    rules_path: str
    export_records: bool
    dry_run: bool


class YamlConfig(TypedDict, total=False):
    pipeline_version: str
    yield_every: int
    max_errors: int
    preview_rows: int
    rules_path: str
    export_records: bool
    dry_run: bool
