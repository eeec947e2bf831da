from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, cast

from .types import ConfigOverrides, YamlConfig


@dataclass(frozen=True)
class Config:
    pipeline_version: str = "v1.0"
    # Cooperative yield cadence of the import loop (rows)
    yield_every: int = 10
    max_errors: int = 50
    preview_rows: int = 5
    # Optional YAML rule table replacing the built-in auto-map rules
    rules_path: Optional[str] = None
    export_records: bool = True
    # Map and validate only; no record is created
    dry_run: bool = False


def load_config(path: Optional[Path], overrides: Optional[ConfigOverrides] = None) -> Config:
    import yaml

    data: YamlConfig = {}

    # Always load configs/config.yaml if it exists
    default_config = Path("configs/config.yaml")
    if default_config.exists():
        raw = yaml.safe_load(default_config.read_text(encoding="utf-8"))
        if isinstance(raw, dict):
            data.update(cast(YamlConfig, raw))

    # Then load custom config if provided (overrides default)
    if path is not None and path.exists():
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
        if isinstance(raw, dict):
            data.update(cast(YamlConfig, raw))

    # Finally apply CLI overrides
    if overrides:
        data.update(cast(YamlConfig, {k: v for k, v in overrides.items() if v is not None}))

    # Coerce booleans from strings if needed (Windows/CLI friendliness)
    for key in ("export_records", "dry_run"):
        if key in data:
            val = data.get(key)
            if isinstance(val, str):
                data[key] = val.strip().lower() in {"1", "true", "yes", "y"}

    defaults = Config()
    rules_path = data.get("rules_path", defaults.rules_path)
    cfg = Config(
        pipeline_version=str(data.get("pipeline_version", defaults.pipeline_version)),
        yield_every=int(data.get("yield_every", defaults.yield_every)),
        max_errors=int(data.get("max_errors", defaults.max_errors)),
        preview_rows=int(data.get("preview_rows", defaults.preview_rows)),
        rules_path=str(rules_path) if rules_path else None,
        export_records=bool(data.get("export_records", defaults.export_records)),
        dry_run=bool(data.get("dry_run", defaults.dry_run)),
    )
    return cfg
