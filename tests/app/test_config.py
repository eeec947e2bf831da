from __future__ import annotations

from pathlib import Path

from importbot.config import Config, load_config


def test_defaults_without_files(tmp_path: Path) -> None:
    cfg = load_config(tmp_path / "missing.yaml")
    assert cfg == Config()
    assert cfg.yield_every == 10


def test_yaml_then_overrides(tmp_path: Path) -> None:
    p = tmp_path / "cfg.yaml"
    p.write_text(
        "yield_every: 25\nmax_errors: 5\ndry_run: 'yes'\nexport_records: 'false'\n",
        encoding="utf-8",
    )
    cfg = load_config(p, overrides={"max_errors": 7})
    assert cfg.yield_every == 25
    assert cfg.max_errors == 7
    assert cfg.dry_run is True
    assert cfg.export_records is False
    assert cfg.rules_path is None
