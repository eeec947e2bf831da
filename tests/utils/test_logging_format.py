from __future__ import annotations

import json
import logging
from pathlib import Path

from importbot.utils.logging_setup import ExtraAwareFormatter, JsonLineFormatter, setup_logging


def _record(**extra: object) -> logging.LogRecord:
    rec = logging.LogRecord(
        name="importbot.main",
        level=logging.ERROR,
        pathname=__file__,
        lineno=1,
        msg="Import aborted: no data rows",
        args=(),
        exc_info=None,
    )
    rec.__dict__.update(extra)
    return rec


def test_extra_aware_formatter_keeps_message_clean() -> None:
    fmt = ExtraAwareFormatter("%(levelname)s | %(name)s | %(message)s")
    out = fmt.format(_record(path="in.csv"))
    assert out == "ERROR | importbot.main | Import aborted: no data rows"


def test_extra_aware_formatter_shows_short_extras() -> None:
    fmt = ExtraAwareFormatter("%(message)s")
    out = fmt.format(_record(rows=0, file="in.csv", path="/tmp/in.csv"))
    assert out == "Import aborted: no data rows [file=in.csv, rows=0]"


def test_json_formatter_includes_extras() -> None:
    out = json.loads(JsonLineFormatter().format(_record(path=Path("in.csv"), rows=1)))
    assert out["level"] == "ERROR"
    assert out["message"] == "Import aborted: no data rows"
    assert out["path"] == "in.csv"
    assert out["rows"] == 1


def test_setup_logging_writes_both_files(tmp_path: Path) -> None:
    files = setup_logging(tmp_path / "run")
    logging.getLogger("importbot.test").info("hello", extra={"rows": 3})
    for h in logging.getLogger().handlers:
        h.flush()
    assert "hello" in files.human.read_text(encoding="utf-8")
    line = files.jsonl.read_text(encoding="utf-8").strip().splitlines()[-1]
    assert json.loads(line)["rows"] == 3
