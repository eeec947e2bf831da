from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

from rich.logging import RichHandler

# Attributes every LogRecord carries; anything else came in through ``extra``
_RECORD_KEYS = frozenset(
    {
        "args",
        "asctime",
        "created",
        "exc_info",
        "exc_text",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "module",
        "msecs",
        "message",
        "msg",
        "name",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "taskName",
        "thread",
        "threadName",
    }
)

HUMAN_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


@dataclass(frozen=True)
class LogFiles:
    human: Path
    jsonl: Path


def record_extras(record: logging.LogRecord) -> Dict[str, Any]:
    return {k: v for k, v in record.__dict__.items() if k not in _RECORD_KEYS}


class JsonLineFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
            "time": self.formatTime(record, datefmt="%Y-%m-%dT%H:%M:%S"),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        payload.update(record_extras(record))
        return json.dumps(payload, ensure_ascii=False, default=str)


class ExtraAwareFormatter(logging.Formatter):
    """Console formatter: appends a few short extras, the rest stay in the JSON log."""

    SAFE_KEYS = ("file", "rows", "invalid")

    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)
        extras = record_extras(record)
        shown = [f"{k}={extras[k]}" for k in self.SAFE_KEYS if k in extras]
        return f"{base} [{', '.join(shown)}]" if shown else base


def setup_logging(run_dir: Path, level: int = logging.INFO) -> LogFiles:
    run_dir.mkdir(parents=True, exist_ok=True)
    human_log = run_dir / "latest_run.log"
    jsonl_log = run_dir / "logs.jsonl"

    logger = logging.getLogger()
    logger.setLevel(level)

    # Clear existing handlers for repeatable runs
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()

    human_handler = logging.FileHandler(human_log, encoding="utf-8")
    human_handler.setFormatter(logging.Formatter(HUMAN_FORMAT))
    human_handler.setLevel(level)

    json_handler = logging.FileHandler(jsonl_log, encoding="utf-8")
    json_handler.setFormatter(JsonLineFormatter())
    json_handler.setLevel(level)

    rich_handler = RichHandler(
        level=level,
        markup=False,
        show_time=True,
        show_path=False,
        rich_tracebacks=True,
        log_time_format="%Y-%m-%d %H:%M:%S",
    )
    # Base message only; RichHandler shows time/level
    rich_handler.setFormatter(ExtraAwareFormatter("%(message)s"))

    logger.addHandler(human_handler)
    logger.addHandler(json_handler)
    logger.addHandler(rich_handler)

    return LogFiles(human=human_log, jsonl=jsonl_log)
