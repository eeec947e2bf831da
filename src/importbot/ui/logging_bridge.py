from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from ..utils.logging_setup import HUMAN_FORMAT


@dataclass
class UiLogBuffer:
    max_lines: int = 200
    lines: List[str] = field(default_factory=list)
    on_append: Optional[Callable[[str], None]] = None

    def append(self, text: str) -> None:
        self.lines.append(text)
        if len(self.lines) > self.max_lines:
            # keep only the last max_lines
            self.lines[:] = self.lines[-self.max_lines :]
        if self.on_append is not None:
            self.on_append(text)

    def dump(self) -> str:
        return "\n".join(self.lines)

    def clear(self) -> None:
        self.lines.clear()


class UiLogHandler(logging.Handler):
    def __init__(self, buffer: UiLogBuffer) -> None:
        super().__init__()
        self.buffer = buffer

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self.buffer.append(self.format(record))
        except Exception:  # pragma: no cover
            self.handleError(record)


def attach_ui_log_handler(logger: logging.Logger, level: int = logging.INFO) -> UiLogBuffer:
    buf = UiLogBuffer()
    handler = UiLogHandler(buf)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(HUMAN_FORMAT))
    logger.addHandler(handler)
    return buf
