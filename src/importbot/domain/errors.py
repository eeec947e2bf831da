from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ErrorCategory(str, Enum):
    MISSING_NAME = "MISSING_NAME"
    INVALID_IDENTIFIER = "INVALID_IDENTIFIER"
    INVALID_EMAIL = "INVALID_EMAIL"
    PERSIST_PARENT = "PERSIST_PARENT"
    PERSIST_CHILD = "PERSIST_CHILD"


@dataclass(frozen=True)
class ValidationError:
    """A row-level problem, tagged with its 1-based source line (header = line 1)."""

    line: int
    reason: str
    category: ErrorCategory

    @property
    def is_child(self) -> bool:
        return self.category is ErrorCategory.PERSIST_CHILD

    def __str__(self) -> str:
        if self.is_child:
            return f"Line {self.line} (contact): {self.reason}"
        return f"Line {self.line}: {self.reason}"


class ImportBotError(Exception):
    """Base class for errors that stop an import before any row is processed."""


class EmptyInputError(ImportBotError):
    def __init__(self, rows: int) -> None:
        super().__init__(f"CSV file is empty or has no data rows ({rows} row(s) found)")
        self.rows = rows


class InputDecodeError(ImportBotError):
    pass


class InvalidMappingError(ImportBotError):
    def __init__(self, required: str) -> None:
        super().__init__(f"No column is mapped to required field '{required}'")
        self.required = required


class UnknownFieldError(ImportBotError):
    def __init__(self, field_path: str) -> None:
        super().__init__(f"Unknown field path '{field_path}'")
        self.field_path = field_path


class SessionBusyError(ImportBotError):
    pass


class UnknownColumnError(ImportBotError, IndexError):
    def __init__(self, col: int, width: int) -> None:
        super().__init__(f"Column {col} out of range (file has {width} column(s))")
        self.col = col
