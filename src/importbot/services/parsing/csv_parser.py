from __future__ import annotations

from typing import List, Literal

from ...domain.errors import InputDecodeError

Separator = Literal[",", ";"]
RawTable = List[List[str]]

_BOM = "\ufeff"


def detect_separator(first_line: str) -> Separator:
    """Pick ';' when it is at least as frequent as ',' in the first line."""
    semicolons = first_line.count(";")
    commas = first_line.count(",")
    return ";" if semicolons >= commas else ","


def decode_bytes(data: bytes) -> str:
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise InputDecodeError(f"Input is not valid UTF-8: {exc}") from exc
    if text.startswith(_BOM):
        text = text[len(_BOM) :]
    return text


def _flush_row(rows: RawTable, row: List[str]) -> None:
    if any(v != "" for v in row):
        rows.append(row)


def parse_csv(text: str) -> RawTable:
    """
    Parse delimited text into a list of rows.

    Two-state scanner (normal / in quotes):
    - '""' inside quotes is a literal quote; quoted fields may hold separators
      and newlines
    - '\\n' or '\\r\\n' outside quotes ends a row
    - fields are trimmed; rows whose fields are all empty are dropped
    - an unterminated quote at end of input closes the field as-is
    """
    sep = detect_separator(text.split("\n", 1)[0])
    rows: RawTable = []
    row: List[str] = []
    field: List[str] = []
    in_quotes = False

    i = 0
    n = len(text)
    while i < n:
        c = text[i]
        nxt = text[i + 1] if i + 1 < n else ""
        if in_quotes:
            if c == '"' and nxt == '"':
                field.append('"')
                i += 1
            elif c == '"':
                in_quotes = False
            else:
                field.append(c)
        else:
            if c == '"':
                in_quotes = True
            elif c == sep:
                row.append("".join(field).strip())
                field = []
            elif c == "\n" or (c == "\r" and nxt == "\n"):
                if c == "\r":
                    i += 1
                row.append("".join(field).strip())
                _flush_row(rows, row)
                row = []
                field = []
            else:
                field.append(c)
        i += 1

    if field or row:
        row.append("".join(field).strip())
        _flush_row(rows, row)
    return rows
