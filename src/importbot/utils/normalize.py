from __future__ import annotations

import re
import unicodedata
from typing import Optional


def strip_accents(value: str) -> str:
    """Decompose (NFKD) and drop combining marks: 'Téléphone' -> 'Telephone'."""
    s = unicodedata.normalize("NFKD", value)
    return "".join(ch for ch in s if not unicodedata.combining(ch))


def normalize_header(value: str) -> str:
    """Normalization for CSV header cells before auto-mapping.

    Steps:
    - strip accents
    - lowercase, trim
    - fold runs of whitespace/hyphens to a single underscore
    """
    s = strip_accents(value)
    s = s.lower().strip()
    s = re.sub(r"[\s\-]+", "_", s)
    return s


def clean_cell(value: Optional[str]) -> Optional[str]:
    """Trim a cell; blank becomes None so empty strings are never stored."""
    if value is None:
        return None
    s = value.strip()
    return s if s else None
