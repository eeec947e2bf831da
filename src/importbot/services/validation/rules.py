from __future__ import annotations

import re
from typing import Optional

from ...domain.errors import ErrorCategory, ValidationError
from ...domain.schema_defs import EMAIL_KEY, IDENTIFIER_KEY, IDENTIFYING_KEY
from .extract import ExtractedRecord

# SIREN (9 digits) or SIRET (14 digits); spaces are ignored
_IDENTIFIER_RE = re.compile(r"^[0-9]{9}([0-9]{5})?$")
_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def is_valid_identifier(value: Optional[str]) -> bool:
    if not value:
        return True
    return _IDENTIFIER_RE.match(re.sub(r"\s", "", value)) is not None


def is_valid_email(value: Optional[str]) -> bool:
    if not value:
        return True
    return _EMAIL_RE.match(value) is not None


def validate_record(record: ExtractedRecord, line: int) -> Optional[ValidationError]:
    """Classify a record; the first failing rule wins. Never mutates the record."""
    p = record.parent
    name = p.get(IDENTIFYING_KEY)
    if not name or not name.strip():
        return ValidationError(line, "missing name.", ErrorCategory.MISSING_NAME)
    ident = p.get(IDENTIFIER_KEY)
    if not is_valid_identifier(ident):
        return ValidationError(
            line, f"invalid identifier ({ident}).", ErrorCategory.INVALID_IDENTIFIER
        )
    email = p.get(EMAIL_KEY)
    if not is_valid_email(email):
        return ValidationError(line, f"invalid email ({email}).", ErrorCategory.INVALID_EMAIL)
    return None
