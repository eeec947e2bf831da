from __future__ import annotations

from importbot.domain.errors import ErrorCategory
from importbot.services.validation.extract import ExtractedRecord
from importbot.services.validation.rules import (
    is_valid_email,
    is_valid_identifier,
    validate_record,
)


def test_valid_record_passes() -> None:
    rec = ExtractedRecord(parent={"nom": "Acme", "siret": "123 456 789 00012", "email": "a@b.fr"})
    assert validate_record(rec, 2) is None


def test_missing_name() -> None:
    err = validate_record(ExtractedRecord(parent={"nom": None}), 7)
    assert err is not None
    assert err.category is ErrorCategory.MISSING_NAME
    assert str(err) == "Line 7: missing name."


def test_name_check_runs_first() -> None:
    rec = ExtractedRecord(parent={"siret": "abc", "email": "nope"})
    err = validate_record(rec, 3)
    assert err is not None and err.category is ErrorCategory.MISSING_NAME


def test_invalid_identifier() -> None:
    rec = ExtractedRecord(parent={"nom": "Acme", "siret": "12345", "email": "nope"})
    err = validate_record(rec, 4)
    assert err is not None
    assert err.category is ErrorCategory.INVALID_IDENTIFIER
    assert str(err) == "Line 4: invalid identifier (12345)."


def test_invalid_email() -> None:
    rec = ExtractedRecord(parent={"nom": "Acme", "email": "not-an-email"})
    err = validate_record(rec, 5)
    assert err is not None
    assert err.category is ErrorCategory.INVALID_EMAIL
    assert str(err) == "Line 5: invalid email (not-an-email)."


def test_validation_does_not_mutate() -> None:
    parent = {"nom": "Acme", "email": "bad"}
    rec = ExtractedRecord(parent=parent)
    validate_record(rec, 2)
    assert rec.parent == {"nom": "Acme", "email": "bad"}


def test_identifier_shapes() -> None:
    assert is_valid_identifier(None)
    assert is_valid_identifier("123456789")
    assert is_valid_identifier("123 456 789")
    assert is_valid_identifier("12345678900012")
    assert not is_valid_identifier("1234567890")
    assert not is_valid_identifier("12345678A")
    # only ASCII digits count
    assert not is_valid_identifier("\uff11\uff12\uff13\uff14\uff15\uff16\uff17\uff18\uff19")
    assert not is_valid_identifier("\u0661\u0662\u0663\u0664\u0665\u0666\u0667\u0668\u0669")


def test_non_ascii_identifier_rejects_row() -> None:
    rec = ExtractedRecord(parent={"nom": "Acme", "siret": "\u0661" * 9})
    err = validate_record(rec, 2)
    assert err is not None
    assert err.category is ErrorCategory.INVALID_IDENTIFIER


def test_email_shapes() -> None:
    assert is_valid_email(None)
    assert is_valid_email("a@b.co")
    assert not is_valid_email("a@b")
    assert not is_valid_email("a b@c.fr")
