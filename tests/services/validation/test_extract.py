from __future__ import annotations

from importbot.services.mapping.column_map import auto_map, set_override
from importbot.services.validation.extract import extract_row


def test_extract_splits_parent_and_child() -> None:
    m = auto_map(["nom", "email", "contact_nom", "contact_prenom"])
    rec = extract_row(["Acme", " hello@acme.fr ", "Durand", "Ana"], m)
    assert rec.parent == {"nom": "Acme", "email": "hello@acme.fr"}
    assert rec.child == {"nom": "Durand", "prenom": "Ana"}


def test_blank_cells_become_none() -> None:
    m = auto_map(["nom", "siret"])
    rec = extract_row(["Acme", "   "], m)
    assert rec.parent == {"nom": "Acme", "siret": None}


def test_child_without_name_is_dropped() -> None:
    m = auto_map(["nom", "contact_nom", "contact_email"])
    rec = extract_row(["Acme", "", "x@y.fr"], m)
    assert rec.child is None


def test_short_row_reads_missing_cells_as_none() -> None:
    m = auto_map(["nom", "email", "adresse"])
    rec = extract_row(["Acme"], m)
    assert rec.parent == {"nom": "Acme", "email": None, "adresse": None}


def test_last_column_wins_for_shared_field() -> None:
    m = auto_map(["nom", "entreprise"])
    rec = extract_row(["First", "Second"], m)
    assert rec.parent["nom"] == "Second"


def test_ignored_columns_are_skipped() -> None:
    m = set_override(auto_map(["nom", "email"]), 1, "")
    rec = extract_row(["Acme", "a@b.fr"], m)
    assert rec.parent == {"nom": "Acme"}
