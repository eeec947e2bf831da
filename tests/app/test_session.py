from __future__ import annotations

import pytest

from importbot.app.session import ImportSession, SessionStatus
from importbot.domain.errors import EmptyInputError, InvalidMappingError, SessionBusyError
from importbot.services.importer.report import ReportBuilder
from importbot.services.io_csv import read_csv_text
from importbot.services.mapping.column_map import auto_map, set_override


def _loaded(text: str = "nom;email\nAcme;a@acme.fr\n") -> ImportSession:
    table = read_csv_text("in.csv", text)
    s = ImportSession()
    s.load(table, auto_map(table.header))
    return s


def test_load_rejects_header_only_file() -> None:
    table = read_csv_text("in.csv", "nom;email\n")
    s = ImportSession()
    with pytest.raises(EmptyInputError):
        s.load(table, auto_map(table.header))
    assert s.status is SessionStatus.EMPTY


def test_load_replaces_previous_state() -> None:
    s = _loaded()
    s.start()
    s.finish(ReportBuilder(total=1).build())
    assert s.status is SessionStatus.DONE

    other = read_csv_text("b.csv", "societe,ville\nGlobex,Lyon\n")
    s.load(other, auto_map(other.header))
    assert s.table is other
    assert s.report is None
    assert s.mapping is not None and s.mapping.headers == ("societe", "ville")
    assert s.status is SessionStatus.LOADED


def test_busy_session_rejects_load_and_reset() -> None:
    s = _loaded()
    s.start()
    assert s.busy
    table = read_csv_text("b.csv", "nom\nX\n")
    with pytest.raises(SessionBusyError):
        s.load(table, auto_map(table.header))
    with pytest.raises(SessionBusyError):
        s.reset()
    with pytest.raises(SessionBusyError):
        s.start()


def test_start_requires_valid_mapping() -> None:
    s = _loaded("foo;bar\n1;2\n")
    assert not s.can_start()
    with pytest.raises(InvalidMappingError):
        s.start()
    assert s.mapping is not None
    s.update_mapping(set_override(s.mapping, 0, "prospect.nom"))
    assert s.can_start()


def test_failed_run_returns_to_loaded() -> None:
    s = _loaded()
    s.start()
    s.finish(None)
    assert s.status is SessionStatus.LOADED
    assert s.can_start()


def test_reset_clears_everything() -> None:
    s = _loaded()
    s.reset()
    assert s.table is None and s.mapping is None
    assert s.status is SessionStatus.EMPTY
    assert not s.can_start()
