from __future__ import annotations

import pytest

from importbot.domain.errors import ErrorCategory, ValidationError
from importbot.services.importer.report import ReportBuilder


def test_builder_counts_and_freezes() -> None:
    b = ReportBuilder(total=3)
    b.add_parent()
    b.add_child()
    b.skip(ValidationError(3, "missing name.", ErrorCategory.MISSING_NAME))
    b.add_issue(ValidationError(4, "contact rejected", ErrorCategory.PERSIST_CHILD))
    report = b.build()

    assert report.parents == 1
    assert report.children == 1
    assert report.skipped == 1
    assert report.child_failures == 1
    assert report.parent_failures == 0
    assert not report.ok
    assert report.errors == ["Line 3: missing name.", "Line 4 (contact): contact rejected"]

    with pytest.raises(RuntimeError):
        b.add_parent()


def test_to_dict_shape() -> None:
    report = ReportBuilder(total=2).build()
    assert report.ok
    assert report.to_dict() == {
        "parents": 0,
        "children": 0,
        "errors": [],
        "total": 2,
        "skipped": 0,
    }


def test_built_flag_is_not_a_constructor_argument() -> None:
    with pytest.raises(TypeError):
        ReportBuilder(_built=True)  # type: ignore[call-arg]
    assert "_built" not in repr(ReportBuilder())
