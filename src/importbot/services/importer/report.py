from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple

from ...domain.errors import ErrorCategory, ValidationError
from ...types import ReportDict


@dataclass(frozen=True)
class ImportReport:
    """Final outcome of one run.

    ``parents + skipped`` need not equal ``total``: a row whose parent create
    failed counts as neither. Reconcile through ``issues`` instead.
    """

    parents: int
    children: int
    total: int
    skipped: int
    issues: Tuple[ValidationError, ...]

    @property
    def errors(self) -> List[str]:
        return [str(i) for i in self.issues]

    @property
    def parent_failures(self) -> int:
        return sum(1 for i in self.issues if i.category is ErrorCategory.PERSIST_PARENT)

    @property
    def child_failures(self) -> int:
        return sum(1 for i in self.issues if i.category is ErrorCategory.PERSIST_CHILD)

    @property
    def ok(self) -> bool:
        return not self.issues

    def to_dict(self) -> ReportDict:
        return {
            "parents": self.parents,
            "children": self.children,
            "errors": self.errors,
            "total": self.total,
            "skipped": self.skipped,
        }


@dataclass
class ReportBuilder:
    total: int = 0
    parents: int = 0
    children: int = 0
    skipped: int = 0
    issues: List[ValidationError] = field(default_factory=list)
    _built: bool = field(default=False, init=False, repr=False)

    def _check_open(self) -> None:
        if self._built:
            raise RuntimeError("Report already built; start a new run for a new report")

    def add_parent(self) -> None:
        self._check_open()
        self.parents += 1

    def add_child(self) -> None:
        self._check_open()
        self.children += 1

    def skip(self, issue: ValidationError) -> None:
        """Record a row rejected by validation."""
        self._check_open()
        self.skipped += 1
        self.issues.append(issue)

    def add_issue(self, issue: ValidationError) -> None:
        self._check_open()
        self.issues.append(issue)

    def build(self) -> ImportReport:
        self._built = True
        return ImportReport(
            parents=self.parents,
            children=self.children,
            total=self.total,
            skipped=self.skipped,
            issues=tuple(self.issues),
        )
