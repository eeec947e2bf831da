from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional, Protocol


@dataclass(frozen=True)
class PersistError:
    message: str


@dataclass(frozen=True)
class ParentResult:
    id: Optional[str] = None
    error: Optional[PersistError] = None


@dataclass(frozen=True)
class ChildResult:
    error: Optional[PersistError] = None


class PersistPort(Protocol):
    """Record-creation backend. Each call returns a result-or-error value."""

    async def create_parent(self, fields: Mapping[str, Optional[str]]) -> ParentResult: ...

    async def create_child(
        self, parent_id: str, fields: Mapping[str, Optional[str]]
    ) -> ChildResult: ...
