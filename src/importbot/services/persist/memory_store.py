from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Set

import pandas as pd

from .port import ChildResult, ParentResult, PersistError


@dataclass
class StoredRecord:
    id: str
    fields: Dict[str, Optional[str]]
    parent_id: Optional[str] = None


@dataclass
class InMemoryStore:
    """Local persistence backend: keeps created records in lists.

    Never de-duplicates; importing the same rows twice yields two sets of
    records with distinct ids.
    """

    logger: logging.Logger = field(default_factory=lambda: logging.getLogger("importbot.store"))
    parents: List[StoredRecord] = field(default_factory=list)
    children: List[StoredRecord] = field(default_factory=list)
    _parent_ids: Set[str] = field(default_factory=set, init=False, repr=False)

    def __post_init__(self) -> None:
        self._parent_ids.update(p.id for p in self.parents)

    async def create_parent(self, fields: Mapping[str, Optional[str]]) -> ParentResult:
        rec = StoredRecord(id=str(uuid.uuid4()), fields=dict(fields))
        self.parents.append(rec)
        self._parent_ids.add(rec.id)
        self.logger.debug("Created parent", extra={"id": rec.id})
        return ParentResult(id=rec.id)

    async def create_child(
        self, parent_id: str, fields: Mapping[str, Optional[str]]
    ) -> ChildResult:
        if parent_id not in self._parent_ids:
            return ChildResult(error=PersistError(f"unknown parent id {parent_id}"))
        rec = StoredRecord(id=str(uuid.uuid4()), fields=dict(fields), parent_id=parent_id)
        self.children.append(rec)
        self.logger.debug("Created child", extra={"id": rec.id, "parent_id": parent_id})
        return ChildResult()

    def frames(self) -> tuple[pd.DataFrame, pd.DataFrame]:
        parents = pd.DataFrame([{"id": r.id, **r.fields} for r in self.parents])
        children = pd.DataFrame(
            [{"id": r.id, "parent_id": r.parent_id, **r.fields} for r in self.children]
        )
        return parents, children

    def export_excel(self, out_path: Path) -> None:
        """Write created records to a workbook with Prospects and Contacts sheets."""
        parents, children = self.frames()
        out_path.parent.mkdir(parents=True, exist_ok=True)
        with pd.ExcelWriter(out_path, engine="openpyxl") as writer:
            parents.to_excel(writer, sheet_name="Prospects", index=False)
            children.to_excel(writer, sheet_name="Contacts", index=False)
        self.logger.info(
            f"Wrote {out_path.name}",
            extra={"path": str(out_path), "parents": len(parents), "children": len(children)},
        )
