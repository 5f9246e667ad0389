from __future__ import annotations

from copy import deepcopy
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from recube.project.io import model_from_dict
from recube.project.schema import Model


@dataclass(frozen=True)
class TransactionRecord:
    op_name: str
    args: Dict[str, Any]
    before: Dict[str, Any]
    after: Dict[str, Any]
    before_hash: str = ""
    after_hash: str = ""
    created: List[str] = field(default_factory=list)
    deleted: List[str] = field(default_factory=list)


def _element_ids(snapshot: Dict[str, Any]) -> List[str]:
    return [str(e.get("uuid")) for e in snapshot.get("elements", []) if isinstance(e, dict)]


def _document(model: Model) -> Dict[str, Any]:
    data = model.to_dict()
    data.pop("history", None)
    return data


class TransactionManager:
    """Snapshot-based undo log; one record per committed edit."""

    def __init__(self, model: Model) -> None:
        self.model = model
        self._active: Optional[Dict[str, Any]] = None
        self._undo: List[TransactionRecord] = []
        self._redo: List[TransactionRecord] = []

    def begin(self, op_name: str = "op", args: Optional[Dict[str, Any]] = None) -> None:
        if self._active is not None:
            raise RuntimeError("transaction already active")
        self._active = {
            "op_name": str(op_name),
            "args": dict(args or {}),
            "before": _document(self.model),
        }

    def commit(self, *, before_hash: str = "", after_hash: str = "") -> TransactionRecord:
        if self._active is None:
            raise RuntimeError("no active transaction")
        before = self._active["before"]
        after = _document(self.model)
        b_ids = set(_element_ids(before))
        a_ids = set(_element_ids(after))
        rec = TransactionRecord(
            op_name=str(self._active["op_name"]),
            args=dict(self._active["args"]),
            before=before,
            after=after,
            before_hash=str(before_hash),
            after_hash=str(after_hash),
            created=sorted(a_ids - b_ids),
            deleted=sorted(b_ids - a_ids),
        )
        self._undo.append(rec)
        self._redo.clear()
        self._active = None
        return rec

    def rollback(self) -> None:
        if self._active is None:
            raise RuntimeError("no active transaction")
        _restore(self.model, self._active["before"])
        self._active = None

    def undo(self) -> bool:
        if not self._undo:
            return False
        rec = self._undo.pop()
        _restore(self.model, rec.before)
        self._redo.append(rec)
        return True

    def redo(self) -> bool:
        if not self._redo:
            return False
        rec = self._redo.pop()
        _restore(self.model, rec.after)
        self._undo.append(rec)
        return True

    @property
    def undo_depth(self) -> int:
        return len(self._undo)

    @property
    def redo_depth(self) -> int:
        return len(self._redo)

    @property
    def active(self) -> bool:
        return self._active is not None


def _restore(model: Model, snapshot: Dict[str, Any]) -> None:
    restored = model_from_dict(deepcopy(snapshot))
    model.name = restored.name
    model.elements = restored.elements
    model.meta = restored.meta


def get_transaction_manager(model: Model) -> TransactionManager:
    mgr = getattr(model, "_ops_transaction_manager", None)
    if mgr is None:
        mgr = TransactionManager(model)
        setattr(model, "_ops_transaction_manager", mgr)
    return mgr
