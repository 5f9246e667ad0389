from __future__ import annotations

import hashlib
import json
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, TypeVar

from recube.ops.transactions import get_transaction_manager
from recube.project.schema import Model

T = TypeVar("T")


@dataclass(frozen=True)
class OpContext:
    user: str = "system"
    source: str = "cli"  # cli | api
    run_id: Optional[str] = None


def model_hash(model: Model) -> str:
    data = dict(model.to_dict())
    data.pop("history", None)
    raw = json.dumps(data, sort_keys=True, separators=(",", ":"), ensure_ascii=False).encode("utf-8")
    return hashlib.sha256(raw).hexdigest()


def record_event(
    model: Model,
    *,
    op_name: str,
    args: Dict[str, Any],
    ctx: OpContext,
    before_hash: str,
    after_hash: str,
) -> None:
    model.history.append(
        {
            "action": f"ops.{op_name}",
            "source": ctx.source,
            "user": ctx.user,
            "run_id": ctx.run_id,
            "before_hash": before_hash,
            "after_hash": after_hash,
            "args": args,
        }
    )


def execute_op(
    model: Model,
    *,
    op_name: str,
    args: Dict[str, Any],
    ctx: Optional[OpContext],
    mutate: Callable[[], T],
) -> T:
    """Run one edit inside a transaction; the model is restored if mutate raises."""
    context = ctx or OpContext()
    before = model_hash(model)
    txm = get_transaction_manager(model)
    txm.begin(op_name=op_name, args=args)
    try:
        out = mutate()
        after = model_hash(model)
        rec = txm.commit(before_hash=before, after_hash=after)
    except Exception:
        txm.rollback()
        raise
    evt_args = dict(args)
    evt_args["tx"] = {"created": list(rec.created), "deleted": list(rec.deleted)}
    record_event(model, op_name=op_name, args=evt_args, ctx=context, before_hash=before, after_hash=after)
    return out
