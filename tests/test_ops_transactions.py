from __future__ import annotations

import pytest

from recube.ops.base import OpContext, execute_op, model_hash
from recube.ops.transactions import TransactionManager
from recube.project.schema import Model, RawElement


def _model() -> Model:
    return Model(elements=[RawElement(data={"type": "locator", "name": "a"}), RawElement(data={"type": "locator", "name": "b"})])


def test_transaction_manager_begin_commit_undo_redo() -> None:
    model = _model()
    txm = TransactionManager(model)
    first = model.elements[0].id
    txm.begin(op_name="drop")
    model.remove(first)
    rec = txm.commit()
    assert rec.deleted == [first]
    assert rec.created == []
    assert txm.undo_depth == 1

    assert txm.undo() is True
    assert [e.id for e in model.elements][0] == first
    assert txm.redo_depth == 1
    assert txm.redo() is True
    assert len(model.elements) == 1
    assert txm.undo_depth == 1


def test_transaction_manager_misuse_raises() -> None:
    txm = TransactionManager(_model())
    with pytest.raises(RuntimeError):
        txm.commit()
    with pytest.raises(RuntimeError):
        txm.rollback()
    txm.begin()
    with pytest.raises(RuntimeError, match="already active"):
        txm.begin()
    txm.rollback()
    assert txm.undo() is False
    assert txm.redo() is False


def test_execute_op_rolls_back_and_reraises() -> None:
    model = _model()
    before = model_hash(model)

    def mutate() -> None:
        model.remove(model.elements[0].id)
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError, match="boom"):
        execute_op(model, op_name="drop", args={}, ctx=None, mutate=mutate)
    assert len(model.elements) == 2
    assert model_hash(model) == before
    assert model.history == []


def test_execute_op_records_history_event() -> None:
    model = _model()
    out = execute_op(
        model,
        op_name="rename",
        args={"name": "x"},
        ctx=OpContext(user="tester", source="api"),
        mutate=lambda: setattr(model, "name", "x") or "done",
    )
    assert out == "done"
    assert model.name == "x"
    evt = model.history[-1]
    assert evt["action"] == "ops.rename"
    assert evt["user"] == "tester"
    assert evt["source"] == "api"
    assert evt["args"]["name"] == "x"
    assert evt["before_hash"] != evt["after_hash"]
