from __future__ import annotations

import json
from pathlib import Path

from recube.cli import main
from recube.project.io import load_model, save_model
from recube.project.schema import MeshElement, Model
from recube.testing import box_to_mesh, canonical_cube


def _write_model(path: Path, *, with_empty: bool = False) -> Model:
    elements = [box_to_mesh(canonical_cube((0.0, 0.0, 0.0), (2.0, 4.0, 2.0), texture="skin"), name="body")]
    if with_empty:
        elements.append(MeshElement(vertices={}, faces={}, name="empty"))
    model = Model(name="rig", elements=elements)
    save_model(model, path)
    return model


def test_cli_convert_writes_cubes(tmp_path: Path) -> None:
    src = tmp_path / "rig.json"
    out = tmp_path / "out" / "rig_cubes.json"
    _write_model(src)
    rc = main(["convert", str(src), "--out", str(out)])
    assert rc == 0

    model = load_model(out)
    assert model.meshes() == []
    assert len(model.cubes()) == 1
    cube = model.cubes()[0]
    assert cube.to == (2.0, 4.0, 2.0)
    assert cube.faces
    assert model.history[0]["source"] == "cli"
    assert len(load_model(src).meshes()) == 1


def test_cli_convert_reports_skipped_meshes(tmp_path: Path, capsys) -> None:
    src = tmp_path / "rig.json"
    _write_model(src, with_empty=True)
    rc = main(["convert", str(src), "--json"])
    assert rc == 3
    data = json.loads(capsys.readouterr().out)
    assert data["converted"] == 1
    assert data["skipped"] == 1
    assert data["failures"][0]["mesh_name"] == "empty"
    assert [e.type for e in load_model(src).elements] == ["cube", "mesh"]


def test_cli_inspect_is_a_dry_run(tmp_path: Path, capsys) -> None:
    src = tmp_path / "rig.json"
    _write_model(src)
    before = src.read_text(encoding="utf-8")
    rc = main(["inspect", str(src), "--json", "--uv-mode", "simplified"])
    assert rc == 0
    data = json.loads(capsys.readouterr().out)
    assert data["converted"] == 1
    assert data["reports"][0]["faces"]["east"]["mode"] == "simplified"
    assert src.read_text(encoding="utf-8") == before

    rc = main(["inspect", str(src)])
    assert rc == 0
    text = capsys.readouterr().out
    assert "Recube Inspect" in text
    assert "body: from=[0.0, 0.0, 0.0] to=[2.0, 4.0, 2.0]" in text


def test_cli_error_codes(tmp_path: Path, capsys) -> None:
    assert main(["convert", str(tmp_path / "missing.json")]) == 2
    assert "[ERROR] File not found" in capsys.readouterr().out

    src = tmp_path / "rig.json"
    _write_model(src)
    rc = main(["convert", str(src), "--mesh", "no-such-mesh"])
    assert rc == 4
    assert "[ERROR]" in capsys.readouterr().out
