from __future__ import annotations

import inspect
import re
from pathlib import Path

from recube.geometry import rotation, vectors
from recube.geometry.tolerance import EPS_AREA, EPS_EXTENT, EPS_GIMBAL, EPS_PLANE, EPS_UV
from recube.reconstruct import classify, config, merge, uv


def test_tolerance_constants_exist() -> None:
    assert EPS_PLANE == 1e-4
    assert EPS_AREA == 1e-4
    assert EPS_UV == 1e-6
    assert EPS_GIMBAL > 0.0
    assert EPS_EXTENT > 0.0
    assert EPS_UV < EPS_PLANE


def test_key_functions_use_central_tolerance_defaults() -> None:
    assert inspect.signature(vectors.approx_equal).parameters["eps"].default == EPS_PLANE
    assert inspect.signature(classify.classify_triangles).parameters["plane_eps"].default == EPS_PLANE
    assert inspect.signature(classify.classify_triangles).parameters["area_eps"].default == EPS_AREA
    assert inspect.signature(uv.find_rotation).parameters["eps"].default == EPS_UV
    assert inspect.signature(merge.merge_pair).parameters["plane_eps"].default == EPS_PLANE
    cfg = config.ReconstructConfig()
    assert (cfg.plane_eps, cfg.area_eps, cfg.uv_eps) == (EPS_PLANE, EPS_AREA, EPS_UV)


def test_modules_reference_shared_tolerance_symbols() -> None:
    assert rotation.EPS_GIMBAL == EPS_GIMBAL
    assert classify.EPS_PLANE == EPS_PLANE
    assert uv.EPS_UV == EPS_UV


def test_core_packages_have_no_inline_scientific_epsilon_literals() -> None:
    root = Path(__file__).resolve().parents[1] / "recube"
    pattern = re.compile(r"\b1e-\d+\b")
    offenders: list[str] = []
    for pkg in ("geometry", "reconstruct"):
        for p in sorted((root / pkg).rglob("*.py")):
            if p.name == "tolerance.py":
                continue
            text = p.read_text(encoding="utf-8")
            if pattern.search(text):
                offenders.append(str(p.relative_to(root.parent)))
    assert offenders == []
