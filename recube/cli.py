from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from recube.ops.base import OpContext
from recube.ops.convert_ops import convert_batch, convert_meshes_to_cubes
from recube.project.io import load_model, save_model
from recube.reconstruct.config import ReconstructConfig

logger = logging.getLogger(__name__)


def _config_from_args(args: argparse.Namespace) -> ReconstructConfig:
    return ReconstructConfig(
        uv_mode=args.uv_mode,
        rotation_mode=args.rotation_mode,
        mesh_euler_order=args.mesh_order,
        box_euler_order=args.box_order,
        undo_transforms=not bool(args.no_undo_transforms),
        on_rotation_miss=args.on_rotation_miss,
    )


def _resolve_model_path(raw: str) -> Path | None:
    path = Path(raw).expanduser().resolve()
    if not path.exists():
        print(f"[ERROR] File not found: {path}")
        return None
    if not path.is_file():
        print(f"[ERROR] Not a file: {path}")
        return None
    return path


def _cmd_convert(args: argparse.Namespace) -> int:
    path = _resolve_model_path(args.model)
    if path is None:
        return 2
    model = load_model(path)
    cfg = _config_from_args(args)
    res = convert_meshes_to_cubes(model, mesh_ids=args.mesh or None, config=cfg, ctx=OpContext(source="cli"))
    out_path = Path(args.out).expanduser().resolve() if args.out else path
    save_model(model, out_path)

    if args.json:
        print(json.dumps(res.to_dict(), indent=2, sort_keys=True))
    else:
        print("Recube Convert")
        print(f"  File: {path}")
        print(f"  Saved: {out_path}")
        print(f"  Converted: {len(res.cube_ids)} mesh(es)")
        for report in res.reports:
            for w in report.warnings:
                print(f"  [WARN] {report.mesh_name}: {w}")
        for failure in res.skipped:
            print(f"  [SKIP] {failure.mesh_name} ({failure.mesh_id}): {failure.error}")
    return 3 if res.skipped else 0


def _cmd_inspect(args: argparse.Namespace) -> int:
    path = _resolve_model_path(args.model)
    if path is None:
        return 2
    model = load_model(path)
    batch = convert_batch(model.meshes(), _config_from_args(args))

    if args.json:
        print(json.dumps(batch.to_dict(), indent=2, sort_keys=True))
        return 0

    print("Recube Inspect")
    print(f"  File: {path}")
    print(f"  Meshes: {len(batch.reports) + len(batch.failures)}")
    for box, report in zip(batch.boxes, batch.reports):
        print(f"  {report.mesh_name}: from={list(box.from_)} to={list(box.to)}")
        for name, face in report.faces.items():
            print(f"    {name:<5} mode={face.mode:<10} rotation={face.rotation:<3} triangles={face.triangles}")
        for w in report.warnings:
            print(f"    [WARN] {w}")
    for failure in batch.failures:
        print(f"  [SKIP] {failure.mesh_name} ({failure.mesh_id}): {failure.error}")
    return 0


def _add_config_args(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--uv-mode",
        default="auto",
        choices=["auto", "exact", "simplified"],
        help="UV recovery mode (exact: faces without a clean quad count as rotation misses)",
    )
    p.add_argument("--rotation-mode", default="copy", choices=["copy", "convert"], help="Copy or convert mesh Euler angles")
    p.add_argument("--mesh-order", default="XYZ", help="Euler order of mesh rotations (default: XYZ)")
    p.add_argument("--box-order", default="ZYX", help="Euler order of cube rotations (default: ZYX)")
    p.add_argument(
        "--on-rotation-miss",
        default="zero",
        choices=["zero", "simplified", "error"],
        help="What to do when no 90 degree step aligns a face's UVs",
    )
    p.add_argument("--no-undo-transforms", action="store_true", help="Keep apparent extents of stretched/inflated meshes")


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(prog="recube")
    p.add_argument("--verbose", action="store_true", help="Log debug output")
    sub = p.add_subparsers(dest="cmd", required=True)

    c = sub.add_parser("convert", help="Convert box-derived meshes in a model file back into cubes.")
    c.add_argument("model", help="Path to model JSON")
    c.add_argument("--out", default=None, help="Output path (default: overwrite input)")
    c.add_argument("--mesh", action="append", default=[], help="Mesh uuid to convert (repeatable; default: all)")
    c.add_argument("--json", action="store_true", help="Print machine-readable JSON")
    _add_config_args(c)
    c.set_defaults(func=_cmd_convert)

    i = sub.add_parser("inspect", help="Report how each mesh would be reconstructed, without writing.")
    i.add_argument("model", help="Path to model JSON")
    i.add_argument("--json", action="store_true", help="Print machine-readable JSON")
    _add_config_args(i)
    i.set_defaults(func=_cmd_inspect)

    args = p.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING, format="%(levelname)s %(name)s: %(message)s")
    try:
        return int(args.func(args))
    except (KeyError, ValueError) as exc:
        logger.debug("command failed", exc_info=True)
        print(f"[ERROR] {exc}")
        return 4


if __name__ == "__main__":
    raise SystemExit(main())
