#!/usr/bin/env python3
"""Dump the persisted firevitals state.

Loads the state the same way the app does on startup (including the
one-time legacy migration), then prints every scene with its roster,
vitals log and the alert tags of each entry.

Usage
-----
::

    export FIREVITALS_DATA_DIR=~/.firevitals
    python scripts/dump_state.py

Options::

    --scene ID         Only dump this scene (default: all scenes)
    --json             Output as machine-readable JSON
    --output FILE      Write output to FILE instead of stdout
    --no-alerts        Skip alert evaluation
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from firevitals import FireVitalsConfig, Scene, StateStore, Thresholds, evaluate  # noqa: E402
from firevitals.alerts import tag_names  # noqa: E402
from firevitals.export._format import format_number, format_timestamp  # noqa: E402
from firevitals.views import firefighter_history  # noqa: E402

# ── helpers ──────────────────────────────────────────────────


def _section(title: str) -> str:
    line = "=" * 60
    return f"\n{line}\n  {title}\n{line}"


def _dump_scene(scene: Scene, thresholds: Thresholds | None, out: list[str]) -> dict[str, Any]:
    out.append(_section(f"SCENE  {scene.name}  id={scene.id}"))
    out.append(f"  created   : {format_timestamp(scene.created_at)}")
    out.append(f"  updated   : {format_timestamp(scene.updated_at)}")
    out.append(f"  roster    : {len(scene.firefighters)}")
    out.append(f"  entries   : {len(scene.vitals)}")

    data = scene.to_blob()
    alerts: dict[str, list[str]] = {}
    for member in scene.firefighters:
        marker = "*" if member.id == scene.selected_firefighter_id else " "
        status = member.status.value if member.status else "-"
        out.append(f"\n {marker} {member.label}  [{status}]")
        history = firefighter_history(scene, member.id)
        if not history:
            out.append("      (no vitals)")
        for entry in history:
            flags = tag_names(evaluate(entry, thresholds)) if thresholds is not None else []
            alerts[entry.id] = flags
            out.append(
                f"      {format_timestamp(entry.timestamp)}"
                f"  HR {format_number(entry.heart_rate, '-')}"
                f"  RR {format_number(entry.resp_rate, '-')}"
                f"  SpO2 {format_number(entry.oxygen_sat, '-')}"
                f"  BP {format_number(entry.bp_systolic, '-')}/{format_number(entry.bp_diastolic, '-')}"
                f"  T {format_number(entry.temperature_f, '-')}"
                + (f"  !! {', '.join(flags)}" if flags else "")
            )

    orphans = [entry for entry in scene.vitals if scene.firefighter(entry.firefighter_id) is None]
    if orphans:
        out.append(f"\n  {len(orphans)} entries reference firefighters no longer on the roster")

    if thresholds is not None:
        data["alerts"] = alerts
    return data


# ── main ─────────────────────────────────────────────────────


def main() -> None:
    parser = argparse.ArgumentParser(description="Dump persisted firevitals state")
    parser.add_argument("--scene", help="Only dump this scene id (default: all scenes)")
    parser.add_argument("--json", action="store_true", dest="json_mode", help="Output machine-readable JSON")
    parser.add_argument("--output", "-o", help="Write output to FILE instead of stdout")
    parser.add_argument("--no-alerts", action="store_true", help="Skip alert evaluation")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)

    config = FireVitalsConfig.from_env()
    store = StateStore.from_config(config)
    state = store.init()
    thresholds = None if args.no_alerts else state.settings.thresholds

    out: list[str] = [_section("firevitals dump_state")]
    out.append(f"  data_dir  : {config.data_dir}")
    out.append(f"  scenes    : {len(state.scenes)}")
    out.append(f"  current   : {state.current_scene_id or '-'}")
    out.append(f"  theme     : {state.settings.theme.value}")

    result: dict[str, Any] = {
        "currentSceneId": state.current_scene_id,
        "settings": state.settings.to_blob(),
        "scenes": [],
    }
    scenes = [scene for scene in state.scenes if args.scene in (None, scene.id)]
    if args.scene and not scenes:
        print(f"No scene with id {args.scene!r}", file=sys.stderr)
        sys.exit(1)
    for scene in scenes:
        result["scenes"].append(_dump_scene(scene, thresholds, out))

    if args.json_mode:
        payload = json.dumps(result, indent=2, ensure_ascii=False)
        if args.output:
            Path(args.output).write_text(payload, encoding="utf-8")
            print(f"JSON written to {args.output}", file=sys.stderr)
        else:
            print(payload)
    elif args.output:
        Path(args.output).write_text("\n".join(out) + "\n", encoding="utf-8")
        print(f"Dump written to {args.output}", file=sys.stderr)
    else:
        print("\n".join(out))


if __name__ == "__main__":
    main()
