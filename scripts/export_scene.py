#!/usr/bin/env python3
"""Export a scene as CSV + PDF.

Runs the same pipeline as the app's "Share / Export" button: the files
are offered to the configured share endpoint first and saved into the
export directory when sharing is unavailable or fails.

Usage
-----
::

    export FIREVITALS_EXPORT_DIR=./exports
    export FIREVITALS_SHARE_URL=https://example.org/upload   # optional
    python scripts/export_scene.py

Options::

    --scene ID         Export this scene (default: the active scene)
    --no-share         Skip the share hand-off and download directly
    --email            Also print a mailto: link for the email draft
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from firevitals import ExportPipeline, FireVitalsConfig, StateStore  # noqa: E402
from firevitals.exceptions import FireVitalsError  # noqa: E402


async def main() -> None:
    parser = argparse.ArgumentParser(description="Export a firevitals scene as CSV and PDF")
    parser.add_argument("--scene", help="Scene id to export (default: the active scene)")
    parser.add_argument("--export-dir", help="Directory for downloaded files (overrides FIREVITALS_EXPORT_DIR)")
    parser.add_argument("--no-share", action="store_true", help="Skip the share hand-off")
    parser.add_argument("--email", action="store_true", help="Print a mailto: link for an email draft")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.INFO, format="%(message)s")

    overrides: dict[str, object] = {}
    if args.export_dir:
        overrides["export_dir"] = args.export_dir
    if args.no_share:
        overrides["share_enabled"] = False

    try:
        config = FireVitalsConfig.from_env(**overrides)
    except FireVitalsError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        sys.exit(2)

    state = StateStore.from_config(config).init()
    scene = state.scene(args.scene) if args.scene else state.current_scene
    if scene is None:
        print("No scene to export", file=sys.stderr)
        sys.exit(1)

    pipeline = ExportPipeline.from_config(config)
    result = await pipeline.export_all(scene)

    if result.paths:
        for path in result.paths:
            print(path)
    else:
        print(f"Shared {', '.join(file.name for file in result.files)}")

    if args.email:
        print(pipeline.compose_email_draft(scene).mailto_url)


if __name__ == "__main__":
    asyncio.run(main())
