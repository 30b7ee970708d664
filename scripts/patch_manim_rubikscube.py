#!/usr/bin/env python3
"""Fixes the Square import in manim_rubikscube for current manim releases."""
from __future__ import annotations

import argparse
import importlib.util
import logging
from pathlib import Path

OLD = "from manim.mobject.geometry import Square"
NEW = "from manim.mobject.geometry.polygram import Square"

logger = logging.getLogger("patch_manim_rubikscube")


def locate_cubie_module() -> Path | None:
    # Located without importing: the import itself is what fails.
    spec = importlib.util.find_spec("manim_rubikscube")
    if spec is None or not spec.submodule_search_locations:
        return None
    for location in spec.submodule_search_locations:
        candidate = Path(location) / "cubie.py"
        if candidate.exists():
            return candidate
    return None


def patch(check_only: bool = False) -> int:
    file_path = locate_cubie_module()
    if file_path is None:
        logger.error("manim_rubikscube is not installed")
        return 1

    content = file_path.read_text(encoding="utf-8")
    if NEW in content:
        logger.info("Already patched: %s", file_path)
        return 0
    if OLD not in content:
        logger.error("Import pattern not found in %s", file_path)
        return 1
    if check_only:
        logger.warning("Needs patching: %s", file_path)
        return 1

    file_path.write_text(content.replace(OLD, NEW), encoding="utf-8")
    logger.info("Patched: %s", file_path)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--check", action="store_true", help="Report without writing")
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    return patch(check_only=args.check)


if __name__ == "__main__":
    raise SystemExit(main())
