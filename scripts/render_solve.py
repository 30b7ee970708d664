#!/usr/bin/env python3
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from cubeplan.config import SceneConfig
from cubeplan.render_service import RenderRequest, render_solve


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Render a CFOP solve of a scrambled cube.")

    source_group = parser.add_mutually_exclusive_group()
    source_group.add_argument("--seed", type=int, default=1234, help="Scramble seed")
    source_group.add_argument("--formula", help="Scramble formula instead of a seeded scramble")

    parser.add_argument("--length", type=int, default=25, help="Scramble length for --seed")
    parser.add_argument("--ms-per-turn", type=float, help="Milliseconds per quarter turn")
    parser.add_argument(
        "--quality",
        default="draft",
        help="Render quality: draft/standard/high/final (or ql/qm/qh/qk)",
    )
    parser.add_argument("--play", action="store_true", help="Play video after render")
    parser.add_argument("--manim-bin", default="manim", help="Path to manim executable")
    parser.add_argument("--manim-file", default="cubist.py", help="Path to manim scenes file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    request = RenderRequest(
        scene=SceneConfig(seed=args.seed, length=args.length, formula=args.formula),
        ms_per_quarter_turn=args.ms_per_turn,
        quality=args.quality,
        play=args.play,
        manim_bin=args.manim_bin,
        manim_file=args.manim_file,
    )
    final_path = render_solve(request, repo_root=REPO_ROOT)
    print(f"Rendered: {final_path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
