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
from cubeplan.models import CFOPPlan
from cubeplan.planner import CFOPPlanner, plan_solves
from cubeplan.selfcheck import run_dev_tests


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Plan a CFOP solve and print it stage by stage.")

    source_group = parser.add_mutually_exclusive_group()
    source_group.add_argument("--seed", type=int, default=1234, help="Scramble seed")
    source_group.add_argument("--formula", help="Scramble formula instead of a seeded scramble")
    source_group.add_argument(
        "--self-check",
        action="store_true",
        help="Run the built-in diagnostics and exit",
    )

    parser.add_argument("--length", type=int, default=25, help="Scramble length for --seed")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    return parser.parse_args(argv)


def format_plan(plan: CFOPPlan) -> list[str]:
    lines: list[str] = []
    for stage_plan in plan.stages:
        lines.append(f"{stage_plan.stage.value} ({len(stage_plan.steps)} moves)")
        chunk_id: str | None = None
        for step in stage_plan.steps:
            if step.chunk_id != chunk_id:
                chunk_id = step.chunk_id
                lines.append(f"  [{step.chunk_label}]")
            lines.append(f"    {step.move:<3} {step.label}")
    lines.append(f"Solution: {' '.join(plan.moves)}")
    return lines


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.self_check:
        report = run_dev_tests()
        print(f"Self-check: {report.passed} passed, {len(report.failures)} failed")
        return 0 if report.ok else 1

    scramble = SceneConfig(seed=args.seed, length=args.length, formula=args.formula).scramble()
    print(f"Scramble: {' '.join(scramble.moves)}")

    plan = CFOPPlanner().plan(scramble.state)
    for line in format_plan(plan):
        print(line)

    if not plan_solves(plan, scramble.state):
        logging.getLogger(__name__).error("Plan does not solve the scramble")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
