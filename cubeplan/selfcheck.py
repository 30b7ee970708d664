from __future__ import annotations

import logging
from dataclasses import dataclass, field

from cubeplan.notation import BASIC_FACES
from cubeplan.planner import CFOPPlanner, plan_solves
from cubeplan.solver import Solver, SolverError
from cubeplan.state import apply_moves, create_solved_state, random_scramble, states_equal

logger = logging.getLogger(__name__)

SELF_CHECK_SCRAMBLE = (10, 42)


@dataclass
class SelfCheckReport:
    passed: int = 0
    failures: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures

    def check(self, condition: bool, message: str) -> None:
        if condition:
            self.passed += 1
            return
        self.failures.append(message)
        logger.error("Self-check failed: %s", message)


def run_dev_tests(solver: Solver | None = None) -> SelfCheckReport:
    """Move-algebra laws plus one end-to-end plan; failures are logged, not raised."""
    report = SelfCheckReport()
    solved = create_solved_state()

    for face in BASIC_FACES:
        report.check(
            states_equal(apply_moves(solved, [face, f"{face}'"]), solved),
            f"{face} {face}' should return to solved",
        )
        report.check(
            states_equal(apply_moves(solved, [f"{face}2"]), apply_moves(solved, [face, face])),
            f"{face}2 should equal {face} {face}",
        )

    length, seed = SELF_CHECK_SCRAMBLE
    scramble = random_scramble(length, seed)
    try:
        plan = CFOPPlanner(solver).plan(scramble.state)
    except SolverError as exc:
        report.check(False, f"planner failed on scramble {' '.join(scramble.moves)}: {exc}")
    else:
        report.check(
            plan_solves(plan, scramble.state),
            f"plan for scramble {' '.join(scramble.moves)} should solve the cube",
        )

    logger.info("Self-check: %d passed, %d failed", report.passed, len(report.failures))
    return report
