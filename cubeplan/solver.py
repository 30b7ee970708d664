from __future__ import annotations

import logging
from typing import Mapping, Protocol

from cubeplan.facelets import solved_facelets

logger = logging.getLogger(__name__)


class SolverError(RuntimeError):
    pass


class Solver(Protocol):
    def __call__(self, facelets: str) -> str: ...


class KociembaSolver:
    """Two-phase solver backed by the ``kociemba`` package."""

    def __init__(self, max_depth: int = 24) -> None:
        import kociemba

        self._solve = kociemba.solve
        self.max_depth = max_depth

    def __call__(self, facelets: str) -> str:
        if len(facelets) != 54:
            raise SolverError(f"Facelet string must have 54 characters, got {len(facelets)}")
        if facelets == solved_facelets():
            return ""
        try:
            return self._solve(facelets, max_depth=self.max_depth)
        except ValueError as exc:
            raise SolverError(f"Solver rejected facelets {facelets}: {exc}") from exc


class CannedSolver:
    """Returns fixed answers per facelet string; unknown input is an error."""

    def __init__(self, answers: Mapping[str, str]) -> None:
        self.answers = dict(answers)
        self.calls: list[str] = []

    def __call__(self, facelets: str) -> str:
        self.calls.append(facelets)
        if facelets not in self.answers:
            raise SolverError(f"No canned solution for {facelets}")
        return self.answers[facelets]


def default_solver() -> Solver:
    return KociembaSolver()
