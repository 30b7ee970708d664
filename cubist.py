from __future__ import annotations

from cubeplan.scenes import SolveScene


class Solve(SolveScene):
    """
    Uses environment variables configured by scripts/render_solve.py:
    - CUBEPLAN_SEED
    - CUBEPLAN_LENGTH
    - CUBEPLAN_FORMULA
    - CUBEPLAN_MS_PER_QUARTER_TURN
    """
