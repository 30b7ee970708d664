from cubeplan.config import SceneConfig
from cubeplan.facelets import cube_state_string, solved_facelets, to_facelets
from cubeplan.formula import FormulaConverter, FormulaSyntaxError
from cubeplan.models import AlgorithmPreset, CFOPPlan, Stage, StagePlan, StageStep
from cubeplan.notation import invert_moves, parse_moves, simplify_moves
from cubeplan.planner import CFOPPlanner, normalize_moves, plan_cfop, plan_solves
from cubeplan.playback import PlaybackConfig, PlaybackController, play_moves
from cubeplan.selfcheck import SelfCheckReport, run_dev_tests
from cubeplan.solver import CannedSolver, KociembaSolver, SolverError
from cubeplan.state import (
    CubeState,
    Cubie,
    InvalidMoveError,
    Scramble,
    apply_move,
    apply_moves,
    create_solved_state,
    is_solved,
    random_scramble,
)

__all__ = [
    "AlgorithmPreset",
    "CFOPPlan",
    "CFOPPlanner",
    "CannedSolver",
    "CubeState",
    "Cubie",
    "FormulaConverter",
    "FormulaSyntaxError",
    "InvalidMoveError",
    "KociembaSolver",
    "PlaybackConfig",
    "PlaybackController",
    "SceneConfig",
    "Scramble",
    "SelfCheckReport",
    "SolverError",
    "Stage",
    "StagePlan",
    "StageStep",
    "apply_move",
    "apply_moves",
    "create_solved_state",
    "cube_state_string",
    "invert_moves",
    "is_solved",
    "normalize_moves",
    "parse_moves",
    "plan_cfop",
    "plan_solves",
    "play_moves",
    "random_scramble",
    "run_dev_tests",
    "simplify_moves",
    "solved_facelets",
    "to_facelets",
]
