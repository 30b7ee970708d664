from __future__ import annotations

import logging

import pytest

from cubeplan.facelets import solved_facelets, to_facelets
from cubeplan.formula import FormulaConverter
from cubeplan.models import STAGE_ORDER, Stage
from cubeplan.notation import invert_moves
from cubeplan.planner import (
    CFOPPlanner,
    build_plan,
    chunk_snapshots,
    normalize_moves,
    parse_solution,
    plan_cfop,
    plan_solves,
)
from cubeplan.solver import CannedSolver, SolverError
from cubeplan.state import (
    Scramble,
    apply_move,
    apply_moves,
    create_solved_state,
    is_cross_solved,
    is_first_two_layers_solved,
    is_oll_solved,
    random_scramble,
    scramble_from_moves,
    states_equal,
)

_CLOSING = {
    Stage.CROSS: is_cross_solved,
    Stage.F2L: is_first_two_layers_solved,
    Stage.OLL: is_oll_solved,
}


def _inverse_solver(scramble: Scramble) -> CannedSolver:
    return CannedSolver({to_facelets(scramble.state): " ".join(invert_moves(scramble.moves))})


def _case(formula: str) -> Scramble:
    return scramble_from_moves(FormulaConverter.inverse(formula))


@pytest.mark.parametrize("seed", [1, 42, 1234])
def test_plan_of_inverse_scramble_solves_the_cube(seed: int) -> None:
    scramble = random_scramble(25, seed)
    plan = plan_cfop(scramble.state, _inverse_solver(scramble))

    assert plan_solves(plan, scramble.state)
    assert [step.move for step in plan.steps] == invert_moves(scramble.moves)


@pytest.mark.parametrize("seed", [3, 99])
def test_stages_are_ordered_and_close_on_their_last_move(seed: int) -> None:
    scramble = random_scramble(20, seed)
    plan = plan_cfop(scramble.state, _inverse_solver(scramble))

    order = [STAGE_ORDER.index(stage_plan.stage) for stage_plan in plan.stages]
    assert order == sorted(set(order))

    state = scramble.state
    for stage_plan in plan.stages:
        assert stage_plan.steps
        predicate = _CLOSING.get(stage_plan.stage)
        for index, step in enumerate(stage_plan.steps):
            state = apply_move(state, step.move)
            if predicate is not None:
                assert predicate(state) == (index == len(stage_plan.steps) - 1)


def test_every_step_carries_chunk_metadata() -> None:
    scramble = random_scramble(25, 1234)
    plan = plan_cfop(scramble.state, _inverse_solver(scramble))

    for step in plan.steps:
        assert step.chunk_id
        assert step.chunk_label
        assert step.chunk_size is not None and step.chunk_size >= 1
        assert 0 <= step.chunk_index < step.chunk_size


def test_cross_chunks_close_when_an_edge_is_seated() -> None:
    scramble = scramble_from_moves(["R", "F"])
    plan = plan_cfop(scramble.state, _inverse_solver(scramble))

    assert [stage_plan.stage for stage_plan in plan.stages] == [Stage.CROSS]
    steps = plan.steps
    assert [step.move for step in steps] == ["F'", "R'"]
    assert [step.chunk_id for step in steps] == ["Cross-0", "Cross-1"]
    assert [step.chunk_label for step in steps] == ["Cross: place G edge", "Cross: place R edge"]
    assert steps[1].highlight_cubies == ("1,-1,0",)


def test_f2l_pair_chunk_with_setup_gap() -> None:
    scramble = scramble_from_moves(["R", "U", "R'"])
    plan = plan_cfop(scramble.state, _inverse_solver(scramble))

    assert [stage_plan.stage for stage_plan in plan.stages] == [Stage.F2L]
    steps = plan.steps
    assert [step.chunk_label for step in steps] == [
        "F2L: setup",
        "F2L: FR (setup+insert)",
        "F2L: FR (setup+insert)",
    ]
    assert [step.chunk_id for step in steps] == ["F2L-0", "F2L-1", "F2L-1"]
    assert [step.chunk_index for step in steps] == [0, 0, 1]
    assert [step.chunk_size for step in steps] == [1, 2, 2]
    assert steps[-1].label == "F2L: FR pair (insert)"


def test_known_oll_case_is_named() -> None:
    scramble = _case("R U R' U R U2 R'")
    plan = plan_cfop(scramble.state, _inverse_solver(scramble))

    assert [stage_plan.stage for stage_plan in plan.stages] == [Stage.OLL]
    assert {step.chunk_id for step in plan.steps} == {"OLL-corners"}
    assert {step.chunk_label for step in plan.steps} == {"OLL: sune"}


def test_edge_orientation_opens_the_oll_stage() -> None:
    scramble = _case("F R U R' U' F'")
    plan = plan_cfop(scramble.state, _inverse_solver(scramble))

    assert plan.stages[0].stage == Stage.OLL
    assert plan.steps[0].chunk_id == "OLL-edges"
    assert {step.chunk_id for step in plan.steps} <= {"OLL-edges", "OLL-corners"}
    assert plan_solves(plan, scramble.state)


def test_known_pll_case_is_named() -> None:
    scramble = _case("R U' R U R U R U' R' U' R2")
    plan = plan_cfop(scramble.state, _inverse_solver(scramble))

    assert [stage_plan.stage for stage_plan in plan.stages] == [Stage.PLL]
    assert {step.chunk_id for step in plan.steps} == {"PLL-edges"}
    assert {step.chunk_label for step in plan.steps} == {"PLL: ua"}


def test_solved_cube_gives_empty_plan() -> None:
    plan = plan_cfop(create_solved_state(), CannedSolver({solved_facelets(): ""}))
    assert plan.stages == ()
    assert plan.moves == ()
    assert plan_solves(plan, create_solved_state())


def test_plan_moves_are_simplified_per_stage() -> None:
    plan = build_plan(create_solved_state(), ["U", "U", "U2"])
    assert [step.move for step in plan.steps] == ["U", "U", "U2"]
    assert [stage_plan.stage for stage_plan in plan.stages] == [Stage.PLL]
    assert plan.moves == ()


def test_normalize_drops_and_logs_unsupported_tokens(caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="cubeplan.planner"):
        moves = normalize_moves(["R", "x", "U2", "Rw", "F′", "M'"])

    assert moves == ["R", "U2", "F'"]
    assert len(caplog.records) == 3


def test_parse_solution_handles_prime_marks_and_junk(caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="cubeplan.planner"):
        moves = parse_solution("U′ Q R' (13f)")

    assert moves == ["U'", "R'"]
    assert len(caplog.records) == 2


def test_parse_solution_keeps_moves_scanned_out_of_odd_words(caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="cubeplan.planner"):
        moves = parse_solution("R2' U F2")

    assert moves == ["R2", "U", "F2"]
    assert len(caplog.records) == 1
    assert "R2'" in caplog.records[0].getMessage()


def test_dropped_tokens_do_not_break_the_plan() -> None:
    scramble = scramble_from_moves(["R", "U"])
    solver = CannedSolver({to_facelets(scramble.state): "U' y R'"})
    plan = CFOPPlanner(solver).plan(scramble.state)

    assert [step.move for step in plan.steps] == ["U'", "R'"]
    assert plan_solves(plan, scramble.state)
    assert solver.calls == [to_facelets(scramble.state)]


def test_solver_errors_surface() -> None:
    with pytest.raises(SolverError):
        plan_cfop(random_scramble(5, 3).state, CannedSolver({}))


def test_chunk_snapshots_hold_state_before_each_chunk() -> None:
    scramble = random_scramble(25, 1234)
    plan = plan_cfop(scramble.state, _inverse_solver(scramble))
    snapshots = chunk_snapshots(plan, scramble.state)

    assert sorted(snapshots) == plan.chunk_starts()
    moves = [step.move for step in plan.steps]
    for index, state in snapshots.items():
        assert states_equal(state, apply_moves(scramble.state, moves[:index]))


@pytest.mark.asyncio
async def test_plan_async_matches_sync_plan() -> None:
    scramble = random_scramble(15, 8)
    planner = CFOPPlanner(_inverse_solver(scramble))

    plan = await planner.plan_async(scramble.state)

    assert plan == planner.plan(scramble.state)
