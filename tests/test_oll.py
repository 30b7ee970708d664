from __future__ import annotations

from cubeplan.formula import FormulaConverter
from cubeplan.oll import chunk, edges_oriented, highlight, orientation
from cubeplan.state import (
    apply_move,
    apply_moves,
    create_solved_state,
    is_oll_solved,
    scramble_from_moves,
)


def _states(start, moves):
    states = [start]
    for move in moves:
        states.append(apply_move(states[-1], move))
    return states


def test_solved_top_layer_is_oriented() -> None:
    solved = create_solved_state()
    assert edges_oriented(solved)
    assert is_oll_solved(solved)
    assert orientation(solved.by_id("0,1,1")) == "oriented"
    assert orientation(solved.by_id("0,-1,1")) is None


def test_sune_case_has_oriented_edges_only() -> None:
    state = scramble_from_moves(FormulaConverter.inverse("R U R' U R U2 R'")).state
    assert edges_oriented(state)
    assert not is_oll_solved(state)
    twisted = [cubie for cubie in state.cubies if orientation(cubie) == "misoriented"]
    assert len(twisted) == 3
    assert all(cubie.is_corner for cubie in twisted)


def test_corner_only_case_is_one_named_chunk() -> None:
    moves = FormulaConverter.convert("R U R' U R U2 R'")
    start = apply_moves(create_solved_state(), FormulaConverter.inverse("R U R' U R U2 R'"))
    spans = chunk(_states(start, moves), moves)

    assert len(spans) == 1
    assert (spans[0].start, spans[0].end) == (0, len(moves) - 1)
    assert spans[0].chunk_id == "OLL-corners"
    assert spans[0].label == "OLL: sune"


def test_highlight_reports_orientation_flips() -> None:
    solved = create_solved_state()
    label, ids = highlight(solved, apply_move(solved, "R"))
    assert label == "OLL step"
    assert "1,1,1" in ids
    assert "1,1,-1" in ids


def test_highlight_falls_back_to_moved_top_pieces() -> None:
    solved = create_solved_state()
    _, ids = highlight(solved, apply_move(solved, "U"))
    assert len(ids) == 8
