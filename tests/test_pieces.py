from __future__ import annotations

from cubeplan import cross, f2l
from cubeplan.pieces import (
    CROSS_COLOR,
    F2L_SLOTS,
    cross_count,
    cross_target,
    find_corner,
    find_edge,
    is_f2l_pair_solved,
)
from cubeplan.state import apply_move, apply_moves, create_solved_state


def test_cross_colour_is_the_down_face_colour() -> None:
    assert CROSS_COLOR == "Y"
    assert cross_count(create_solved_state()) == 4


def test_cross_targets_sit_under_their_centres() -> None:
    solved = create_solved_state()
    edge = find_edge(solved, CROSS_COLOR, "G")
    assert edge is not None
    assert cross_target(edge) == (0, -1, 1) == edge.pos


def test_r_turn_unseats_one_cross_edge() -> None:
    state = apply_move(create_solved_state(), "R")
    assert cross_count(state) == 3


def test_cross_highlight_names_the_seated_edge() -> None:
    before = apply_move(create_solved_state(), "R")
    label, ids = cross.highlight(before, apply_move(before, "R'"))
    assert label == "Cross: place R edge"
    assert ids == ("1,-1,0",)


def test_cross_setup_highlight_picks_an_approaching_edge() -> None:
    before = apply_moves(create_solved_state(), ["R2", "U2"])
    label, ids = cross.highlight(before, apply_move(before, "U2"))
    assert label == "Cross: setup"
    assert ids == ("1,-1,0",)


def test_r_turn_breaks_right_slots_only() -> None:
    state = apply_move(create_solved_state(), "R")
    assert [slot for slot in F2L_SLOTS if is_f2l_pair_solved(state, slot)] == ["FL", "BL"]
    assert not is_f2l_pair_solved(state, "FR")
    assert find_corner(state, CROSS_COLOR, "G", "R") is not None


def test_f2l_highlight_on_insert() -> None:
    before = apply_move(create_solved_state(), "R")
    label, ids = f2l.highlight(before, apply_move(before, "R'"))
    assert label == "F2L: FR pair (insert)"
    assert set(ids) == {"1,-1,1", "1,0,1"}
