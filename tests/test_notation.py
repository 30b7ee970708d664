from __future__ import annotations

from cubeplan.notation import (
    ALL_MOVES,
    invert_move,
    invert_moves,
    is_basic_move,
    parse_moves,
    quarter_turns,
    simplify_moves,
)


def test_all_moves_cover_six_faces_three_ways() -> None:
    assert len(ALL_MOVES) == 18
    assert ALL_MOVES[:3] == ("U", "U'", "U2")
    assert all(is_basic_move(move) for move in ALL_MOVES)
    assert not is_basic_move("M")
    assert not is_basic_move("R3")


def test_parse_skips_unknown_characters() -> None:
    assert parse_moves("R U R' U'") == ["R", "U", "R'", "U'"]
    assert parse_moves("R, x U2! (F')") == ["R", "U2", "F'"]
    assert parse_moves("") == []


def test_quarter_turns() -> None:
    assert quarter_turns("R") == 1
    assert quarter_turns("R'") == -1
    assert quarter_turns("R2") == 2


def test_simplify_merges_same_face_runs() -> None:
    assert simplify_moves(["R", "R"]) == ["R2"]
    assert simplify_moves(["R", "R2"]) == ["R'"]
    assert simplify_moves(["R", "R", "R"]) == ["R'"]
    assert simplify_moves(["R2", "R2"]) == []
    assert simplify_moves(["U", "U'", "R"]) == ["R"]


def test_simplify_cascades_after_cancellation() -> None:
    assert simplify_moves(["R", "U", "U'", "R'"]) == []


def test_simplify_never_commutes_other_faces() -> None:
    assert simplify_moves(["R", "L", "R'"]) == ["R", "L", "R'"]


def test_invert() -> None:
    assert invert_move("R") == "R'"
    assert invert_move("R'") == "R"
    assert invert_move("R2") == "R2"
    assert invert_moves(["R", "U2", "F'"]) == ["F", "U2", "R'"]


def test_simplify_is_idempotent() -> None:
    samples = [
        ["R", "R", "U", "U'", "U", "L2", "L2"],
        ["F", "F", "F", "B", "B'", "D", "D"],
        ["U", "U", "U"],
    ]
    for moves in samples:
        once = simplify_moves(moves)
        assert simplify_moves(once) == once
    assert simplify_moves(["U", "U", "U"]) == ["U'"]
