from __future__ import annotations

import pytest

from cubeplan.formula import FormulaConverter
from cubeplan.models import AlgorithmPreset, Stage
from cubeplan.notation import is_basic_move
from cubeplan.presets import PRESET_LIST, match_preset, strip_u_turns

UA = "R U' R U R U R U' R' U' R2"


def test_preset_names_are_unique_per_stage() -> None:
    keys = [(preset.stage, preset.name) for preset in PRESET_LIST]
    assert len(keys) == len(set(keys))


def test_every_preset_formula_parses_to_basic_moves() -> None:
    for preset in PRESET_LIST:
        moves = FormulaConverter.convert(preset.formula)
        assert moves
        assert all(is_basic_move(move) for move in moves)


def test_empty_preset_fields_are_rejected() -> None:
    with pytest.raises(ValueError):
        AlgorithmPreset(name=" ", formula="R", stage=Stage.OLL, chunk="edges")


def test_strip_u_turns_keeps_inner_u_moves() -> None:
    assert strip_u_turns(["U", "U2", "R", "U", "R'", "U'"]) == ["R", "U", "R'"]
    assert strip_u_turns(["U", "U'"]) == []


def test_match_ignores_alignment_turns() -> None:
    moves = ["U2", *FormulaConverter.convert("R U R' U R U2 R'"), "U'"]
    preset = match_preset(Stage.OLL, "corners", moves)
    assert preset is not None
    assert preset.name == "sune"


def test_match_respects_stage_and_chunk() -> None:
    moves = FormulaConverter.convert(UA)
    assert match_preset(Stage.PLL, "edges", moves).name == "ua"
    assert match_preset(Stage.OLL, "edges", moves) is None
    assert match_preset(Stage.PLL, "edges", ["R", "U"]) is None
