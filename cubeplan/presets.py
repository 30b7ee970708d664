from __future__ import annotations

from typing import Sequence

from cubeplan.formula import FormulaConverter
from cubeplan.models import AlgorithmPreset, Stage

# Only the common cases are named; everything else gets the generic chunk label.
PRESET_LIST = [
    AlgorithmPreset(
        name="line",
        formula="F R U R' U' F'",
        stage=Stage.OLL,
        chunk="edges",
    ),
    AlgorithmPreset(
        name="lshape",
        formula="F U R U' R' F'",
        stage=Stage.OLL,
        chunk="edges",
    ),
    AlgorithmPreset(
        name="sune",
        formula="R U R' U R U2 R'",
        stage=Stage.OLL,
        chunk="corners",
    ),
    AlgorithmPreset(
        name="antisune",
        formula="R' U' R U' R' U2 R",
        stage=Stage.OLL,
        chunk="corners",
    ),
    AlgorithmPreset(
        name="ua",
        formula="R U' R U R U R U' R' U' R2",
        stage=Stage.PLL,
        chunk="edges",
    ),
    AlgorithmPreset(
        name="ub",
        formula="R2 U R U R' U' R' U' R' U R'",
        stage=Stage.PLL,
        chunk="edges",
    ),
]


def strip_u_turns(moves: Sequence[str]) -> list[str]:
    """Drops leading and trailing U-face turns used only to align the layer."""
    start = 0
    end = len(moves)
    while start < end and moves[start][0] == "U":
        start += 1
    while end > start and moves[end - 1][0] == "U":
        end -= 1
    return list(moves[start:end])


def match_preset(stage: Stage, chunk: str, moves: Sequence[str]) -> AlgorithmPreset | None:
    core = strip_u_turns(moves)
    for preset in PRESET_LIST:
        if preset.stage != stage or preset.chunk != chunk:
            continue
        if FormulaConverter.convert(preset.formula) == core:
            return preset
    return None
