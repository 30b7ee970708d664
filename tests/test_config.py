from __future__ import annotations

import pytest

from cubeplan.config import SceneConfig
from cubeplan.state import random_scramble


def test_defaults_without_environment() -> None:
    config = SceneConfig.from_env({})
    assert config == SceneConfig(seed=1234, length=25, formula=None)
    assert config.scramble().moves == random_scramble(25, 1234).moves


def test_seed_and_length_from_environment() -> None:
    config = SceneConfig.from_env({"CUBEPLAN_SEED": "7", "CUBEPLAN_LENGTH": "5"})
    assert config.scramble().moves == random_scramble(5, 7).moves


def test_formula_wins_over_seed() -> None:
    config = SceneConfig.from_env({"CUBEPLAN_SEED": "7", "CUBEPLAN_FORMULA": " (R U)2 "})
    assert config.scramble().moves == ("R", "U", "R", "U")


def test_invalid_environment_values_fail() -> None:
    with pytest.raises(ValueError, match="CUBEPLAN_LENGTH"):
        SceneConfig.from_env({"CUBEPLAN_LENGTH": "ten"})
    with pytest.raises(ValueError, match="CUBEPLAN_SEED"):
        SceneConfig.from_env({"CUBEPLAN_SEED": "-1"})
    with pytest.raises(ValueError):
        SceneConfig(length=-1)
