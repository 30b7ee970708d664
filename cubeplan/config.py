from __future__ import annotations

import os
from dataclasses import dataclass
from typing import ClassVar, Mapping

from cubeplan.formula import FormulaConverter
from cubeplan.state import Scramble, random_scramble, scramble_from_moves


def _int_from_env(env: Mapping[str, str], name: str, default: int, minimum: int) -> int:
    raw = env.get(name, "").strip()
    if not raw:
        return default

    try:
        value = int(raw)
    except ValueError as exc:
        raise ValueError(f"Environment variable {name} must be an integer") from exc
    if value < minimum:
        raise ValueError(f"Environment variable {name} must be >= {minimum}")
    return value


@dataclass(frozen=True)
class SceneConfig:
    """Selects the start state: an explicit formula wins over a seeded scramble."""

    seed: int = 1234
    length: int = 25
    formula: str | None = None

    ENV_SEED: ClassVar[str] = "CUBEPLAN_SEED"
    ENV_LENGTH: ClassVar[str] = "CUBEPLAN_LENGTH"
    ENV_FORMULA: ClassVar[str] = "CUBEPLAN_FORMULA"

    def __post_init__(self) -> None:
        if self.length < 0:
            raise ValueError("length must be >= 0")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> SceneConfig:
        env = os.environ if environ is None else environ
        formula = env.get(cls.ENV_FORMULA, "").strip() or None
        return cls(
            seed=_int_from_env(env, cls.ENV_SEED, cls.seed, minimum=0),
            length=_int_from_env(env, cls.ENV_LENGTH, cls.length, minimum=0),
            formula=formula,
        )

    def scramble(self) -> Scramble:
        if self.formula:
            return scramble_from_moves(FormulaConverter.convert(self.formula))
        return random_scramble(self.length, self.seed)
