from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Tuple

from cubeplan.notation import is_basic_move


class Stage(str, Enum):
    CROSS = "Cross"
    F2L = "F2L"
    OLL = "OLL"
    PLL = "PLL"


STAGE_ORDER: Tuple[Stage, ...] = (Stage.CROSS, Stage.F2L, Stage.OLL, Stage.PLL)


@dataclass(frozen=True)
class AlgorithmPreset:
    name: str
    formula: str
    stage: Stage
    chunk: str

    def __post_init__(self) -> None:
        if not self.name.strip():
            raise ValueError("Preset name must be non-empty")
        if not self.formula.strip():
            raise ValueError("Preset formula must be non-empty")


@dataclass(frozen=True)
class StageStep:
    move: str
    label: str = ""
    highlight_cubies: Tuple[str, ...] = ()
    chunk_id: str | None = None
    chunk_label: str | None = None
    chunk_index: int | None = None
    chunk_size: int | None = None

    def __post_init__(self) -> None:
        if not is_basic_move(self.move):
            raise ValueError(f"Step move must be a basic face turn, got {self.move!r}")


@dataclass(frozen=True)
class StagePlan:
    stage: Stage
    steps: Tuple[StageStep, ...] = ()

    @property
    def moves(self) -> list[str]:
        return [step.move for step in self.steps]


@dataclass(frozen=True)
class CFOPPlan:
    stages: Tuple[StagePlan, ...]
    moves: Tuple[str, ...]

    def __post_init__(self) -> None:
        order = [STAGE_ORDER.index(stage_plan.stage) for stage_plan in self.stages]
        if order != sorted(set(order)):
            raise ValueError("Stages must appear once each in Cross, F2L, OLL, PLL order")

    @property
    def steps(self) -> list[StageStep]:
        return [step for stage_plan in self.stages for step in stage_plan.steps]

    def iter_steps(self) -> Iterator[tuple[Stage, StageStep]]:
        for stage_plan in self.stages:
            for step in stage_plan.steps:
                yield stage_plan.stage, step

    def stage_for_index(self, index: int) -> Stage | None:
        offset = 0
        for stage_plan in self.stages:
            if index < offset + len(stage_plan.steps):
                return stage_plan.stage
            offset += len(stage_plan.steps)
        return None

    def chunk_starts(self) -> list[int]:
        starts: list[int] = []
        previous: str | None = None
        for index, step in enumerate(self.steps):
            chunk_id = step.chunk_id or f"m-{index}"
            if chunk_id != previous:
                starts.append(index)
                previous = chunk_id
        return starts
