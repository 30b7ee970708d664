from __future__ import annotations

import asyncio
import logging
import re
from dataclasses import dataclass, replace
from typing import Callable, Iterable, Sequence

from cubeplan import cross, f2l, oll, pll
from cubeplan.facelets import to_facelets
from cubeplan.models import STAGE_ORDER, CFOPPlan, Stage, StagePlan, StageStep
from cubeplan.notation import parse_moves, simplify_moves
from cubeplan.pieces import ChunkSpan
from cubeplan.solver import Solver, default_solver
from cubeplan.state import (
    CubeState,
    apply_move,
    apply_moves,
    is_cross_solved,
    is_first_two_layers_solved,
    is_oll_solved,
    is_solved,
)

logger = logging.getLogger(__name__)

_VALID_MOVE = re.compile(r"^[UDLRFB]['′2]?$")

# PLL has no closing check: it stays open until the move list runs out.
_CLOSING_PREDICATES: tuple[Callable[[CubeState], bool], ...] = (
    is_cross_solved,
    is_first_two_layers_solved,
    is_oll_solved,
)

_HIGHLIGHTERS = {
    Stage.CROSS: cross.highlight,
    Stage.F2L: f2l.highlight,
    Stage.OLL: oll.highlight,
    Stage.PLL: pll.highlight,
}


def normalize_moves(tokens: Iterable[str]) -> list[str]:
    valid: list[str] = []
    for token in tokens:
        if _VALID_MOVE.match(token):
            valid.append(token.replace("′", "'"))
        else:
            logger.warning("Skipping unsupported move %r (only U D L R F B with ' and 2)", token)
    return valid


def parse_solution(solution: str) -> list[str]:
    tokens: list[str] = []
    for word in solution.replace("′", "'").split():
        parsed = parse_moves(word)
        if "".join(parsed) != word:
            logger.warning("Skipping unsupported characters in %r, kept %s", word, parsed)
        tokens.extend(parsed)
    return normalize_moves(tokens)


@dataclass
class _Segment:
    stage: Stage
    states: list[CubeState]
    steps: list[StageStep]


def _open_stage(index: int, state: CubeState) -> int:
    while index < len(_CLOSING_PREDICATES) and _CLOSING_PREDICATES[index](state):
        index += 1
    return index


def _segment(initial: CubeState, moves: Sequence[str]) -> list[_Segment]:
    segments: list[_Segment] = []
    index = _open_stage(0, initial)
    current = _Segment(stage=STAGE_ORDER[index], states=[initial], steps=[])

    for move in moves:
        before = current.states[-1]
        after = apply_move(before, move)
        label, highlight = _HIGHLIGHTERS[current.stage](before, after)
        current.steps.append(StageStep(move=move, label=label, highlight_cubies=highlight))
        current.states.append(after)

        if index < len(_CLOSING_PREDICATES) and _CLOSING_PREDICATES[index](after):
            segments.append(current)
            index = _open_stage(index + 1, after)
            current = _Segment(stage=STAGE_ORDER[index], states=[after], steps=[])

    if current.steps:
        segments.append(current)
    return segments


def _stage_spans(segment: _Segment) -> list[ChunkSpan]:
    moves = [step.move for step in segment.steps]
    if segment.stage == Stage.CROSS:
        return cross.chunk(segment.states)
    if segment.stage == Stage.F2L:
        return f2l.chunk(segment.states)
    if segment.stage == Stage.OLL:
        return oll.chunk(segment.states, moves)
    return pll.chunk(segment.states, moves)


def _fill_gaps(stage: Stage, spans: list[ChunkSpan], total: int) -> list[ChunkSpan]:
    filled: list[ChunkSpan] = []
    cursor = 0
    for span in sorted(spans, key=lambda item: item.start):
        if span.start > cursor:
            filled.append(ChunkSpan(start=cursor, end=span.start - 1, label=f"{stage.value}: setup"))
        filled.append(span)
        cursor = span.end + 1
    if cursor < total:
        filled.append(ChunkSpan(start=cursor, end=total - 1, label=f"{stage.value}: setup"))
    return filled


def _chunk_steps(segment: _Segment) -> tuple[StageStep, ...]:
    steps = list(segment.steps)
    counter = 0
    for span in _fill_gaps(segment.stage, _stage_spans(segment), len(steps)):
        chunk_id = span.chunk_id
        if chunk_id is None:
            chunk_id = f"{segment.stage.value}-{counter}"
            counter += 1
        for position in range(span.start, span.end + 1):
            steps[position] = replace(
                steps[position],
                chunk_id=chunk_id,
                chunk_label=span.label,
                chunk_index=position - span.start,
                chunk_size=span.size,
            )
    return tuple(steps)


def build_plan(initial: CubeState, moves: Sequence[str]) -> CFOPPlan:
    """Segments an already-normalized solution into labelled, chunked stages."""
    stages = tuple(
        StagePlan(stage=segment.stage, steps=_chunk_steps(segment))
        for segment in _segment(initial, moves)
    )
    flat = tuple(move for stage_plan in stages for move in simplify_moves(stage_plan.moves))
    return CFOPPlan(stages=stages, moves=flat)


class CFOPPlanner:
    def __init__(self, solver: Solver | None = None) -> None:
        self._solver = solver

    @property
    def solver(self) -> Solver:
        if self._solver is None:
            self._solver = default_solver()
        return self._solver

    def solve(self, state: CubeState) -> list[str]:
        facelets = to_facelets(state)
        logger.debug("Solver input: %s", facelets)
        solution = self.solver(facelets)
        logger.debug("Solver output: %s", solution)
        return parse_solution(solution)

    def plan(self, state: CubeState) -> CFOPPlan:
        return build_plan(state, self.solve(state))

    async def plan_async(self, state: CubeState) -> CFOPPlan:
        moves = await asyncio.to_thread(self.solve, state)
        return build_plan(state, moves)


def plan_cfop(state: CubeState, solver: Solver | None = None) -> CFOPPlan:
    return CFOPPlanner(solver).plan(state)


def replay(plan: CFOPPlan, start: CubeState) -> CubeState:
    return apply_moves(start, plan.moves)


def plan_solves(plan: CFOPPlan, start: CubeState) -> bool:
    return is_solved(replay(plan, start))


def chunk_snapshots(plan: CFOPPlan, start: CubeState) -> dict[int, CubeState]:
    """State before the first step of every chunk, keyed by global step index."""
    starts = set(plan.chunk_starts())
    snapshots: dict[int, CubeState] = {}
    state = start
    for index, step in enumerate(plan.steps):
        if index in starts:
            snapshots[index] = state
        state = apply_move(state, step.move)
    return snapshots
