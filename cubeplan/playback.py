from __future__ import annotations

import asyncio
import logging
import math
import os
import time
from dataclasses import dataclass, replace
from typing import Awaitable, Callable, ClassVar, Iterable, Mapping, Protocol, Sequence, Union

from cubeplan.models import CFOPPlan, Stage
from cubeplan.planner import chunk_snapshots
from cubeplan.state import CubeState, apply_move, in_layer, move_spec

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlaybackConfig:
    ms_per_quarter_turn: float = 320.0
    double_turn_multiplier: float = 2.0
    seek_debounce_ms: float = 30.0

    ENV_MS_PER_QUARTER_TURN: ClassVar[str] = "CUBEPLAN_MS_PER_QUARTER_TURN"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> PlaybackConfig:
        env = os.environ if environ is None else environ
        raw = env.get(cls.ENV_MS_PER_QUARTER_TURN, "").strip()
        if not raw:
            return cls()

        try:
            value = float(raw)
        except ValueError as exc:
            raise ValueError(
                f"Environment variable {cls.ENV_MS_PER_QUARTER_TURN} must be a float"
            ) from exc
        if value <= 0:
            raise ValueError(f"Environment variable {cls.ENV_MS_PER_QUARTER_TURN} must be > 0")
        return cls(ms_per_quarter_turn=value)


def ease_in_out_quad(t: float) -> float:
    t = min(1.0, max(0.0, t))
    if t < 0.5:
        return 2 * t * t
    return -1 + (4 - 2 * t) * t


@dataclass(frozen=True)
class QueuedMove:
    move: str
    stage: Stage | None = None
    highlight: tuple[str, ...] = ()
    chunk_label: str | None = None


def queue_from_plan(plan: CFOPPlan, start: int = 0) -> list[QueuedMove]:
    queued = [
        QueuedMove(
            move=step.move,
            stage=stage,
            highlight=step.highlight_cubies,
            chunk_label=step.chunk_label,
        )
        for stage, step in plan.iter_steps()
    ]
    return queued[start:]


def move_rotation(move: str) -> tuple[str, int, int]:
    """Axis, layer and signed quarter turns of a basic move."""
    axis, layer, direction, turns = move_spec(move)
    return axis, layer, direction * turns


def move_angle(move: str) -> float:
    _, _, quarters = move_rotation(move)
    return quarters * math.pi / 2


def move_duration_ms(move: str, config: PlaybackConfig) -> float:
    if move.endswith("2"):
        return config.ms_per_quarter_turn * config.double_turn_multiplier
    return config.ms_per_quarter_turn


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class Animating:
    move: QueuedMove
    start_ms: float
    affected_ids: tuple[str, ...]
    duration_ms: float


@dataclass(frozen=True)
class Committing:
    move: QueuedMove
    affected_ids: tuple[str, ...]


PlaybackState = Union[Idle, Animating, Committing]


@dataclass(frozen=True)
class StageChanged:
    stage: Stage


@dataclass(frozen=True)
class MoveStarted:
    move: QueuedMove


@dataclass(frozen=True)
class AttachPieces:
    ids: tuple[str, ...]
    axis: str


@dataclass(frozen=True)
class SetRotation:
    axis: str
    radians: float


@dataclass(frozen=True)
class DetachPieces:
    ids: tuple[str, ...]


@dataclass(frozen=True)
class CommitMove:
    move: QueuedMove


Effect = Union[StageChanged, MoveStarted, AttachPieces, SetRotation, DetachPieces, CommitMove]


def advance(
    state: PlaybackState,
    now_ms: float,
    queue: Sequence[QueuedMove],
    cube: CubeState,
    config: PlaybackConfig,
) -> tuple[PlaybackState, tuple[Effect, ...]]:
    """One step of the playback state machine. Performs no I/O."""
    if isinstance(state, Idle):
        if not queue:
            return state, ()
        queued = queue[0]
        axis, layer, _ = move_rotation(queued.move)
        affected = tuple(cubie.id for cubie in cube.cubies if in_layer(cubie.pos, axis, layer))
        effects: list[Effect] = []
        if queued.stage is not None:
            effects.append(StageChanged(queued.stage))
        effects.extend(
            (
                MoveStarted(queued),
                AttachPieces(affected, axis),
                SetRotation(axis, 0.0),
            )
        )
        animating = Animating(
            move=queued,
            start_ms=now_ms,
            affected_ids=affected,
            duration_ms=move_duration_ms(queued.move, config),
        )
        return animating, tuple(effects)

    if isinstance(state, Animating):
        axis, _, _ = move_rotation(state.move.move)
        target = move_angle(state.move.move)
        fraction = (now_ms - state.start_ms) / state.duration_ms if state.duration_ms > 0 else 1.0
        if fraction < 1.0:
            return state, (SetRotation(axis, target * ease_in_out_quad(fraction)),)
        return Committing(state.move, state.affected_ids), (SetRotation(axis, target),)

    return Idle(), (DetachPieces(state.affected_ids), CommitMove(state.move))


class RotationFrame(Protocol):
    """Renderer capability: a transient group that pieces join while turning."""

    def attach(self, ids: Sequence[str], axis: str) -> None: ...

    def set_rotation(self, axis: str, radians: float) -> None: ...

    def detach(self, ids: Sequence[str]) -> None: ...


def _monotonic_ms() -> float:
    return time.monotonic() * 1000.0


class PlaybackController:
    """Drives the state machine from a per-frame ``tick`` and owns the cube."""

    def __init__(
        self,
        frame: RotationFrame,
        cube: CubeState,
        config: PlaybackConfig | None = None,
        clock: Callable[[], float] = _monotonic_ms,
        on_stage_change: Callable[[Stage | None], None] | None = None,
        on_move: Callable[[str], None] | None = None,
        on_commit: Callable[[CubeState, int], None] | None = None,
        on_cube_reset: Callable[[CubeState], None] | None = None,
        on_finished: Callable[[], None] | None = None,
    ) -> None:
        self.frame = frame
        self.cube = cube
        self.config = config or PlaybackConfig()
        self.clock = clock
        self.on_stage_change = on_stage_change
        self.on_move = on_move
        self.on_commit = on_commit
        self.on_cube_reset = on_cube_reset
        self.on_finished = on_finished

        self.state: PlaybackState = Idle()
        self.queue: list[QueuedMove] = []
        self.paused = False
        self.step_index = 0
        self.plan: CFOPPlan | None = None
        self.plan_start: CubeState | None = None
        self._snapshots: dict[int, CubeState] = {}
        self._paused_elapsed: float | None = None
        self._last_seek_ms: float | None = None

    @property
    def idle(self) -> bool:
        return isinstance(self.state, Idle) and not self.queue

    @property
    def current_move(self) -> str | None:
        if isinstance(self.state, (Animating, Committing)):
            return self.state.move.move
        return None

    def enqueue(self, moves: Iterable[str | QueuedMove]) -> None:
        for move in moves:
            self.queue.append(move if isinstance(move, QueuedMove) else QueuedMove(move=move))

    def load_plan(self, plan: CFOPPlan, start: CubeState) -> None:
        self.cancel_tween()
        self.plan = plan
        self.plan_start = start
        self.cube = start
        self.step_index = 0
        self.queue = queue_from_plan(plan)
        self._snapshots = chunk_snapshots(plan, start)
        if self.on_cube_reset:
            self.on_cube_reset(self.cube)

    def tick(self) -> None:
        if self.paused:
            return

        now = self.clock()
        for _ in range(3):
            self.state, effects = advance(self.state, now, self.queue, self.cube, self.config)
            self._apply(effects)
            if not isinstance(self.state, Committing):
                break

    def _apply(self, effects: Iterable[Effect]) -> None:
        for effect in effects:
            if isinstance(effect, StageChanged):
                if self.on_stage_change:
                    self.on_stage_change(effect.stage)
            elif isinstance(effect, MoveStarted):
                if self.on_move:
                    self.on_move(effect.move.move)
            elif isinstance(effect, AttachPieces):
                self.frame.attach(effect.ids, effect.axis)
            elif isinstance(effect, SetRotation):
                self.frame.set_rotation(effect.axis, effect.radians)
            elif isinstance(effect, DetachPieces):
                self.frame.detach(effect.ids)
            elif isinstance(effect, CommitMove):
                self._commit(effect.move)

    def _commit(self, queued: QueuedMove) -> None:
        self.cube = apply_move(self.cube, queued.move)
        if self.queue:
            self.queue.pop(0)
        if self.plan is not None:
            self.step_index += 1
        if self.on_commit:
            self.on_commit(self.cube, self.step_index)
        if not self.queue and self.on_finished:
            self.on_finished()

    def pause(self) -> None:
        if self.paused:
            return
        self.paused = True
        if isinstance(self.state, Animating):
            self._paused_elapsed = self.clock() - self.state.start_ms

    def resume(self) -> None:
        if not self.paused:
            return
        self.paused = False
        if isinstance(self.state, Animating) and self._paused_elapsed is not None:
            self.state = replace(self.state, start_ms=self.clock() - self._paused_elapsed)
        self._paused_elapsed = None

    def toggle_pause(self) -> None:
        if self.paused:
            self.resume()
        else:
            self.pause()

    def set_speed(self, ms_per_quarter_turn: float) -> None:
        if ms_per_quarter_turn <= 0:
            raise ValueError("ms_per_quarter_turn must be > 0")
        self.config = replace(self.config, ms_per_quarter_turn=ms_per_quarter_turn)
        if not isinstance(self.state, Animating):
            return

        duration = move_duration_ms(self.state.move.move, self.config)
        now = self.clock()
        elapsed = self._paused_elapsed if self.paused else now - self.state.start_ms
        fraction = min(1.0, elapsed / self.state.duration_ms) if self.state.duration_ms > 0 else 1.0
        if self.paused:
            self._paused_elapsed = fraction * duration
        self.state = replace(self.state, duration_ms=duration, start_ms=now - fraction * duration)

    def cancel_tween(self) -> None:
        """Discards any in-flight rotation without committing its move."""
        if isinstance(self.state, (Animating, Committing)):
            axis, _, _ = move_rotation(self.state.move.move)
            self.frame.set_rotation(axis, 0.0)
            self.frame.detach(self.state.affected_ids)
        self.state = Idle()
        self._paused_elapsed = None

    def finish_instantly(self) -> None:
        """Commits the whole remaining queue to the logical cube at once."""
        self.cancel_tween()
        for queued in self.queue:
            self.cube = apply_move(self.cube, queued.move)
        self.queue = []
        if self.plan is not None:
            self.step_index = len(self.plan.steps)
        if self.on_cube_reset:
            self.on_cube_reset(self.cube)
        if self.on_commit:
            self.on_commit(self.cube, self.step_index)
        if self.on_finished:
            self.on_finished()

    @property
    def last_index(self) -> int:
        if self.plan is None:
            return 0
        return max(0, len(self.plan.steps) - 1)

    def clamp_index(self, index: int) -> int:
        return max(0, min(index, self.last_index))

    def state_at(self, index: int) -> CubeState:
        if self.plan is None or self.plan_start is None:
            return self.cube

        target = self.clamp_index(index)
        start_index = max((i for i in self._snapshots if i <= target), default=0)
        state = self._snapshots.get(start_index, self.plan_start)
        steps = self.plan.steps
        for position in range(start_index, target):
            state = apply_move(state, steps[position].move)
        return state

    def seek(self, index: int) -> bool:
        """Jumps to a step index; returns False when the request is debounced."""
        if self.plan is None:
            return False

        now = self.clock()
        if self._last_seek_ms is not None and now - self._last_seek_ms < self.config.seek_debounce_ms:
            return False
        self._last_seek_ms = now

        self.paused = True
        self.cancel_tween()
        target = self.clamp_index(index)
        self.cube = self.state_at(target)
        self.step_index = target
        self.queue = queue_from_plan(self.plan, target)
        logger.debug("Seek to step %d of %d", target, len(self.plan.steps))

        if self.on_cube_reset:
            self.on_cube_reset(self.cube)
        if self.on_stage_change:
            self.on_stage_change(self.plan.stage_for_index(target))
        return True

    def step_forward(self) -> bool:
        return self.seek(self.step_index + 1)

    def step_back(self) -> bool:
        return self.seek(self.step_index - 1)

    def next_chunk(self) -> bool:
        if self.plan is None:
            return False
        steps = self.plan.steps
        current = steps[self.step_index].chunk_id if self.step_index < len(steps) else None
        index = self.step_index + 1
        while index < len(steps) and steps[index].chunk_id == current:
            index += 1
        return self.seek(index)

    def previous_chunk(self) -> bool:
        if self.plan is None:
            return False
        steps = self.plan.steps
        index = min(self.step_index, len(steps) - 1)
        if index <= 0:
            return self.seek(0)
        current = steps[index].chunk_id
        while index > 0 and steps[index - 1].chunk_id == current:
            index -= 1
        previous = index - 1
        previous_id = steps[previous].chunk_id if previous >= 0 else None
        while previous > 0 and steps[previous - 1].chunk_id == previous_id:
            previous -= 1
        return self.seek(max(0, previous))


async def play_moves(
    frame: RotationFrame,
    sequence: Iterable[str | QueuedMove],
    cube: CubeState,
    config: PlaybackConfig | None = None,
    clock: Callable[[], float] = _monotonic_ms,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    frame_interval_ms: float = 16.0,
    on_stage_change: Callable[[Stage | None], None] | None = None,
    on_move: Callable[[str], None] | None = None,
) -> CubeState:
    """Plays moves strictly one after another and returns the final cube."""
    controller = PlaybackController(
        frame,
        cube,
        config=config,
        clock=clock,
        on_stage_change=on_stage_change,
        on_move=on_move,
    )
    controller.enqueue(sequence)
    while not controller.idle:
        controller.tick()
        await sleep(frame_interval_ms / 1000.0)
    return controller.cube
