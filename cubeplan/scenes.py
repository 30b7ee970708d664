from __future__ import annotations

import logging

from manim import DOWN, RIGHT, UL, Text, ThreeDScene

from cubeplan.animations import FaceTurn
from cubeplan.config import SceneConfig
from cubeplan.facelets import cube_state_string
from cubeplan.models import CFOPPlan, Stage, StageStep
from cubeplan.planner import CFOPPlanner
from cubeplan.playback import PlaybackConfig, ease_in_out_quad, move_duration_ms
from cubeplan.setup import CubeVisualConfig, SceneSetup
from cubeplan.state import Scramble

logger = logging.getLogger(__name__)


def caption_for(stage: Stage, step: StageStep) -> str:
    return step.chunk_label or f"{stage.value}: {step.label}"


class SolveScene(ThreeDScene):
    """Scrambled cube solved stage by stage with a caption per chunk.

    Start state comes from CUBEPLAN_SEED / CUBEPLAN_LENGTH or CUBEPLAN_FORMULA.
    """

    VISUAL_CONFIG = CubeVisualConfig()
    CAPTION_FONT_SIZE = 28
    CAPTION_COLOR = "#1D2430"
    PRE_START_WAIT = 0.5
    END_WAIT = 1.0

    def build_plan(self) -> tuple[Scramble, CFOPPlan]:
        scramble = SceneConfig.from_env().scramble()
        plan = CFOPPlanner().plan(scramble.state)
        logger.info("Planned %d steps for scramble %s", len(plan.steps), " ".join(scramble.moves))
        return scramble, plan

    def _show_caption(self, caption: Text | None, text: str) -> Text:
        if caption is not None:
            self.remove(caption)
        updated = Text(text, font_size=self.CAPTION_FONT_SIZE, color=self.CAPTION_COLOR)
        updated.to_corner(UL)
        updated.shift(RIGHT * 0.45 + DOWN * 0.26)
        self.add_fixed_in_frame_mobjects(updated)
        self.add(updated)
        return updated

    def construct(self) -> None:
        scramble, plan = self.build_plan()
        playback = PlaybackConfig.from_env()
        cube = SceneSetup.apply(self, self.VISUAL_CONFIG)
        cube.set_state(cube_state_string(scramble.state))
        self.add(cube)
        self.wait(self.PRE_START_WAIT)

        caption: Text | None = None
        shown: str | None = None
        for stage, step in plan.iter_steps():
            text = caption_for(stage, step)
            if text != shown:
                caption = self._show_caption(caption, text)
                shown = text
            self.play(
                FaceTurn(cube, step.move),
                run_time=move_duration_ms(step.move, playback) / 1000.0,
                rate_func=ease_in_out_quad,
            )

        self._show_caption(caption, "Solved")
        self.wait(self.END_WAIT)
