from __future__ import annotations

import pytest

pytest.importorskip("manim")
pytest.importorskip("manim_rubikscube")

from manim import PI, Y_AXIS  # noqa: E402

from cubeplan.models import Stage, StageStep  # noqa: E402
from cubeplan.scenes import caption_for  # noqa: E402


def test_caption_prefers_chunk_label() -> None:
    step = StageStep(move="R", label="OLL step", chunk_label="OLL: sune")
    assert caption_for(Stage.OLL, step) == "OLL: sune"
    assert caption_for(Stage.OLL, StageStep(move="R", label="OLL step")) == "OLL: OLL step"


def test_face_turn_maps_to_scene_axes() -> None:
    from manim_rubikscube import RubiksCube

    from cubeplan.animations import FaceTurn, layer_cubies

    cube = RubiksCube()
    turn = FaceTurn(cube, "R")
    assert turn.angle * turn.axis == pytest.approx(PI / 2 * Y_AXIS)
    assert len(layer_cubies(cube, "y", 1)) == 9
