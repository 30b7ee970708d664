from __future__ import annotations

import numpy as np
from manim import PI, Animation, VGroup, X_AXIS, Y_AXIS, Z_AXIS
from manim_rubikscube import RubiksCube

from cubeplan.playback import move_rotation

# manim_rubikscube puts F toward -x, R toward -y and U toward +z.
_SCENE_AXES = {
    "x": -Y_AXIS,
    "y": Z_AXIS,
    "z": -X_AXIS,
}


def layer_cubies(cube: RubiksCube, axis: str, layer: int) -> np.ndarray:
    if axis == "x":
        return cube.cubies[:, 1 - layer, :].flatten()
    if axis == "y":
        return cube.cubies[:, :, 1 + layer].flatten()
    if axis == "z":
        return cube.cubies[1 - layer, :, :].flatten()
    raise ValueError(f"Unsupported axis: {axis}")


class FaceTurn(Animation):
    """Turns one outer layer of a 3x3 cube by a basic move."""

    def __init__(self, mobject: RubiksCube, move: str, **kwargs):
        self.move = move
        self.layer_axis, self.layer, quarters = move_rotation(move)
        self.axis = _SCENE_AXES[self.layer_axis]
        self.angle = quarters * PI / 2
        super().__init__(mobject, **kwargs)

    def _targets(self) -> np.ndarray:
        return layer_cubies(self.mobject, self.layer_axis, self.layer)

    def create_starting_mobject(self):
        starting_mobject = self.mobject.copy()
        if starting_mobject.indices == {}:
            starting_mobject.set_indices()
        return starting_mobject

    def interpolate_mobject(self, alpha):
        self.mobject.become(self.starting_mobject)
        VGroup(*self._targets()).rotate(alpha * self.angle, self.axis)

    def finish(self):
        super().finish()
        self.mobject.adjust_indices(np.array(self._targets(), dtype=object))
