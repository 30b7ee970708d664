from __future__ import annotations

from dataclasses import dataclass, field

from manim import DEGREES, ORIGIN, ThreeDScene
from manim_rubikscube import RubiksCube

from cubeplan.palette import face_palette, validate_cube_palette


@dataclass(frozen=True)
class CubeVisualConfig:
    colors: tuple[str, ...] = field(default_factory=face_palette)
    background_color: str = "#D4D4D4"
    sticker_stroke_color: str = "#1F2733"
    sticker_stroke_width: float = 3.4
    internal_face_color: str = "#242B35"
    scale: float = 0.9
    camera_phi_deg: float = 60.0
    # Shows U, F and R.
    camera_theta_deg: float = 213.0
    camera_zoom: float = 0.70


class SceneSetup:
    @staticmethod
    def _soften_internal_faces(cube: RubiksCube, internal_face_color: str) -> None:
        for cubie in cube.cubies.flatten():
            for face in cubie.faces.values():
                if face.get_fill_color().to_hex().lower() == "#000000":
                    face.set_fill(internal_face_color, opacity=1.0)

    @staticmethod
    def apply(scene: ThreeDScene, config: CubeVisualConfig) -> RubiksCube:
        scene.camera.background_color = config.background_color

        validate_cube_palette(config.colors)
        cube = RubiksCube(colors=list(config.colors)).scale(config.scale)
        SceneSetup._soften_internal_faces(cube, config.internal_face_color)
        cube.move_to(ORIGIN)
        cube.set_stroke(color=config.sticker_stroke_color, width=config.sticker_stroke_width)

        scene.set_camera_orientation(
            phi=config.camera_phi_deg * DEGREES,
            theta=config.camera_theta_deg * DEGREES,
            zoom=config.camera_zoom,
        )
        return cube
