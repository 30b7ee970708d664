from __future__ import annotations

import logging
from functools import lru_cache

import numpy as np

from cubeplan.state import CubeState, Vec3

logger = logging.getLogger(__name__)

FACELET_ORDER = "URFDLB"

COLOR_TO_FACELET = {
    "W": "U",
    "Y": "D",
    "R": "R",
    "O": "L",
    "G": "F",
    "B": "B",
}


def _cube_index() -> np.ndarray:
    cube_idx = np.empty((3, 3, 3), dtype=object)
    for i in range(3):
        for j in range(3):
            for k in range(3):
                cube_idx[i, j, k] = (i - 1, j - 1, k - 1)
    return cube_idx


@lru_cache(maxsize=1)
def facelet_slots() -> tuple[tuple[Vec3, str], ...]:
    """(position, face) for all 54 stickers in solver order.

    Each face is read row-major as seen from outside the cube, with U on top
    for the side faces, B at the top of U and F at the top of D.
    """
    cube_idx = _cube_index()
    grids = {
        "U": cube_idx[:, 2, :].T,
        "R": np.flip(cube_idx[2, :, :], (0, 1)),
        "F": np.flip(cube_idx[:, :, 2].T, 0),
        "D": np.flip(cube_idx[:, 0, :].T, 0),
        "L": np.flip(cube_idx[0, :, :], 0),
        "B": np.flip(cube_idx[:, :, 0].T, (0, 1)),
    }

    slots: list[tuple[Vec3, str]] = []
    for face in FACELET_ORDER:
        slots.extend((tuple(pos), face) for pos in grids[face].flatten())
    return tuple(slots)


def solved_facelets() -> str:
    return "".join(face * 9 for face in FACELET_ORDER)


@lru_cache(maxsize=1)
def render_slots() -> tuple[tuple[Vec3, str], ...]:
    """(position, face) in the order ``manim_rubikscube.RubiksCube.set_state`` reads.

    That library indexes its cubies with F toward -x, R toward -y and U
    toward +z, so its index triples are mapped back into cube coordinates.
    """
    cube_idx = _cube_index()
    grids = (
        ("U", np.rot90(cube_idx[:, :, 2], 2)),
        ("R", np.rot90(np.flip(cube_idx[:, 0, :], (0, 1)), -1)),
        ("F", np.rot90(np.flip(cube_idx[0, :, :], 0))),
        ("D", np.rot90(np.flip(cube_idx[:, :, 0], 0), 2)),
        ("L", np.rot90(np.flip(cube_idx[:, 2, :], 0))),
        ("B", np.rot90(np.flip(cube_idx[2, :, :], (0, 1)), -1)),
    )

    slots: list[tuple[Vec3, str]] = []
    for face, grid in grids:
        for a, b, c in grid.flatten():
            slots.append(((-b, c, -a), face))
    return tuple(slots)


def _read_stickers(state: CubeState, slots: tuple[tuple[Vec3, str], ...]) -> str:
    by_pos = {cubie.pos: cubie for cubie in state.cubies}

    letters: list[str] = []
    for index, (pos, face) in enumerate(slots):
        cubie = by_pos.get(pos)
        color = cubie.face_colors.get(face) if cubie is not None else None
        letter = COLOR_TO_FACELET.get(color) if color is not None else None
        if letter is None:
            logger.warning("No sticker for facelet %d (%s at %s); using face letter", index, face, pos)
            letter = face
        letters.append(letter)
    return "".join(letters)


def to_facelets(state: CubeState) -> str:
    return _read_stickers(state, facelet_slots())


def cube_state_string(state: CubeState) -> str:
    """Sticker string for loading a state into the rendered cube."""
    return _read_stickers(state, render_slots())
