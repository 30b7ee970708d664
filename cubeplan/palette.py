from __future__ import annotations

from typing import Mapping, Sequence

from cubeplan.facelets import FACELET_ORDER
from cubeplan.state import SOLVED_COLORS

# Tuned for the light-gray scene background.
STICKER_HEX: Mapping[str, str] = {
    "W": "#F4F4F4",
    "Y": "#FDFF00",
    "O": "#FF7A00",
    "R": "#C1121F",
    "G": "#2DBE4A",
    "B": "#2B63E8",
}

_CRITICAL_PAIR_MIN_DISTANCE = {
    ("R", "O"): 95.0,
    ("Y", "O"): 90.0,
}


def face_palette(stickers: Mapping[str, str] = STICKER_HEX) -> tuple[str, ...]:
    """Hex colours in U, R, F, D, L, B order for the solved colour scheme."""
    return tuple(stickers[SOLVED_COLORS[face]] for face in FACELET_ORDER)


def _hex_to_rgb(hex_color: str) -> tuple[int, int, int]:
    color = hex_color.strip()
    if color.startswith("#"):
        color = color[1:]
    if len(color) != 6:
        raise ValueError(f"Invalid color '{hex_color}' (expected #RRGGBB)")
    return (int(color[0:2], 16), int(color[2:4], 16), int(color[4:6], 16))


def _rgb_distance(a: tuple[int, int, int], b: tuple[int, int, int]) -> float:
    return sum((left - right) ** 2 for left, right in zip(a, b)) ** 0.5


def validate_cube_palette(colors: Sequence[str]) -> None:
    if len(colors) != 6:
        raise ValueError("Cube palette must contain exactly 6 face colors (U,R,F,D,L,B)")

    rgb_by_sticker = {
        SOLVED_COLORS[face]: _hex_to_rgb(color)
        for face, color in zip(FACELET_ORDER, colors, strict=True)
    }
    for (a, b), min_distance in _CRITICAL_PAIR_MIN_DISTANCE.items():
        distance = _rgb_distance(rgb_by_sticker[a], rgb_by_sticker[b])
        if distance < min_distance:
            raise ValueError(
                "Cube palette contrast is too low for critical pair "
                f"{a}/{b}: distance={distance:.1f} < {min_distance:.1f}"
            )
