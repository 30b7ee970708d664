from __future__ import annotations

from typing import Sequence

from cubeplan.models import Stage
from cubeplan.pieces import ChunkSpan, index_by_id, side_faces_at, top_layer
from cubeplan.presets import match_preset
from cubeplan.state import SOLVED_COLORS, CubeState, Cubie


def _sides_match(cubie: Cubie) -> bool:
    return all(
        cubie.face_colors.get(face) == SOLVED_COLORS[face]
        for face in side_faces_at(cubie.pos)
    )


def corners_permuted(state: CubeState) -> bool:
    return all(_sides_match(cubie) for cubie in top_layer(state) if cubie.is_corner)


def highlight(before: CubeState, after: CubeState) -> tuple[str, tuple[str, ...]]:
    following = index_by_id(after)
    moved: list[str] = []
    for cubie in top_layer(before):
        x, y, z = following[cubie.id].pos
        if y == 1 and (x, z) != (cubie.pos[0], cubie.pos[2]):
            moved.append(cubie.id)
    return "PLL step", tuple(moved)


def chunk(states: Sequence[CubeState], moves: Sequence[str]) -> list[ChunkSpan]:
    """Splits the stage into a corner-permutation and an edge-permutation chunk."""
    total = len(moves)
    if corners_permuted(states[0]):
        corner_end = -1
    else:
        corner_end = next((i for i in range(total) if corners_permuted(states[i + 1])), total - 1)

    spans: list[ChunkSpan] = []
    if corner_end >= 0:
        spans.append(
            ChunkSpan(start=0, end=corner_end, label="PLL: corners", chunk_id="PLL-corners")
        )
    if corner_end + 1 < total:
        preset = match_preset(Stage.PLL, "edges", moves[corner_end + 1 :])
        spans.append(
            ChunkSpan(
                start=corner_end + 1,
                end=total - 1,
                label=f"PLL: {preset.name}" if preset else "PLL: edges",
                chunk_id="PLL-edges",
            )
        )
    return spans
