from __future__ import annotations

from typing import Sequence

from cubeplan.models import Stage
from cubeplan.pieces import ChunkSpan, changed_ids, index_by_id, top_layer
from cubeplan.presets import match_preset
from cubeplan.state import SOLVED_COLORS, CubeState, Cubie

_TOP_COLOR = SOLVED_COLORS["U"]


def orientation(cubie: Cubie) -> str | None:
    if cubie.pos[1] != 1 or "U" not in cubie.face_colors:
        return None
    return "oriented" if cubie.face_colors["U"] == _TOP_COLOR else "misoriented"


def edges_oriented(state: CubeState) -> bool:
    edges = [cubie for cubie in top_layer(state) if cubie.is_edge]
    return len(edges) == 4 and all(edge.face_colors.get("U") == _TOP_COLOR for edge in edges)


def highlight(before: CubeState, after: CubeState) -> tuple[str, tuple[str, ...]]:
    following = index_by_id(after)
    flipped = tuple(
        cubie.id
        for cubie in top_layer(before)
        if orientation(cubie) != orientation(following[cubie.id])
    )
    if flipped:
        return "OLL step", flipped

    moved = changed_ids(before, after)
    return "OLL step", tuple(cubie.id for cubie in top_layer(after) if cubie.id in moved)


def _label(chunk_name: str, moves: Sequence[str], fallback: str) -> str:
    preset = match_preset(Stage.OLL, chunk_name, moves)
    return f"OLL: {preset.name}" if preset else fallback


def chunk(states: Sequence[CubeState], moves: Sequence[str]) -> list[ChunkSpan]:
    """Splits the stage into an edge-orientation and a corner-orientation chunk."""
    total = len(moves)
    if edges_oriented(states[0]):
        edge_end = -1
    else:
        edge_end = next((i for i in range(total) if edges_oriented(states[i + 1])), total - 1)

    spans: list[ChunkSpan] = []
    if edge_end >= 0:
        spans.append(
            ChunkSpan(
                start=0,
                end=edge_end,
                label=_label("edges", moves[: edge_end + 1], "OLL: orient edges"),
                chunk_id="OLL-edges",
            )
        )
    if edge_end + 1 < total:
        spans.append(
            ChunkSpan(
                start=edge_end + 1,
                end=total - 1,
                label=_label("corners", moves[edge_end + 1 :], "OLL: orient corners"),
                chunk_id="OLL-corners",
            )
        )
    return spans
