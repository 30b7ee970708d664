from __future__ import annotations

from typing import Sequence

from cubeplan.pieces import (
    ChunkSpan,
    changed_ids,
    cross_count,
    cross_edges,
    cross_target,
    index_by_id,
    is_cross_edge_seated,
    manhattan,
    side_color,
)
from cubeplan.state import CubeState, Cubie


def _newly_seated(before: CubeState, after: CubeState) -> list[Cubie]:
    previous = index_by_id(before)
    seated = [
        edge
        for edge in cross_edges(after)
        if is_cross_edge_seated(edge) and not is_cross_edge_seated(previous[edge.id])
    ]
    return sorted(seated, key=lambda edge: edge.id)


def _place_label(edge: Cubie | None) -> str:
    color = side_color(edge) if edge is not None else None
    return f"Cross: place {color} edge" if color else "Cross: place edge"


def highlight(before: CubeState, after: CubeState) -> tuple[str, tuple[str, ...]]:
    placed = _newly_seated(before, after)
    if placed:
        return _place_label(placed[0]), (placed[0].id,)

    moved = changed_ids(before, after)
    following = index_by_id(after)
    best: tuple[int, str] | None = None
    for edge in cross_edges(before):
        if is_cross_edge_seated(edge) or edge.id not in moved:
            continue
        target = cross_target(edge)
        if target is None:
            continue
        distance = manhattan(following[edge.id].pos, target)
        if distance >= manhattan(edge.pos, target):
            continue
        if best is None or (distance, edge.id) < best:
            best = (distance, edge.id)

    return "Cross: setup", (best[1],) if best else ()


def chunk(states: Sequence[CubeState]) -> list[ChunkSpan]:
    """A chunk closes on every move that raises the number of seated edges."""
    spans: list[ChunkSpan] = []
    start = 0
    count = cross_count(states[0])
    for index in range(len(states) - 1):
        following = cross_count(states[index + 1])
        if following > count:
            placed = _newly_seated(states[index], states[index + 1])
            spans.append(
                ChunkSpan(
                    start=start,
                    end=index,
                    label=_place_label(placed[0] if placed else None),
                )
            )
            start = index + 1
        count = following
    return spans
