from __future__ import annotations

from typing import Sequence

from cubeplan.pieces import (
    F2L_SLOTS,
    ChunkSpan,
    changed_ids,
    is_f2l_pair_solved,
    slot_pieces,
    top_layer,
)
from cubeplan.state import CubeState


def highlight(before: CubeState, after: CubeState) -> tuple[str, tuple[str, ...]]:
    completed = [
        slot
        for slot in F2L_SLOTS
        if not is_f2l_pair_solved(before, slot) and is_f2l_pair_solved(after, slot)
    ]
    if completed:
        slot = completed[0]
        corner, edge = slot_pieces(after, slot)
        ids = tuple(piece.id for piece in (corner, edge) if piece is not None)
        return f"F2L: {slot} pair (insert)", ids

    active = next((slot for slot in F2L_SLOTS if not is_f2l_pair_solved(after, slot)), "FR")
    moved = changed_ids(before, after)
    ids = tuple(cubie.id for cubie in top_layer(after) if cubie.id in moved)
    return f"F2L: {active} pair (setup)", ids


def chunk(states: Sequence[CubeState]) -> list[ChunkSpan]:
    """One chunk per unsolved slot, from the first move touching its pieces
    through the move that solves it. Slots are visited FR, FL, BR, BL."""
    total = len(states) - 1
    spans: list[ChunkSpan] = []
    cursor = 0
    for slot in F2L_SLOTS:
        if cursor >= total:
            break
        if is_f2l_pair_solved(states[cursor], slot):
            continue

        pieces = {piece.id for piece in slot_pieces(states[cursor], slot) if piece is not None}
        start = next(
            (i for i in range(cursor, total) if pieces & changed_ids(states[i], states[i + 1])),
            cursor,
        )
        end = next(
            (i for i in range(start, total) if is_f2l_pair_solved(states[i + 1], slot)),
            total - 1,
        )
        spans.append(ChunkSpan(start=start, end=end, label=f"F2L: {slot} (setup+insert)"))
        cursor = end + 1
    return spans
