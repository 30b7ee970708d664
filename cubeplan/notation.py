from __future__ import annotations

from typing import Iterable, Iterator

BASIC_FACES = ("U", "D", "L", "R", "F", "B")

ALL_MOVES: tuple[str, ...] = tuple(
    f"{face}{modifier}" for face in BASIC_FACES for modifier in ("", "'", "2")
)

_BASIC_MOVE_SET = frozenset(ALL_MOVES)
_MODIFIERS = ("'", "2")
_AMOUNT_BY_MODIFIER = {"": 1, "'": -1, "2": 2}
_MODIFIER_BY_AMOUNT = {1: "", 2: "2", 3: "'"}


def split_move_modifier(move: str) -> tuple[str, str]:
    if move.endswith("2"):
        return move[:-1], "2"
    if move.endswith("'"):
        return move[:-1], "'"
    return move, ""


def is_basic_move(move: str) -> bool:
    return move in _BASIC_MOVE_SET


def quarter_turns(move: str) -> int:
    """Signed quarter-turn amount of a move token: 1, -1 or 2."""
    _, modifier = split_move_modifier(move)
    return _AMOUNT_BY_MODIFIER[modifier]


def _scan(text: str) -> Iterator[str]:
    i = 0
    length = len(text)
    while i < length:
        char = text[i]
        if char not in BASIC_FACES:
            i += 1
            continue
        if i + 1 < length and text[i + 1] in _MODIFIERS:
            yield text[i : i + 2]
            i += 2
        else:
            yield char
            i += 1


def parse_moves(text: str) -> list[str]:
    """Extracts face-turn tokens from free text, skipping everything else."""
    return list(_scan(text))


def simplify_moves(moves: Iterable[str]) -> list[str]:
    """Merges adjacent turns of the same face.

    Only the last kept token is looked at, so turns on different faces are
    never reordered: ``R L R'`` stays as it is.
    """
    result: list[str] = []
    for move in moves:
        if not result or result[-1][0] != move[0]:
            result.append(move)
            continue

        last = result.pop()
        total = (quarter_turns(last) + quarter_turns(move)) % 4
        if total:
            result.append(f"{move[0]}{_MODIFIER_BY_AMOUNT[total]}")
    return result


def invert_move(move: str) -> str:
    base, modifier = split_move_modifier(move)
    if not base:
        raise ValueError("Move must be non-empty")
    if modifier == "":
        return f"{base}'"
    if modifier == "'":
        return base
    return move


def invert_moves(moves: Iterable[str]) -> list[str]:
    return [invert_move(move) for move in reversed(list(moves))]
