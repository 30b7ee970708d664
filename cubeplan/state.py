from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator, Mapping

from cubeplan.notation import ALL_MOVES, is_basic_move, split_move_modifier

Vec3 = tuple[int, int, int]

FACE_KEYS = ("U", "D", "L", "R", "F", "B")
COLORS = ("W", "Y", "O", "R", "G", "B")

SOLVED_COLORS: Mapping[str, str] = {
    "U": "W",
    "D": "Y",
    "L": "O",
    "R": "R",
    "F": "G",
    "B": "B",
}

FACE_NORMALS: Mapping[str, Vec3] = {
    "U": (0, 1, 0),
    "D": (0, -1, 0),
    "L": (-1, 0, 0),
    "R": (1, 0, 0),
    "F": (0, 0, 1),
    "B": (0, 0, -1),
}
_FACE_BY_NORMAL = {normal: face for face, normal in FACE_NORMALS.items()}

_AXIS_INDEX = {"x": 0, "y": 1, "z": 2}

# face -> (axis, layer, direction of a clockwise turn seen from that face)
_MOVE_SPECS: Mapping[str, tuple[str, int, int]] = {
    "R": ("x", 1, -1),
    "L": ("x", -1, 1),
    "U": ("y", 1, -1),
    "D": ("y", -1, 1),
    "F": ("z", 1, -1),
    "B": ("z", -1, 1),
}


class InvalidMoveError(ValueError):
    pass


@dataclass(frozen=True)
class Cubie:
    id: str
    pos: Vec3
    face_colors: Mapping[str, str] = field(default_factory=dict)

    @property
    def is_edge(self) -> bool:
        return len(self.face_colors) == 2

    @property
    def is_corner(self) -> bool:
        return len(self.face_colors) == 3

    def has_color(self, color: str) -> bool:
        return color in self.face_colors.values()


@dataclass(frozen=True)
class CubeState:
    cubies: tuple[Cubie, ...]

    def __iter__(self) -> Iterator[Cubie]:
        return iter(self.cubies)

    def __len__(self) -> int:
        return len(self.cubies)

    def by_id(self, cubie_id: str) -> Cubie:
        for cubie in self.cubies:
            if cubie.id == cubie_id:
                return cubie
        raise KeyError(f"Unknown cubie id: {cubie_id}")

    def at(self, pos: Vec3) -> Cubie | None:
        for cubie in self.cubies:
            if cubie.pos == pos:
                return cubie
        return None

    def signature(self) -> dict[str, tuple[Vec3, tuple[tuple[str, str], ...]]]:
        return {
            cubie.id: (cubie.pos, tuple(sorted(cubie.face_colors.items())))
            for cubie in self.cubies
        }


@dataclass(frozen=True)
class Scramble:
    moves: tuple[str, ...]
    state: CubeState


def exposed_faces(pos: Vec3) -> list[str]:
    x, y, z = pos
    faces: list[str] = []
    if y == 1:
        faces.append("U")
    if y == -1:
        faces.append("D")
    if x == -1:
        faces.append("L")
    if x == 1:
        faces.append("R")
    if z == 1:
        faces.append("F")
    if z == -1:
        faces.append("B")
    return faces


def create_solved_state() -> CubeState:
    cubies: list[Cubie] = []
    for x in (-1, 0, 1):
        for y in (-1, 0, 1):
            for z in (-1, 0, 1):
                pos = (x, y, z)
                colors = {face: SOLVED_COLORS[face] for face in exposed_faces(pos)}
                cubies.append(Cubie(id=f"{x},{y},{z}", pos=pos, face_colors=colors))
    return CubeState(cubies=tuple(cubies))


def _rotate_vec(vec: Vec3, axis: str, direction: int) -> Vec3:
    # Right-hand rule, +90 degrees for direction > 0.
    x, y, z = vec
    if axis == "x":
        if direction > 0:
            return (x, -z, y)
        return (x, z, -y)
    if axis == "y":
        if direction > 0:
            return (z, y, -x)
        return (-z, y, x)
    if axis == "z":
        if direction > 0:
            return (-y, x, z)
        return (y, -x, z)
    raise ValueError(f"Unsupported axis: {axis}")


def _rotate_face_keys(face_colors: Mapping[str, str], axis: str, direction: int) -> dict[str, str]:
    return {
        _FACE_BY_NORMAL[_rotate_vec(FACE_NORMALS[face], axis, direction)]: color
        for face, color in face_colors.items()
    }


def move_spec(move: str) -> tuple[str, int, int, int]:
    """Resolves a basic move to ``(axis, layer, direction, turns)``."""
    if not is_basic_move(move):
        raise InvalidMoveError(f"Unsupported move: {move!r}")

    face, modifier = split_move_modifier(move)
    axis, layer, direction = _MOVE_SPECS[face]
    if modifier == "'":
        direction = -direction
    turns = 2 if modifier == "2" else 1
    return axis, layer, direction, turns


def in_layer(pos: Vec3, axis: str, layer: int) -> bool:
    return pos[_AXIS_INDEX[axis]] == layer


def apply_move(state: CubeState, move: str) -> CubeState:
    axis, layer, direction, turns = move_spec(move)

    cubies: list[Cubie] = []
    for cubie in state.cubies:
        pos = cubie.pos
        colors = dict(cubie.face_colors)
        for _ in range(turns):
            if not in_layer(pos, axis, layer):
                break
            pos = _rotate_vec(pos, axis, direction)
            colors = _rotate_face_keys(colors, axis, direction)
        cubies.append(Cubie(id=cubie.id, pos=pos, face_colors=colors))
    return CubeState(cubies=tuple(cubies))


def apply_moves(state: CubeState, moves: Iterable[str]) -> CubeState:
    for move in moves:
        state = apply_move(state, move)
    return state


def states_equal(a: CubeState, b: CubeState) -> bool:
    return len(a) == len(b) and a.signature() == b.signature()


def is_cubie_solved(cubie: Cubie) -> bool:
    return all(color == SOLVED_COLORS[face] for face, color in cubie.face_colors.items())


def is_solved(state: CubeState) -> bool:
    return all(is_cubie_solved(cubie) for cubie in state.cubies)


def is_cross_solved(state: CubeState, face: str = "D") -> bool:
    axis, layer, _ = _MOVE_SPECS[face]
    edges = [
        cubie
        for cubie in state.cubies
        if in_layer(cubie.pos, axis, layer) and cubie.is_edge
    ]
    return all(is_cubie_solved(edge) for edge in edges)


def is_first_two_layers_solved(state: CubeState) -> bool:
    return all(is_cubie_solved(cubie) for cubie in state.cubies if cubie.pos[1] != 1)


def is_oll_solved(state: CubeState) -> bool:
    return all(
        cubie.face_colors.get("U") == SOLVED_COLORS["U"]
        for cubie in state.cubies
        if cubie.pos[1] == 1
    )


def face_axis(face: str) -> str:
    return _MOVE_SPECS[face][0]


def _imul(a: int, b: int) -> int:
    return (a * b) & 0xFFFFFFFF


def mulberry32(seed: int):
    """Counter-based 32-bit PRNG; yields floats in [0, 1)."""
    state = seed & 0xFFFFFFFF

    def next_float() -> float:
        nonlocal state
        state = (state + 0x6D2B79F5) & 0xFFFFFFFF
        t = _imul(state ^ (state >> 15), state | 1)
        t ^= (t + _imul(t ^ (t >> 7), t | 61)) & 0xFFFFFFFF
        return ((t ^ (t >> 14)) & 0xFFFFFFFF) / 4294967296

    return next_float


def random_scramble(n: int = 25, seed: int = 1234) -> Scramble:
    if n < 0:
        raise ValueError("n must be >= 0")

    rnd = mulberry32(seed)
    moves: list[str] = []
    last_face: str | None = None
    last_axis: str | None = None
    while len(moves) < n:
        move = ALL_MOVES[int(rnd() * len(ALL_MOVES))]
        face = move[0]
        axis = face_axis(face)
        if face == last_face or axis == last_axis:
            continue
        moves.append(move)
        last_face = face
        last_axis = axis

    return Scramble(moves=tuple(moves), state=apply_moves(create_solved_state(), moves))


def scramble_from_moves(moves: Iterable[str]) -> Scramble:
    moves = tuple(moves)
    return Scramble(moves=moves, state=apply_moves(create_solved_state(), moves))
