from __future__ import annotations

from dataclasses import dataclass

from cubeplan.state import FACE_NORMALS, SOLVED_COLORS, CubeState, Cubie, Vec3, is_cubie_solved

CROSS_FACE = "D"
CROSS_COLOR = SOLVED_COLORS[CROSS_FACE]
SIDE_FACES = ("F", "R", "B", "L")
F2L_SLOTS = ("FR", "FL", "BR", "BL")

FACE_BY_COLOR = {color: face for face, color in SOLVED_COLORS.items()}

_SLOT_FACES = {
    "FR": ("F", "R"),
    "FL": ("F", "L"),
    "BR": ("B", "R"),
    "BL": ("B", "L"),
}


@dataclass(frozen=True)
class ChunkSpan:
    start: int
    end: int
    label: str
    chunk_id: str | None = None

    @property
    def size(self) -> int:
        return self.end - self.start + 1


def index_by_id(state: CubeState) -> dict[str, Cubie]:
    return {cubie.id: cubie for cubie in state.cubies}


def changed_ids(before: CubeState, after: CubeState) -> set[str]:
    previous = index_by_id(before)
    return {cubie.id for cubie in after.cubies if previous[cubie.id].pos != cubie.pos}


def manhattan(a: Vec3, b: Vec3) -> int:
    return sum(abs(i - j) for i, j in zip(a, b))


def top_layer(state: CubeState) -> list[Cubie]:
    return [cubie for cubie in state.cubies if cubie.pos[1] == 1]


def find_edge(state: CubeState, a: str, b: str) -> Cubie | None:
    for cubie in state.cubies:
        if cubie.is_edge and cubie.has_color(a) and cubie.has_color(b):
            return cubie
    return None


def find_corner(state: CubeState, a: str, b: str, c: str) -> Cubie | None:
    for cubie in state.cubies:
        if cubie.is_corner and cubie.has_color(a) and cubie.has_color(b) and cubie.has_color(c):
            return cubie
    return None


def cross_edges(state: CubeState) -> list[Cubie]:
    return [cubie for cubie in state.cubies if cubie.is_edge and cubie.has_color(CROSS_COLOR)]


def is_cross_edge_seated(edge: Cubie) -> bool:
    return edge.face_colors.get(CROSS_FACE) == CROSS_COLOR and is_cubie_solved(edge)


def cross_count(state: CubeState) -> int:
    return sum(1 for edge in cross_edges(state) if is_cross_edge_seated(edge))


def side_color(edge: Cubie) -> str | None:
    for color in edge.face_colors.values():
        if color != CROSS_COLOR:
            return color
    return None


def cross_target(edge: Cubie) -> Vec3 | None:
    color = side_color(edge)
    face = FACE_BY_COLOR.get(color) if color else None
    if face not in SIDE_FACES:
        return None
    side = FACE_NORMALS[face]
    down = FACE_NORMALS[CROSS_FACE]
    return (side[0] + down[0], side[1] + down[1], side[2] + down[2])


def slot_colors(slot: str) -> tuple[str, str]:
    first, second = _SLOT_FACES[slot]
    return SOLVED_COLORS[first], SOLVED_COLORS[second]


def slot_pieces(state: CubeState, slot: str) -> tuple[Cubie | None, Cubie | None]:
    a, b = slot_colors(slot)
    return find_corner(state, CROSS_COLOR, a, b), find_edge(state, a, b)


def is_f2l_pair_solved(state: CubeState, slot: str) -> bool:
    corner, edge = slot_pieces(state, slot)
    if corner is None or edge is None:
        return False
    return is_cubie_solved(corner) and is_cubie_solved(edge)


def side_faces_at(pos: Vec3) -> list[str]:
    x, _, z = pos
    faces: list[str] = []
    if x == 1:
        faces.append("R")
    elif x == -1:
        faces.append("L")
    if z == 1:
        faces.append("F")
    elif z == -1:
        faces.append("B")
    return faces
