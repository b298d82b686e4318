"""Axial hex coordinate utilities.

Pointy-top hexes, world plane is XZ (y is up). Direction numbering is
clockwise from NE and is shared with the side letters used for road assets:

    Dir 0: a  NE  (+1, -1)
    Dir 1: b  E   (+1,  0)
    Dir 2: c  SE  ( 0, +1)
    Dir 3: d  SW  (-1, +1)
    Dir 4: e  W   (-1,  0)
    Dir 5: f  NW  ( 0, -1)
"""

import math
from typing import NamedTuple, Optional

SQRT3 = math.sqrt(3)


class HexOffset(NamedTuple):
    """Offset for hex neighbor lookup."""
    dq: int
    dr: int


# Neighbor offsets indexed by direction (clockwise from NE)
HEX_NEIGHBOR_OFFSETS: list[HexOffset] = [
    HexOffset(+1, -1),  # Dir 0: NE
    HexOffset(+1,  0),  # Dir 1: E
    HexOffset( 0, +1),  # Dir 2: SE
    HexOffset(-1, +1),  # Dir 3: SW
    HexOffset(-1,  0),  # Dir 4: W
    HexOffset( 0, -1),  # Dir 5: NW
]

# Direction names for readability
HEX_DIRECTIONS: dict[str, int] = {
    "NE": 0,
    "E": 1,
    "SE": 2,
    "SW": 3,
    "W": 4,
    "NW": 5,
}

_OFFSET_TO_DIRECTION: dict[tuple[int, int], int] = {
    (offset.dq, offset.dr): direction
    for direction, offset in enumerate(HEX_NEIGHBOR_OFFSETS)
}


def to_world(q: int, r: int, size: float = 1.0) -> tuple[float, float, float]:
    """Convert axial coordinates to a world position (x, y, z).

    y is always 0; the board lies in the XZ plane.
    """
    x = size * (SQRT3 * q + SQRT3 / 2 * r)
    z = size * (3 / 2 * r)
    return (x, 0.0, z)


def to_axial(x: float, z: float, size: float = 1.0) -> tuple[int, int]:
    """Convert a world XZ position to the axial coordinates of its hex."""
    fq = (SQRT3 / 3 * x - 1 / 3 * z) / size
    fr = (2 / 3 * z) / size
    return cube_round(fq, fr)


def cube_round(fq: float, fr: float) -> tuple[int, int]:
    """Round fractional axial coordinates to the nearest hex.

    Rounds in cube space and fixes the component with the largest
    rounding error so that q + r + s == 0 still holds.
    """
    fs = -fq - fr
    q = round(fq)
    r = round(fr)
    s = round(fs)

    q_diff = abs(q - fq)
    r_diff = abs(r - fr)
    s_diff = abs(s - fs)

    if q_diff > r_diff and q_diff > s_diff:
        q = -r - s
    elif r_diff > s_diff:
        r = -q - s

    return (int(q), int(r))


def get_neighbor(q: int, r: int, direction: int) -> tuple[int, int]:
    """Get coordinates of neighbor in the given direction.

    Args:
        q: Axial q coordinate
        r: Axial r coordinate
        direction: Direction index 0-5 (clockwise from NE)

    Returns:
        (q, r) of neighbor hex
    """
    offset = HEX_NEIGHBOR_OFFSETS[direction]
    return (q + offset.dq, r + offset.dr)


def neighbors(q: int, r: int) -> list[tuple[int, int]]:
    """Get all 6 neighbors, position in the list is the direction index."""
    return [get_neighbor(q, r, direction) for direction in range(6)]


def get_all_neighbors(q: int, r: int) -> list[tuple[int, int, int]]:
    """Get all 6 neighbors with their connecting direction.

    Returns:
        List of (neighbor_q, neighbor_r, direction_from_center)
    """
    return [
        (q + offset.dq, r + offset.dr, direction)
        for direction, offset in enumerate(HEX_NEIGHBOR_OFFSETS)
    ]


def get_direction(from_q: int, from_r: int, to_q: int, to_r: int) -> Optional[int]:
    """Direction index from one hex to an adjacent one, None if not adjacent."""
    return _OFFSET_TO_DIRECTION.get((to_q - from_q, to_r - from_r))


def distance(q1: int, r1: int, q2: int, r2: int) -> int:
    """Calculate hex distance between two coordinates.

    Uses axial coordinate distance formula.
    """
    return (abs(q1 - q2) + abs(q1 + r1 - q2 - r2) + abs(r1 - r2)) // 2


def is_valid(q: int, r: int, board_radius: int) -> bool:
    """Check that a hex lies within a hexagonal board of the given radius."""
    return max(abs(q), abs(r), abs(q + r)) <= board_radius


def hexes_in_radius(board_radius: int) -> list[tuple[int, int]]:
    """All coordinates of a board with the given radius, sorted by (q, r)."""
    cells = []
    for q in range(-board_radius, board_radius + 1):
        r_min = max(-board_radius, -q - board_radius)
        r_max = min(board_radius, -q + board_radius)
        for r in range(r_min, r_max + 1):
            cells.append((q, r))
    return cells


def cells_between(start: tuple[int, int], end: tuple[int, int]) -> list[tuple[int, int]]:
    """Hexes on the straight line from start to end, both inclusive.

    Consecutive entries are always adjacent.
    """
    n = distance(start[0], start[1], end[0], end[1])
    if n == 0:
        return [start]

    # Nudge off exact hex edges so ties round the same way every time
    sq, sr = start[0] + 1e-6, start[1] + 1e-6
    eq, er = end[0] + 1e-6, end[1] + 1e-6

    cells = []
    for i in range(n + 1):
        t = i / n
        cells.append(cube_round(sq + (eq - sq) * t, sr + (er - sr) * t))
    return cells


def neighborhood(q: int, r: int) -> list[tuple[int, int]]:
    """The hex itself followed by its 6 neighbors."""
    return [(q, r), *neighbors(q, r)]


def coords_to_key(q: int, r: int) -> str:
    """Convert coordinates to string key for dict lookups."""
    return f"{q},{r}"


def key_to_coords(key: str) -> tuple[int, int]:
    """Convert string key back to coordinates."""
    q, r = key.split(",")
    return (int(q), int(r))
