"""Board geometry for the triangular lattice.

The board is a diamond of ``2N + 1`` rows. Row ``i`` holds ``i + 1`` nodes
while the diamond expands and ``2N + 1 - i`` while it contracts. Every
lattice address ``(row, col)`` also has a square coordinate ``(x, y)``
obtained by rotating the diamond 45 degrees; in that frame the board is a
plain ``(N + 1) x (N + 1)`` square and the six lattice directions are

    (+1, 0), (-1, 0), (0, +1), (0, -1), (+1, -1), (-1, +1)

Same-x and same-y lines are the two diagonal families on screen, and lines
of constant ``x + y`` are the on-screen rows.

Architecture Note:
    All straight-line reasoning (dragon rays, griffin slides, ranger
    cannons, wizard beam links) goes through ``BoardManager`` so that the
    rotated frame is defined in exactly one place.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import lru_cache
from typing import Dict, Iterator, List, Optional, Set, Tuple

Cell = Tuple[int, int]
Direction = Tuple[int, int]

BOARD_SIZE = 8
STEP = 40.0
VSTEP = STEP * 0.5

# Lattice neighbour directions in the rotated square frame
DIRECTIONS: Tuple[Direction, ...] = (
    (1, 0),
    (-1, 0),
    (0, 1),
    (0, -1),
    (1, -1),
    (-1, 1),
)

# On-screen row family: x + y constant
ROW_DIRECTIONS: Tuple[Direction, ...] = ((1, -1), (-1, 1))

# Vertical "true diagonal" family: (x +/- 1, y +/- 1), two rows apart
TRUE_DIAGONAL_DIRECTIONS: Tuple[Direction, ...] = ((1, 1), (-1, -1))


@dataclass(frozen=True)
class Node:
    """A lattice node with planar coordinates centred at the origin."""

    x: float
    y: float
    row: int
    col: int

    @property
    def cell(self) -> Cell:
        return (self.row, self.col)


def build_nodes(size: int = BOARD_SIZE) -> List[List[Node]]:
    """Return the lattice nodes grouped by row."""
    rows: List[List[Node]] = []
    for level in range(2 * size + 1):
        count = level + 1 if level <= size else 2 * size + 1 - level
        y = (level - size) * VSTEP
        x_start = -(count - 1) * STEP / 2
        rows.append(
            [Node(x=x_start + j * STEP, y=y, row=level, col=j) for j in range(count)]
        )
    return rows


def build_adjacency(rows: List[List[Node]]) -> Dict[Cell, Set[Cell]]:
    """Return the undirected adjacency relation between node addresses.

    Same-row neighbours are linked. Between an expanding row and the next,
    node ``c`` is linked to the two nodes ``c`` and ``c + 1`` born under it;
    contracting rows mirror this.
    """
    adjacency: Dict[Cell, Set[Cell]] = {
        node.cell: set() for row in rows for node in row
    }

    def connect(a: Cell, b: Cell) -> None:
        if a == b or a not in adjacency or b not in adjacency:
            return
        adjacency[a].add(b)
        adjacency[b].add(a)

    for r, row in enumerate(rows):
        for c in range(len(row) - 1):
            connect((r, c), (r, c + 1))

    for r in range(len(rows) - 1):
        upper, lower = rows[r], rows[r + 1]
        if len(lower) == len(upper) + 1:
            for c in range(len(upper)):
                connect((r, c), (r + 1, c))
                connect((r, c), (r + 1, c + 1))
        elif len(upper) == len(lower) + 1:
            for c in range(len(lower)):
                connect((r + 1, c), (r, c))
                connect((r + 1, c), (r, c + 1))

    return adjacency


def rotate_to_square(row: int, col: int, size: int = BOARD_SIZE) -> Tuple[int, int]:
    """Map a lattice address to the rotated square coordinate ``(x, y)``."""
    if row <= size:
        return col, row - col
    offset = row - size
    return col + offset, size - col


def square_to_lattice(x: int, y: int, size: int = BOARD_SIZE) -> Cell:
    """Inverse of :func:`rotate_to_square`."""
    row = x + y
    if row <= size:
        return row, x
    return row, size - y


def coordinate_label(row: int, col: int, size: int = BOARD_SIZE) -> str:
    """Display label: file letter from x, 1-indexed rank from y (e.g. ``I9``)."""
    x, y = rotate_to_square(row, col, size)
    return f"{chr(ord('A') + x)}{y + 1}"


@dataclass
class BoardGeometry:
    """Nodes, adjacency and square-frame helpers for one board size."""

    size: int
    rows: List[List[Node]] = field(default_factory=list)
    adjacency: Dict[Cell, Set[Cell]] = field(default_factory=dict)

    @property
    def nodes(self) -> List[Node]:
        return [node for row in self.rows for node in row]

    def neighbours(self, cell: Cell) -> Set[Cell]:
        return self.adjacency.get(cell, set())

    def to_square(self, cell: Cell) -> Tuple[int, int]:
        return rotate_to_square(cell[0], cell[1], self.size)

    def from_square(self, x: int, y: int) -> Optional[Cell]:
        if not (0 <= x <= self.size and 0 <= y <= self.size):
            return None
        return square_to_lattice(x, y, self.size)

    def offset(self, cell: Cell, direction: Direction, distance: int = 1) -> Optional[Cell]:
        """Cell reached by stepping ``distance`` times along ``direction``."""
        x, y = self.to_square(cell)
        return self.from_square(x + direction[0] * distance, y + direction[1] * distance)

    def ray(self, cell: Cell, direction: Direction) -> Iterator[Cell]:
        """Yield successive cells from ``cell`` (exclusive) to the board edge."""
        current = self.offset(cell, direction)
        while current is not None:
            yield current
            current = self.offset(current, direction)

    def delta(self, origin: Cell, dest: Cell) -> Tuple[int, int]:
        ox, oy = self.to_square(origin)
        dx, dy = self.to_square(dest)
        return dx - ox, dy - oy

    def line_direction(self, origin: Cell, dest: Cell) -> Optional[Tuple[Direction, int]]:
        """Return ``(direction, distance)`` if ``dest`` lies on a lattice line."""
        dx, dy = self.delta(origin, dest)
        if dx == 0 and dy == 0:
            return None
        if dx == 0:
            return (0, 1 if dy > 0 else -1), abs(dy)
        if dy == 0:
            return (1 if dx > 0 else -1, 0), abs(dx)
        if dx == -dy:
            return (1, -1) if dx > 0 else (-1, 1), abs(dx)
        return None


class BoardManager:
    """Entry point for board geometry lookups."""

    @staticmethod
    @lru_cache(maxsize=4)
    def geometry(size: int = BOARD_SIZE) -> BoardGeometry:
        rows = build_nodes(size)
        return BoardGeometry(size=size, rows=rows, adjacency=build_adjacency(rows))
