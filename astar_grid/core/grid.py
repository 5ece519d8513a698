"""Occupancy grid searched by the pathfinder."""

from __future__ import annotations

from enum import IntEnum
from typing import Any, Iterable, List, Sequence, Set, Tuple

from .errors import OutOfRange


Coord = Tuple[int, int]


class Occupancy(IntEnum):
    """Terrain value of a single cell."""

    FREE = 0
    BLOCKED = 1


def _is_blocked_value(value: Any) -> bool:
    if isinstance(value, str):
        return value == "#"
    return bool(value)


class Grid:
    """Rectangular occupancy grid addressed by ``(x, y)``.

    The grid has no public mutators so it can be shared by reference between
    any number of sequential searches. ``with_blocked`` and ``with_free``
    return modified copies.
    """

    def __init__(self, width: int, height: int, blocked: Iterable[Coord] = ()) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("grid dimensions must be positive")
        self._width = width
        self._height = height
        # One list per row, one value per cell.
        self._cells: List[List[Occupancy]] = [
            [Occupancy.FREE for _ in range(width)] for _ in range(height)
        ]
        for x, y in blocked:
            if not self.in_bounds(x, y):
                raise OutOfRange((x, y), self.size)
            self._cells[y][x] = Occupancy.BLOCKED

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------
    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[Any]]) -> "Grid":
        """Build a grid from row-major data where ``rows[y][x]`` is a cell.

        Truthy values (or ``"#"`` in string rows) mark blocked cells.
        """

        if not rows or not rows[0]:
            raise ValueError("rows must contain at least one cell")
        width = len(rows[0])
        if any(len(row) != width for row in rows):
            raise ValueError("all rows must have the same length")
        blocked = [
            (x, y)
            for y, row in enumerate(rows)
            for x, value in enumerate(row)
            if _is_blocked_value(value)
        ]
        return cls(width, len(rows), blocked)

    @classmethod
    def open_field(cls, width: int, height: int) -> "Grid":
        """Return a grid with every cell free."""
        return cls(width, height)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def size(self) -> Tuple[int, int]:
        return (self._width, self._height)

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self._width and 0 <= y < self._height

    def is_blocked(self, x: int, y: int) -> bool:
        """Return ``True`` if ``(x, y)`` is blocked.

        Callers must check :meth:`in_bounds` first; out-of-bounds queries
        raise :class:`OutOfRange`.
        """

        if not self.in_bounds(x, y):
            raise OutOfRange((x, y), self.size)
        return self._cells[y][x] is Occupancy.BLOCKED

    def is_free(self, x: int, y: int) -> bool:
        return not self.is_blocked(x, y)

    def occupancy(self, x: int, y: int) -> Occupancy:
        if not self.in_bounds(x, y):
            raise OutOfRange((x, y), self.size)
        return self._cells[y][x]

    def blocked_cells(self) -> Set[Coord]:
        return {
            (x, y)
            for y, row in enumerate(self._cells)
            for x, value in enumerate(row)
            if value is Occupancy.BLOCKED
        }

    def to_rows(self) -> List[List[int]]:
        """Return a row-major copy of the grid as ``0``/``1`` values."""
        return [[int(value) for value in row] for row in self._cells]

    # ------------------------------------------------------------------
    # Derived grids
    # ------------------------------------------------------------------
    def with_blocked(self, cells: Iterable[Coord]) -> "Grid":
        """Return a copy of this grid with ``cells`` additionally blocked."""
        return Grid(self._width, self._height, self.blocked_cells() | set(cells))

    def with_free(self, cells: Iterable[Coord]) -> "Grid":
        """Return a copy of this grid with ``cells`` cleared."""
        return Grid(self._width, self._height, self.blocked_cells() - set(cells))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return self.size == other.size and self._cells == other._cells

    def __repr__(self) -> str:
        return (
            f"Grid(width={self._width}, height={self._height}, "
            f"blocked={len(self.blocked_cells())})"
        )


__all__ = ["Coord", "Grid", "Occupancy"]
