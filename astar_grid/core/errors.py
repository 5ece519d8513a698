"""Exception types raised by the grid search engine."""

from __future__ import annotations

from typing import Tuple


class InvalidInput(ValueError):
    """Raised when a search is requested with an unusable start or target."""

    def __init__(self, coord: Tuple[int, int], reason: str) -> None:
        super().__init__(f"{coord}: {reason}")
        self.coord = coord
        self.reason = reason


class OutOfRange(IndexError):
    """Raised when a grid cell outside the grid bounds is queried."""

    def __init__(self, coord: Tuple[int, int], size: Tuple[int, int]) -> None:
        super().__init__(f"cell {coord} is outside grid of size {size}")
        self.coord = coord
        self.size = size


__all__ = ["InvalidInput", "OutOfRange"]
