"""Event dataclasses emitted by the search loop."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, Optional, Tuple


@dataclass(frozen=True, slots=True)
class SearchSnapshot:
    """Open and closed cells after one expansion of a search.

    ``current`` is the cell popped during ``iteration``; it is ``None`` for
    the empty snapshot used to clear a display.
    """

    iteration: int
    current: Optional[Tuple[int, int]]
    open_cells: FrozenSet[Tuple[int, int]] = field(default_factory=frozenset)
    closed_cells: FrozenSet[Tuple[int, int]] = field(default_factory=frozenset)

    @classmethod
    def empty(cls) -> "SearchSnapshot":
        return cls(iteration=0, current=None)


__all__ = ["SearchSnapshot"]
