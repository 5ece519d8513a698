"""Open list and closed set for the A* loop."""

from __future__ import annotations

from dataclasses import dataclass
from heapq import heappop, heappush
from itertools import count
from typing import Dict, FrozenSet, Iterator, List, Optional, Set, Tuple

from ..core.grid import Coord


@dataclass(frozen=True, eq=False, slots=True)
class Node:
    """A discovered cell together with the best known route to it."""

    coord: Coord
    g: float
    h: float
    parent: Optional["Node"] = None

    @property
    def f(self) -> float:
        return self.g + self.h

    def lineage(self) -> Iterator["Node"]:
        """Yield this node and its ancestors back to the start node."""
        node: Optional[Node] = self
        while node is not None:
            yield node
            node = node.parent

    def path(self) -> Tuple[Coord, ...]:
        """Return the coordinates from the start node to this node."""
        coords = [node.coord for node in self.lineage()]
        coords.reverse()
        return tuple(coords)


# Heap entries: (f, h, seq, node). ``seq`` is unique so nodes are never compared.
_Entry = Tuple[float, float, int, Node]


class Frontier:
    """Priority queue of open nodes plus the set of closed coordinates.

    Ordering is lowest ``f``, then lowest ``h``, then earliest insertion.
    Superseded heap entries are left in place and skipped when popped; the
    ``coord -> Node`` index is the source of truth for what is open.
    """

    def __init__(self) -> None:
        self._heap: List[_Entry] = []
        self._open: Dict[Coord, Node] = {}
        self._closed: Set[Coord] = set()
        self._seq = count()

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------
    def push_or_update(self, node: Node) -> bool:
        """Open ``node`` unless its cell is closed or already has a cheaper route.

        Returns ``True`` if the frontier changed.
        """

        if node.coord in self._closed:
            return False
        existing = self._open.get(node.coord)
        if existing is not None and node.g >= existing.g:
            return False
        self._open[node.coord] = node
        heappush(self._heap, (node.f, node.h, next(self._seq), node))
        return True

    def pop_best(self) -> Node:
        """Remove and return the open node with the best priority."""

        while self._heap:
            _, _, _, node = heappop(self._heap)
            if self._open.get(node.coord) is node:
                del self._open[node.coord]
                return node
        raise IndexError("pop from empty frontier")

    def mark_closed(self, coord: Coord) -> None:
        self._closed.add(coord)
        self._open.pop(coord, None)

    def clear(self) -> None:
        """Drop all open and closed state."""
        self._heap.clear()
        self._open.clear()
        self._closed.clear()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def is_closed(self, coord: Coord) -> bool:
        return coord in self._closed

    def is_open(self, coord: Coord) -> bool:
        return coord in self._open

    def get_open(self, coord: Coord) -> Optional[Node]:
        return self._open.get(coord)

    def is_empty(self) -> bool:
        return not self._open

    @property
    def open_count(self) -> int:
        return len(self._open)

    @property
    def closed_count(self) -> int:
        return len(self._closed)

    def open_cells(self) -> FrozenSet[Coord]:
        return frozenset(self._open)

    def closed_cells(self) -> FrozenSet[Coord]:
        return frozenset(self._closed)

    def __len__(self) -> int:
        return len(self._open)


__all__ = ["Node", "Frontier"]
