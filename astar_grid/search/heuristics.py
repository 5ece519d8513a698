"""Distance estimators used to rank cells on the open list."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from random import Random
from typing import Optional, Protocol, Union, runtime_checkable


class Heuristic(Enum):
    """Selectable heuristic for a search."""

    MANHATTAN = "manhattan"
    EUCLIDEAN = "euclidean"
    MANHATTAN_RANDOM = "manhattan_random"


# Accepted spellings, including the one used by older configs.
_ALIASES = {
    "manhattan": Heuristic.MANHATTAN,
    "euclidean": Heuristic.EUCLIDEAN,
    "euclidian": Heuristic.EUCLIDEAN,
    "manhattan_random": Heuristic.MANHATTAN_RANDOM,
    "random": Heuristic.MANHATTAN_RANDOM,
}


@runtime_checkable
class HeuristicStrategy(Protocol):
    """Estimate the remaining cost from ``(x, y)`` to the target."""

    kind: Heuristic

    def estimate(self, x: int, y: int, target_x: int, target_y: int) -> float:
        ...


@dataclass(frozen=True)
class ManhattanHeuristic:
    """``|dx| + |dy|``; admissible and consistent on a 4-neighbour grid."""

    kind: Heuristic = field(default=Heuristic.MANHATTAN, init=False)

    def estimate(self, x: int, y: int, target_x: int, target_y: int) -> float:
        return float(abs(x - target_x) + abs(y - target_y))


@dataclass(frozen=True)
class EuclideanHeuristic:
    """Straight-line distance. Admissible but looser than Manhattan."""

    kind: Heuristic = field(default=Heuristic.EUCLIDEAN, init=False)

    def estimate(self, x: int, y: int, target_x: int, target_y: int) -> float:
        return math.sqrt((x - target_x) ** 2 + (y - target_y) ** 2)


@dataclass(frozen=True)
class ManhattanRandomHeuristic:
    """Manhattan distance plus uniform noise in ``[0, spread)``.

    This overestimates, so paths are not guaranteed to be shortest. It exists
    to make the explored region vary between runs. Pass a seeded ``rng`` for
    reproducible output.
    """

    rng: Random = field(default_factory=Random, compare=False)
    spread: float = 2.0
    kind: Heuristic = field(default=Heuristic.MANHATTAN_RANDOM, init=False)

    def __post_init__(self) -> None:
        if self.spread < 0:
            raise ValueError("spread must be non-negative")

    def estimate(self, x: int, y: int, target_x: int, target_y: int) -> float:
        return abs(x - target_x) + abs(y - target_y) + self.rng.random() * self.spread


HeuristicSelection = Union[Heuristic, str, HeuristicStrategy]


def parse_heuristic(name: Union[Heuristic, str]) -> Heuristic:
    """Return the :class:`Heuristic` named by ``name``."""

    if isinstance(name, Heuristic):
        return name
    key = str(name).strip().lower().replace("-", "_").replace(" ", "_")
    try:
        return _ALIASES[key]
    except KeyError:
        raise ValueError(f"Unknown heuristic: {name!r}") from None


def get_heuristic(
    selection: HeuristicSelection = Heuristic.MANHATTAN,
    rng: Optional[Random] = None,
    spread: float = 2.0,
) -> HeuristicStrategy:
    """Resolve ``selection`` into a strategy object.

    Strategy instances are returned unchanged. ``rng`` and ``spread`` only
    affect :attr:`Heuristic.MANHATTAN_RANDOM`.
    """

    if not isinstance(selection, (Heuristic, str)):
        if isinstance(selection, HeuristicStrategy):
            return selection
        raise TypeError(f"Not a heuristic: {selection!r}")

    kind = parse_heuristic(selection)
    if kind is Heuristic.EUCLIDEAN:
        return EuclideanHeuristic()
    if kind is Heuristic.MANHATTAN_RANDOM:
        return ManhattanRandomHeuristic(rng=rng if rng is not None else Random(), spread=spread)
    return ManhattanHeuristic()


__all__ = [
    "Heuristic",
    "HeuristicStrategy",
    "HeuristicSelection",
    "ManhattanHeuristic",
    "EuclideanHeuristic",
    "ManhattanRandomHeuristic",
    "parse_heuristic",
    "get_heuristic",
]
