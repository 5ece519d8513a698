"""A* search over an occupancy :class:`~astar_grid.core.grid.Grid`.

The loop lives in :class:`SearchRun`, a resumable iteration that performs one
pop-and-expand cycle per :meth:`SearchRun.step`. :meth:`Pathfinder.find_path`
is the batch form and simply drives a run to completion.

Movement is 4-directional with unit cost. Closed cells are never reopened,
which is safe for the admissible heuristics (Manhattan, Euclidean).
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from random import Random
import logging
import time
from typing import Callable, ClassVar, Iterator, Optional, Sequence, Tuple, Union

from ..core.errors import InvalidInput, OutOfRange
from ..core.events import SearchSnapshot
from ..core.grid import Coord, Grid
from .frontier import Frontier, Node
from .heuristics import (
    Heuristic,
    HeuristicSelection,
    HeuristicStrategy,
    get_heuristic,
)

logger = logging.getLogger(__name__)

# Up, down, left, right.
NEIGHBOR_OFFSETS: Tuple[Coord, ...] = ((0, -1), (0, 1), (-1, 0), (1, 0))
STEP_COST = 1

SnapshotObserver = Callable[[SearchSnapshot], None]


class SearchState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    CANCELLED = "cancelled"
    ERRORED = "errored"


_TERMINAL = {
    SearchState.SUCCEEDED,
    SearchState.FAILED,
    SearchState.CANCELLED,
    SearchState.ERRORED,
}


# ------------------------------------------------------------------
# Results
# ------------------------------------------------------------------
@dataclass(frozen=True)
class PathFound:
    """Successful search: ``path`` runs from start to target inclusive."""

    path: Tuple[Coord, ...]
    open_count: int
    closed_count: int
    elapsed_ms: float = 0.0
    heuristic: Optional[Heuristic] = None

    found: ClassVar[bool] = True

    @property
    def start(self) -> Coord:
        return self.path[0]

    @property
    def target(self) -> Coord:
        return self.path[-1]

    @property
    def cost(self) -> int:
        """Number of steps along the path."""
        return (len(self.path) - 1) * STEP_COST


@dataclass(frozen=True)
class NoPathExists:
    """The open list ran dry before the target was reached."""

    start: Coord
    target: Coord
    open_count: int
    closed_count: int
    elapsed_ms: float = 0.0
    heuristic: Optional[Heuristic] = None

    found: ClassVar[bool] = False
    path: ClassVar[Optional[Tuple[Coord, ...]]] = None


SearchResult = Union[PathFound, NoPathExists]


def as_coord(value: Sequence[int], label: str = "coordinate") -> Coord:
    """Return ``value`` as an ``(x, y)`` tuple of ints.

    Raises :class:`InvalidInput` for anything that is not a pair of integers.
    Floats are rejected rather than truncated.
    """

    try:
        x, y = value
    except (TypeError, ValueError):
        raise InvalidInput(value, f"{label} must be an (x, y) pair") from None
    for part in (x, y):
        if isinstance(part, bool) or not isinstance(part, int):
            raise InvalidInput(value, f"{label} must have integer components")
    return (x, y)


def validate_endpoint(grid: Grid, coord: Coord, label: str) -> None:
    """Raise :class:`InvalidInput` unless ``coord`` is an in-bounds free cell."""

    x, y = coord
    if not grid.in_bounds(x, y):
        raise InvalidInput(coord, f"{label} is outside the {grid.width}x{grid.height} grid")
    if grid.is_blocked(x, y):
        raise InvalidInput(coord, f"{label} is on a blocked cell")


# ------------------------------------------------------------------
# Stepped search
# ------------------------------------------------------------------
class SearchRun:
    """One A* invocation that can be advanced a single expansion at a time.

    Start, target, grid and heuristic are fixed when the run is created.
    Endpoints are validated immediately so an invalid request never touches
    the frontier.
    """

    def __init__(
        self,
        grid: Grid,
        start: Sequence[int],
        target: Sequence[int],
        heuristic: HeuristicStrategy,
        capture: bool = True,
    ) -> None:
        self._grid = grid
        self._start = as_coord(start, "start")
        self._target = as_coord(target, "target")
        validate_endpoint(grid, self._start, "start")
        validate_endpoint(grid, self._target, "target")

        self._heuristic = heuristic
        self.capture = capture
        self.state = SearchState.IDLE
        self.result: Optional[SearchResult] = None
        self.iterations = 0
        self._frontier = Frontier()
        self._elapsed = 0.0
        self._steps = self._iterate()

    @property
    def grid(self) -> Grid:
        return self._grid

    @property
    def start(self) -> Coord:
        return self._start

    @property
    def target(self) -> Coord:
        return self._target

    @property
    def heuristic(self) -> HeuristicStrategy:
        return self._heuristic

    # ------------------------------------------------------------------
    # Loop
    # ------------------------------------------------------------------
    def _estimate(self, coord: Coord) -> float:
        return self._heuristic.estimate(coord[0], coord[1], self._target[0], self._target[1])

    def _neighbors(self, coord: Coord) -> Iterator[Coord]:
        x, y = coord
        for dx, dy in NEIGHBOR_OFFSETS:
            nx, ny = x + dx, y + dy
            if self._grid.in_bounds(nx, ny) and not self._grid.is_blocked(nx, ny):
                yield (nx, ny)

    def _expand(self, current: Node) -> None:
        frontier = self._frontier
        for coord in self._neighbors(current.coord):
            if frontier.is_closed(coord):
                continue
            frontier.push_or_update(
                Node(coord, current.g + STEP_COST, self._estimate(coord), current)
            )

    def _snapshot(self, current: Coord) -> SearchSnapshot:
        if not self.capture:
            return SearchSnapshot(iteration=self.iterations, current=current)
        return SearchSnapshot(
            iteration=self.iterations,
            current=current,
            open_cells=self._frontier.open_cells(),
            closed_cells=self._frontier.closed_cells(),
        )

    def _iterate(self) -> Iterator[SearchSnapshot]:
        frontier = self._frontier
        kind = getattr(self._heuristic, "kind", None)
        try:
            if self.start == self.target:
                self._finish(SearchState.SUCCEEDED, PathFound((self.start,), 0, 1, heuristic=kind))
                return

            frontier.push_or_update(Node(self.start, 0.0, self._estimate(self.start)))
            while not frontier.is_empty():
                current = frontier.pop_best()
                frontier.mark_closed(current.coord)
                self.iterations += 1
                snapshot = self._snapshot(current.coord)
                if current.coord == self.target:
                    self._finish(
                        SearchState.SUCCEEDED,
                        PathFound(
                            current.path(),
                            frontier.open_count,
                            frontier.closed_count,
                            heuristic=kind,
                        ),
                    )
                    yield snapshot
                    return
                self._expand(current)
                yield snapshot

            self._finish(
                SearchState.FAILED,
                NoPathExists(
                    self.start,
                    self.target,
                    frontier.open_count,
                    frontier.closed_count,
                    heuristic=kind,
                ),
            )
        finally:
            frontier.clear()

    def _finish(self, state: SearchState, result: SearchResult) -> None:
        self.state = state
        self.result = result

    # ------------------------------------------------------------------
    # Driving
    # ------------------------------------------------------------------
    @property
    def finished(self) -> bool:
        return self.state in _TERMINAL

    @property
    def elapsed_ms(self) -> float:
        return self._elapsed * 1000.0

    @property
    def open_count(self) -> int:
        return self._frontier.open_count

    @property
    def closed_count(self) -> int:
        return self._frontier.closed_count

    def step(self) -> Optional[SearchSnapshot]:
        """Run one expansion and return its snapshot, or ``None`` once finished."""

        if self.finished:
            return None
        self.state = SearchState.RUNNING
        started = time.perf_counter()
        try:
            snapshot: Optional[SearchSnapshot] = next(self._steps)
        except StopIteration:
            snapshot = None
        except OutOfRange:
            self.state = SearchState.ERRORED
            logger.exception(
                "Grid bounds violated while searching %s -> %s", self.start, self.target
            )
            raise
        except Exception:
            self.state = SearchState.ERRORED
            logger.exception("Search %s -> %s failed", self.start, self.target)
            raise
        finally:
            self._elapsed += time.perf_counter() - started

        if self.finished:
            self._steps.close()
            self.result = replace(self.result, elapsed_ms=self.elapsed_ms)
            logger.debug(
                "Search %s -> %s %s after %d iterations (%.2f ms)",
                self.start,
                self.target,
                self.state.value,
                self.iterations,
                self.elapsed_ms,
            )
        return snapshot

    def run(self, observer: Optional[SnapshotObserver] = None) -> Optional[SearchResult]:
        """Step until finished, passing each snapshot to ``observer``."""

        for snapshot in self:
            if observer is not None:
                observer(snapshot)
        return self.result

    def cancel(self) -> None:
        """Abandon the run and release the frontier."""

        if self.finished:
            return
        self._steps.close()
        self._frontier.clear()
        self.state = SearchState.CANCELLED
        self.result = None
        logger.debug("Search %s -> %s cancelled after %d iterations", self.start, self.target, self.iterations)

    def __iter__(self) -> Iterator[SearchSnapshot]:
        while True:
            snapshot = self.step()
            if snapshot is None:
                return
            yield snapshot

    def __enter__(self) -> "SearchRun":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.cancel()


# ------------------------------------------------------------------
# Public entry points
# ------------------------------------------------------------------
class Pathfinder:
    """Create and run searches with a default heuristic.

    The pathfinder keeps no per-search state; changing :attr:`heuristic`
    affects only searches started afterwards.
    """

    def __init__(
        self,
        heuristic: HeuristicSelection = Heuristic.MANHATTAN,
        rng: Optional[Random] = None,
        random_spread: float = 2.0,
    ) -> None:
        self.heuristic = heuristic
        self.rng = rng
        self.random_spread = random_spread

    def search(
        self,
        grid: Grid,
        start: Sequence[int],
        target: Sequence[int],
        heuristic: Optional[HeuristicSelection] = None,
        capture: bool = True,
    ) -> SearchRun:
        """Return a stepped :class:`SearchRun` that has not started yet.

        With ``capture=False`` snapshots carry only the iteration and current
        cell, which avoids copying the open and closed sets every step.
        """

        selection = heuristic if heuristic is not None else self.heuristic
        strategy = get_heuristic(selection, rng=self.rng, spread=self.random_spread)
        return SearchRun(grid, start, target, strategy, capture=capture)

    def find_path(
        self,
        grid: Grid,
        start: Sequence[int],
        target: Sequence[int],
        heuristic: Optional[HeuristicSelection] = None,
        observer: Optional[SnapshotObserver] = None,
    ) -> SearchResult:
        """Search to completion and return :class:`PathFound` or :class:`NoPathExists`."""

        with self.search(grid, start, target, heuristic, capture=observer is not None) as run:
            result = run.run(observer)
        if result is None:
            raise RuntimeError(
                f"search {run.start} -> {run.target} ended {run.state.value} without a result"
            )
        return result


def find_path(
    grid: Grid,
    start: Sequence[int],
    target: Sequence[int],
    heuristic: HeuristicSelection = Heuristic.MANHATTAN,
    observer: Optional[SnapshotObserver] = None,
) -> SearchResult:
    """Convenience wrapper around :meth:`Pathfinder.find_path`."""

    return Pathfinder(heuristic).find_path(grid, start, target, observer=observer)


__all__ = [
    "NEIGHBOR_OFFSETS",
    "SearchState",
    "PathFound",
    "NoPathExists",
    "SearchResult",
    "SearchRun",
    "Pathfinder",
    "find_path",
    "as_coord",
    "validate_endpoint",
]
