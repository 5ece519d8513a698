"""Caller-side driver that keeps one search in sync with start and target."""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional, Sequence

from ..core.events import SearchSnapshot
from ..core.grid import Coord, Grid
from ..utils.observer import log_event, record_search, search_event
from .heuristics import Heuristic, HeuristicSelection, parse_heuristic
from .pathfinder import (
    Pathfinder,
    SearchResult,
    SearchRun,
    SearchState,
    as_coord,
    validate_endpoint,
)

logger = logging.getLogger(__name__)

SnapshotListener = Callable[[SearchSnapshot], None]


class SearchSession:
    """Hold the current start, target and heuristic and drive stepped searches.

    A new search begins only when the start or target coordinate actually
    changes value. Heuristic changes are picked up by the next search.
    """

    def __init__(
        self,
        grid: Grid,
        start: Sequence[int],
        target: Sequence[int],
        heuristic: HeuristicSelection = Heuristic.MANHATTAN,
        observe: bool = True,
        pathfinder: Pathfinder | None = None,
        event_log: List[Dict[str, Any]] | None = None,
    ) -> None:
        self.grid = grid
        self._start: Coord = as_coord(start, "start")
        self._target: Coord = as_coord(target, "target")
        validate_endpoint(grid, self._start, "start")
        validate_endpoint(grid, self._target, "target")

        self.heuristic: HeuristicSelection = self._resolve(heuristic)
        self.observe = observe
        self.pathfinder = pathfinder if pathfinder is not None else Pathfinder()
        self.event_log = event_log if event_log is not None else []
        self.result: Optional[SearchResult] = None
        self.searches_started = 0
        self._listeners: List[SnapshotListener] = []
        self._run: Optional[SearchRun] = None
        self.error: Optional[Exception] = None
        self.refresh()

    @staticmethod
    def _resolve(selection: HeuristicSelection) -> HeuristicSelection:
        if isinstance(selection, (Heuristic, str)):
            return parse_heuristic(selection)
        return selection

    # ------------------------------------------------------------------
    # Listeners
    # ------------------------------------------------------------------
    def add_listener(self, listener: SnapshotListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_listener(self, listener: SnapshotListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self, snapshot: SearchSnapshot) -> None:
        for listener in list(self._listeners):
            listener(snapshot)

    def toggle_observe(self) -> bool:
        """Flip snapshot forwarding. Returns the new setting.

        Turning it off sends one empty snapshot so listeners can clear.
        """

        self.observe = not self.observe
        if not self.observe:
            self._notify(SearchSnapshot.empty())
        return self.observe

    # ------------------------------------------------------------------
    # Inputs
    # ------------------------------------------------------------------
    def _accept(self, coord: Coord, label: str) -> bool:
        x, y = coord
        if not self.grid.in_bounds(x, y) or self.grid.is_blocked(x, y):
            logger.info("Ignoring %s %s: not a free cell", label, coord)
            return False
        return True

    def set_target(self, target: Sequence[int]) -> bool:
        """Move the target; returns ``True`` if a new search was started."""

        coord = as_coord(target, "target")
        if coord == self._target or not self._accept(coord, "target"):
            return False
        self._target = coord
        self.refresh()
        return True

    def set_start(self, start: Sequence[int]) -> bool:
        """Move the start; returns ``True`` if a new search was started."""

        coord = as_coord(start, "start")
        if coord == self._start or not self._accept(coord, "start"):
            return False
        self._start = coord
        self.refresh()
        return True

    def set_heuristic(self, selection: HeuristicSelection) -> None:
        """Select the heuristic used by the next search."""

        self.heuristic = self._resolve(selection)
        logger.debug("Heuristic set to %s", self.heuristic)

    # ------------------------------------------------------------------
    # Driving
    # ------------------------------------------------------------------
    def refresh(self) -> SearchRun:
        """Abandon any active run and start a new one from the current inputs."""

        self.cancel()
        self.error = None
        self._run = self.pathfinder.search(
            self.grid, self._start, self._target, self.heuristic
        )
        self.searches_started += 1
        logger.debug(
            "Search #%d started: %s -> %s", self.searches_started, self._start, self._target
        )
        return self._run

    def cancel(self) -> None:
        if self._run is not None:
            self._run.cancel()
            self._run = None

    def advance(self, steps: int = 1) -> int:
        """Run up to ``steps`` expansions of the active search.

        Returns the number of snapshots produced.
        """

        produced = 0
        for _ in range(steps):
            run = self._run
            if run is None:
                break
            try:
                snapshot = run.step()
            except Exception as exc:
                self._run = None
                self.error = exc
                raise
            if snapshot is not None:
                produced += 1
                if self.observe:
                    self._notify(snapshot)
            if run.finished:
                self._complete(run)
        return produced

    def run_to_completion(self, max_steps: int | None = None) -> Optional[SearchResult]:
        """Advance until the active search ends or ``max_steps`` is used up."""

        taken = 0
        while self._run is not None and (max_steps is None or taken < max_steps):
            self.advance(1)
            taken += 1
        return self.result

    def _complete(self, run: SearchRun) -> None:
        self._run = None
        if run.result is None:
            return
        self.result = run.result
        record_search(run.result.elapsed_ms)
        log_event("search", search_event(run.result), self.event_log)
        if run.result.found:
            logger.info(
                "Path %s -> %s: %d cells, open %d, closed %d, %.2f ms",
                run.start,
                run.target,
                len(run.result.path),
                run.result.open_count,
                run.result.closed_count,
                run.result.elapsed_ms,
            )
        else:
            logger.info(
                "No path %s -> %s (closed %d, %.2f ms)",
                run.start,
                run.target,
                run.result.closed_count,
                run.result.elapsed_ms,
            )

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------
    @property
    def start(self) -> Coord:
        return self._start

    @property
    def target(self) -> Coord:
        return self._target

    @property
    def running(self) -> bool:
        return self._run is not None

    @property
    def state(self) -> SearchState:
        if self._run is not None:
            return self._run.state
        if self.error is not None:
            return SearchState.ERRORED
        if self.result is None:
            return SearchState.IDLE
        return SearchState.SUCCEEDED if self.result.found else SearchState.FAILED

    @property
    def path(self):
        return self.result.path if self.result is not None else None

    @property
    def open_count(self) -> int:
        return self.result.open_count if self.result is not None else 0

    @property
    def closed_count(self) -> int:
        return self.result.closed_count if self.result is not None else 0

    @property
    def elapsed_ms(self) -> float:
        return self.result.elapsed_ms if self.result is not None else 0.0

    @property
    def distance(self) -> int:
        """Manhattan distance between start and target."""
        return abs(self._start[0] - self._target[0]) + abs(self._start[1] - self._target[1])


__all__ = ["SearchSession"]
