"""cProfile helpers for measuring search performance."""

from __future__ import annotations

import cProfile
import io
import logging
import pstats
from pathlib import Path
from typing import TYPE_CHECKING, Sequence

from .observer import record_search

if TYPE_CHECKING:
    from ..core.grid import Grid
    from ..search.pathfinder import Pathfinder

logger = logging.getLogger(__name__)


def profile_searches(
    pathfinder: "Pathfinder",
    grid: "Grid",
    start: Sequence[int],
    target: Sequence[int],
    n: int,
    out_path: str | Path = "profile.prof",
    top: int = 10,
) -> pstats.Stats:
    """Run ``n`` batch searches from ``start`` to ``target`` under cProfile.

    Each search's own ``elapsed_ms`` goes into the observer history. The raw
    profile is dumped to ``out_path`` and the ``top`` entries by cumulative
    time are logged at DEBUG.
    """

    if n < 1:
        raise ValueError("n must be at least 1")

    profiler = cProfile.Profile()
    found = 0
    profiler.enable()
    try:
        for _ in range(n):
            result = pathfinder.find_path(grid, start, target)
            record_search(result.elapsed_ms)
            found += int(result.found)
    finally:
        profiler.disable()

    path = Path(out_path)
    profiler.dump_stats(str(path))
    logger.info("Profiled %d search(es), %d found a path; stats in %s", n, found, path)

    stats = pstats.Stats(profiler).sort_stats(pstats.SortKey.CUMULATIVE)
    if logger.isEnabledFor(logging.DEBUG):
        buffer = io.StringIO()
        pstats.Stats(profiler, stream=buffer).sort_stats(pstats.SortKey.CUMULATIVE).print_stats(top)
        logger.debug("Top %d entries by cumulative time:\n%s", top, buffer.getvalue())
    return stats


__all__ = ["profile_searches"]
