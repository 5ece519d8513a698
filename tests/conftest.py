# tests/conftest.py
from collections import deque
from typing import Dict, Optional, Tuple

import pytest

from astar_grid.core.grid import Grid
from astar_grid.utils import observer


@pytest.fixture(autouse=True)
def _reset_observer():
    observer._search_durations.clear()
    observer._events.clear()
    yield
    observer._search_durations.clear()
    observer._events.clear()


def _bfs_steps(grid: Grid, start: Tuple[int, int], target: Tuple[int, int]) -> Optional[int]:
    """Unweighted breadth-first search baseline; ``None`` when unreachable."""
    dist: Dict[Tuple[int, int], int] = {start: 0}
    queue = deque([start])
    while queue:
        cur = queue.popleft()
        if cur == target:
            return dist[cur]
        x, y = cur
        for nxt in ((x, y - 1), (x, y + 1), (x - 1, y), (x + 1, y)):
            if nxt in dist or not grid.in_bounds(*nxt) or grid.is_blocked(*nxt):
                continue
            dist[nxt] = dist[cur] + 1
            queue.append(nxt)
    return None


@pytest.fixture
def bfs_steps():
    return _bfs_steps


@pytest.fixture
def corridor_grid() -> Grid:
    # Middle column blocked except for (1, 1).
    return Grid(3, 3, blocked=[(1, 0), (1, 2)])
