from __future__ import annotations

import logging
from typing import Iterable, Tuple

from .base_scenario import BaseScenario
from ..core.grid import Grid
from ..utils.noise import scatter_cells

logger = logging.getLogger(__name__)


class OpenFieldScenario(BaseScenario):
    """Grid without any blocked cells."""

    def __init__(self, width: int = 16, height: int = 16) -> None:
        self.width = width
        self.height = height

    def get_name(self) -> str:
        return "Open Field"

    def build_grid(self) -> Grid:
        return Grid.open_field(self.width, self.height)


class RandomTerrainScenario(BaseScenario):
    """Grid with about ``density`` of its cells blocked at random.

    Cells listed in ``keep_free`` (typically the start and target) are never
    blocked. Passing a ``seed`` makes the layout reproducible.
    """

    def __init__(
        self,
        width: int = 16,
        height: int = 16,
        density: float = 0.1,
        seed: int | None = None,
        keep_free: Iterable[Tuple[int, int]] = (),
    ) -> None:
        self.width = width
        self.height = height
        self.density = density
        self.seed = seed
        self.keep_free = tuple(keep_free)

    def get_name(self) -> str:
        return "Random Terrain"

    def build_grid(self) -> Grid:
        blocked = scatter_cells(
            self.width, self.height, self.density, seed=self.seed, exclude=self.keep_free
        )
        logger.debug(
            "[Scenario] %dx%d terrain with %d blocked cells (seed=%s)",
            self.width,
            self.height,
            len(blocked),
            self.seed,
        )
        return Grid(self.width, self.height, blocked)


__all__ = ["OpenFieldScenario", "RandomTerrainScenario"]
