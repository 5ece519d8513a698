from abc import ABC, abstractmethod

from ..core.grid import Grid


class BaseScenario(ABC):
    """Abstract base class for terrain scenarios."""

    @abstractmethod
    def build_grid(self) -> Grid:
        """Return the grid this scenario searches on."""
        pass

    @abstractmethod
    def get_name(self) -> str:
        """Return a human readable name for the scenario."""
        pass
