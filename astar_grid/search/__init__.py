"""search package."""

from .heuristics import Heuristic, get_heuristic
from .pathfinder import NoPathExists, PathFound, Pathfinder, SearchRun, SearchState, find_path
from .session import SearchSession

__all__ = [
    "Heuristic",
    "get_heuristic",
    "NoPathExists",
    "PathFound",
    "Pathfinder",
    "SearchRun",
    "SearchState",
    "find_path",
    "SearchSession",
]
