"""Simple configuration loader for astar_grid."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml


CONFIG_PATH = Path(__file__).resolve().parents[1] / "config.yaml"


@dataclass
class GridConfig:
    """Terrain generated for the demo driver."""

    size: Tuple[int, int] = (16, 16)
    blocked_density: float = 0.1
    seed: Optional[int] = None


@dataclass
class SearchConfig:
    """Defaults for new searches."""

    heuristic: str = "manhattan"
    random_spread: float = 2.0
    seed: Optional[int] = None
    observe: bool = True


@dataclass
class DriverConfig:
    """Pacing of the stepped driver loop."""

    step_rate: float = 20.0
    max_steps: int = 10000
    start: Tuple[int, int] = (0, 0)
    target: Tuple[int, int] = (3, 3)
    profile_searches: int = 0
    profile_path: str = "profile.prof"


@dataclass
class LoggingConfig:
    global_level: str = "INFO"
    module_levels: Dict[str, str] = field(default_factory=dict)


@dataclass
class Config:
    """Top level configuration dataclass."""

    grid: GridConfig
    search: SearchConfig
    driver: DriverConfig
    logging: LoggingConfig


def _optional_int(value: Any) -> Optional[int]:
    return None if value is None else int(value)


def _parse_config(data: dict[str, Any]) -> Config:
    """Convert raw ``data`` into :class:`Config`."""

    grid_data = data.get("grid", {}) or {}
    grid = GridConfig(
        size=tuple(grid_data.get("size", [16, 16])),
        blocked_density=float(grid_data.get("blocked_density", 0.1)),
        seed=_optional_int(grid_data.get("seed")),
    )

    search_data = data.get("search", {}) or {}
    search = SearchConfig(
        heuristic=str(search_data.get("heuristic", "manhattan")),
        random_spread=float(search_data.get("random_spread", 2.0)),
        seed=_optional_int(search_data.get("seed")),
        observe=bool(search_data.get("observe", True)),
    )

    driver_data = data.get("driver", {}) or {}
    driver = DriverConfig(
        step_rate=float(driver_data.get("step_rate", 20.0)),
        max_steps=int(driver_data.get("max_steps", 10000)),
        start=tuple(driver_data.get("start", [0, 0])),
        target=tuple(driver_data.get("target", [3, 3])),
        profile_searches=int(driver_data.get("profile_searches", 0)),
        profile_path=str(driver_data.get("profile_path", "profile.prof")),
    )

    logging_data = data.get("logging", {}) or {}
    logging_cfg = LoggingConfig(
        global_level=str(logging_data.get("global_level", "INFO")).upper(),
        module_levels=dict(logging_data.get("module_levels") or {}),
    )

    return Config(grid=grid, search=search, driver=driver, logging=logging_cfg)


def load_config(path: Path = CONFIG_PATH) -> Config:
    """Load configuration from ``path`` and return a :class:`Config`."""

    path = Path(path)
    if path.is_file():
        raw = yaml.safe_load(path.read_text()) or {}
    else:
        raw = {}
    return _parse_config(raw)


# Load configuration at module import time.
CONFIG = load_config()


__all__ = [
    "CONFIG",
    "Config",
    "GridConfig",
    "SearchConfig",
    "DriverConfig",
    "LoggingConfig",
    "load_config",
]
