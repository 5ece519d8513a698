"""Headless driver: build a terrain, then step a search at a fixed cadence."""

from __future__ import annotations

from pathlib import Path
from random import Random
import logging

from .config import CONFIG, Config, load_config
from .core.time_manager import TimeManager
from .scenarios.terrain import RandomTerrainScenario
from .search.heuristics import parse_heuristic
from .search.pathfinder import Pathfinder
from .search.session import SearchSession
from .utils.observer import print_stats
from .utils.profiling import profile_searches


log_level_str = CONFIG.logging.global_level
numeric_level = getattr(logging, log_level_str, logging.INFO)
logging.basicConfig(
    level=numeric_level,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    force=True
)
logger = logging.getLogger(__name__)

# Apply per-module levels if defined
if CONFIG.logging.module_levels:
    for module_name, level_str in CONFIG.logging.module_levels.items():
        module_numeric_level = getattr(logging, level_str.upper(), None)
        if module_numeric_level is not None:
            logging.getLogger(module_name).setLevel(module_numeric_level)
        else:
            logger.warning("Invalid log level '%s' for module '%s' in config.", level_str, module_name)


def build_session(cfg: Config) -> SearchSession:
    """Create the grid and search session described by ``cfg``."""

    width, height = cfg.grid.size
    start = tuple(cfg.driver.start)
    target = tuple(cfg.driver.target)
    scenario = RandomTerrainScenario(
        width,
        height,
        density=cfg.grid.blocked_density,
        seed=cfg.grid.seed,
        keep_free=(start, target),
    )
    grid = scenario.build_grid()
    logger.info("[Bootstrap] %s: %r", scenario.get_name(), grid)

    rng = Random(cfg.search.seed) if cfg.search.seed is not None else None
    pathfinder = Pathfinder(
        heuristic=parse_heuristic(cfg.search.heuristic),
        rng=rng,
        random_spread=cfg.search.random_spread,
    )
    return SearchSession(
        grid,
        start,
        target,
        heuristic=pathfinder.heuristic,
        observe=cfg.search.observe,
        pathfinder=pathfinder,
    )


def _resolve_config_path(config_path: str | Path) -> Path:
    actual_config_path = Path(config_path)
    if not actual_config_path.is_file():
        project_root_config = Path(__file__).resolve().parents[1] / "config.yaml"
        if project_root_config.is_file():
            actual_config_path = project_root_config
    return actual_config_path


def bootstrap(config_path: str | Path = Path("config.yaml")) -> SearchSession:
    return build_session(load_config(_resolve_config_path(config_path)))


def run(
    session: SearchSession,
    time_manager: TimeManager | None = None,
    max_steps: int = 10000,
) -> int:
    """Advance ``session`` one expansion per tick until its search ends.

    Returns the number of ticks used.
    """

    ticks = 0
    while session.running and ticks < max_steps:
        session.advance(1)
        ticks += 1
        if time_manager is not None:
            time_manager.sleep_until_next_tick()
    if session.running:
        logger.warning("Step budget of %d exhausted; cancelling search.", max_steps)
        session.cancel()
    return ticks


def main(config_path: str | Path = Path("config.yaml")) -> None:
    cfg = load_config(_resolve_config_path(config_path))
    session = build_session(cfg)
    tm = TimeManager(cfg.driver.step_rate)

    def _log_snapshot(snapshot) -> None:
        logger.debug(
            "Iteration %d at %s: open %d, closed %d",
            snapshot.iteration,
            snapshot.current,
            len(snapshot.open_cells),
            len(snapshot.closed_cells),
        )

    session.add_listener(_log_snapshot)
    try:
        run(session, tm, cfg.driver.max_steps)
    except KeyboardInterrupt:
        logger.info("KeyboardInterrupt caught. Shutting down...")
    finally:
        session.cancel()

    if session.path is not None:
        logger.info("Path: %s", " -> ".join(f"({x},{y})" for x, y in session.path))
        logger.info("Distance: %d, exec %.2f ms", session.distance, session.elapsed_ms)
    elif session.result is not None:
        logger.info("No path between %s and %s.", session.start, session.target)

    if cfg.driver.profile_searches > 0:
        profile_searches(
            session.pathfinder,
            session.grid,
            session.start,
            session.target,
            cfg.driver.profile_searches,
            cfg.driver.profile_path,
        )
    print_stats()


if __name__ == "__main__":
    main()
