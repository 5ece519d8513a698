from astar_grid.scenarios.base_scenario import BaseScenario
from astar_grid.scenarios.terrain import OpenFieldScenario, RandomTerrainScenario


def test_open_field_has_no_blocked_cells():
    scenario = OpenFieldScenario(8, 4)
    grid = scenario.build_grid()
    assert isinstance(scenario, BaseScenario)
    assert scenario.get_name() == "Open Field"
    assert grid.size == (8, 4)
    assert grid.blocked_cells() == set()


def test_random_terrain_is_reproducible_with_seed():
    a = RandomTerrainScenario(20, 10, seed=99).build_grid()
    b = RandomTerrainScenario(20, 10, seed=99).build_grid()
    assert a == b
    assert RandomTerrainScenario().get_name() == "Random Terrain"


def test_random_terrain_density():
    grid = RandomTerrainScenario(100, 100, density=0.1, seed=3).build_grid()
    ratio = len(grid.blocked_cells()) / (100 * 100)
    assert 0.07 < ratio < 0.13


def test_random_terrain_keeps_cells_free():
    keep = [(0, 0), (4, 4)]
    grid = RandomTerrainScenario(5, 5, density=1.0, seed=1, keep_free=keep).build_grid()
    assert grid.blocked_cells() == {(x, y) for x in range(5) for y in range(5)} - set(keep)


def test_zero_density_is_open():
    grid = RandomTerrainScenario(6, 6, density=0.0, seed=1).build_grid()
    assert grid.blocked_cells() == set()
