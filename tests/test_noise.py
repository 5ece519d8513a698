import pytest

from astar_grid.utils import noise


def test_white_noise_dimensions() -> None:
    data = noise.white_noise(4, 3, seed=123)
    assert len(data) == 3
    assert all(len(row) == 4 for row in data)
    assert all(0.0 <= v < 1.0 for row in data for v in row)
    data2 = noise.white_noise(4, 3, seed=123)
    assert data == data2


def test_scatter_cells_respects_exclude() -> None:
    cells = noise.scatter_cells(10, 10, 0.5, seed=4, exclude=[(0, 0)])
    assert (0, 0) not in cells
    assert all(0 <= x < 10 and 0 <= y < 10 for x, y in cells)


def test_scatter_cells_full_density() -> None:
    assert len(noise.scatter_cells(3, 2, 1.0, seed=0)) == 6


def test_scatter_cells_invalid_density() -> None:
    with pytest.raises(ValueError):
        noise.scatter_cells(3, 3, 1.5)
