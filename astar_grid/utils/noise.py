"""Seeded noise used to scatter blocked terrain."""

from __future__ import annotations

from random import Random
from typing import Iterable, Set, Tuple


def white_noise(
    width: int, height: int, seed: int | None = None
) -> list[list[float]]:
    """Return ``height`` rows of ``width`` random floats in ``[0, 1)``."""

    rnd = Random(seed)
    return [[rnd.random() for _ in range(width)] for _ in range(height)]


def scatter_cells(
    width: int,
    height: int,
    density: float,
    seed: int | None = None,
    exclude: Iterable[Tuple[int, int]] = (),
) -> Set[Tuple[int, int]]:
    """Pick roughly ``density`` of all ``(x, y)`` cells at random.

    A cell is picked when its noise value is at least ``1 - density``, so a
    density of ``0.1`` matches the usual "one cell in ten" terrain. Cells in
    ``exclude`` are never picked.
    """

    if not 0.0 <= density <= 1.0:
        raise ValueError("density must be within [0, 1]")
    if density == 0.0:
        return set()
    skip = set(exclude)
    threshold = 1.0 - density
    return {
        (x, y)
        for y, row in enumerate(white_noise(width, height, seed=seed))
        for x, value in enumerate(row)
        if value >= threshold and (x, y) not in skip
    }


__all__ = ["white_noise", "scatter_cells"]
