import pytest
from dataclasses import FrozenInstanceError

from astar_grid.core.errors import InvalidInput, OutOfRange
from astar_grid.core.events import SearchSnapshot


def test_empty_snapshot():
    snap = SearchSnapshot.empty()
    assert snap.iteration == 0
    assert snap.current is None
    assert snap.open_cells == frozenset()
    assert snap.closed_cells == frozenset()


def test_snapshot_is_frozen():
    snap = SearchSnapshot(1, (0, 0), frozenset({(1, 0)}), frozenset({(0, 0)}))
    with pytest.raises(FrozenInstanceError):
        snap.iteration = 2  # type: ignore[misc]


def test_error_types():
    err = InvalidInput((1, 2), "target is on a blocked cell")
    assert isinstance(err, ValueError)
    assert "(1, 2)" in str(err)
    oor = OutOfRange((5, 0), (3, 3))
    assert isinstance(oor, IndexError)
    assert not isinstance(oor, ValueError)
