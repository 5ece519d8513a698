import logging

import pytest

from astar_grid.core.errors import InvalidInput
from astar_grid.core.events import SearchSnapshot
from astar_grid.core.grid import Grid
from astar_grid.search.heuristics import Heuristic
from astar_grid.search.pathfinder import SearchState
from astar_grid.search.session import SearchSession
from astar_grid.utils import observer


def _session(**kwargs):
    grid = Grid(6, 6, blocked=[(3, 3), (3, 4)])
    return SearchSession(grid, (0, 0), (5, 5), **kwargs)


def test_session_starts_a_search():
    session = _session()
    assert session.running
    assert session.searches_started == 1
    assert session.state is SearchState.IDLE
    assert session.path is None
    assert session.distance == 10


def test_run_to_completion_records_result():
    log = []
    session = _session(event_log=log)
    result = session.run_to_completion()
    assert result.found
    assert session.path == result.path
    assert not session.running
    assert session.state is SearchState.SUCCEEDED
    assert session.open_count == result.open_count
    assert session.closed_count == result.closed_count
    assert log[-1]["type"] == "search"
    assert log[-1]["found"] is True
    assert log[-1]["length"] == 11
    assert len(observer._search_durations) == 1


def test_same_target_value_does_not_restart():
    session = _session()
    session.run_to_completion()
    assert not session.set_target([5, 5])
    assert session.searches_started == 1
    assert not session.running


def test_new_target_restarts_and_cancels_pending_run():
    session = _session()
    session.advance(2)
    pending = session._run
    assert session.set_target((0, 5))
    assert pending.state is SearchState.CANCELLED
    assert session.searches_started == 2
    assert session.target == (0, 5)
    result = session.run_to_completion()
    assert result.path[-1] == (0, 5)


def test_blocked_or_outside_target_is_ignored(caplog):
    session = _session()
    first = session.run_to_completion()
    with caplog.at_level(logging.INFO, logger="astar_grid.search.session"):
        assert not session.set_target((3, 3))
        assert not session.set_target((9, 9))
    assert session.target == (5, 5)
    assert session.path == first.path
    assert session.searches_started == 1
    assert any("Ignoring target" in r.getMessage() for r in caplog.records)


def test_set_start_restarts():
    session = _session()
    assert session.set_start((5, 0))
    assert session.start == (5, 0)
    result = session.run_to_completion()
    assert result.path[0] == (5, 0)
    assert not session.set_start((5, 0))


def test_start_on_target_finishes_without_snapshots():
    session = _session()
    seen = []
    session.add_listener(seen.append)
    session.set_start((5, 5))
    assert session.advance(1) == 0
    assert session.path == ((5, 5),)
    assert seen == []


def test_heuristic_change_applies_to_next_search():
    session = _session()
    current = session._run
    session.set_heuristic("euclidean")
    assert current.heuristic.kind is Heuristic.MANHATTAN
    session.refresh()
    assert session._run.heuristic.kind is Heuristic.EUCLIDEAN
    assert session.run_to_completion().heuristic is Heuristic.EUCLIDEAN


def test_listeners_receive_snapshots():
    session = _session()
    seen = []
    session.add_listener(seen.append)
    session.add_listener(seen.append)
    assert session.advance(3) == 3
    assert [s.iteration for s in seen] == [1, 2, 3]
    session.remove_listener(seen.append)
    session.advance(1)
    assert len(seen) == 3


def test_toggle_observe_sends_empty_snapshot_and_mutes():
    session = _session()
    seen = []
    session.add_listener(seen.append)
    session.advance(1)
    assert session.toggle_observe() is False
    assert seen[-1] == SearchSnapshot.empty()
    session.advance(2)
    assert len(seen) == 2
    assert session.toggle_observe() is True
    session.advance(1)
    assert seen[-1].iteration == 4


def test_step_budget_leaves_search_running():
    session = _session()
    session.run_to_completion(max_steps=2)
    assert session.running
    assert session.result is None
    session.cancel()
    assert not session.running
    assert session.state is SearchState.IDLE


def test_previous_path_kept_until_new_search_finishes():
    session = _session()
    first = session.run_to_completion()
    session.set_target((0, 5))
    assert session.path == first.path
    session.run_to_completion()
    assert session.path[-1] == (0, 5)


def test_no_path_session():
    grid = Grid(3, 3, blocked=[(1, 0), (1, 1), (1, 2)])
    log = []
    session = SearchSession(grid, (0, 0), (2, 2), event_log=log)
    result = session.run_to_completion()
    assert not result.found
    assert session.path is None
    assert session.state is SearchState.FAILED
    assert log[-1]["found"] is False
    assert "length" not in log[-1]


class _BrokenHeuristic:
    kind = Heuristic.MANHATTAN

    def estimate(self, x, y, tx, ty):
        if (x, y) != (0, 0):
            raise ZeroDivisionError("estimate failed")
        return abs(x - tx) + abs(y - ty)


def test_failing_search_stops_the_session():
    session = _session(heuristic=_BrokenHeuristic())
    with pytest.raises(ZeroDivisionError):
        session.advance(1)
    assert not session.running
    assert session.state is SearchState.ERRORED
    assert isinstance(session.error, ZeroDivisionError)
    assert session.advance(5) == 0

    session.set_heuristic(Heuristic.MANHATTAN)
    session.refresh()
    assert session.error is None
    assert session.run_to_completion().found


@pytest.mark.parametrize("coord", [(0.9, 0.2), (2.7, 2), ("1", 1), (True, 0), (1, 2, 3)])
def test_non_integer_coordinates_are_rejected(coord):
    session = _session()
    with pytest.raises(InvalidInput):
        session.set_target(coord)
    with pytest.raises(InvalidInput):
        session.set_start(coord)
    assert session.target == (5, 5)
    assert session.start == (0, 0)
    assert session.searches_started == 1
