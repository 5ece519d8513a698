from pathlib import Path

from astar_grid import main
from astar_grid.config import load_config
from astar_grid.core.time_manager import TimeManager


def _write_config(tmp_path: Path, density: float = 0.15) -> Path:
    path = tmp_path / "config.yaml"
    path.write_text(
        "grid:\n"
        "  size: [8, 8]\n"
        f"  blocked_density: {density}\n"
        "  seed: 21\n"
        "search:\n"
        "  heuristic: manhattan\n"
        "driver:\n"
        "  step_rate: 1000\n"
        "  start: [0, 0]\n"
        "  target: [7, 7]\n"
    )
    return path


def test_build_session_uses_config(tmp_path: Path):
    cfg = load_config(_write_config(tmp_path))
    session = main.build_session(cfg)
    assert session.grid.size == (8, 8)
    assert session.start == (0, 0)
    assert session.target == (7, 7)
    assert not session.grid.is_blocked(0, 0)
    assert not session.grid.is_blocked(7, 7)
    assert session.running


def test_run_drives_search_to_the_end(tmp_path: Path):
    session = main.bootstrap(_write_config(tmp_path))
    ticks = main.run(session, TimeManager(1000.0))
    assert ticks >= 1
    assert not session.running
    assert session.result is not None


def test_run_cancels_when_budget_exhausted(tmp_path: Path):
    session = main.bootstrap(_write_config(tmp_path, density=0.0))
    ticks = main.run(session, None, max_steps=2)
    assert ticks == 2
    assert not session.running
    assert session.result is None


def test_main_prints_stats(tmp_path: Path, capsys):
    main.main(_write_config(tmp_path))
    assert "Search:" in capsys.readouterr().out


def test_main_profiles_when_configured(tmp_path: Path):
    path = _write_config(tmp_path)
    out = tmp_path / "search.prof"
    path.write_text(
        path.read_text()
        + "  profile_searches: 2\n"
        + f"  profile_path: {out.as_posix()}\n"
    )
    main.main(path)
    assert out.exists()


def test_main_skips_profiling_by_default(tmp_path: Path, monkeypatch):
    calls = []
    monkeypatch.setattr(main, "profile_searches", lambda *args, **kwargs: calls.append(args))
    main.main(_write_config(tmp_path))
    assert calls == []
