import threading

from grid import CellState, NodeState
from algorithms import UNREACHABLE, get_algorithm
from engine import MazeSession, RUN_ALL
import engine.session as session_module
from engine.session import NOTICE_BUSY, NOTICE_NEED_MARKERS


def test_run_requires_markers(session):
    assert session.request_run(RUN_ALL) is False
    assert session.notice == NOTICE_NEED_MARKERS
    assert not session.running
    assert session.recorder is None


def test_placement_rules(session):
    assert session.place_start(1, 1)
    assert not session.place_end(1, 1)            # held by Start
    assert not session.place_end(0, 3)            # border wall
    assert not session.place_end(9, 9)            # out of bounds
    assert session.place_end(5, 5)
    assert session.snapshot()[(1, 1)] is CellState.START
    assert session.snapshot()[(5, 5)] is CellState.END


def test_second_placement_of_a_role_is_ignored(session):
    assert session.place_start(1, 1)
    assert not session.place_start(2, 2)
    assert session.notice == "Start is already placed"
    assert session.start == (1, 1)
    assert session.snapshot()[(2, 2)] is CellState.UNVISITED

    assert session.place_end(5, 5)
    assert not session.place_end(4, 4)
    assert session.end == (5, 5)


def test_clear_cell_then_place_moves_start(session):
    session.place_start(1, 1)
    assert session.clear_cell(1, 1)
    assert session.place_start(2, 2)
    assert session.start == (2, 2)
    assert session.grid.node(1, 1).state is NodeState.UNVISITED
    assert session.snapshot()[(1, 1)] is CellState.UNVISITED


def test_wall_edits(session):
    session.place_start(1, 1)
    assert not session.set_wall(1, 1, True)       # on Start
    assert not session.set_wall(0, 2, False)      # border
    assert session.set_wall(3, 3, True)
    assert session.grid.node(3, 3).is_wall
    assert not session.place_end(3, 3)
    assert session.clear_cell(3, 3)
    assert not session.grid.node(3, 3).is_wall


def test_clear_cell_drops_markers(session):
    session.place_start(1, 1)
    session.place_end(5, 5)
    session.clear_cell(1, 1)
    assert session.start is None
    assert session.end == (5, 5)


def test_full_comparison_on_open_grid(session):
    session.place_start(1, 1)
    session.place_end(3, 3)
    assert session.request_run(RUN_ALL, background=False)
    results = session.recorder.results
    assert [r.algorithm_name for r in results] == ["A*", "BFS", "DFS"]
    assert results[0].path_length == 4
    assert results[1].path_length == 4
    assert results[2].path_length >= 4
    assert session.last_comparison.best_name in ("A*", "BFS")
    assert not session.running


def test_enclosed_end_reports_no_best(session):
    session.place_start(2, 2)
    session.place_end(3, 3)
    for pos in [(2, 3), (4, 3), (3, 2), (3, 4)]:
        session.set_wall(*pos, True)
    session.request_run(RUN_ALL, background=False)
    assert all(r.path_length == UNREACHABLE for r in session.recorder.results)
    assert session.last_comparison.best_name is None


def test_single_algorithm_by_name(session):
    session.place_start(1, 1)
    session.place_end(1, 5)
    assert session.request_run("BFS", background=False)
    assert [r.algorithm_name for r in session.recorder.results] == ["BFS"]
    assert not session.request_run("bogus")
    assert "Unknown algorithm" in session.notice


def test_runs_do_not_leak_visitation(session):
    seen = []
    session.on_step = lambda snap, step: seen.append(snap)
    session.place_start(1, 1)
    session.place_end(5, 5)
    session.request_run("astar", background=False)
    first_bfs = len(seen)
    session.request_run("bfs", background=False)

    states = list(seen[first_bfs].values())
    assert states.count(CellState.OPEN) == 1
    assert CellState.CLOSED not in states
    assert CellState.PATH not in states
    assert session.last_snapshot[(5, 5)] is CellState.END


def test_edits_rejected_while_running():
    gate = threading.Event()
    release = threading.Event()

    def blocking_delay(seconds):
        gate.set()
        release.wait(5)
        return True

    s = MazeSession(rows=7, generate_walls=False, delay=blocking_delay, between_runs=0)
    s.place_start(1, 1)
    s.place_end(5, 5)
    assert s.request_run("bfs")
    assert gate.wait(5)

    assert s.running
    assert not s.set_wall(3, 3, True)
    assert s.notice == NOTICE_BUSY
    assert not s.place_start(2, 2)
    assert not s.generate_walls()
    assert not s.request_run(RUN_ALL)

    release.set()
    assert s.wait(5)
    assert not s.running
    assert s.recorder.results[0].path_length == 8


def test_clear_cancels_running_search():
    gate = threading.Event()
    s = MazeSession(rows=7, wall_density=0.0, generate_walls=False, between_runs=0, speed="slow")
    s.on_step = lambda snap, step: gate.set()
    s.place_start(1, 1)
    s.place_end(5, 5)
    s.request_run(RUN_ALL)
    assert gate.wait(5)

    assert s.request_clear()
    assert not s.running
    assert s.start is None and s.end is None
    assert s.last_comparison is None
    assert len(s.recorder) == 0
    assert s.grid.wall_count() == 4 * 6


def test_density_is_clamped_and_generate_spares_markers():
    s = MazeSession(rows=9, generate_walls=False, seed=5, delay=lambda seconds: True)
    s.place_start(1, 1)
    s.place_end(7, 7)
    assert s.set_wall_density(4.0)
    assert s.wall_density == 1.0
    assert s.generate_walls()
    assert s.grid.node(4, 4).is_wall
    assert not s.grid.node(1, 1).is_wall
    assert s.snapshot()[(1, 1)] is CellState.START
    s.set_wall_density(-1)
    assert s.wall_density == 0.0


def test_seeded_sessions_share_walls():
    a = MazeSession(rows=12, seed=42)
    b = MazeSession(rows=12, seed=42)
    assert a.to_rows() == b.to_rows()


def test_set_speed(session):
    assert session.set_speed("fast")
    assert session.speed == "fast"
    assert not session.set_speed("warp")
    assert session.speed == "fast"


def test_clear_rerolls_walls_at_current_density(session):
    session.place_start(1, 1)
    session.place_end(5, 5)
    session.set_wall_density(1.0)
    assert session.request_clear()
    assert session.start is None and session.end is None
    assert session.grid.wall_count() == 7 * 7

    session.set_wall_density(0.0)
    session.request_clear()
    assert session.grid.wall_count() == 4 * 6


def test_concurrent_run_requests_start_one_worker(monkeypatch):
    lookups = threading.Barrier(2, timeout=5)
    release = threading.Event()

    def lookup_together(key):
        lookups.wait()
        return get_algorithm(key)

    monkeypatch.setattr(session_module, "get_algorithm", lookup_together)
    s = MazeSession(rows=7, generate_walls=False, delay=lambda seconds: release.wait(5), between_runs=0)
    s.place_start(1, 1)
    s.place_end(5, 5)

    before = {t for t in threading.enumerate() if t.name == "maze-search"}
    accepted = []
    callers = [threading.Thread(target=lambda: accepted.append(s.request_run("bfs"))) for _ in range(2)]
    for t in callers:
        t.start()
    for t in callers:
        t.join(5)

    workers = [t for t in threading.enumerate() if t.name == "maze-search" and t not in before]
    assert sorted(accepted) == [False, True]
    assert s.notice == NOTICE_BUSY
    assert len(workers) == 1

    release.set()
    assert s.wait(5)
    assert len(s.recorder) == 1


def test_clear_waits_out_a_run_and_leaves_grid_idle():
    gate = threading.Event()
    s = MazeSession(rows=7, wall_density=0.0, generate_walls=False, between_runs=0, speed="slow")
    s.on_step = lambda snap, step: gate.set()
    s.place_start(1, 1)
    s.place_end(5, 5)
    s.request_run("dfs")
    assert gate.wait(5)

    assert s.request_clear()
    assert not s.running
    assert not s.request_run("dfs")
    assert s.notice == NOTICE_NEED_MARKERS
    assert s.place_start(1, 1)
