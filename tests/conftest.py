import pytest

from grid import Grid
from engine import MazeSession
from main import create_app


def _drain(generator):
    """Exhaust a search generator → (steps, path_length)."""
    steps = []
    while True:
        try:
            steps.append(next(generator))
        except StopIteration as done:
            return steps, done.value


@pytest.fixture
def drain():
    return _drain


@pytest.fixture
def open_grid():
    """5×5 grid: border walls only, 3×3 open interior."""
    return Grid(5)


@pytest.fixture
def maze():
    """
    9×9 grid with a wall column at col 4 open only at row 7:

        #########
        #...#...#
        #...#...#
        #...#...#
        #...#...#
        #...#...#
        #...#...#
        #.......#
        #########
    """
    g = Grid(9)
    for r in range(1, 7):
        g.set_wall(g.node(r, 4), True)
    return g


@pytest.fixture
def session():
    return MazeSession(rows=7, generate_walls=False, delay=lambda seconds: True, between_runs=0)


@pytest.fixture
def client(session):
    app = create_app({"TESTING": True}, session=session)
    return app.test_client()
