"""Shared fixtures: a fresh runner, a small weighted graph, the Flask test client."""

import pytest

from engine import AlgorithmRunner
from main import create_app


class FakeClock:
    """Manual monotonic clock; `sleep` advances it instead of blocking."""

    def __init__(self, start: float = 100.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.now += seconds

    def advance_ms(self, ms: float) -> None:
        self.now += ms / 1000.0


@pytest.fixture
def runner():
    return AlgorithmRunner()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def paced_runner(clock):
    return AlgorithmRunner(clock=clock, sleep=clock.sleep)


@pytest.fixture
def weighted_graph():
    """
        A --1-- B --2-- D
        |       |       |
        4       5       1
        |       |       |
        C --1-- E --3-- F        (+ isolated node Z)

    Shortest A→F by weight: A-B-D-F (cost 4).  Fewest hops: A-B-D-F or
    A-C-E-F (3 edges); BFS reports A-B-D-F because B is enqueued first.
    """
    return {
        "directed": False,
        "nodes": [
            {"id": "A", "x": 0, "y": 0},
            {"id": "B", "x": 1, "y": 0},
            {"id": "C", "x": 0, "y": 1},
            {"id": "D", "x": 2, "y": 0},
            {"id": "E", "x": 1, "y": 1},
            {"id": "F", "x": 2, "y": 1},
            {"id": "Z", "x": 5, "y": 5},
        ],
        "edges": [
            {"source": "A", "target": "B", "weight": 1},
            {"source": "A", "target": "C", "weight": 4},
            {"source": "B", "target": "D", "weight": 2},
            {"source": "B", "target": "E", "weight": 5},
            {"source": "C", "target": "E", "weight": 1},
            {"source": "D", "target": "F", "weight": 1},
            {"source": "E", "target": "F", "weight": 3},
        ],
    }


@pytest.fixture
def app():
    app = create_app(runner=AlgorithmRunner(), config={"TESTING": True})
    return app


@pytest.fixture
def client(app):
    return app.test_client()


def execute(runner, algo_key, input, config=None):
    """Start a Run with no pacing and drive it to a terminal status."""
    run = runner.start(algo_key, input, config if config is not None else {"pacing_ms": 0})
    runner.run_until_complete([run])
    return run


def kinds(run):
    return [s.kind.value for s in run.steps]
