import pytest

from forcegraph.graph_engine import GraphEngine
from forcegraph.interaction import InteractionController
from forcegraph.view import ViewTransform


@pytest.fixture
def engine():
    return GraphEngine(seed=7)


@pytest.fixture
def quiet_engine():
    """Engine without warm-start, so each frame is a single pass."""
    return GraphEngine(seed=7, warm_start_frames=0)


@pytest.fixture
def view():
    return ViewTransform()


@pytest.fixture
def controller(quiet_engine, view):
    return InteractionController(quiet_engine, view)
