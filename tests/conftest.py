"""Shared test fixtures for floor-plan engine tests."""
import pytest
from floorplan.canvas import make_canvas_config
from floorplan.editor import Editor, make_editor_config


class FakeClock:
    """Manually advanced clock for debounce tests."""
    def __init__(self, t: float = 0.0):
        self.t = t

    def __call__(self) -> float:
        return self.t

    def advance(self, dt: float) -> None:
        self.t += dt


@pytest.fixture(scope="session")
def cfg():
    """Default canvas: 36 ft across 800 px, extended 3x."""
    return make_canvas_config()


@pytest.fixture(scope="session")
def g(cfg):
    """Grid size (one foot) in pixels."""
    return cfg.grid_size


@pytest.fixture(scope="session")
def editor_config(cfg):
    return make_editor_config(cfg)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def editor(editor_config, clock):
    return Editor(editor_config, clock=clock)


def square(x_ft: float, y_ft: float, side_ft: float, g: float):
    """Square room vertices [tl, tr, br, bl] in pixels from feet."""
    x, y, s = x_ft*g, y_ft*g, side_ft*g
    return ((x, y), (x+s, y), (x+s, y+s), (x, y+s))
