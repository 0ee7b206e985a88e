"""Pan/zoom view transform between stage (screen) and world (plan) pixels."""
from typing import Callable, NamedTuple

from .types import Point

MIN_ZOOM = 0.1
MAX_ZOOM = 3.0
WHEEL_STEP = 1.1     # per wheel notch
BUTTON_STEP = 1.2    # zoom-in / zoom-out buttons


class ViewState(NamedTuple):
    zoom: float = 1.0
    pan: Point = (0.0, 0.0)


def clamp_zoom(z: float, lo: float = MIN_ZOOM, hi: float = MAX_ZOOM) -> float:
    return max(lo, min(hi, z))

def stage_to_world(view: ViewState, p: Point) -> Point:
    return ((p[0]-view.pan[0])/view.zoom, (p[1]-view.pan[1])/view.zoom)

def world_to_stage(view: ViewState, p: Point) -> Point:
    return (p[0]*view.zoom+view.pan[0], p[1]*view.zoom+view.pan[1])

def make_view_transform(view: ViewState) -> Callable[[float, float], tuple[float, float]]:
    """Create to_stage closure for a fixed view."""
    z = view.zoom; px, py = view.pan
    def to_stage(x: float, y: float) -> tuple[float, float]:
        return (x*z+px, y*z+py)
    return to_stage

def zoom_at(view: ViewState, pointer: Point, zoom: float,
            lo: float = MIN_ZOOM, hi: float = MAX_ZOOM) -> ViewState:
    """Zoom to *zoom* (clamped), keeping the world point under *pointer* fixed."""
    z = clamp_zoom(zoom, lo, hi)
    w = stage_to_world(view, pointer)
    return ViewState(z, (pointer[0]-w[0]*z, pointer[1]-w[1]*z))

def wheel_zoom(view: ViewState, pointer: Point, delta_y: float) -> ViewState:
    """One wheel notch: scrolling up (negative delta) zooms in."""
    z = view.zoom*WHEEL_STEP if delta_y < 0 else view.zoom/WHEEL_STEP
    return zoom_at(view, pointer, z)

def zoom_to_focus(view: ViewState, zoom_in: bool, display_size: float,
                  focus: Point | None = None) -> ViewState:
    """Button zoom; when a focus point is given it is centered in the display."""
    z = clamp_zoom(view.zoom*BUTTON_STEP if zoom_in else view.zoom/BUTTON_STEP)
    if focus is None:
        return view._replace(zoom=z)
    c = display_size/2
    return ViewState(z, (c-focus[0]*z, c-focus[1]*z))

def pan_by(view: ViewState, dx: float, dy: float) -> ViewState:
    return view._replace(pan=(view.pan[0]+dx, view.pan[1]+dy))

def initial_view(display_size: float, extended_size: float) -> ViewState:
    """Zoom 1 with the display window centered in the extended canvas."""
    off = (extended_size-display_size)/2
    return ViewState(1.0, (-off, -off))

def reset_view(display_size: float, extended_size: float,
               focus: Point | None = None) -> ViewState:
    if focus is None:
        return initial_view(display_size, extended_size)
    c = display_size/2
    return ViewState(1.0, (c-focus[0], c-focus[1]))
