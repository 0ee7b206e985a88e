"""ADU site boundary editing: add, remove, drag vertices and square resize."""
import logging
import math

from shared.types import Point
from shared.geometry import ValidationRejection, point_seg_dist, polygon_area
from floorplan.canvas import CanvasConfig, constrain_to_canvas, snap_and_clamp
from floorplan.constants import (
    ADU_DEFAULT_AREA, ADU_MIN_AREA, ADU_MAX_AREA, MSG_BOUNDARY_MIN,
)

logger = logging.getLogger(__name__)

Boundary = tuple[Point, ...]


def square_about(center: Point, side: float, cfg: CanvasConfig) -> Boundary:
    """Axis-aligned square [tl, tr, br, bl] of the given side, clamped to the canvas."""
    cx, cy = center; h = side/2; ext = cfg.extended_canvas_size
    return tuple(constrain_to_canvas(p, ext) for p in
                 [(cx-h, cy-h), (cx+h, cy-h), (cx+h, cy+h), (cx-h, cy+h)])

def default_boundary(cfg: CanvasConfig, sqft: float = ADU_DEFAULT_AREA) -> Boundary:
    """Square of *sqft* centered in the extended canvas."""
    c = cfg.extended_canvas_size/2
    return square_about((c, c), math.sqrt(sqft)*cfg.pixels_per_foot, cfg)

def boundary_area(boundary: Boundary, ppf: float) -> float:
    return polygon_area(boundary, ppf)

def nearest_edge(boundary: Boundary, p: Point) -> int:
    """Index of the edge start closest to p; first minimum wins."""
    n = len(boundary); best_i, best_d = 0, math.inf
    for i in range(n):
        d = point_seg_dist(p, boundary[i], boundary[(i+1)%n])
        if d < best_d:
            best_i, best_d = i, d
    return best_i

def add_vertex(boundary: Boundary, click: Point, cfg: CanvasConfig) -> Boundary:
    """Insert a snapped, clamped vertex right after the start of the nearest edge."""
    p = snap_and_clamp(click, cfg)
    i = nearest_edge(boundary, p)
    return boundary[:i+1] + (p,) + boundary[i+1:]

def remove_vertex(boundary: Boundary, i: int) -> Boundary:
    if len(boundary) <= 3:
        raise ValidationRejection(MSG_BOUNDARY_MIN)
    if not 0 <= i < len(boundary):
        raise ValidationRejection(f"No boundary vertex {i}")
    return boundary[:i] + boundary[i+1:]

def drag_vertex(boundary: Boundary, i: int, pos: Point, cfg: CanvasConfig) -> Boundary:
    if not 0 <= i < len(boundary):
        raise ValidationRejection(f"No boundary vertex {i}")
    return boundary[:i] + (snap_and_clamp(pos, cfg),) + boundary[i+1:]

def resize_boundary(boundary: Boundary, sqft: float, cfg: CanvasConfig) -> Boundary:
    """Replace the boundary with a square of *sqft* about its current center.

    The center is the midpoint of vertices 0 and 2. The area is clamped to
    the ADU size limits.
    """
    sqft = max(ADU_MIN_AREA, min(ADU_MAX_AREA, sqft))
    c = ((boundary[0][0]+boundary[2][0])/2, (boundary[0][1]+boundary[2][1])/2)
    logger.debug("Resizing boundary to %.0f sqft about %s", sqft, c)
    return square_about(c, math.sqrt(sqft)*cfg.pixels_per_foot, cfg)
