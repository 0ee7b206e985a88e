"""Coordinate and grid system: pixels-per-foot, snapping, canvas clamping."""
import math
from typing import NamedTuple

import numpy as np

from shared.types import Point
from shared.geometry import round_half_up
from floorplan.constants import (
    MAX_CANVAS_FEET, DISPLAY_SIZE, CANVAS_EXTEND, MAJOR_GRID_EVERY,
    SNAP_GRID, SNAP_HALF, SNAP_FREE,
)


class CanvasConfig(NamedTuple):
    max_canvas_feet: float
    display_size: float
    pixels_per_foot: float
    grid_size: float               # one foot in pixels
    extended_grid_feet: float
    extended_canvas_size: float    # clamp extent for both axes (px)


class GridLine(NamedTuple):
    start: Point
    end: Point
    major: bool


def make_canvas_config(max_canvas_feet: float = MAX_CANVAS_FEET,
                       display_size: float = DISPLAY_SIZE,
                       extend: float = CANVAS_EXTEND) -> CanvasConfig:
    ppf = display_size/max_canvas_feet
    ext_ft = max_canvas_feet*extend
    return CanvasConfig(max_canvas_feet, display_size, ppf, ppf, ext_ft, ext_ft*ppf)


def snap_to_grid(v: float, grid: float) -> float:
    return round_half_up(v/grid)*grid

def snap_point(p: Point, grid: float) -> Point:
    return (snap_to_grid(p[0], grid), snap_to_grid(p[1], grid))

def snap_with_mode(v: float, grid: float, mode: str) -> float:
    """Snap by granularity: full grid, half grid (cell centers), or free."""
    if mode == SNAP_GRID:
        return snap_to_grid(v, grid)
    if mode == SNAP_HALF:
        return (math.floor(v/grid)+0.5)*grid
    if mode == SNAP_FREE:
        return v
    raise ValueError(f"Unknown snap mode: {mode!r}")

def constrain_to_canvas(p: Point, extent: float) -> Point:
    return (max(0.0, min(extent, p[0])), max(0.0, min(extent, p[1])))

def snap_and_clamp(p: Point, cfg: CanvasConfig) -> Point:
    return constrain_to_canvas(snap_point(p, cfg.grid_size), cfg.extended_canvas_size)

def to_feet(px: float, cfg: CanvasConfig) -> float:
    return px/cfg.pixels_per_foot

def to_px(ft: float, cfg: CanvasConfig) -> float:
    return ft*cfg.pixels_per_foot


def grid_lines(cfg: CanvasConfig) -> list[GridLine]:
    """Vertical then horizontal grid lines, one per foot across the extended canvas."""
    ext = cfg.extended_canvas_size
    ticks = np.arange(0, int(round(cfg.extended_grid_feet))+1)
    lines = []
    for k in ticks:
        x = float(k*cfg.grid_size)
        lines.append(GridLine((x, 0.0), (x, ext), bool(k % MAJOR_GRID_EVERY == 0)))
    for k in ticks:
        y = float(k*cfg.grid_size)
        lines.append(GridLine((0.0, y), (ext, y), bool(k % MAJOR_GRID_EVERY == 0)))
    return lines
