"""Shared types, geometry and view-transform utilities."""

from .types import Point, ROTATIONS, Room, Door, Window, Furniture, Item
from .geometry import (
    GeometryError, ValidationRejection,
    left_norm, off_pt, lerp, dist, point_seg_dist,
    poly_area, polygon_area, centroid, point_in_polygon, is_fully_inside,
    effective_area, total_area, label_position,
    round_half_up, fmt_feet_inches, fmt_area,
)
from .view import (
    ViewState, stage_to_world, world_to_stage, make_view_transform,
    zoom_at, wheel_zoom, zoom_to_focus, pan_by, initial_view, reset_view,
)
