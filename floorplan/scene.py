"""Render-ready scene: everything the drawing layer needs, already positioned."""
from typing import NamedTuple

from shared.types import Point
from shared.geometry import effective_area, fmt_area, label_position, polygon_area
from floorplan.canvas import GridLine, grid_lines
from floorplan.entities import item_footprint
from walls.resolver import wall_segments, split_segment
from walls.labels import DimensionLabel, layout_room_labels


class RoomShape(NamedTuple):
    id: str
    name: str
    color: str
    vertices: tuple[Point, ...]
    walls: list[tuple[Point, Point]]    # wall lines with open passages removed
    label_position: Point
    label_text: str
    selected: bool


class ItemShape(NamedTuple):
    kind: str                           # "door" | "window" | "furniture"
    id: str
    type: str
    center: Point
    width: float                        # pixels, already swapped when vertical
    height: float
    rotation: int
    selected: bool


class Scene(NamedTuple):
    grid: list[GridLine]
    boundary: tuple[Point, ...]
    boundary_area: float
    boundary_vertices: list[tuple[Point, bool]]   # (position, selected); edit mode only
    rooms: list[RoomShape]
    items: list[ItemShape]
    labels: list[DimensionLabel]
    drawing: tuple[Point, ...]


def build_scene(state, config, zoom: float = 1.0) -> Scene:
    """Scene for a PlanState under an EditorConfig at the given zoom."""
    cfg = config.canvas; sel = state.selection
    rooms, labels = [], []
    for r in state.rooms:
        segs = wall_segments(r, state.doors, state.windows, cfg)
        text = f"{r.name}\n{fmt_area(effective_area(r, state.rooms))}"
        rooms.append(RoomShape(r.id, r.name, r.color, r.vertices,
                               [p for s in segs for p in split_segment(s)],
                               label_position(r.vertices), text, sel.room == r.id))
        labels.extend(layout_room_labels(r, segs, zoom))
    items = []
    for kind, coll in (("door", state.doors), ("window", state.windows),
                       ("furniture", state.furniture)):
        for it in coll:
            w, h = item_footprint(it, cfg.pixels_per_foot)
            items.append(ItemShape(kind, it.id, it.type, it.position, w, h, it.rotation,
                                   getattr(sel, kind) == it.id))
    verts = ([(p, i == state.selected_vertex) for i, p in enumerate(state.boundary)]
             if state.edit_boundary else [])
    drawing = state.drawing.points if state.drawing else ()
    return Scene(grid_lines(cfg), state.boundary,
                 polygon_area(state.boundary, cfg.pixels_per_foot),
                 verts, rooms, items, labels, drawing)
