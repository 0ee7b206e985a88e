"""Normalized floor-plan document handed to rendering, export and persistence."""
import hashlib
import json
from typing import NamedTuple

from shared.types import Point, Room, Door, Window, Furniture
from shared.geometry import effective_area, polygon_area, round_half_up
from floorplan.canvas import CanvasConfig
from floorplan.catalog import room_config
from floorplan.constants import ADU_MIN_AREA, ADU_MAX_AREA


class FloorPlanDocument(NamedTuple):
    rooms: tuple[Room, ...]
    doors: tuple[Door, ...]
    windows: tuple[Window, ...]
    furniture: tuple[Furniture, ...]
    total_area: float               # sqft, nested rooms counted once
    boundary: tuple[Point, ...]
    pixels_per_foot: float
    canvas_width: float
    canvas_height: float


def build_document(snap, cfg: CanvasConfig) -> FloorPlanDocument:
    """Document from anything carrying rooms/doors/windows/furniture/boundary."""
    total = sum(effective_area(r, snap.rooms) for r in snap.rooms)
    ext = cfg.extended_canvas_size
    return FloorPlanDocument(snap.rooms, snap.doors, snap.windows, snap.furniture,
                             total, snap.boundary, cfg.pixels_per_foot, ext, ext)


def _pt(p: Point) -> dict:
    return {"x": p[0], "y": p[1]}

def to_dict(doc: FloorPlanDocument) -> dict:
    """JSON-ready form with the collaborators' camelCase keys."""
    return {
        "rooms": [{"id": r.id, "type": r.type, "name": r.name, "color": r.color,
                   "vertices": [_pt(v) for v in r.vertices], "area": round_half_up(r.area)}
                  for r in doc.rooms],
        "doors": [{"id": d.id, "type": d.type, "position": _pt(d.position),
                   "rotation": d.rotation, "width": d.width} for d in doc.doors],
        "windows": [{"id": w.id, "type": w.type, "position": _pt(w.position),
                     "rotation": w.rotation, "width": w.width, "height": w.height,
                     "sillHeight": w.sill_height} for w in doc.windows],
        "furniture": [{"id": f.id, "type": f.type, "position": _pt(f.position),
                       "rotation": f.rotation, "width": f.width, "depth": f.depth}
                      for f in doc.furniture],
        "totalArea": round_half_up(doc.total_area),
        "boundary": [_pt(p) for p in doc.boundary],
        "pixelsPerFoot": doc.pixels_per_foot,
        "canvasWidth": doc.canvas_width,
        "canvasHeight": doc.canvas_height,
    }

def document_hash(doc: FloorPlanDocument) -> str:
    """Stable content hash used for dirty detection."""
    data = json.dumps(to_dict(doc), sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(data.encode()).hexdigest()


def check_limits(doc: FloorPlanDocument) -> list[str]:
    """Human-readable warnings for ADU size limits and undersized rooms."""
    msgs = []
    boundary_sqft = polygon_area(doc.boundary, doc.pixels_per_foot)
    if boundary_sqft < ADU_MIN_AREA:
        msgs.append(f"ADU must be at least {ADU_MIN_AREA} square feet")
    elif boundary_sqft > ADU_MAX_AREA:
        msgs.append(f"ADU cannot exceed {ADU_MAX_AREA} square feet")
    if doc.total_area > boundary_sqft+1e-6:
        msgs.append(f"Rooms total {round_half_up(doc.total_area)} sq ft, more than the "
                    f"{round_half_up(boundary_sqft)} sq ft ADU boundary")
    for r in doc.rooms:
        rc = room_config(r.type)
        if r.area < rc.min_size:
            msgs.append(f"{r.name} is {round_half_up(r.area)} sq ft; "
                        f"{rc.label} needs at least {rc.min_size} sq ft")
    return msgs
