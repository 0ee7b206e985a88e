"""Entity placement, transforms and deletion for rooms, doors, windows, furniture.

Every function is pure: collections are tuples and each operation returns a
new value. Refused operations raise ValidationRejection.
"""
import uuid

from shared.types import Point, Room, Door, Window, Furniture, Item
from shared.geometry import ValidationRejection, polygon_area, round_half_up
from floorplan.canvas import (
    CanvasConfig, snap_to_grid, snap_point, snap_with_mode, constrain_to_canvas,
    snap_and_clamp,
)
from floorplan.catalog import room_config, door_config, window_config, furniture_config
from floorplan.constants import (
    SNAP_GRID, MIN_ROOM_UNITS, MIN_DOOR_UNITS, MIN_WINDOW_UNITS, MIN_FURNITURE_UNITS,
    MIN_DRAWN_ROOM_SQFT, WINDOW_SILL_HEIGHT, OPENING_DEPTH,
    MSG_ROOM_MIN, MSG_POLYGON_MIN, MSG_NOT_RECT_ROTATE, MSG_NOT_RECT_RESIZE,
)


def new_id(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4().hex[:12]}"

# ============================================================
# Lookup
# ============================================================
def find(coll, eid: str):
    for e in coll:
        if e.id == eid:
            return e
    raise ValidationRejection(f"No entity with id {eid!r}")

def replace(coll, new) -> tuple:
    return tuple(new if e.id == new.id else e for e in coll)

def delete(coll, eid: str) -> tuple:
    """Remove the entity with *eid*; unknown ids leave the collection as is."""
    return tuple(e for e in coll if e.id != eid)

# ============================================================
# Rectangles
# ============================================================
def rect_vertices(x: float, y: float, w: float, h: float) -> tuple[Point, ...]:
    """[top-left, top-right, bottom-right, bottom-left]."""
    return ((x, y), (x+w, y), (x+w, y+h), (x, y+h))

def is_rect(verts) -> bool:
    """True for a 4-vertex axis-aligned rectangle in [tl, tr, br, bl] order."""
    if len(verts) != 4:
        return False
    (x0, y0), (x1, y1), (x2, y2), (x3, y3) = verts
    return (y0 == y1 and x1 == x2 and y2 == y3 and x3 == x0
            and x1 > x0 and y2 > y1)

def rect_dims(verts) -> tuple[float, float, float, float]:
    """(x, y, width, height) of a rectangle room, width = v1.x-v0.x, height = v2.y-v0.y."""
    return (verts[0][0], verts[0][1], verts[1][0]-verts[0][0], verts[2][1]-verts[0][1])

# ============================================================
# Placement
# ============================================================
def make_room(room_type: str, verts, rooms, cfg: CanvasConfig) -> Room:
    """New room named '<label> <n>' where n counts existing rooms of that type."""
    rc = room_config(room_type)
    n = sum(1 for r in rooms if r.type == room_type)+1
    verts = tuple(verts)
    return Room(new_id("room"), room_type, f"{rc.label} {n}", rc.color,
                verts, polygon_area(verts, cfg.pixels_per_foot))

def place_room(rooms, room_type: str, point: Point, cfg: CanvasConfig) -> Room:
    """Default-size rectangle of the type with its top-left at the snapped point."""
    rc = room_config(room_type)
    x, y = snap_and_clamp(point, cfg); g = cfg.grid_size
    return make_room(room_type, rect_vertices(x, y, rc.width*g, rc.height*g), rooms, cfg)

def place_door(door_type: str, point: Point, cfg: CanvasConfig) -> Door:
    return Door(new_id("door"), door_type, snap_and_clamp(point, cfg), 0,
                door_config(door_type).width)

def place_window(window_type: str, point: Point, cfg: CanvasConfig) -> Window:
    wc = window_config(window_type)
    return Window(new_id("window"), window_type, snap_and_clamp(point, cfg), 0,
                  wc.width, wc.height, WINDOW_SILL_HEIGHT)

def place_furniture(furniture_type: str, point: Point, cfg: CanvasConfig) -> Furniture:
    fc = furniture_config(furniture_type)
    return Furniture(new_id("furniture"), furniture_type, snap_and_clamp(point, cfg), 0,
                     fc.width, fc.depth)

# ============================================================
# Drawing
# ============================================================
def finish_rect(start: Point, end: Point, room_type: str, rooms,
                cfg: CanvasConfig) -> Room | None:
    """Room spanning the two snapped corners, or None when it would be under 1 sqft."""
    a = snap_and_clamp(start, cfg); b = snap_and_clamp(end, cfg)
    x = min(a[0], b[0]); y = min(a[1], b[1])
    w = abs(b[0]-a[0]); h = abs(b[1]-a[1])
    if w*h/cfg.pixels_per_foot**2 < MIN_DRAWN_ROOM_SQFT:
        return None
    return make_room(room_type, rect_vertices(x, y, w, h), rooms, cfg)

def complete_polygon(points, room_type: str, rooms, cfg: CanvasConfig) -> Room:
    if len(points) < 3:
        raise ValidationRejection(MSG_POLYGON_MIN)
    return make_room(room_type, [snap_and_clamp(p, cfg) for p in points], rooms, cfg)

# ============================================================
# Move
# ============================================================
def move_room(room: Room, delta: Point, cfg: CanvasConfig) -> Room:
    """Translate by a snapped delta, clamped so the whole room stays on the canvas."""
    dx, dy = snap_point(delta, cfg.grid_size)
    xs = [v[0] for v in room.vertices]; ys = [v[1] for v in room.vertices]
    ext = cfg.extended_canvas_size
    dx = max(-min(xs), min(ext-max(xs), dx))
    dy = max(-min(ys), min(ext-max(ys), dy))
    if dx == 0 and dy == 0:
        return room
    return room._replace(vertices=tuple((x+dx, y+dy) for x, y in room.vertices))

def move_item(item: Item, pos: Point, cfg: CanvasConfig, mode: str = SNAP_GRID) -> Item:
    g = cfg.grid_size
    p = (snap_with_mode(pos[0], g, mode), snap_with_mode(pos[1], g, mode))
    return item._replace(position=constrain_to_canvas(p, cfg.extended_canvas_size))

# ============================================================
# Resize
# ============================================================
def resize_room(room: Room, origin: Point, scale_x: float, scale_y: float,
                cfg: CanvasConfig) -> Room:
    """Scale an axis-aligned room; size snaps to whole grid units, at least one."""
    if not is_rect(room.vertices):
        raise ValidationRejection(MSG_NOT_RECT_RESIZE)
    g = cfg.grid_size; _, _, w, h = rect_dims(room.vertices)
    nw = max(MIN_ROOM_UNITS*g, snap_to_grid(w*scale_x, g))
    nh = max(MIN_ROOM_UNITS*g, snap_to_grid(h*scale_y, g))
    x, y = snap_and_clamp(origin, cfg)
    verts = rect_vertices(x, y, nw, nh)
    return room._replace(vertices=verts, area=polygon_area(verts, cfg.pixels_per_foot))

def _scaled_units(ft: float, scale: float, minimum: int) -> float:
    return max(minimum, round_half_up(ft*scale))

def resize_item(item: Item, scale_x: float, scale_y: float) -> Item:
    """Scale an item's plan dimensions in whole feet.

    Scale factors are in stage axes; a vertical item's width runs along y.
    """
    if is_vertical(item):
        scale_x, scale_y = scale_y, scale_x
    if isinstance(item, Door):
        return item._replace(width=_scaled_units(item.width, scale_x, MIN_DOOR_UNITS))
    if isinstance(item, Window):
        return item._replace(width=_scaled_units(item.width, scale_x, MIN_WINDOW_UNITS))
    return item._replace(width=_scaled_units(item.width, scale_x, MIN_FURNITURE_UNITS),
                         depth=_scaled_units(item.depth, scale_y, MIN_FURNITURE_UNITS))

# ============================================================
# Rotate
# ============================================================
def is_vertical(item: Item) -> bool:
    return item.rotation % 180 == 90

def rotate_item(item: Item) -> Item:
    return item._replace(rotation=(item.rotation+90) % 360)

def rotate_room(room: Room) -> Room:
    """Swap width and height about the room's center."""
    if not is_rect(room.vertices):
        raise ValidationRejection(MSG_NOT_RECT_ROTATE)
    v = room.vertices; _, _, w, h = rect_dims(v)
    cx = (v[0][0]+v[2][0])/2; cy = (v[0][1]+v[2][1])/2
    return room._replace(vertices=rect_vertices(cx-h/2, cy-w/2, h, w))

# ============================================================
# Room vertex editing
# ============================================================
def _with_vertices(room: Room, verts, cfg: CanvasConfig) -> Room:
    verts = tuple(verts)
    return room._replace(vertices=verts, area=polygon_area(verts, cfg.pixels_per_foot))

def drag_room_vertex(room: Room, i: int, pos: Point, cfg: CanvasConfig) -> Room:
    if not 0 <= i < len(room.vertices):
        raise ValidationRejection(f"No vertex {i} on {room.name}")
    v = list(room.vertices); v[i] = snap_and_clamp(pos, cfg)
    return _with_vertices(room, v, cfg)

def insert_room_vertex(room: Room, i: int, cfg: CanvasConfig) -> Room:
    """Split edge i at its snapped midpoint."""
    n = len(room.vertices)
    if not 0 <= i < n:
        raise ValidationRejection(f"No edge {i} on {room.name}")
    a = room.vertices[i]; b = room.vertices[(i+1)%n]
    mid = snap_and_clamp(((a[0]+b[0])/2, (a[1]+b[1])/2), cfg)
    return _with_vertices(room, room.vertices[:i+1]+(mid,)+room.vertices[i+1:], cfg)

def remove_room_vertex(room: Room, i: int, cfg: CanvasConfig) -> Room:
    if len(room.vertices) <= 3:
        raise ValidationRejection(MSG_ROOM_MIN)
    if not 0 <= i < len(room.vertices):
        raise ValidationRejection(f"No vertex {i} on {room.name}")
    return _with_vertices(room, room.vertices[:i]+room.vertices[i+1:], cfg)

# ============================================================
# Footprints
# ============================================================
def item_footprint(item: Item, ppf: float) -> tuple[float, float]:
    """Displayed (width, height) in pixels, axes swapped for vertical items."""
    if isinstance(item, Furniture):
        w, d = item.width, item.depth
    else:
        w, d = item.width, OPENING_DEPTH
    w *= ppf; d *= ppf
    return (d, w) if is_vertical(item) else (w, d)
