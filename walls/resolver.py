"""Associate doors and windows with room walls and split walls at open passages.

Each room edge (consecutive vertex pair, wrapping) is classified horizontal,
vertical or diagonal. Openings attach to aligned H/V edges only; diagonal
edges are never split. Every attached opening shortens the wall's effective
length, but only open passages (door type "opening") cut the rendered wall.
"""
from typing import NamedTuple

from shared.types import Point, Room
from shared.geometry import dist
from floorplan.canvas import CanvasConfig, to_feet, to_px
from floorplan.entities import is_vertical
from walls.constants import WALL_TOLERANCE_FRACTION

OPEN_PASSAGE = "opening"


class WallOpening(NamedTuple):
    """Door or window attached to a wall, as an interval along the wall axis."""
    id: str
    kind: str           # "door" | "window"
    type: str
    position: Point     # item center
    width_ft: float
    cut_start: float    # along-axis pixel coordinate
    cut_end: float


class WallSegment(NamedTuple):
    index: int          # edge index in the room polygon
    start: Point
    end: Point
    orientation: str    # "H" | "V" | "D"
    length_ft: float
    openings: tuple[WallOpening, ...]
    effective_length_ft: float


def wall_tolerance(cfg: CanvasConfig) -> float:
    return cfg.grid_size*WALL_TOLERANCE_FRACTION

def classify_edge(a: Point, b: Point, tol: float) -> str:
    if abs(a[1]-b[1]) < tol:
        return "H"
    if abs(a[0]-b[0]) < tol:
        return "V"
    return "D"

def opening_on_edge(item, a: Point, b: Point, orientation: str, tol: float) -> bool:
    """Orientation matches, off-axis coordinate aligned, on-axis inside the span."""
    x, y = item.position
    if orientation == "H" and not is_vertical(item):
        return (abs(y-(a[1]+b[1])/2) < tol
                and min(a[0], b[0])-tol <= x <= max(a[0], b[0])+tol)
    if orientation == "V" and is_vertical(item):
        return (abs(x-(a[0]+b[0])/2) < tol
                and min(a[1], b[1])-tol <= y <= max(a[1], b[1])+tol)
    return False

def _openings_on_edge(a, b, orientation, doors, windows, cfg):
    """Openings attached to edge a-b, sorted by cut start."""
    if orientation == "D":
        return ()
    tol = wall_tolerance(cfg); ax = 0 if orientation == "H" else 1
    result = []
    for kind, items in (("door", doors), ("window", windows)):
        for it in items:
            if opening_on_edge(it, a, b, orientation, tol):
                half = to_px(it.width, cfg)/2; c = it.position[ax]
                result.append(WallOpening(it.id, kind, it.type, it.position,
                                          it.width, c-half, c+half))
    result.sort(key=lambda o: o.cut_start)
    return tuple(result)

def effective_length(length_ft: float, openings) -> float:
    return max(0.0, length_ft-sum(o.width_ft for o in openings))

def wall_segments(room: Room, doors, windows, cfg: CanvasConfig) -> list[WallSegment]:
    """One WallSegment per room edge with its attached openings."""
    verts = room.vertices; n = len(verts); tol = wall_tolerance(cfg)
    segs = []
    for i in range(n):
        a = verts[i]; b = verts[(i+1)%n]
        orient = classify_edge(a, b, tol)
        length_ft = to_feet(dist(a, b), cfg)
        ops = _openings_on_edge(a, b, orient, doors, windows, cfg)
        segs.append(WallSegment(i, a, b, orient, length_ft, ops,
                                effective_length(length_ft, ops)))
    return segs

def _solid_ranges(cuts, lo: float, hi: float) -> list[tuple[float, float]]:
    """Solid wall ranges in [lo, hi] from cut intervals sorted by start."""
    ranges = []
    cursor = lo
    for c0, c1 in cuts:
        if c0 > cursor:
            ranges.append((cursor, min(c0, hi)))
        cursor = max(cursor, c1)
    if cursor < hi:
        ranges.append((cursor, hi))
    return ranges

def split_segment(seg: WallSegment) -> list[tuple[Point, Point]]:
    """Render pieces of a wall after removing open-passage cuts."""
    cuts = [(o.cut_start, o.cut_end) for o in seg.openings
            if o.kind == "door" and o.type == OPEN_PASSAGE]
    if seg.orientation == "D" or not cuts:
        return [(seg.start, seg.end)]
    if seg.orientation == "H":
        y = seg.start[1]
        lo, hi = sorted((seg.start[0], seg.end[0]))
        return [((s, y), (e, y)) for s, e in _solid_ranges(cuts, lo, hi)]
    x = seg.start[0]
    lo, hi = sorted((seg.start[1], seg.end[1]))
    return [((x, s), (x, e)) for s, e in _solid_ranges(cuts, lo, hi)]

def render_segments(room: Room, doors, windows, cfg: CanvasConfig) -> list[tuple[Point, Point]]:
    """All wall line pieces of a room, in edge order."""
    return [piece for seg in wall_segments(room, doors, windows, cfg)
            for piece in split_segment(seg)]

def segment_length_ft(piece: tuple[Point, Point], cfg: CanvasConfig) -> float:
    return to_feet(dist(*piece), cfg)
