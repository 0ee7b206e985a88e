"""Dimension label layout for room walls and the openings on them.

Wall length labels sit outside the room, offset perpendicular to the wall.
Opening width labels use the same outward direction with a slightly larger
offset, pushed further out when they would overlap the wall label. The push
is pairwise only; three or more close openings on one wall may still overlap.
"""
import math
from typing import NamedTuple

from shared.types import Point, Room
from shared.geometry import centroid, dist, lerp, left_norm, off_pt, fmt_feet_inches
from walls.resolver import WallSegment
from walls.constants import (
    WALL_LABEL_OFFSET, OPENING_LABEL_OFFSET, WALL_LABEL_ANCHOR, OPENING_LABEL_ANCHOR,
    COLLISION_ALONG, COLLISION_PERP, COLLISION_PUSH,
)


class DimensionLabel(NamedTuple):
    text: str
    position: Point     # text origin, world pixels
    rotation: float     # degrees
    kind: str           # "wall" | "opening"
    room_id: str
    edge_index: int
    opening_id: str | None = None


def _axes(seg: WallSegment) -> tuple[Point, Point]:
    """(along, across) unit vectors in a canonical direction for the wall."""
    if seg.orientation == "H":
        t = (1.0, 0.0)
    elif seg.orientation == "V":
        t = (0.0, 1.0)
    else:
        L = dist(seg.start, seg.end)
        t = ((seg.end[0]-seg.start[0])/L, (seg.end[1]-seg.start[1])/L)
        if t[0] < 0 or (t[0] == 0 and t[1] < 0):
            t = (-t[0], -t[1])
    return t, (-t[1], t[0])

def outward_normal(a: Point, b: Point, c: Point) -> Point:
    """Unit normal of wall a-b pointing away from the room centroid c."""
    n = left_norm(a, b); m = lerp(a, b, 0.5)
    if (m[0]-c[0])*n[0]+(m[1]-c[1])*n[1] < 0:
        n = (-n[0], -n[1])
    return n

def _box(p: Point, anchor: Point, zoom: float) -> Point:
    """Text box origin; the anchor is in screen x/y whatever the wall direction."""
    return (p[0]-anchor[0]/zoom, p[1]-anchor[1]/zoom)

def labels_collide(wall_box: Point, opening_box: Point, t: Point, s: Point,
                   zoom: float) -> bool:
    """Both the along-wall and the same-level distances are under threshold."""
    d = (opening_box[0]-wall_box[0], opening_box[1]-wall_box[1])
    along = abs(d[0]*t[0]+d[1]*t[1]); perp = abs(d[0]*s[0]+d[1]*s[1])
    return along < COLLISION_ALONG/zoom and perp < COLLISION_PERP/zoom

def layout_segment_labels(room: Room, seg: WallSegment, zoom: float = 1.0) -> list[DimensionLabel]:
    if dist(seg.start, seg.end) < 1e-9:
        return []
    t, s = _axes(seg)
    n = outward_normal(seg.start, seg.end, centroid(room.vertices))
    rot = {"H": 0.0, "V": 90.0}.get(seg.orientation, math.degrees(math.atan2(t[1], t[0])))
    mid = lerp(seg.start, seg.end, 0.5)
    wall_pos = off_pt(mid, n, WALL_LABEL_OFFSET/zoom)
    show_wall = seg.effective_length_ft > 0
    labels = []
    if show_wall:
        labels.append(DimensionLabel(fmt_feet_inches(seg.effective_length_ft), wall_pos,
                                     rot, "wall", room.id, seg.index))
    wall_box = _box(wall_pos, WALL_LABEL_ANCHOR, zoom)
    base = OPENING_LABEL_OFFSET/zoom
    for o in seg.openings:
        hit = show_wall and labels_collide(
            wall_box, _box(off_pt(o.position, n, base), OPENING_LABEL_ANCHOR, zoom),
            t, s, zoom)
        pos = off_pt(o.position, n, base*COLLISION_PUSH if hit else base)
        labels.append(DimensionLabel(fmt_feet_inches(o.width_ft), pos, rot, "opening",
                                     room.id, seg.index, o.id))
    return labels

def layout_room_labels(room: Room, segments, zoom: float = 1.0) -> list[DimensionLabel]:
    return [lbl for seg in segments for lbl in layout_segment_labels(room, seg, zoom)]
