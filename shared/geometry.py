"""Pure geometry functions, polygon utilities, and formatting."""
import math

import numpy as np

from .types import Point, Room

# ============================================================
# Error Types
# ============================================================
class GeometryError(ValueError):
    """Raised for impossible geometry operations."""


class ValidationRejection(ValueError):
    """Raised when a user operation is refused; state must stay unchanged."""

# ============================================================
# Geometry Utilities
# ============================================================
def left_norm(p1: Point, p2: Point) -> Point:
    """Unit normal vector to the left of the direction p1 → p2 (CCW perpendicular)."""
    dx = p2[0]-p1[0]; dy = p2[1]-p1[1]; Ln = math.sqrt(dx**2+dy**2)
    if Ln < 1e-12:
        raise GeometryError(f"Zero-length edge at {p1}")
    return (-dy/Ln, dx/Ln)

def off_pt(p: Point, n: Point, d: float) -> Point:
    """Offset point p by distance d along unit direction n."""
    return (p[0]+d*n[0], p[1]+d*n[1])

def lerp(a: Point, b: Point, t: float) -> Point:
    """Linear interpolation between two points."""
    return (a[0]+t*(b[0]-a[0]), a[1]+t*(b[1]-a[1]))

def dist(p1: Point, p2: Point) -> float:
    return math.hypot(p2[0]-p1[0], p2[1]-p1[1])

def point_seg_dist(p: Point, a: Point, b: Point) -> float:
    """Distance from p to the closed segment a-b."""
    dx = b[0]-a[0]; dy = b[1]-a[1]; L2 = dx*dx+dy*dy
    if L2 == 0:
        return dist(p, a)
    t = max(0.0, min(1.0, ((p[0]-a[0])*dx+(p[1]-a[1])*dy)/L2))
    return dist(p, (a[0]+t*dx, a[1]+t*dy))

# ============================================================
# Polygon Utilities
# ============================================================
def poly_area(verts) -> float:
    """Polygon area via the shoelace formula. Works for either winding order."""
    n = len(verts); a = 0
    for i in range(n):
        j = (i+1)%n; a += verts[i][0]*verts[j][1]-verts[j][0]*verts[i][1]
    return abs(a)/2

def polygon_area(verts, ppf: float) -> float:
    """Area in square feet of a pixel-space polygon; 0 for fewer than 3 vertices."""
    if len(verts) < 3:
        return 0.0
    return poly_area(verts)/(ppf*ppf)

def centroid(verts) -> Point:
    """Vertex mean (not the area centroid)."""
    n = len(verts)
    return (sum(v[0] for v in verts)/n, sum(v[1] for v in verts)/n)

def point_in_polygon(p: Point, verts) -> bool:
    """Even-odd ray casting. Boundary points may land on either side."""
    n = len(verts)
    if n < 3:
        return False
    x, y = p; inside = False; j = n-1
    for i in range(n):
        xi, yi = verts[i]; xj, yj = verts[j]
        if (yi > y) != (yj > y) and x < (xj-xi)*(y-yi)/(yj-yi)+xi:
            inside = not inside
        j = i
    return inside

def is_fully_inside(inner, outer) -> bool:
    """True if *inner* lies inside *outer*.

    The centroid of inner must be inside, and so must every inner vertex
    after nudging it 1% toward that centroid (shared edges count as inside).
    """
    if len(inner) < 3 or len(outer) < 3:
        return False
    c = centroid(inner)
    if not point_in_polygon(c, outer):
        return False
    return all(point_in_polygon(lerp(v, c, 0.01), outer) for v in inner)

def effective_area(room: Room, rooms) -> float:
    """Room area minus the areas of other rooms nested inside it, clamped at 0."""
    nested = sum(r.area for r in rooms
                 if r.id != room.id and is_fully_inside(r.vertices, room.vertices))
    return max(0.0, room.area-nested)

def total_area(rooms) -> float:
    return sum(effective_area(r, rooms) for r in rooms)

def label_position(verts) -> Point:
    """Interior point suitable for a room label.

    The centroid when it falls inside; for concave shapes, the point of a
    10x10 sample lattice over the bounding box that lies farthest from
    every edge.
    """
    c = centroid(verts)
    if point_in_polygon(c, verts):
        return c
    xs = [v[0] for v in verts]; ys = [v[1] for v in verts]
    gx = np.linspace(min(xs), max(xs), 11)[1:-1]
    gy = np.linspace(min(ys), max(ys), 11)[1:-1]
    best, best_d = c, 0.0
    for y in gy:
        for x in gx:
            p = (float(x), float(y))
            if not point_in_polygon(p, verts):
                continue
            d = min(point_seg_dist(p, verts[i], verts[(i+1)%len(verts)])
                    for i in range(len(verts)))
            if d > best_d:
                best, best_d = p, d
    return best

# ============================================================
# Formatting Helpers
# ============================================================
def round_half_up(v: float) -> int:
    """Nearest integer, halves rounding up (round() rounds them to even)."""
    return math.floor(v+0.5)

def fmt_feet_inches(ft: float) -> str:
    """Format feet as a dimension string, e.g. 8.5 -> \"8'-6\\\"\"."""
    whole = math.floor(ft); inches = round_half_up((ft-whole)*12)
    if inches == 12:
        whole += 1; inches = 0
    return f"{whole}'-{inches}\""

def fmt_area(sqft: float) -> str:
    return f"{round_half_up(sqft)} sq ft"
