"""Tests for shared/geometry.py pure functions."""
import pytest
from shared.geometry import (
    GeometryError,
    left_norm, off_pt, lerp, point_seg_dist,
    poly_area, polygon_area, centroid, point_in_polygon, is_fully_inside,
    effective_area, total_area, label_position,
    round_half_up, fmt_feet_inches, fmt_area,
)
from shared.types import Room
from conftest import square

PPF = 800/36


def _room(rid, verts, ppf=PPF):
    return Room(rid, "bedroom", rid, "#fff", verts, polygon_area(verts, ppf))


# --- left_norm / off_pt / lerp ---

def test_left_norm_horizontal():
    n = left_norm((0, 0), (1, 0))
    assert n == pytest.approx((0.0, 1.0))


def test_left_norm_zero_length_raises():
    with pytest.raises(GeometryError, match="Zero-length"):
        left_norm((2, 2), (2, 2))


def test_off_pt():
    assert off_pt((3, 4), (0, 1), 2.0) == pytest.approx((3, 6))


def test_lerp_midpoint():
    assert lerp((0, 0), (10, 20), 0.5) == pytest.approx((5, 10))


# --- point_seg_dist ---

class TestPointSegDist:
    def test_perpendicular_foot_inside(self):
        assert point_seg_dist((5, 3), (0, 0), (10, 0)) == pytest.approx(3)

    def test_beyond_end_uses_endpoint(self):
        assert point_seg_dist((13, 4), (0, 0), (10, 0)) == pytest.approx(5)

    def test_degenerate_segment(self):
        assert point_seg_dist((3, 4), (0, 0), (0, 0)) == pytest.approx(5)


# --- polygon area ---

class TestPolygonArea:
    L_SHAPE = [(0, 0), (40, 0), (40, 20), (20, 20), (20, 40), (0, 40)]

    def test_rectangle_w_times_h(self):
        g = PPF
        verts = [(0, 0), (12*g, 0), (12*g, 7*g), (0, 7*g)]
        assert polygon_area(verts, g) == pytest.approx(84)

    def test_ten_foot_square_is_100(self):
        assert polygon_area(square(3, 3, 10, PPF), PPF) == pytest.approx(100)

    def test_cyclic_rotation_invariant(self):
        a = poly_area(self.L_SHAPE)
        for k in range(len(self.L_SHAPE)):
            assert poly_area(self.L_SHAPE[k:]+self.L_SHAPE[:k]) == pytest.approx(a)

    def test_winding_reversal_invariant(self):
        assert poly_area(self.L_SHAPE[::-1]) == pytest.approx(poly_area(self.L_SHAPE))

    def test_l_shape_area(self):
        assert poly_area(self.L_SHAPE) == pytest.approx(1200)

    def test_fewer_than_three_vertices(self):
        assert polygon_area([(0, 0), (10, 0)], PPF) == 0.0


# --- point in polygon ---

class TestPointInPolygon:
    SQ = [(0, 0), (10, 0), (10, 10), (0, 10)]

    def test_inside(self):
        assert point_in_polygon((5, 5), self.SQ)

    def test_outside(self):
        assert not point_in_polygon((15, 5), self.SQ)

    def test_concave_notch_is_outside(self):
        assert not point_in_polygon((30, 30), TestPolygonArea.L_SHAPE)

    def test_degenerate_polygon(self):
        assert not point_in_polygon((0, 0), [(0, 0), (1, 1)])


def test_centroid_is_vertex_mean():
    assert centroid([(0, 0), (10, 0), (10, 10), (0, 10)]) == pytest.approx((5, 5))


# --- nesting / effective area ---

class TestEffectiveArea:
    def test_nested_room_subtracted(self):
        outer = _room("outer", square(0, 0, 10, PPF))
        inner = _room("inner", square(3, 3, 4, PPF))
        rooms = [outer, inner]
        assert effective_area(outer, rooms) == pytest.approx(84)
        assert effective_area(inner, rooms) == pytest.approx(16)
        assert total_area(rooms) == pytest.approx(100)

    def test_shared_edge_still_nested(self):
        outer = square(0, 0, 10, PPF)
        assert is_fully_inside(square(0, 0, 4, PPF), outer)

    def test_overlapping_not_nested(self):
        assert not is_fully_inside(square(8, 8, 4, PPF), square(0, 0, 10, PPF))

    def test_side_by_side_rooms_add(self):
        a = _room("a", square(0, 0, 10, PPF)); b = _room("b", square(10, 0, 5, PPF))
        assert total_area([a, b]) == pytest.approx(125)

    def test_clamped_at_zero(self):
        outer = _room("outer", square(0, 0, 10, PPF))
        big = _room("big", square(1, 1, 8, PPF))._replace(area=500)
        assert effective_area(outer, [outer, big]) == 0.0


# --- label position ---

class TestLabelPosition:
    def test_convex_uses_centroid(self):
        assert label_position([(0, 0), (10, 0), (10, 10), (0, 10)]) == pytest.approx((5, 5))

    def test_concave_point_is_inside(self):
        u_shape = [(0, 0), (30, 0), (30, 30), (20, 30), (20, 5), (10, 5), (10, 30), (0, 30)]
        p = label_position(u_shape)
        assert point_in_polygon(p, u_shape)


# --- formatting ---

class TestFmtFeetInches:
    def test_whole_feet(self):
        assert fmt_feet_inches(10) == "10'-0\""

    def test_half_foot(self):
        assert fmt_feet_inches(8.5) == "8'-6\""

    def test_rounds_up_to_next_foot(self):
        assert fmt_feet_inches(3.99) == "4'-0\""

    def test_three_and_a_half(self):
        assert fmt_feet_inches(3.5) == "3'-6\""


def test_fmt_area_rounds():
    assert fmt_area(99.6) == "100 sq ft"
    assert fmt_area(100.5) == "101 sq ft"


def test_round_half_up():
    assert [round_half_up(v) for v in (0.5, 1.5, 2.5, 2.49, -0.5)] == [1, 2, 3, 2, 0]
