"""Tests for walls/resolver.py and walls/labels.py."""
import pytest
from shared.geometry import point_in_polygon
from shared.types import Door, Window
from floorplan.entities import make_room
from walls.resolver import (
    classify_edge, opening_on_edge, wall_tolerance, effective_length,
    wall_segments, split_segment, render_segments, segment_length_ft,
    _solid_ranges, WallOpening,
)
from walls.labels import layout_room_labels, layout_segment_labels, outward_normal
from conftest import square


def _door(x, y, width=3, rotation=0, kind="opening", did="d1"):
    return Door(did, kind, (x, y), rotation, width)


def _window(x, y, width=3, rotation=0, wid="w1"):
    return Window(wid, "standard", (x, y), rotation, width, 4, 3.0)


@pytest.fixture
def room10(cfg, g):
    """10x10 ft room with its top-left corner at (10, 10) ft."""
    return make_room("bedroom", square(10, 10, 10, g), (), cfg)


# ============================================================
# Helper unit tests
# ============================================================

class TestSolidRanges:
    def test_no_cuts(self):
        assert _solid_ranges([], 0, 10) == [(0, 10)]

    def test_one_cut_in_middle(self):
        assert _solid_ranges([(3, 7)], 0, 10) == [(0, 3), (7, 10)]

    def test_cut_at_start(self):
        assert _solid_ranges([(0, 5)], 0, 10) == [(5, 10)]

    def test_overlapping_cuts(self):
        assert _solid_ranges([(2, 5), (4, 6), (8, 9)], 0, 10) == [(0, 2), (6, 8), (9, 10)]

    def test_cut_past_end(self):
        assert _solid_ranges([(8, 12)], 0, 10) == [(0, 8)]


class TestClassify:
    def test_horizontal(self):
        assert classify_edge((0, 5), (10, 5.2), 1) == "H"

    def test_vertical(self):
        assert classify_edge((3, 0), (3, 10), 1) == "V"

    def test_diagonal(self):
        assert classify_edge((0, 0), (10, 10), 1) == "D"


class TestOpeningOnEdge:
    def test_aligned(self, g):
        assert opening_on_edge(_door(5*g, 0), (0, 0), (10*g, 0), "H", g/4)

    def test_off_axis_beyond_tolerance(self, g):
        assert not opening_on_edge(_door(5*g, g/2), (0, 0), (10*g, 0), "H", g/4)

    def test_orientation_mismatch(self, g):
        assert not opening_on_edge(_door(5*g, 0, rotation=90), (0, 0), (10*g, 0), "H", g/4)

    def test_vertical_wall(self, g):
        assert opening_on_edge(_door(0, 5*g, rotation=270), (0, 10*g), (0, 0), "V", g/4)

    def test_span_inclusive_with_tolerance(self, g):
        assert opening_on_edge(_door(10.2*g, 0), (0, 0), (10*g, 0), "H", g/4)
        assert not opening_on_edge(_door(10.5*g, 0), (0, 0), (10*g, 0), "H", g/4)

    def test_diagonal_never(self, g):
        assert not opening_on_edge(_door(5*g, 5*g), (0, 0), (10*g, 10*g), "D", g/4)


def test_tolerance_quarter_grid(cfg):
    assert wall_tolerance(cfg) == pytest.approx(cfg.grid_size/4)


def test_effective_length_clamped():
    ops = [WallOpening("a", "door", "single", (0, 0), 6, 0, 1),
           WallOpening("b", "door", "single", (0, 0), 6, 0, 1)]
    assert effective_length(10, ops) == 0.0


# ============================================================
# Wall segments
# ============================================================

class TestWallSegments:
    def test_centered_opening_on_ten_foot_wall(self, cfg, g, room10):
        door = _door(15*g, 10*g, width=3)
        top = wall_segments(room10, [door], [], cfg)[0]
        assert top.orientation == "H"
        assert top.length_ft == pytest.approx(10)
        assert top.effective_length_ft == pytest.approx(7)
        pieces = split_segment(top)
        assert len(pieces) == 2
        assert [segment_length_ft(p, cfg) for p in pieces] == pytest.approx([3.5, 3.5])

    def test_no_openings_one_piece_per_edge(self, cfg, room10):
        pieces = render_segments(room10, [], [], cfg)
        assert len(pieces) == 4
        assert pieces[0] == (room10.vertices[0], room10.vertices[1])

    def test_window_reduces_length_but_does_not_cut(self, cfg, g, room10):
        segs = wall_segments(room10, [], [_window(15*g, 20*g, width=4)], cfg)
        bottom = segs[2]
        assert bottom.effective_length_ft == pytest.approx(6)
        assert split_segment(bottom) == [(bottom.start, bottom.end)]

    def test_single_door_does_not_cut(self, cfg, g, room10):
        seg = wall_segments(room10, [_door(15*g, 10*g, kind="single")], [], cfg)[0]
        assert seg.effective_length_ft == pytest.approx(7)
        assert len(split_segment(seg)) == 1

    def test_vertical_wall_cut(self, cfg, g, room10):
        door = _door(20*g, 12*g, width=2, rotation=90)
        right = wall_segments(room10, [door], [], cfg)[1]
        assert right.orientation == "V"
        pieces = split_segment(right)
        assert [segment_length_ft(p, cfg) for p in pieces] == pytest.approx([1, 7])

    def test_misaligned_opening_excluded_everywhere(self, cfg, g, room10):
        door = _door(15*g, 10.5*g)
        segs = wall_segments(room10, [door], [], cfg)
        assert all(not s.openings for s in segs)
        assert all(s.effective_length_ft == pytest.approx(10) for s in segs)

    def test_openings_sorted_along_wall(self, cfg, g, room10):
        doors = [_door(18*g, 10*g, width=2, did="b"), _door(12*g, 10*g, width=2, did="a")]
        seg = wall_segments(room10, doors, [], cfg)[0]
        assert [o.id for o in seg.openings] == ["a", "b"]
        assert [segment_length_ft(p, cfg) for p in split_segment(seg)] == pytest.approx([1, 4, 1])

    def test_diagonal_edge_uncut(self, cfg, g):
        tri = make_room("other", ((10*g, 10*g), (20*g, 10*g), (10*g, 20*g)), (), cfg)
        segs = wall_segments(tri, [_door(15*g, 15*g, rotation=0)], [], cfg)
        assert segs[1].orientation == "D"
        assert segs[1].openings == ()
        assert len(split_segment(segs[1])) == 1


# ============================================================
# Labels
# ============================================================

class TestOutwardNormal:
    def test_top_wall_points_up(self):
        assert outward_normal((0, 0), (10, 0), (5, 5)) == pytest.approx((0, -1))

    def test_left_wall_points_left(self):
        assert outward_normal((0, 10), (0, 0), (5, 5)) == pytest.approx((-1, 0))

    def test_winding_independent(self):
        assert outward_normal((10, 0), (0, 0), (5, 5)) == pytest.approx((0, -1))


class TestLabels:
    def test_wall_labels_outside_room(self, cfg, room10):
        labels = layout_room_labels(room10, wall_segments(room10, [], [], cfg))
        assert len(labels) == 4
        assert all(lbl.kind == "wall" and lbl.text == "10'-0\"" for lbl in labels)
        assert all(not point_in_polygon(lbl.position, room10.vertices) for lbl in labels)

    def test_top_label_offset(self, cfg, g, room10):
        top = wall_segments(room10, [], [], cfg)[0]
        (lbl,) = layout_segment_labels(room10, top)
        assert lbl.position == pytest.approx((15*g, 10*g-15))
        assert lbl.rotation == 0

    def test_vertical_label_rotated(self, cfg, g, room10):
        right = wall_segments(room10, [], [], cfg)[1]
        (lbl,) = layout_segment_labels(room10, right)
        assert lbl.rotation == 90
        assert lbl.position == pytest.approx((20*g+15, 15*g))

    def test_offsets_scale_with_zoom(self, cfg, g, room10):
        top = wall_segments(room10, [], [], cfg)[0]
        (lbl,) = layout_segment_labels(room10, top, zoom=2.0)
        assert lbl.position == pytest.approx((15*g, 10*g-7.5))

    def test_colliding_opening_label_pushed(self, cfg, g, room10):
        top = wall_segments(room10, [_door(15*g, 10*g)], [], cfg)[0]
        wall, opening = layout_segment_labels(room10, top)
        assert wall.text == "7'-0\""
        assert opening.kind == "opening" and opening.text == "3'-0\""
        assert opening.position == pytest.approx((15*g, 10*g-18*2.5))

    def test_vertical_wall_opening_label_pushed(self, cfg, g, room10):
        right = wall_segments(room10, [_door(20*g, 15*g, rotation=90)], [], cfg)[1]
        _, opening = layout_segment_labels(room10, right)
        assert opening.position == pytest.approx((20*g+18*2.5, 15*g))

    def test_vertical_wall_along_threshold_in_screen_y(self, cfg, g, room10):
        # 73 px above the wall label: outside the 70 px along-wall window
        right = wall_segments(room10, [_door(20*g, 15*g-73, rotation=90)], [], cfg)[1]
        _, opening = layout_segment_labels(room10, right)
        assert opening.position == pytest.approx((20*g+18, 15*g-73))

    def test_distant_opening_label_not_pushed(self, cfg, g):
        big = make_room("living", square(10, 10, 20, g), (), cfg)
        top = wall_segments(big, [_door(12*g, 10*g)], [], cfg)[0]
        _, opening = layout_segment_labels(big, top)
        assert opening.position == pytest.approx((12*g, 10*g-18))

    def test_fully_opened_wall_has_no_wall_label(self, cfg, g):
        small = make_room("closet", square(10, 10, 4, g), (), cfg)
        top = wall_segments(small, [_door(12*g, 10*g, width=4)], [], cfg)[0]
        labels = layout_segment_labels(small, top)
        assert [lbl.kind for lbl in labels] == ["opening"]
        assert labels[0].position == pytest.approx((12*g, 10*g-18))

    def test_diagonal_label_outside(self, cfg, g):
        tri = make_room("other", ((10*g, 10*g), (20*g, 10*g), (10*g, 20*g)), (), cfg)
        diag = wall_segments(tri, [], [], cfg)[1]
        (lbl,) = layout_segment_labels(tri, diag)
        assert not point_in_polygon(lbl.position, tri.vertices)
        assert lbl.rotation == pytest.approx(-45)
