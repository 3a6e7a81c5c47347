"""
End-to-end tests for compute_visibility.
"""

import math

import pytest

from sight import InvalidGeometryError, ObstacleSet, Point, compute_visibility
from sight.geometry import TAU

SQUARE = [((0, 0), (10, 0)), ((10, 0), (10, 10)), ((10, 10), (0, 10)), ((0, 10), (0, 0))]


def vertex_angles(polygon):
    ox, oy = polygon.observer
    return [math.atan2(y - oy, x - ox) % TAU for x, y in polygon.vertices]


def strictly_increasing(values):
    return all(b > a for a, b in zip(values, values[1:]))


class TestScenarios:
    def test_single_wall_in_front(self):
        polygon = compute_visibility((0, 0), [((2, -1), (2, 1))], max_range=10)
        points = polygon.vertices

        assert Point(2.0, 1.0) in points
        assert Point(2.0, -1.0) in points
        far = [p for p in points if p not in (Point(2.0, 1.0), Point(2.0, -1.0))]
        assert far
        assert all(math.hypot(*p) == pytest.approx(10.0) for p in far)
        assert strictly_increasing(vertex_angles(polygon))

    def test_single_wall_open_side_is_visible(self):
        polygon = compute_visibility((0, 0), [((2, -1), (2, 1))], max_range=10)
        assert polygon.contains((-5, 0))
        assert polygon.contains((0, 5))
        assert polygon.contains((3, 4))
        assert not polygon.contains((5, 0))
        assert polygon.area() > 150

    def test_walls_out_of_range_still_enclose_observer(self):
        polygon = compute_visibility((0, 0), [((50, -1), (50, 1))], max_range=10)
        for point in [(5, 0), (0, 5), (-5, 0), (0, -5)]:
            assert polygon.contains(point)
        assert not polygon.contains((11, 0))
        assert strictly_increasing(vertex_angles(polygon))

    def test_bounding_square_gives_its_corners(self):
        polygon = compute_visibility((3, 4), SQUARE, max_range=100)
        assert polygon.vertices == (
            Point(10.0, 10.0), Point(0.0, 10.0), Point(0.0, 0.0), Point(10.0, 0.0),
        )
        assert polygon.area() == pytest.approx(100.0)

    def test_no_obstacles_gives_empty_polygon(self):
        polygon = compute_visibility((1, 1), [], max_range=10)
        assert len(polygon) == 0
        assert polygon.is_degenerate

    def test_observer_on_endpoint_skips_that_angle(self):
        polygon = compute_visibility((2, 1), [((2, -1), (2, 1))], max_range=10)
        assert len(polygon) >= 1
        assert all(math.isfinite(c) for p in polygon.vertices for c in p)

    def test_observer_on_shared_corner_inside_square(self):
        polygon = compute_visibility((0, 0), SQUARE, max_range=100)
        assert len(polygon) >= 1

    def test_corner_occludes_far_wall(self):
        obstacles = ObstacleSet.build([((3, 3), (6, 3)), ((1, 1), (1, 3))])
        polygon = compute_visibility((0, 0), obstacles, max_range=100)
        points = polygon.vertices

        corner = points.index(Point(1.0, 1.0))
        before = points[corner - 1]
        assert before.y == pytest.approx(3.0)
        assert before.x > 3.0
        assert strictly_increasing(vertex_angles(polygon))

    def test_occluded_point_not_visible(self):
        walls = SQUARE + [((4, 2), (4, 8))]
        polygon = compute_visibility((2, 5), walls, max_range=100)
        assert polygon.contains((3, 5))
        assert not polygon.contains((8, 5))
        # past the wall's top end, only the wedge left of the shadow line is lit
        assert polygon.contains((4.5, 9.5))
        assert not polygon.contains((8, 9.5))


class TestProperties:
    rooms = ObstacleSet.from_rects(
        [(3, 3, 4, 2), (12, 6, 2, 8), (5, 12, 3, 3), (15, 2, 1, 1)], bounds=(20, 20))

    @pytest.mark.parametrize("observer", [(1, 1), (10, 10), (2.5, 17.3), (19, 0.5), (9, 5)])
    def test_vertices_strictly_increasing_in_angle(self, observer):
        polygon = compute_visibility(observer, self.rooms, max_range=50)
        assert len(polygon) >= 3
        assert strictly_increasing(vertex_angles(polygon))

    @pytest.mark.parametrize("observer", [(1, 1), (10, 10), (2.5, 17.3)])
    def test_repeat_is_bit_identical(self, observer):
        first = compute_visibility(observer, self.rooms, max_range=50)
        second = compute_visibility(observer, self.rooms, max_range=50)
        assert first.vertices == second.vertices

    def test_vertices_stay_within_range(self):
        polygon = compute_visibility((10, 10), self.rooms, max_range=6)
        assert all(math.hypot(x - 10, y - 10) <= 6 + 1e-9 for x, y in polygon)

    def test_accepts_vector_like_observer(self):
        class Vec:
            x = 1.0
            y = 1.0

        by_tuple = compute_visibility((1.0, 1.0), self.rooms, max_range=50)
        by_attr = compute_visibility(Vec(), self.rooms, max_range=50)
        assert by_tuple.vertices == by_attr.vertices


class TestValidation:
    def test_degenerate_segment_rejected_before_computing(self):
        with pytest.raises(InvalidGeometryError):
            compute_visibility((0, 0), [((1, 1), (1, 1))], max_range=10)

    def test_bad_max_range(self):
        with pytest.raises(ValueError):
            compute_visibility((0, 0), SQUARE, max_range=0)

    def test_angle_epsilon_must_exceed_epsilon(self):
        with pytest.raises(ValueError):
            compute_visibility((5, 5), SQUARE, max_range=10, epsilon=1e-3, angle_epsilon=1e-4)
