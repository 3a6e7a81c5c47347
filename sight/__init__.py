from sight.errors import DegenerateObserverError, InvalidGeometryError, SightError
from sight.geometry import (
    Hit,
    IntersectionStatus,
    Point,
    Ray,
    Segment,
    intersect,
    segment_intersection,
)
from sight.obstacles import Endpoint, ObstacleSet, build_obstacles
from sight.angles import Sample, sample, sample_angles
from sight.caster import cast, cast_all, cast_samples
from sight.polygon import VisibilityPolygon, assemble, point_in_polygon
from sight.visibility import compute_visibility

__all__ = [
    "DegenerateObserverError",
    "InvalidGeometryError",
    "SightError",
    "Hit",
    "IntersectionStatus",
    "Point",
    "Ray",
    "Segment",
    "intersect",
    "segment_intersection",
    "Endpoint",
    "ObstacleSet",
    "build_obstacles",
    "Sample",
    "sample",
    "sample_angles",
    "cast",
    "cast_all",
    "cast_samples",
    "VisibilityPolygon",
    "assemble",
    "point_in_polygon",
    "compute_visibility",
]
