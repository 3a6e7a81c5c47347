import logging
import math
from typing import NamedTuple

from settings import EPSILON
from sight.errors import InvalidGeometryError
from sight.geometry import (
    IntersectionStatus,
    Point,
    Segment,
    as_point,
    segment_intersection,
)

logger = logging.getLogger(__name__)


class Endpoint(NamedTuple):
    point: Point
    segment_index: int
    end: int  # 0 -> segment.a, 1 -> segment.b


def _coerce_segment(raw, index):
    """Accept a Segment, ((x0, y0), (x1, y1)) or (x0, y0, x1, y1)."""
    try:
        if len(raw) == 4:
            x0, y0, x1, y1 = raw
            a, b = Point(float(x0), float(y0)), Point(float(x1), float(y1))
        else:
            start, end = raw
            a, b = as_point(start), as_point(end)
    except (TypeError, ValueError) as exc:
        raise InvalidGeometryError(
            f"segment {index} is not a pair of points: {raw!r}", index
        ) from exc

    if not all(math.isfinite(v) for v in (a.x, a.y, b.x, b.y)):
        raise InvalidGeometryError(
            f"segment {index} has a non-finite coordinate: {raw!r}", index
        )
    return Segment(a, b)


def _rect_edges(rect):
    if hasattr(rect, "width"):
        x, y, w, h = rect.x, rect.y, rect.width, rect.height
    else:
        x, y, w, h = rect
    corners = [(x, y), (x + w, y), (x + w, y + h), (x, y + h)]
    return [(corners[i], corners[(i + 1) % 4]) for i in range(4)]


class ObstacleSet:
    """Ordered, read-only collection of opaque wall segments.

    Build it with ``build`` or ``from_rects``, once per map. Iteration order
    is insertion order with duplicates removed; ray casting and angle
    sampling break ties on it, so equal input always gives equal output.
    """

    __slots__ = ("_segments",)

    def __init__(self, segments=()):
        self._segments = tuple(segments)

    @classmethod
    def build(cls, raw_segments, epsilon=EPSILON):
        """Validate and deduplicate ``raw_segments``.

        Raises InvalidGeometryError on a zero-length or malformed segment.
        A segment and its reverse count as the same wall; the first one wins.
        """
        segments = []
        seen = set()
        dropped = 0
        for index, raw in enumerate(raw_segments):
            segment = _coerce_segment(raw, index)
            if segment.length() <= epsilon:
                raise InvalidGeometryError(
                    f"segment {index} has zero length at ({segment.a.x}, {segment.a.y})",
                    index,
                )
            key = frozenset(segment)
            if key in seen:
                dropped += 1
                continue
            seen.add(key)
            segments.append(segment)

        if dropped:
            logger.debug("Dropped %d duplicate segment(s)", dropped)
        return cls(segments)

    @classmethod
    def from_rects(cls, rects, bounds=None, epsilon=EPSILON):
        """Edges of axis-aligned rects (pygame.Rect or (x, y, w, h)).

        ``bounds=(width, height)`` adds the map boundary after the rects.
        """
        raw = []
        for r in rects:
            raw.extend(_rect_edges(r))
        if bounds is not None:
            width, height = bounds
            raw.extend(_rect_edges((0, 0, width, height)))
        return cls.build(raw, epsilon)

    # -------------------------
    # Access
    # -------------------------

    @property
    def segments(self):
        return self._segments

    def __len__(self):
        return len(self._segments)

    def __iter__(self):
        return iter(self._segments)

    def __getitem__(self, index):
        return self._segments[index]

    def __repr__(self):
        return f"ObstacleSet({len(self._segments)} segments)"

    def endpoints(self):
        """Yield both endpoints of every segment, tagged with their owner."""
        for index, segment in enumerate(self._segments):
            yield Endpoint(segment.a, index, 0)
            yield Endpoint(segment.b, index, 1)

    def corners(self):
        """Distinct endpoint points in first-seen order."""
        seen = set()
        result = []
        for endpoint in self.endpoints():
            if endpoint.point not in seen:
                seen.add(endpoint.point)
                result.append(endpoint.point)
        return result

    def collinear_pairs(self, epsilon=EPSILON):
        """Index pairs of segments lying on one line and touching or overlapping."""
        pairs = []
        for i, first in enumerate(self._segments):
            for j in range(i + 1, len(self._segments)):
                status, _ = segment_intersection(first, self._segments[j], epsilon)
                if status is IntersectionStatus.COLLINEAR_INTERSECTING:
                    pairs.append((i, j))
        return pairs


def build_obstacles(raw_segments, epsilon=EPSILON):
    return ObstacleSet.build(raw_segments, epsilon)
