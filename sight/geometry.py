import math
from enum import Enum
from typing import NamedTuple, Optional

from settings import EPSILON
from sight.errors import DegenerateObserverError

TAU = 2 * math.pi


class Point(NamedTuple):
    x: float
    y: float


class Segment(NamedTuple):
    a: Point
    b: Point

    def length(self):
        return math.hypot(self.b.x - self.a.x, self.b.y - self.a.y)

    def reversed(self):
        return Segment(self.b, self.a)


class Ray(NamedTuple):
    """Half-line ``origin + t * (dx, dy)`` for t >= 0, with (dx, dy) unit length."""
    origin: Point
    dx: float
    dy: float
    angle: float

    @classmethod
    def from_angle(cls, origin, angle):
        return cls(as_point(origin), math.cos(angle), math.sin(angle), angle)

    @classmethod
    def towards(cls, origin, target, epsilon=EPSILON):
        origin = as_point(origin)
        return cls.from_angle(origin, angle_to(origin, target, epsilon))

    def point_at(self, t):
        return Point(self.origin.x + self.dx * t, self.origin.y + self.dy * t)


class Hit(NamedTuple):
    point: Point
    distance: float
    segment: Optional[Segment] = None  # None for a max-range fallback


class IntersectionStatus(Enum):
    INTERSECTING = "intersecting"
    COLLINEAR_INTERSECTING = "collinear_intersecting"
    COLLINEAR_DISJOINT = "collinear_disjoint"
    DISJOINT = "disjoint"


def as_point(value):
    """Coerce an (x, y) pair, or anything with .x/.y (pygame.Vector2), to a Point."""
    if isinstance(value, Point):
        return value
    if hasattr(value, "x") and hasattr(value, "y"):
        return Point(float(value.x), float(value.y))
    x, y = value
    return Point(float(x), float(y))


def distance(p, q):
    return math.hypot(q[0] - p[0], q[1] - p[1])


def normalize_angle(angle):
    """Map an angle in radians onto [0, 2*pi)."""
    angle = angle % TAU
    # a tiny negative angle rounds up to exactly TAU
    if angle >= TAU:
        angle = 0.0
    return angle


def angle_to(origin, point, epsilon=EPSILON):
    """Angle of ``point`` seen from ``origin``, in (-pi, pi]."""
    dx = point[0] - origin[0]
    dy = point[1] - origin[1]
    if math.hypot(dx, dy) <= epsilon:
        raise DegenerateObserverError(
            f"point ({point[0]}, {point[1]}) coincides with the observer"
        )
    return math.atan2(dy, dx)


def intersect(ray, segment, epsilon=EPSILON):
    """Intersect ``ray`` with ``segment``.

    Solves ``origin + t*dir = a + u*(b - a)`` for t >= 0 and u in [0, 1]
    (both within ``epsilon``). Parallel and collinear pairs count as no hit.
    Hits within ``epsilon`` of an endpoint snap onto that endpoint, so a ray
    through a corner shared by two segments lands on the same point for both.

    Returns a Hit or None.
    """
    (ax, ay), (bx, by) = segment
    ox, oy = ray.origin
    sdx = bx - ax
    sdy = by - ay

    denom = ray.dx * sdy - ray.dy * sdx
    if abs(denom) <= epsilon * math.hypot(sdx, sdy):
        return None

    qx = ax - ox
    qy = ay - oy
    t = (qx * sdy - qy * sdx) / denom
    u = (qx * ray.dy - qy * ray.dx) / denom

    if t < -epsilon or u < -epsilon or u > 1 + epsilon:
        return None

    if abs(u) <= epsilon:
        point = Point(float(ax), float(ay))
        return Hit(point, distance(ray.origin, point), segment)
    if abs(u - 1) <= epsilon:
        point = Point(float(bx), float(by))
        return Hit(point, distance(ray.origin, point), segment)

    t = max(t, 0.0)
    return Hit(Point(ox + ray.dx * t, oy + ray.dy * t), t, segment)


def segment_intersection(s0, s1, epsilon=EPSILON):
    """Classify how two segments meet.

    With p = s0.a, r = s0.b - s0.a, q = s1.a, s = s1.b - s1.a:

    - r x s == 0 and (q - p) x r == 0: collinear. They touch or overlap when
      the projection of s1 onto s0, [t0, t1], meets [0, 1].
    - r x s == 0 otherwise: parallel, disjoint.
    - else t = (q - p) x s / (r x s), u = (q - p) x r / (r x s) and the
      segments cross at p + t*r when both lie in [0, 1].

    Returns ``(status, point)``; point is only set for INTERSECTING.
    """
    p, q = s0.a, s1.a
    rx, ry = s0.b.x - p.x, s0.b.y - p.y
    sx, sy = s1.b.x - q.x, s1.b.y - q.y
    qpx, qpy = q.x - p.x, q.y - p.y

    r_len = math.hypot(rx, ry)
    r_cross_s = rx * sy - ry * sx
    qp_cross_r = qpx * ry - qpy * rx

    if abs(r_cross_s) <= epsilon * r_len * math.hypot(sx, sy):
        if abs(qp_cross_r) > epsilon * r_len * max(r_len, 1.0):
            return IntersectionStatus.DISJOINT, None
        rr = rx * rx + ry * ry
        t0 = (qpx * rx + qpy * ry) / rr
        t1 = t0 + (sx * rx + sy * ry) / rr
        lo, hi = min(t0, t1), max(t0, t1)
        if hi >= -epsilon and lo <= 1 + epsilon:
            return IntersectionStatus.COLLINEAR_INTERSECTING, None
        return IntersectionStatus.COLLINEAR_DISJOINT, None

    t = (qpx * sy - qpy * sx) / r_cross_s
    u = (qpx * ry - qpy * rx) / r_cross_s
    if -epsilon <= t <= 1 + epsilon and -epsilon <= u <= 1 + epsilon:
        return IntersectionStatus.INTERSECTING, Point(p.x + rx * t, p.y + ry * t)
    return IntersectionStatus.DISJOINT, None
