import math

from settings import EPSILON, MAX_RANGE
from sight.geometry import TAU, Hit, Ray, as_point, intersect, normalize_angle

# widest angle two neighbouring max-range vertices may span
ARC_STEP = math.pi / 2


def check_range(max_range):
    if not math.isfinite(max_range) or max_range <= 0:
        raise ValueError(f"max_range must be a positive finite number, got {max_range!r}")


def _nearest(ray, obstacles, max_range, epsilon):
    closest = None
    for segment in obstacles:
        hit = intersect(ray, segment, epsilon)
        if hit is None or hit.distance > max_range:
            continue
        # equal distances: the earlier segment keeps the hit
        if closest is None or hit.distance < closest.distance - epsilon:
            closest = hit

    if closest is None:
        return Hit(ray.point_at(max_range), max_range)
    return closest


def cast(observer, angle, obstacles, max_range=MAX_RANGE, epsilon=EPSILON):
    """Nearest obstacle hit along ``angle``, or the point at ``max_range``."""
    check_range(max_range)
    return _nearest(Ray.from_angle(observer, angle), obstacles, max_range, epsilon)


def cast_all(observer, angles, obstacles, max_range=MAX_RANGE, epsilon=EPSILON):
    """``(angle, hit)`` for every angle, in input order."""
    check_range(max_range)
    observer = as_point(observer)
    return [
        (angle, _nearest(Ray.from_angle(observer, angle), obstacles, max_range, epsilon))
        for angle in angles
    ]


def _touches(hit, point, epsilon):
    tol = epsilon * max(1.0, hit.distance)
    a, b = hit.segment
    return (math.isclose(a.x, point.x, abs_tol=tol) and math.isclose(a.y, point.y, abs_tol=tol)) or \
           (math.isclose(b.x, point.x, abs_tol=tol) and math.isclose(b.y, point.y, abs_tol=tol))


def _close_open_arcs(observer, pairs, obstacles, max_range, epsilon):
    """Split wide gaps between neighbouring max-range hits with extra rays.

    Two rays that both ran out of range are joined by a chord. Past
    ARC_STEP apart the chord cuts off open ground, and past pi the fan
    closes around the wrong side of the observer.
    """
    n = len(pairs)
    filled = []
    for i, (angle, hit) in enumerate(pairs):
        filled.append((angle, hit))
        next_angle, next_hit = pairs[(i + 1) % n]
        if hit.segment is not None or next_hit.segment is not None:
            continue
        gap = (next_angle - angle) % TAU if n > 1 else TAU
        if gap < ARC_STEP:
            continue
        steps = int(gap // ARC_STEP) + 1
        for k in range(1, steps):
            extra = normalize_angle(angle + gap * k / steps)
            filled.append(
                (extra, _nearest(Ray.from_angle(observer, extra), obstacles, max_range, epsilon))
            )
    filled.sort(key=lambda item: item[0])
    return filled


def cast_samples(observer, samples, obstacles, max_range=MAX_RANGE, epsilon=EPSILON):
    """Cast every sampled angle and return ``(angle, hit)`` pairs by angle.

    An offset ray whose hit lies on a wall ending at the point the corner
    ray reached only adds a vertex collinear with that wall, and is dropped.
    Open stretches between max-range hits get a ray at least every ARC_STEP.
    """
    check_range(max_range)
    observer = as_point(observer)

    hits = [
        (s, _nearest(Ray.from_angle(observer, s.angle), obstacles, max_range, epsilon))
        for s in samples
    ]
    corner_hits = {s.base: hit for s, hit in hits if s.side == 0}

    result = []
    for s, hit in hits:
        if s.side and hit.segment is not None:
            corner_hit = corner_hits.get(s.base)
            if corner_hit is not None and _touches(hit, corner_hit.point, epsilon):
                continue
        result.append((s.angle, hit))
    return _close_open_arcs(observer, result, obstacles, max_range, epsilon)
