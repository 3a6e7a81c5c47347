import math

from settings import EPSILON
from sight.geometry import as_point


def point_in_polygon(x, y, polygon):
    """Ray-casting point-in-polygon test."""
    n = len(polygon)
    inside = False
    j = n - 1
    for i in range(n):
        xi, yi = polygon[i]
        xj, yj = polygon[j]
        if ((yi > y) != (yj > y)) and (x < (xj - xi) * (y - yi) / (yj - yi) + xi):
            inside = not inside
        j = i
    return inside


class VisibilityPolygon:
    """Region visible from ``observer``: a fan of vertices sorted by angle.

    Fewer than three vertices is a valid, degenerate result (an empty map,
    or a single visible corner). Callers must tolerate it.
    """

    __slots__ = ("observer", "vertices", "max_range")

    def __init__(self, observer, vertices, max_range):
        self.observer = as_point(observer)
        self.vertices = tuple(vertices)
        self.max_range = max_range

    def __len__(self):
        return len(self.vertices)

    def __iter__(self):
        return iter(self.vertices)

    def __getitem__(self, index):
        return self.vertices[index]

    def __repr__(self):
        return (f"VisibilityPolygon(observer=({self.observer.x}, {self.observer.y}), "
                f"{len(self.vertices)} vertices)")

    @property
    def is_degenerate(self):
        return len(self.vertices) < 3

    def triangles(self):
        """Triangle fan ``(observer, p_i, p_i+1)``, closed by ``(observer, p_last, p_0)``."""
        if self.is_degenerate:
            return []
        pts = self.vertices
        fan = [(self.observer, pts[i], pts[i + 1]) for i in range(len(pts) - 1)]
        fan.append((self.observer, pts[-1], pts[0]))
        return fan

    def contains(self, point):
        if self.is_degenerate:
            return False
        x, y = as_point(point)
        return point_in_polygon(x, y, self.vertices)

    def area(self):
        """Shoelace area of the vertex outline."""
        pts = self.vertices
        if len(pts) < 3:
            return 0.0
        total = 0.0
        for i, (x0, y0) in enumerate(pts):
            x1, y1 = pts[(i + 1) % len(pts)]
            total += x0 * y1 - x1 * y0
        return abs(total) / 2

    def to_dict(self):
        return {
            "observer": [self.observer.x, self.observer.y],
            "max_range": self.max_range,
            "vertices": [[p.x, p.y] for p in self.vertices],
        }


def assemble(observer, angle_hits, max_range, tolerance=EPSILON):
    """Order ``(angle, hit)`` pairs into a VisibilityPolygon.

    Sorted by angle, nearer hit first on equal angles; of several hits within
    ``tolerance`` of one angle only the first is kept. No other merging.
    """
    ordered = sorted(angle_hits, key=lambda item: (item[0], item[1].distance))

    vertices = []
    last_angle = -math.inf
    for angle, hit in ordered:
        if angle - last_angle <= tolerance:
            continue
        vertices.append(hit.point)
        last_angle = angle

    return VisibilityPolygon(observer, vertices, max_range)
