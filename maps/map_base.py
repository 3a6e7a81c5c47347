import json
import logging
import math

from settings import ANGLE_EPSILON, EPSILON
from maps.region_base import FloorRegion, WallRegion
from sight.obstacles import ObstacleSet
from sight.visibility import compute_visibility

logger = logging.getLogger(__name__)


class MapBase:
    def __init__(self, width, height):
        self.width = width
        self.height = height
        self.regions = []
        self._obstacles = None
        self._visibility_poly = None

    @classmethod
    def from_json(cls, path, elevation=0):
        """Construct a MapBase from a JSON file.

        Reads ``wall_regions`` / ``floor_regions`` at the top level, or from
        the entry of ``layers`` with the given ``elevation`` (editor format).
        """
        with open(path, "r") as f:
            data = json.load(f)

        map_obj = cls(width=data["width"], height=data["height"])

        layer_data = data
        if "layers" in data:
            layers = [l for l in data["layers"] if l.get("elevation", 0) == elevation]
            if not layers:
                raise ValueError(f"{path}: no layer with elevation {elevation}")
            layer_data = layers[0]

        for wr in layer_data.get("wall_regions", []):
            map_obj.add_region(WallRegion((wr["x"], wr["y"], wr["w"], wr["h"])))
        for fr in layer_data.get("floor_regions", []):
            map_obj.add_region(
                FloorRegion((fr["x"], fr["y"], fr["w"], fr["h"]), fr["type"])
            )

        return map_obj

    def add_region(self, region):
        self.regions.append(region)
        self._obstacles = None

    def add_wall(self, rect):
        self.add_region(WallRegion(rect))

    @property
    def max_range(self):
        """Diagonal of the map: no ray inside it can see further."""
        return math.hypot(self.width, self.height)

    @property
    def obstacles(self):
        """Edges of every opaque region plus the map boundary, built once."""
        if self._obstacles is None:
            rects = [r.rect for r in self.regions if r.opaque]
            self._obstacles = ObstacleSet.from_rects(rects, bounds=(self.width, self.height))
            logger.debug("Built %d obstacle segments from %d opaque regions",
                         len(self._obstacles), len(rects))
        return self._obstacles

    def blocked_at(self, x, y):
        return any(r.opaque and r.contains_point(x, y) for r in self.regions)

    def update_visibility(self, observer, max_range=None,
                          epsilon=EPSILON, angle_epsilon=ANGLE_EPSILON):
        """Compute and cache the visibility polygon for the current tick."""
        if max_range is None:
            max_range = self.max_range
        self._visibility_poly = compute_visibility(
            observer, self.obstacles, max_range, epsilon, angle_epsilon,
        )
        return self._visibility_poly

    @property
    def visibility_polygon(self):
        return self._visibility_poly

    def is_visible(self, x, y):
        """Check if a map-space point is inside the cached visibility polygon."""
        if self._visibility_poly is None:
            return True
        return self._visibility_poly.contains((x, y))
