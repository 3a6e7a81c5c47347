import pygame

from data.region_stats import REGION_STATS


class MapRegion:
    def __init__(self, rect, region_type):
        self.rect = pygame.Rect(rect)
        self.region_type = region_type
        self.opaque = REGION_STATS[region_type]["opaque"]

    def contains_point(self, x, y):
        return self.rect.collidepoint(x, y)


class WallRegion(MapRegion):
    def __init__(self, rect):
        super().__init__(rect, "wall")


class FloorRegion(MapRegion):
    """Walkable region; blocks sight only if its type is opaque (e.g. pillar)."""
