import random

from settings import MAP_TILES_H, MAP_TILES_W, TILE_SIZE, WALL_CHANCE
from maps.map_base import MapBase


class TileMap(MapBase):
    """Square grid where every tile is independently a wall with ``wall_chance``.

    ``tiles[row][col]`` is True for walls. Walls of neighbouring tiles share
    edges; the obstacle set keeps one copy of each.
    """

    def __init__(self, cols=MAP_TILES_W, rows=MAP_TILES_H, tile_size=TILE_SIZE,
                 wall_chance=WALL_CHANCE, seed=None):
        super().__init__(width=cols * tile_size, height=rows * tile_size)
        self.tile_size = tile_size

        rng = random.Random(seed)
        self.tiles = [[rng.random() < wall_chance for _ in range(cols)]
                      for _ in range(rows)]

        for row, line in enumerate(self.tiles):
            for col, is_wall in enumerate(line):
                if is_wall:
                    self.add_wall((col * tile_size, row * tile_size, tile_size, tile_size))
