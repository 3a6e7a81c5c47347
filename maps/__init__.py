from maps.map_base import MapBase
from maps.lvl1_map import Lvl1Map
from maps.tile_map import TileMap

__all__ = ["MapBase", "Lvl1Map", "TileMap"]
