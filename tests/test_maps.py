"""
Tests for the map layer: regions, JSON loading, tile maps.
"""

import json

import pytest

from maps import Lvl1Map, MapBase, TileMap
from maps.region_base import FloorRegion, WallRegion


class TestMapBase:
    def test_obstacles_are_opaque_regions_plus_bounds(self):
        m = MapBase(100, 100)
        m.add_wall((40, 40, 10, 10))
        m.add_region(FloorRegion((10, 10, 20, 20), "water"))
        assert len(m.obstacles) == 8

    def test_obstacles_cached_until_regions_change(self):
        m = MapBase(100, 100)
        first = m.obstacles
        assert m.obstacles is first
        m.add_region(FloorRegion((10, 10, 5, 5), "pillar"))
        assert m.obstacles is not first
        assert len(m.obstacles) == 8

    def test_unknown_region_type(self):
        with pytest.raises(KeyError):
            FloorRegion((0, 0, 5, 5), "cloud")

    def test_is_visible_before_and_after_update(self):
        m = MapBase(100, 100)
        m.add_wall((50, 0, 10, 80))
        assert m.is_visible(90, 40)

        polygon = m.update_visibility((20, 40))
        assert m.visibility_polygon is polygon
        assert polygon.max_range == pytest.approx(m.max_range)
        assert m.is_visible(30, 40)
        assert not m.is_visible(90, 40)
        # passes under the wall's bottom end
        assert m.is_visible(60, 98)

    def test_blocked_at(self):
        m = MapBase(100, 100)
        m.add_wall((50, 0, 10, 80))
        m.add_region(FloorRegion((0, 0, 20, 20), "grass"))
        assert m.blocked_at(55, 10)
        assert not m.blocked_at(5, 5)

    def test_wall_region_is_opaque(self):
        assert WallRegion((0, 0, 1, 1)).opaque
        assert not FloorRegion((0, 0, 1, 1), "stone").opaque


class TestFromJson:
    def test_top_level_regions(self, tmp_path):
        path = tmp_path / "room.json"
        path.write_text(json.dumps({
            "width": 200,
            "height": 100,
            "wall_regions": [{"x": 50, "y": 20, "w": 10, "h": 60}],
            "floor_regions": [{"type": "lava", "x": 100, "y": 10, "w": 30, "h": 30}],
        }))
        m = MapBase.from_json(str(path))
        assert (m.width, m.height) == (200, 100)
        assert len(m.regions) == 2
        assert len(m.obstacles) == 8

    def test_layered_editor_format(self, tmp_path):
        path = tmp_path / "layers.json"
        path.write_text(json.dumps({
            "width": 100,
            "height": 100,
            "layers": [
                {"elevation": 0, "bg_color": [0, 0, 0],
                 "wall_regions": [{"x": 10, "y": 10, "w": 5, "h": 5}],
                 "floor_regions": []},
                {"elevation": 1, "bg_color": [0, 0, 0],
                 "wall_regions": [], "floor_regions": []},
            ],
        }))
        assert len(MapBase.from_json(str(path)).regions) == 1
        assert len(MapBase.from_json(str(path), elevation=1).regions) == 0
        with pytest.raises(ValueError):
            MapBase.from_json(str(path), elevation=5)

    def test_missing_size(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"wall_regions": []}))
        with pytest.raises(KeyError):
            MapBase.from_json(str(path))


class TestTileMap:
    def test_same_seed_same_map(self):
        assert TileMap(seed=7).tiles == TileMap(seed=7).tiles

    def test_shared_tile_edges_deduplicated(self):
        m = TileMap(cols=2, rows=1, tile_size=32, wall_chance=1.0)
        assert (m.width, m.height) == (64, 32)
        # 7 distinct tile edges, plus the 2 map bounds no tile edge repeats
        assert len(m.obstacles) == 9

    def test_empty_map_is_just_bounds(self):
        m = TileMap(cols=4, rows=4, wall_chance=0.0)
        assert m.regions == []
        polygon = m.update_visibility((10, 20))
        assert len(polygon) == 4


def test_lvl1_map_computes_visibility():
    m = Lvl1Map()
    polygon = m.update_visibility((512, 400))
    assert len(polygon) >= 3
    assert m.is_visible(512, 300)
    # behind the enclosure's top wall
    assert not m.is_visible(700, 700)
