import argparse
import importlib
import json
import logging
import sys

import pygame

from settings import ANGLE_EPSILON, EPSILON, LOG_FORMAT, LOG_LEVEL, WALK_STEPS

from maps import Lvl1Map, MapBase, TileMap

logger = logging.getLogger("main")


def load_map(name, seed=None):
    """Map from a JSON file, a ``maps/<name>_map.py`` module, or Lvl1Map."""
    if name and name.endswith(".json"):
        return MapBase.from_json(name)
    if name:
        mod = importlib.import_module(f"maps.{name}_map")
        # Find the map class: first class that is a subclass of MapBase
        map_cls = None
        for attr_name in dir(mod):
            attr = getattr(mod, attr_name)
            if isinstance(attr, type) and issubclass(attr, MapBase) and attr is not MapBase:
                map_cls = attr
                break
        if map_cls is None:
            raise ValueError(f"maps.{name}_map defines no map class")
        if issubclass(map_cls, TileMap):
            return map_cls(seed=seed)
        return map_cls()
    return Lvl1Map()


def walk(start, end, steps):
    """Observer positions from ``start`` to ``end``, one per tick."""
    start = pygame.Vector2(start)
    end = pygame.Vector2(end)
    if steps <= 1:
        return [start]
    return [start.lerp(end, i / (steps - 1)) for i in range(steps)]


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Compute visibility polygons for an observer moving through a map")
    parser.add_argument("--map", type=str, default=None,
                        help="JSON map file, or map module name (e.g. 'tile' for maps/tile_map.py)")
    parser.add_argument("--seed", type=int, default=None,
                        help="Random seed for generated maps")
    parser.add_argument("--observer", nargs=2, type=float, action="append",
                        metavar=("X", "Y"), help="Observer position (repeatable)")
    parser.add_argument("--walk", nargs=4, type=float, default=None,
                        metavar=("X0", "Y0", "X1", "Y1"),
                        help="Walk the observer along a straight line")
    parser.add_argument("--steps", type=int, default=WALK_STEPS,
                        help="Ticks along --walk")
    parser.add_argument("--max-range", type=float, default=None,
                        help="Ray length when nothing is hit (default: map diagonal)")
    parser.add_argument("--epsilon", type=float, default=EPSILON)
    parser.add_argument("--angle-epsilon", type=float, default=ANGLE_EPSILON)
    parser.add_argument("--json", action="store_true",
                        help="Print one JSON polygon per tick")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else LOG_LEVEL,
                        format=LOG_FORMAT)

    # -----------------------------
    # Load Map
    # -----------------------------
    try:
        current_map = load_map(args.map, args.seed)
        obstacles = current_map.obstacles
    except (OSError, ImportError, KeyError, ValueError) as exc:
        logger.error("Could not load map %r: %s", args.map, exc)
        return 1

    logger.info("Map %dx%d with %d obstacle segments",
                current_map.width, current_map.height, len(obstacles))
    if args.verbose:
        logger.debug("%d collinear segment pairs", len(obstacles.collinear_pairs()))

    # -----------------------------
    # Observer path
    # -----------------------------
    if args.observer:
        observers = [pygame.Vector2(x, y) for x, y in args.observer]
    elif args.walk:
        x0, y0, x1, y1 = args.walk
        observers = walk((x0, y0), (x1, y1), args.steps)
    else:
        mid = current_map.height / 2
        observers = walk((current_map.width * 0.25, mid),
                         (current_map.width * 0.75, mid), args.steps)

    # -----------------------------
    # Ticks
    # -----------------------------
    for tick, observer in enumerate(observers):
        if current_map.blocked_at(observer.x, observer.y):
            logger.warning("Observer (%.1f, %.1f) is inside a wall", observer.x, observer.y)
        try:
            polygon = current_map.update_visibility(
                observer, args.max_range, args.epsilon, args.angle_epsilon)
        except ValueError as exc:
            logger.error("Tick %d: %s", tick, exc)
            return 1

        if args.json:
            print(json.dumps(polygon.to_dict()))
        else:
            logger.info("Tick %d observer (%.1f, %.1f): %d vertices, area %.1f",
                        tick, observer.x, observer.y, len(polygon), polygon.area())

    return 0


if __name__ == "__main__":
    sys.exit(main())
