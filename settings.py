# Numeric tolerances. All coordinates are Python floats (double precision);
# tie behaviour at corners depends on these.
EPSILON = 1e-9          # parallel detection, endpoint inclusion, angle/distance ties
ANGLE_EPSILON = 1e-4    # radians either side of a corner for the offset rays
MAX_RANGE = 2000.0      # how far a ray sees when it hits nothing

# Tile maps
TILE_SIZE = 32
MAP_TILES_W = 30
MAP_TILES_H = 30
WALL_CHANCE = 0.25

# Host
WALK_STEPS = 10
LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
