from maps.map_base import MapBase
from maps.region_base import FloorRegion


class Lvl1Map(MapBase):
    def __init__(self):
        super().__init__(width=1024, height=1024)

        self._build_border()
        self._build_interior()
        self._build_ground()

    def _build_border(self):
        t = 32  # wall thickness

        self.add_wall((0, 0, self.width, t))                # top
        self.add_wall((0, self.height - t, self.width, t))  # bottom
        self.add_wall((0, 0, t, self.height))               # left
        self.add_wall((self.width - t, 0, t, self.height))  # right

    def _build_interior(self):
        self.add_wall((600, 500, 200, 32))

        # Enclosure with a gap on the right (720-780)
        self.add_wall((350, 600, 300, 24))   # top
        self.add_wall((350, 876, 300, 24))   # bottom
        self.add_wall((626, 600, 24, 120))   # right top
        self.add_wall((626, 780, 24, 120))   # right bottom

        self.add_region(FloorRegion((160, 700, 40, 40), "pillar"))

    def _build_ground(self):
        # Seen through, never blocking
        self.add_region(FloorRegion((200, 200, 180, 140), "water"))
        self.add_region(FloorRegion((500, 100, 200, 200), "grass"))
        self.add_region(FloorRegion((450, 400, 120, 300), "stone"))
        self.add_region(FloorRegion((700, 150, 40, 40), "chest"))
