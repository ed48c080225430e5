import math
import logging
import numpy as np
from enum import Enum
from typing import List, Tuple, Union

from ..world_iface.runner.world_map import WorldMap, PointOfInterest, TerrainType, WALK_LIMIT

logger = logging.getLogger(__name__)


class Direction(Enum):
    NORTH = "north"
    SOUTH = "south"
    EAST = "east"
    WEST = "west"

    @property
    def offset(self) -> Tuple[int, int]:
        return _OFFSETS[self]

    @classmethod
    def parse(cls, value: Union["Direction", str]) -> "Direction":
        if isinstance(value, Direction):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"Direction '{value}' not found") from None


_OFFSETS = {
    Direction.NORTH: (0, -1),
    Direction.SOUTH: (0, 1),
    Direction.EAST: (1, 0),
    Direction.WEST: (-1, 0),
}


class ExplorationTracker:
    """
    Fog-of-war bookkeeping for a generated world.
    Owns the player position and the explored/discovered flags; terrain and
    point-of-interest identity are never touched.
    """

    def __init__(self, world: WorldMap):
        self.world = world
        settings = world.exploration
        self.reveal_radius = float(settings.get("reveal_radius", 3))
        self.start_radius = float(settings.get("start_radius", 5))
        self.discover_distance = float(settings.get("discover_distance", 5))
        self.explore_distance = float(settings.get("explore_distance", 1))
        self.region_discover_percent = float(settings.get("region_discover_percent", 5))
        self.impassable_cost = float(settings.get("impassable_cost", WALK_LIMIT))

    def can_enter(self, x: int, y: int) -> bool:
        grid = self.world.grid
        return grid.in_bounds(x, y) and float(grid.movement_cost[y, x]) < self.impassable_cost

    def move(self, direction) -> bool:
        d = Direction.parse(direction)
        x, y = self.world.current_player_position
        dx, dy = d.offset
        nx, ny = x + dx, y + dy
        if not self.can_enter(nx, ny):
            logger.debug("Move %s from (%d, %d) blocked, position unchanged", d.value, x, y)
            return False
        self.world.current_player_position = (nx, ny)
        self.reveal(nx, ny, self.reveal_radius)
        self.update_points_of_interest(nx, ny)
        self.update_regions()
        return True

    def reveal(self, x: int, y: int, radius: float) -> int:
        grid = self.world.grid
        r = int(math.ceil(radius))
        x0, x1 = max(0, x - r), min(grid.width, x + r + 1)
        y0, y1 = max(0, y - r), min(grid.height, y + r + 1)
        if x0 >= x1 or y0 >= y1:
            return 0
        yy, xx = np.ogrid[y0:y1, x0:x1]
        disk = (xx - x) ** 2 + (yy - y) ** 2 <= radius * radius
        window = grid.explored[y0:y1, x0:x1]
        newly = int((disk & ~window).sum())
        window |= disk
        return newly

    def update_points_of_interest(self, x: int, y: int) -> List[PointOfInterest]:
        found = []
        for poi in self.world.points_of_interest:
            d = poi.distance_to(x, y)
            if d <= self.discover_distance and not poi.discovered:
                poi.discovered = True
                found.append(poi)
                logger.debug("Discovered %s '%s' at (%d, %d)", poi.kind.value, poi.name, poi.x, poi.y)
            if d <= self.explore_distance:
                poi.discovered = True
                poi.explored = True
        return found

    def update_regions(self):
        grid = self.world.grid
        for region in self.world.regions:
            x0, x1, y0, y1 = region.bounds(grid.width, grid.height)
            total = (x1 - x0) * (y1 - y0)
            if total <= 0:
                continue
            explored = int(grid.explored[y0:y1, x0:x1].sum())
            percent = (100 * explored) // total
            region.explored_percent = max(region.explored_percent, int(percent))
            if region.explored_percent >= self.region_discover_percent and not region.discovered:
                region.discovered = True
                logger.info("Region '%s' discovered (%d%% explored)", region.name, region.explored_percent)

    def place_player(self, rng: np.random.Generator) -> Tuple[int, int]:
        grid = self.world.grid
        start = None
        home = self.world.settlements()
        if home:
            start = home[int(rng.integers(0, len(home)))]
            x, y = start.x, start.y
        else:
            ys, xs = np.nonzero(grid.terrain_mask(TerrainType.PLAINS))
            if len(xs) > 0:
                i = int(rng.integers(0, len(xs)))
                x, y = int(xs[i]), int(ys[i])
            else:
                x, y = grid.width // 2, grid.height // 2
        self.world.current_player_position = (x, y)
        self.reveal(x, y, self.start_radius)
        self.update_points_of_interest(x, y)
        if start is not None:
            start.discovered = True
            start.explored = True
        self.update_regions()
        return x, y

    def explored_fraction(self) -> float:
        return float(self.world.grid.explored.mean())
