import math
import numpy as np
from numpy.typing import NDArray
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


class TerrainType(Enum):
    OCEAN = "ocean"
    SHORE = "shore"
    PLAINS = "plains"
    FOREST = "forest"
    HILLS = "hills"
    MOUNTAINS = "mountains"
    SWAMP = "swamp"
    DESERT = "desert"
    TUNDRA = "tundra"
    RIVER = "river"
    LAKE = "lake"
    PATH = "path"
    ROAD = "road"
    BRIDGE = "bridge"
    SETTLEMENT = "settlement"
    DUNGEON = "dungeon"
    LANDMARK = "landmark"
    GLACIER = "glacier"
    PEAK = "peak"


class BiomeType(Enum):
    TEMPERATE = "temperate"
    TROPICAL = "tropical"
    ARCTIC = "arctic"
    ARID = "arid"
    COASTAL = "coastal"
    VOLCANIC = "volcanic"


class PoiKind(Enum):
    TOWN = "town"
    VILLAGE = "village"
    DUNGEON = "dungeon"
    LANDMARK = "landmark"


class Service(Enum):
    INN = "inn"
    SHOP = "shop"
    BLACKSMITH = "blacksmith"
    TEMPLE = "temple"
    GUILD = "guild"


TERRAINS: List[TerrainType] = list(TerrainType)
BIOMES: List[BiomeType] = list(BiomeType)
TERRAIN_CODES: Dict[TerrainType, int] = {t: i for i, t in enumerate(TERRAINS)}
BIOME_CODES: Dict[BiomeType, int] = {b: i for i, b in enumerate(BIOMES)}
IMPASSABLE_COST = 100.0
# cells at or above this cost cannot be entered
WALK_LIMIT = 50.0
GRID_ARRAYS = ("elevation", "humidity", "temperature", "terrain", "biome",
               "movement_cost", "danger_level", "explored", "point_of_interest_id")


@dataclass(frozen=True)
class Cell:
    x: int
    y: int
    elevation: float
    humidity: float
    temperature: float
    terrain: TerrainType
    biome: BiomeType
    movement_cost: float
    danger_level: int
    explored: bool
    point_of_interest_id: Optional[str] = None

    @property
    def walkable(self) -> bool:
        return self.movement_cost < WALK_LIMIT

    @property
    def has_point_of_interest(self) -> bool:
        return self.point_of_interest_id is not None


@dataclass(eq=False)
class Grid:
    """Per-cell world layers, every array indexed as [y, x]."""
    width: int
    height: int
    elevation: NDArray[np.float32]
    humidity: NDArray[np.float32]
    temperature: NDArray[np.float32]
    terrain: NDArray[np.int8]
    biome: NDArray[np.int8]
    movement_cost: NDArray[np.float32]
    danger_level: NDArray[np.int16]
    explored: NDArray[np.bool_]
    point_of_interest_id: NDArray[np.object_]

    @classmethod
    def blank(cls, width: int, height: int) -> "Grid":
        shape = (height, width)
        return cls(
            width=width,
            height=height,
            elevation=np.zeros(shape, dtype=np.float32),
            humidity=np.zeros(shape, dtype=np.float32),
            temperature=np.zeros(shape, dtype=np.float32),
            terrain=np.full(shape, TERRAIN_CODES[TerrainType.OCEAN], dtype=np.int8),
            biome=np.full(shape, BIOME_CODES[BiomeType.TEMPERATE], dtype=np.int8),
            movement_cost=np.full(shape, IMPASSABLE_COST, dtype=np.float32),
            danger_level=np.zeros(shape, dtype=np.int16),
            explored=np.zeros(shape, dtype=bool),
            point_of_interest_id=np.full(shape, None, dtype=object),
        )

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def terrain_at(self, x: int, y: int) -> TerrainType:
        return TERRAINS[int(self.terrain[y, x])]

    def biome_at(self, x: int, y: int) -> BiomeType:
        return BIOMES[int(self.biome[y, x])]

    def set_terrain(self, x: int, y: int, terrain: TerrainType, movement_cost: float):
        self.terrain[y, x] = TERRAIN_CODES[terrain]
        self.movement_cost[y, x] = movement_cost

    def terrain_mask(self, *terrains: TerrainType) -> NDArray[np.bool_]:
        return np.isin(self.terrain, [TERRAIN_CODES[t] for t in terrains])

    def free_mask(self) -> NDArray[np.bool_]:
        return np.equal(self.point_of_interest_id, None)

    def cell(self, x: int, y: int) -> Cell:
        return Cell(
            x=x,
            y=y,
            elevation=float(self.elevation[y, x]),
            humidity=float(self.humidity[y, x]),
            temperature=float(self.temperature[y, x]),
            terrain=self.terrain_at(x, y),
            biome=self.biome_at(x, y),
            movement_cost=float(self.movement_cost[y, x]),
            danger_level=int(self.danger_level[y, x]),
            explored=bool(self.explored[y, x]),
            point_of_interest_id=self.point_of_interest_id[y, x],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "elevation": self.elevation.tolist(),
            "humidity": self.humidity.tolist(),
            "temperature": self.temperature.tolist(),
            "terrain": [[TERRAINS[c].value for c in row] for row in self.terrain],
            "biome": [[BIOMES[c].value for c in row] for row in self.biome],
            "movement_cost": self.movement_cost.tolist(),
            "danger_level": self.danger_level.tolist(),
            "explored": self.explored.tolist(),
            "point_of_interest_id": self.point_of_interest_id.tolist(),
        }

    @classmethod
    def from_dict(cls, width: int, height: int, data: Dict[str, Any]) -> "Grid":
        terrain_lookup = {t.value: TERRAIN_CODES[t] for t in TERRAINS}
        biome_lookup = {b.value: BIOME_CODES[b] for b in BIOMES}
        poi = np.full((height, width), None, dtype=object)
        for y, row in enumerate(data["point_of_interest_id"]):
            for x, value in enumerate(row):
                poi[y, x] = value
        return cls(
            width=width,
            height=height,
            elevation=np.asarray(data["elevation"], dtype=np.float32),
            humidity=np.asarray(data["humidity"], dtype=np.float32),
            temperature=np.asarray(data["temperature"], dtype=np.float32),
            terrain=np.asarray([[terrain_lookup[v] for v in row] for row in data["terrain"]], dtype=np.int8),
            biome=np.asarray([[biome_lookup[v] for v in row] for row in data["biome"]], dtype=np.int8),
            movement_cost=np.asarray(data["movement_cost"], dtype=np.float32),
            danger_level=np.asarray(data["danger_level"], dtype=np.int16),
            explored=np.asarray(data["explored"], dtype=bool),
            point_of_interest_id=poi,
        )

    def __eq__(self, other):
        if not isinstance(other, Grid):
            return NotImplemented
        if (self.width, self.height) != (other.width, other.height):
            return False
        return all(np.array_equal(getattr(self, k), getattr(other, k)) for k in GRID_ARRAYS)


@dataclass
class Region:
    id: str
    name: str
    center_x: int
    center_y: int
    width: int
    height: int
    biome: BiomeType
    main_terrain: TerrainType
    description: str = ""
    discovered: bool = False
    explored_percent: int = 0

    def contains(self, x: int, y: int) -> bool:
        return (math.floor(self.center_x - self.width / 2) <= x <= math.ceil(self.center_x + self.width / 2)
                and math.floor(self.center_y - self.height / 2) <= y <= math.ceil(self.center_y + self.height / 2))

    def bounds(self, grid_width: int, grid_height: int) -> Tuple[int, int, int, int]:
        """Half-open (x0, x1, y0, y1) box of the region clipped to the grid."""
        x0 = max(0, math.floor(self.center_x - self.width / 2))
        x1 = min(grid_width, math.ceil(self.center_x + self.width / 2) + 1)
        y0 = max(0, math.floor(self.center_y - self.height / 2))
        y1 = min(grid_height, math.ceil(self.center_y + self.height / 2) + 1)
        return x0, x1, y0, y1

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "center_x": self.center_x,
            "center_y": self.center_y,
            "width": self.width,
            "height": self.height,
            "biome": self.biome.value,
            "main_terrain": self.main_terrain.value,
            "discovered": self.discovered,
            "explored_percent": self.explored_percent,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Region":
        return cls(
            id=str(data["id"]),
            name=str(data["name"]),
            description=str(data.get("description", "")),
            center_x=int(data["center_x"]),
            center_y=int(data["center_y"]),
            width=int(data["width"]),
            height=int(data["height"]),
            biome=BiomeType(data["biome"]),
            main_terrain=TerrainType(data["main_terrain"]),
            discovered=bool(data.get("discovered", False)),
            explored_percent=int(data.get("explored_percent", 0)),
        )


@dataclass
class PointOfInterest:
    id: str
    name: str
    kind: PoiKind
    x: int
    y: int
    description: str = ""
    discovered: bool = False
    explored: bool = False
    services: Optional[List[Service]] = None
    connected_to: List[str] = field(default_factory=list)

    @property
    def position(self) -> Tuple[int, int]:
        return self.x, self.y

    @property
    def is_settlement(self) -> bool:
        return self.kind in (PoiKind.TOWN, PoiKind.VILLAGE)

    def distance_to(self, x: float, y: float) -> float:
        return math.hypot(self.x - x, self.y - y)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "kind": self.kind.value,
            "x": self.x,
            "y": self.y,
            "discovered": self.discovered,
            "explored": self.explored,
            "services": None if self.services is None else [s.value for s in self.services],
            "connected_to": list(self.connected_to),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PointOfInterest":
        services = data.get("services")
        return cls(
            id=str(data["id"]),
            name=str(data["name"]),
            description=str(data.get("description", "")),
            kind=PoiKind(data["kind"]),
            x=int(data["x"]),
            y=int(data["y"]),
            discovered=bool(data.get("discovered", False)),
            explored=bool(data.get("explored", False)),
            services=None if services is None else [Service(s) for s in services],
            connected_to=[str(c) for c in data.get("connected_to", [])],
        )


@dataclass(eq=False)
class WorldMap:
    width: int
    height: int
    seed: int
    grid: Grid
    regions: List[Region] = field(default_factory=list)
    points_of_interest: List[PointOfInterest] = field(default_factory=list)
    current_player_position: Tuple[int, int] = (0, 0)
    exploration: Dict[str, Any] = field(default_factory=dict)
    scenario_hash: str = ""

    def __post_init__(self):
        self._tracker = None

    @property
    def tracker(self):
        if self._tracker is None:
            from ...explorer_iface.explorer import ExplorationTracker
            self._tracker = ExplorationTracker(self)
        return self._tracker

    def tile_at(self, x: int, y: int) -> Optional[Cell]:
        if not self.grid.in_bounds(x, y):
            return None
        return self.grid.cell(x, y)

    def point_of_interest_by_id(self, poi_id: str) -> Optional[PointOfInterest]:
        for poi in self.points_of_interest:
            if poi.id == poi_id:
                return poi
        return None

    def point_of_interest_at(self, x: int, y: int) -> Optional[PointOfInterest]:
        if not self.grid.in_bounds(x, y):
            return None
        poi_id = self.grid.point_of_interest_id[y, x]
        if poi_id is None:
            return None
        return self.point_of_interest_by_id(poi_id)

    def region_at(self, x: int, y: int) -> Optional[Region]:
        for region in self.regions:
            if region.contains(x, y):
                return region
        return None

    def region_by_id(self, region_id: str) -> Optional[Region]:
        for region in self.regions:
            if region.id == region_id:
                return region
        return None

    def current_tile(self) -> Optional[Cell]:
        return self.tile_at(*self.current_player_position)

    def current_region(self) -> Optional[Region]:
        return self.region_at(*self.current_player_position)

    def current_point_of_interest(self) -> Optional[PointOfInterest]:
        return self.point_of_interest_at(*self.current_player_position)

    def discovered_regions(self) -> List[Region]:
        return [r for r in self.regions if r.discovered]

    def discovered_points_of_interest(self) -> List[PointOfInterest]:
        return [p for p in self.points_of_interest if p.discovered]

    def settlements(self) -> List[PointOfInterest]:
        return [p for p in self.points_of_interest if p.is_settlement]

    def move(self, direction) -> bool:
        return self.tracker.move(direction)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "width": self.width,
            "height": self.height,
            "seed": self.seed,
            "scenario_hash": self.scenario_hash,
            "current_player_position": list(self.current_player_position),
            "exploration": dict(self.exploration),
            "grid": self.grid.to_dict(),
            "regions": [r.to_dict() for r in self.regions],
            "points_of_interest": [p.to_dict() for p in self.points_of_interest],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WorldMap":
        width = int(data["width"])
        height = int(data["height"])
        x, y = data["current_player_position"]
        return cls(
            width=width,
            height=height,
            seed=int(data["seed"]),
            grid=Grid.from_dict(width, height, data["grid"]),
            regions=[Region.from_dict(r) for r in data["regions"]],
            points_of_interest=[PointOfInterest.from_dict(p) for p in data["points_of_interest"]],
            current_player_position=(int(x), int(y)),
            exploration=dict(data.get("exploration", {})),
            scenario_hash=str(data.get("scenario_hash", "")),
        )

    def __eq__(self, other):
        if not isinstance(other, WorldMap):
            return NotImplemented
        return (self.width == other.width and self.height == other.height and self.seed == other.seed
                and self.scenario_hash == other.scenario_hash
                and tuple(self.current_player_position) == tuple(other.current_player_position)
                and self.exploration == other.exploration
                and self.regions == other.regions
                and self.points_of_interest == other.points_of_interest
                and self.grid == other.grid)
