import logging
import numpy as np
from numpy.typing import NDArray
from typing import Any, Dict, List
from . import naming
from .kernels import proximity_scores
from .world_map import Grid, Region, PointOfInterest, PoiKind, Service, TerrainType
logger = logging.getLogger(__name__)
WATER = (TerrainType.OCEAN, TerrainType.LAKE, TerrainType.RIVER)
def settlement_scores(grid: Grid, params: Dict[str, Any]) -> NDArray[np.float32]:
    """Desirability of every cell as a settlement site."""
    radius = max(1, int(params.get("water_radius", 3)))
    fresh = grid.terrain_mask(TerrainType.RIVER, TerrainType.LAKE)
    paths = grid.terrain_mask(TerrainType.PATH, TerrainType.ROAD)
    weighted, near, path_count = proximity_scores(fresh, paths, radius)
    score = (grid.terrain_mask(TerrainType.PLAINS) * float(params.get("plains_bonus", 10.0))
             + weighted * float(params.get("water_weight", 5.0))
             + near * float(params.get("water_bonus", 15.0))
             + path_count * float(params.get("path_weight", 2.0)))
    return score.astype(np.float32)
def _candidates(grid: Grid, region: Region, allowed: NDArray[np.bool_]):
    x0, x1, y0, y1 = region.bounds(grid.width, grid.height)
    ys, xs = np.nonzero(allowed[y0:y1, x0:x1])
    return xs + x0, ys + y0
def _mark(grid: Grid, poi: PointOfInterest, terrain: TerrainType, registry: Dict[str, Any]):
    grid.set_terrain(poi.x, poi.y, terrain, registry["movement_cost"][terrain])
    grid.point_of_interest_id[poi.y, poi.x] = poi.id
def _services(is_town: bool, rng: np.random.Generator, params: Dict[str, Any]) -> List[Service]:
    if is_town:
        return [Service.INN, Service.SHOP, Service.BLACKSMITH, Service.TEMPLE]
    services = [Service.INN]
    if rng.random() < float(params.get("village_shop_chance", 0.5)):
        services.append(Service.SHOP)
    if rng.random() < float(params.get("village_blacksmith_chance", 0.3)):
        services.append(Service.BLACKSMITH)
    return services
def place_settlements(grid: Grid, regions: List[Region], registry: Dict[str, Any], params: Dict[str, Any],
                      rng: np.random.Generator, names_rng: np.random.Generator) -> List[PointOfInterest]:
    per_region = int(params.get("per_region", 3))
    spacing = grid.width / float(params.get("spacing_divisor", 10))
    top = int(params.get("top_candidates", 3))
    town_chance = float(params.get("town_chance", 0.3))
    scores = settlement_scores(grid, params)
    land = ~grid.terrain_mask(*WATER) & (grid.movement_cost < registry["walk_limit"])
    placed: List[PointOfInterest] = []
    for region in regions:
        for _ in range(per_region):
            xs, ys = _candidates(grid, region, land & grid.free_mask())
            ok = np.ones(len(xs), dtype=bool)
            for other in placed:
                ok &= np.hypot(xs - other.x, ys - other.y) >= spacing
            xs, ys = xs[ok], ys[ok]
            if len(xs) == 0:
                break
            order = np.argsort(-scores[ys, xs], kind="stable")[:top]
            pick = order[int(rng.integers(0, len(order)))]
            x, y = int(xs[pick]), int(ys[pick])
            is_town = bool(rng.random() < town_chance)
            poi = PointOfInterest(
                id=f"settlement_{len(placed)}",
                name=naming.settlement_name(region.biome, names_rng),
                description=naming.settlement_description(is_town, region.biome, names_rng),
                kind=PoiKind.TOWN if is_town else PoiKind.VILLAGE,
                x=x,
                y=y,
                services=_services(is_town, rng, params),
            )
            _mark(grid, poi, TerrainType.SETTLEMENT, registry)
            placed.append(poi)
    logger.info("Placed %d settlements", len(placed))
    return placed
def place_dungeons(grid: Grid, regions: List[Region], registry: Dict[str, Any], params: Dict[str, Any],
                   rng: np.random.Generator, names_rng: np.random.Generator) -> List[PointOfInterest]:
    count = int(len(regions) * float(params.get("dungeons_per_region", 0.7)))
    allowed = grid.terrain_mask(TerrainType.HILLS, TerrainType.MOUNTAINS, TerrainType.FOREST)
    placed: List[PointOfInterest] = []
    for _ in range(count):
        region = regions[int(rng.integers(0, len(regions)))]
        xs, ys = _candidates(grid, region, allowed & grid.free_mask())
        if len(xs) == 0:
            continue
        i = int(rng.integers(0, len(xs)))
        x, y = int(xs[i]), int(ys[i])
        terrain = grid.terrain_at(x, y)
        poi = PointOfInterest(
            id=f"dungeon_{len(placed)}",
            name=naming.dungeon_name(terrain, names_rng),
            description=naming.dungeon_description(terrain, names_rng),
            kind=PoiKind.DUNGEON,
            x=x,
            y=y,
        )
        _mark(grid, poi, TerrainType.DUNGEON, registry)
        placed.append(poi)
    logger.info("Placed %d dungeons", len(placed))
    return placed
def place_landmarks(grid: Grid, regions: List[Region], registry: Dict[str, Any], params: Dict[str, Any],
                    rng: np.random.Generator, names_rng: np.random.Generator) -> List[PointOfInterest]:
    count = int(len(regions) * float(params.get("landmarks_per_region", 0.5)))
    allowed = ~grid.terrain_mask(*WATER, TerrainType.SETTLEMENT, TerrainType.DUNGEON, TerrainType.LANDMARK)
    placed: List[PointOfInterest] = []
    for _ in range(count):
        region = regions[int(rng.integers(0, len(regions)))]
        xs, ys = _candidates(grid, region, allowed & grid.free_mask())
        if len(xs) == 0:
            continue
        i = int(rng.integers(0, len(xs)))
        x, y = int(xs[i]), int(ys[i])
        terrain = grid.terrain_at(x, y)
        poi = PointOfInterest(
            id=f"landmark_{len(placed)}",
            name=naming.landmark_name(terrain, names_rng),
            description=naming.landmark_description(terrain, region.biome, names_rng),
            kind=PoiKind.LANDMARK,
            x=x,
            y=y,
        )
        _mark(grid, poi, TerrainType.LANDMARK, registry)
        placed.append(poi)
    logger.info("Placed %d landmarks", len(placed))
    return placed
