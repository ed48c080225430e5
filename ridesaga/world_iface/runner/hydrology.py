import logging
import numpy as np
from typing import Any, Dict, List, Tuple
from .kernels import descend
from .world_map import Grid, TerrainType, TERRAIN_CODES
logger = logging.getLogger(__name__)
def river_sources(grid: Grid, params: Dict[str, Any]) -> List[Tuple[int, int]]:
    threshold = float(params.get("river_source_elevation", 70.0))
    count = int(params.get("river_count", 3))
    spacing = grid.width / float(params.get("river_spacing_divisor", 5))
    ys, xs = np.nonzero(grid.elevation > threshold)
    # stable sort keeps scan order among equal elevations
    order = np.argsort(-grid.elevation[ys, xs], kind="stable")
    picked: List[Tuple[int, int]] = []
    for i in order:
        if len(picked) >= count:
            break
        x, y = int(xs[i]), int(ys[i])
        if all(np.hypot(x - px, y - py) >= spacing for px, py in picked):
            picked.append((x, y))
    return picked
def carve_rivers(grid: Grid, registry: Dict[str, Any], params: Dict[str, Any]) -> List[List[Tuple[int, int]]]:
    stop_below = float(params.get("river_mouth_elevation", 15.0))
    max_steps = grid.width + grid.height
    cost = registry["movement_cost"][TerrainType.RIVER]
    ocean = TERRAIN_CODES[TerrainType.OCEAN]
    river = TERRAIN_CODES[TerrainType.RIVER]
    paths = []
    for x, y in river_sources(grid, params):
        xs, ys = descend(grid.elevation, x, y, stop_below, max_steps)
        for px, py in zip(xs, ys):
            if grid.terrain[py, px] != ocean:
                grid.terrain[py, px] = river
                grid.movement_cost[py, px] = cost
        paths.append(list(zip(xs.tolist(), ys.tolist())))
    logger.info("Carved %d rivers, %d cells", len(paths), sum(len(p) for p in paths))
    return paths
def carve_lakes(grid: Grid, registry: Dict[str, Any], params: Dict[str, Any], rng: np.random.Generator) -> List[Tuple[int, int]]:
    count = int(grid.width // int(params.get("tiles_per_lake", 40)))
    lo, hi = params.get("lake_elevation", [15.0, 40.0])
    rmin, rmax = params.get("lake_radius", [3, 7])
    level = float(params.get("lake_level", 15.0))
    cost = registry["movement_cost"][TerrainType.LAKE]
    yy, xx = np.ogrid[0:grid.height, 0:grid.width]
    centers = []
    for _ in range(count):
        ys, xs = np.nonzero(grid.terrain_mask(TerrainType.PLAINS, TerrainType.FOREST)
                            & (grid.elevation > lo) & (grid.elevation < hi))
        if len(xs) == 0:
            continue
        i = int(rng.integers(0, len(xs)))
        cx, cy = int(xs[i]), int(ys[i])
        radius = int(rng.integers(rmin, rmax + 1))
        disk = ((xx - cx) ** 2 + (yy - cy) ** 2 <= radius * radius) & ~grid.terrain_mask(TerrainType.OCEAN)
        grid.terrain[disk] = TERRAIN_CODES[TerrainType.LAKE]
        grid.elevation[disk] = level
        grid.movement_cost[disk] = cost
        centers.append((cx, cy))
    logger.info("Carved %d lakes", len(centers))
    return centers
