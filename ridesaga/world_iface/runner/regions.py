import logging
import numpy as np
from typing import Any, Dict, List, Optional, Tuple
from . import naming
from .world_map import Grid, Region, TerrainType
logger = logging.getLogger(__name__)
def pick_centers(grid: Grid, count: int, spacing: float, attempts: int, rng: np.random.Generator) -> List[Tuple[int, int]]:
    land = ~grid.terrain_mask(TerrainType.OCEAN)
    centers: List[Tuple[int, int]] = []
    for _ in range(count):
        for _ in range(attempts):
            x = int(rng.integers(0, grid.width))
            y = int(rng.integers(0, grid.height))
            if not land[y, x]:
                continue
            if all(np.hypot(x - cx, y - cy) >= spacing for cx, cy in centers):
                centers.append((x, y))
                break
    return centers
def identify_regions(grid: Grid, params: Dict[str, Any], rng: np.random.Generator, names_rng: np.random.Generator) -> List[Region]:
    count = max(1, int(grid.width // int(params.get("tiles_per_region", 30))))
    spacing = grid.width / float(params.get("spacing_divisor", 5))
    attempts = int(params.get("placement_attempts", 100))
    size_lo, size_hi = params.get("size", [10, 29])
    regions = []
    for i, (x, y) in enumerate(pick_centers(grid, count, spacing, attempts, rng)):
        terrain = grid.terrain_at(x, y)
        biome = grid.biome_at(x, y)
        regions.append(Region(
            id=f"region_{i}",
            name=naming.region_name(terrain, biome, names_rng),
            description=naming.region_description(terrain, biome, names_rng),
            center_x=x,
            center_y=y,
            width=int(rng.integers(size_lo, size_hi + 1)),
            height=int(rng.integers(size_lo, size_hi + 1)),
            biome=biome,
            main_terrain=terrain,
        ))
    if len(regions) < count:
        logger.warning("Placed %d of %d regions, not enough land", len(regions), count)
    return regions
def region_at(regions: List[Region], x: int, y: int) -> Optional[Region]:
    for region in regions:
        if region.contains(x, y):
            return region
    return None
