import logging
import numpy as np
from numpy.typing import NDArray
from typing import Any, Dict, Optional, Tuple

from .registry import default_registry, apply_danger_levels
from .world_map import (TerrainType, BiomeType, Grid, TERRAIN_CODES, BIOME_CODES, IMPASSABLE_COST)

logger = logging.getLogger(__name__)

# mountains are only passable when their pre-drawn gate value exceeds this
MOUNTAIN_GATE = 0.6


def classify(elevation: float, humidity: float, temperature: float, gate: float = 1.0,
             registry: Optional[Dict[str, Any]] = None) -> Tuple[TerrainType, bool, float]:
    """Map one cell's climate triple to (terrain, walkable, movement_cost)."""
    registry = registry or default_registry()
    e, h, t = elevation, humidity, temperature
    if e < 30:
        terrain = TerrainType.OCEAN
    elif e < 35:
        terrain = TerrainType.SHORE
    elif e > 85:
        terrain = TerrainType.GLACIER if t < 30 else TerrainType.PEAK
    elif e > 75:
        terrain = TerrainType.MOUNTAINS
    elif e > 60:
        if h < 30:
            terrain = TerrainType.DESERT if t > 70 else TerrainType.HILLS
        else:
            terrain = TerrainType.FOREST
    elif h < 30:
        if t > 70:
            terrain = TerrainType.DESERT
        elif t > 30:
            terrain = TerrainType.PLAINS
        else:
            terrain = TerrainType.TUNDRA
    elif h < 60:
        terrain = TerrainType.PLAINS
    elif t > 70:
        terrain = TerrainType.FOREST
    elif t > 40 and h > 80:
        terrain = TerrainType.SWAMP
    else:
        terrain = TerrainType.FOREST
    cost = registry["movement_cost"][terrain]
    if terrain is TerrainType.MOUNTAINS and gate <= MOUNTAIN_GATE:
        cost = max(cost, IMPASSABLE_COST)
    return terrain, cost < registry["walk_limit"], cost


def classify_grid(E: NDArray[np.float32], H: NDArray[np.float32], T: NDArray[np.float32],
                  gate: NDArray[np.float64], registry: Dict[str, Any]) -> Tuple[NDArray[np.int8], NDArray[np.float32]]:
    conds = [
        E < 30,
        E < 35,
        (E > 85) & (T < 30),
        E > 85,
        E > 75,
        (E > 60) & (H < 30) & (T > 70),
        (E > 60) & (H < 30),
        E > 60,
        (H < 30) & (T > 70),
        (H < 30) & (T > 30),
        H < 30,
        H < 60,
        T > 70,
        (T > 40) & (H > 80),
    ]
    choices = [
        TerrainType.OCEAN, TerrainType.SHORE, TerrainType.GLACIER, TerrainType.PEAK, TerrainType.MOUNTAINS,
        TerrainType.DESERT, TerrainType.HILLS, TerrainType.FOREST,
        TerrainType.DESERT, TerrainType.PLAINS, TerrainType.TUNDRA, TerrainType.PLAINS,
        TerrainType.FOREST, TerrainType.SWAMP,
    ]
    codes = np.select(conds, [TERRAIN_CODES[c] for c in choices],
                      default=TERRAIN_CODES[TerrainType.FOREST]).astype(np.int8)
    cost = registry["cost_table"][codes]
    blocked = (codes == TERRAIN_CODES[TerrainType.MOUNTAINS]) & (gate <= MOUNTAIN_GATE)
    cost = np.where(blocked, np.maximum(cost, IMPASSABLE_COST), cost).astype(np.float32)
    return codes, cost


def build_grid(E, H, T, gate, registry: Dict[str, Any]) -> Grid:
    h, w = E.shape
    grid = Grid.blank(w, h)
    grid.elevation[:] = E
    grid.humidity[:] = H
    grid.temperature[:] = T
    grid.terrain[:], grid.movement_cost[:] = classify_grid(E, H, T, gate, registry)
    apply_danger_levels(grid, registry)
    return grid


def assign_biomes(grid: Grid, rng: np.random.Generator, params: Dict[str, Any]):
    volcanic_chance = float(params.get("volcanic_chance", 0.05))
    T = grid.temperature
    H = grid.humidity
    roll = rng.random(T.shape)
    conds = [
        grid.terrain_mask(TerrainType.SHORE),
        grid.terrain_mask(TerrainType.MOUNTAINS, TerrainType.PEAK) & (roll < volcanic_chance),
        T < 25,
        (H < 30) & (T > 60),
        (T > 70) & (H >= 60),
    ]
    choices = [BiomeType.COASTAL, BiomeType.VOLCANIC, BiomeType.ARCTIC, BiomeType.ARID, BiomeType.TROPICAL]
    grid.biome[:] = np.select(conds, [BIOME_CODES[b] for b in choices], default=BIOME_CODES[BiomeType.TEMPERATE])
    logger.debug("Assigned biomes: %s", {b.value: int((grid.biome == BIOME_CODES[b]).sum()) for b in BiomeType})
