import numpy as np
from typing import Dict, Any, List
from .world_map import TerrainType, TERRAINS, IMPASSABLE_COST, WALK_LIMIT, Grid
DEFAULT_TERRAIN: List[Dict[str, Any]] = [
    {"name": "ocean", "movement_cost": 100.0, "danger_level": 0},
    {"name": "shore", "movement_cost": 1.5, "danger_level": 1},
    {"name": "plains", "movement_cost": 1.0, "danger_level": 1},
    {"name": "forest", "movement_cost": 1.2, "danger_level": 2},
    {"name": "hills", "movement_cost": 1.5, "danger_level": 2},
    {"name": "mountains", "movement_cost": 3.0, "danger_level": 3},
    {"name": "swamp", "movement_cost": 2.0, "danger_level": 3},
    {"name": "desert", "movement_cost": 1.5, "danger_level": 2},
    {"name": "tundra", "movement_cost": 1.3, "danger_level": 2},
    {"name": "river", "movement_cost": 2.0, "danger_level": 1},
    {"name": "lake", "movement_cost": 100.0, "danger_level": 0},
    {"name": "path", "movement_cost": 0.9, "danger_level": 1},
    {"name": "road", "movement_cost": 0.8, "danger_level": 0},
    {"name": "bridge", "movement_cost": 1.0, "danger_level": 1},
    {"name": "settlement", "movement_cost": 1.0, "danger_level": 0},
    {"name": "dungeon", "movement_cost": 1.0, "danger_level": 5},
    {"name": "landmark", "movement_cost": 1.0, "danger_level": 1},
    {"name": "glacier", "movement_cost": 100.0, "danger_level": 4},
    {"name": "peak", "movement_cost": 100.0, "danger_level": 4},
]
# floors that keep water and high ground out of reach regardless of scenario values
_COST_FLOORS = {
    TerrainType.OCEAN: IMPASSABLE_COST,
    TerrainType.LAKE: IMPASSABLE_COST,
    TerrainType.GLACIER: IMPASSABLE_COST,
    TerrainType.PEAK: IMPASSABLE_COST,
    TerrainType.RIVER: 2.0,
}
def default_terrain() -> List[Dict[str, Any]]:
    return [dict(row) for row in DEFAULT_TERRAIN]
def build_registry(cfg: Dict[str, Any]) -> Dict[str, Any]:
    rows = {t["name"]: t for t in cfg.get("terrain", DEFAULT_TERRAIN)}
    names: List[str] = [t.value for t in TERRAINS]
    missing = [n for n in names if n not in rows]
    if missing:
        raise ValueError(f"Terrain '{missing[0]}' not found in scenario")
    movement_cost: Dict[TerrainType, float] = {}
    danger_level: Dict[TerrainType, int] = {}
    for t in TERRAINS:
        movement_cost[t] = max(float(rows[t.value]["movement_cost"]), _COST_FLOORS.get(t, 0.0))
        danger_level[t] = int(rows[t.value]["danger_level"])
    walk_limit = float(cfg.get("exploration", {}).get("impassable_cost", WALK_LIMIT))
    return {
        "movement_cost": movement_cost,
        "cost_table": np.array([movement_cost[t] for t in TERRAINS], dtype=np.float32),
        "danger_table": np.array([danger_level[t] for t in TERRAINS], dtype=np.int16),
        "walk_limit": walk_limit,
    }
def default_registry() -> Dict[str, Any]:
    return build_registry({"terrain": DEFAULT_TERRAIN})
def apply_danger_levels(grid: Grid, registry: Dict[str, Any]):
    grid.danger_level[:] = registry["danger_table"][grid.terrain]
