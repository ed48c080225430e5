import math
import logging
import numpy as np
from typing import Any, Dict, List, Optional, Tuple
from .world_map import Grid, PointOfInterest, PoiKind, TerrainType
logger = logging.getLogger(__name__)
def trace(start: Tuple[int, int], end: Tuple[int, int], rng: np.random.Generator,
          jitter: float = 0.3, arrive: float = 0.5) -> List[Tuple[int, int]]:
    """Cells visited walking from start toward end, re-aiming every step."""
    ex, ey = float(end[0]), float(end[1])
    dist = math.hypot(ex - start[0], ey - start[1])
    max_steps = int(4 * dist) + 10
    cx, cy = float(start[0]), float(start[1])
    cells: List[Tuple[int, int]] = []
    for _ in range(max_steps):
        if abs(cx - ex) <= arrive and abs(cy - ey) <= arrive:
            break
        cell = (int(math.floor(cx + 0.5)), int(math.floor(cy + 0.5)))
        if not cells or cells[-1] != cell:
            cells.append(cell)
        dx = ex - cx
        dy = ey - cy
        d = math.hypot(dx, dy)
        step = min(1.0, d)
        cx += dx / d * step + (rng.random() - 0.5) * jitter
        cy += dy / d * step + (rng.random() - 0.5) * jitter
    return cells
def paint(grid: Grid, cells: List[Tuple[int, int]], is_road: bool, registry: Dict[str, Any]) -> int:
    costs = registry["movement_cost"]
    kind = TerrainType.ROAD if is_road else TerrainType.PATH
    painted = 0
    for x, y in cells:
        if not grid.in_bounds(x, y) or grid.point_of_interest_id[y, x] is not None:
            continue
        terrain = grid.terrain_at(x, y)
        if terrain is TerrainType.RIVER:
            grid.set_terrain(x, y, TerrainType.BRIDGE, costs[TerrainType.BRIDGE])
        elif terrain in (TerrainType.OCEAN, TerrainType.LAKE, TerrainType.BRIDGE):
            continue
        elif terrain is TerrainType.ROAD and not is_road:
            continue
        else:
            grid.set_terrain(x, y, kind, costs[kind])
        painted += 1
    return painted
def nearest(poi: PointOfInterest, candidates: List[PointOfInterest]) -> Optional[PointOfInterest]:
    others = [c for c in candidates if c is not poi]
    if not others:
        return None
    return min(others, key=lambda c: poi.distance_to(c.x, c.y))
def link(grid: Grid, a: PointOfInterest, b: PointOfInterest, is_road: bool,
         registry: Dict[str, Any], rng: np.random.Generator, jitter: float = 0.3) -> int:
    painted = paint(grid, trace(a.position, b.position, rng, jitter), is_road, registry)
    if b.id not in a.connected_to:
        a.connected_to.append(b.id)
    if a.id not in b.connected_to:
        b.connected_to.append(a.id)
    return painted
def connect(grid: Grid, pois: List[PointOfInterest], registry: Dict[str, Any], params: Dict[str, Any],
            rng: np.random.Generator) -> int:
    jitter = float(params.get("jitter", 0.3))
    chance = float(params.get("poi_link_chance", 0.7))
    settlements = [p for p in pois if p.is_settlement]
    links = 0
    cells = 0
    for start in settlements:
        other = nearest(start, settlements)
        if other is None:
            continue
        is_road = start.kind is PoiKind.TOWN or other.kind is PoiKind.TOWN
        cells += link(grid, start, other, is_road, registry, rng, jitter)
        links += 1
    for poi in pois:
        if poi.kind not in (PoiKind.DUNGEON, PoiKind.LANDMARK):
            continue
        if rng.random() >= chance:
            continue
        other = nearest(poi, settlements)
        if other is None:
            continue
        cells += link(grid, poi, other, False, registry, rng, jitter)
        links += 1
    logger.info("Connected %d links, painted %d cells", links, cells)
    return links
