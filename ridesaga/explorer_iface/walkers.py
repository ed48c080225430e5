import numpy as np
from typing import Dict, Any, List, Optional

from .explorer import Direction
from ..world_iface.runner.world_map import WorldMap

DIRECTIONS: List[Direction] = list(Direction)

class BaseWalker:
    def __init__(self, world: WorldMap, seed: Optional[int] = None):
        self.world = world
        self.rng = np.random.default_rng(seed)
        self.history: List[Dict[str, Any]] = []
        self.steps = 0

    def decide(self) -> Direction:
        raise NotImplementedError("Subclasses must implement decide()")

    def step(self) -> bool:
        direction = self.decide()
        before = self.world.current_player_position
        moved = self.world.move(direction)
        self.history.append({
            "step": self.steps,
            "direction": direction.value,
            "moved": moved,
            "position_before": before,
            "position_after": self.world.current_player_position,
        })
        self.steps += 1
        return moved

    def _random_direction(self) -> Direction:
        return DIRECTIONS[int(self.rng.integers(0, len(DIRECTIONS)))]

class RandomWalker(BaseWalker):
    def decide(self) -> Direction:
        return self._random_direction()

class FrontierWalker(BaseWalker):
    """Heads for whichever open neighbour would reveal the most fog."""

    def _unexplored_near(self, x: int, y: int, radius: int) -> int:
        grid = self.world.grid
        x0, x1 = max(0, x - radius), min(grid.width, x + radius + 1)
        y0, y1 = max(0, y - radius), min(grid.height, y + radius + 1)
        return int((~grid.explored[y0:y1, x0:x1]).sum())

    def decide(self) -> Direction:
        tracker = self.world.tracker
        radius = int(np.ceil(tracker.reveal_radius)) + 1
        x, y = self.world.current_player_position
        best: List[Direction] = []
        best_score = -1
        for d in DIRECTIONS:
            dx, dy = d.offset
            if not tracker.can_enter(x + dx, y + dy):
                continue
            score = self._unexplored_near(x + dx, y + dy, radius)
            if score > best_score:
                best, best_score = [d], score
            elif score == best_score:
                best.append(d)
        if not best:
            return self._random_direction()
        return best[int(self.rng.integers(0, len(best)))]

WALKERS = {"random": RandomWalker, "frontier": FrontierWalker}

class ExpeditionRunner:
    def __init__(self, walker: BaseWalker):
        self.walker = walker
        self.world = walker.world

    def run(self, steps: int) -> Dict[str, Any]:
        start = self.world.current_player_position
        moved = 0
        for _ in range(steps):
            if self.walker.step():
                moved += 1
        return {
            "steps": int(steps),
            "moved": moved,
            "blocked": int(steps) - moved,
            "start": list(start),
            "position": list(self.world.current_player_position),
            "explored_fraction": self.world.tracker.explored_fraction(),
            "discovered_points_of_interest": len(self.world.discovered_points_of_interest()),
            "discovered_regions": len(self.world.discovered_regions()),
        }

def make_walker(kind: str, world: WorldMap, seed: Optional[int] = None) -> BaseWalker:
    if kind not in WALKERS:
        raise ValueError(f"Walker '{kind}' not found")
    return WALKERS[kind](world, seed)
