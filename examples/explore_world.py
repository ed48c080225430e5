from ridesaga.world_iface.runner.engine import generate_world
from ridesaga.explorer_iface.walkers import FrontierWalker

class SimpleExplorer:
    def __init__(self, world):
        self.world = world
        self.walker = FrontierWalker(world, seed=7)

    def step(self):
        moved = self.walker.step()
        return moved, self.world.current_player_position

if __name__ == "__main__":
    world = generate_world(96, 96, seed=1337)
    explorer = SimpleExplorer(world)
    home = world.current_point_of_interest()
    print(f"Explorer starts at {world.current_player_position} in {home.name if home else 'the wilds'}")
    for i in range(25):
        moved, (x, y) = explorer.step()
        cell = world.tile_at(x, y)
        print(f"Step {i+1}: ({x}, {y}) - {cell.terrain.value}, moved={moved}")
    for poi in world.discovered_points_of_interest():
        print(f"Discovered {poi.kind.value} {poi.name} at {poi.position}")
    for region in world.regions:
        print(f"{region.name}: {region.explored_percent}% explored")
