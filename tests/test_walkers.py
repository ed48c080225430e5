import pytest
import numpy as np
from ridesaga.world_iface.runner.engine import generate_world
from ridesaga.explorer_iface.explorer import Direction
from ridesaga.explorer_iface.walkers import BaseWalker, RandomWalker, FrontierWalker, ExpeditionRunner, make_walker

@pytest.fixture
def world():
    return generate_world(64, 64, seed=21)

def test_base_walker_requires_decide(world):
    walker = BaseWalker(world, seed=0)
    with pytest.raises(NotImplementedError):
        walker.step()

def test_random_walker_history(world):
    walker = RandomWalker(world, seed=1)
    for _ in range(20):
        walker.step()

    assert len(walker.history) == 20
    assert walker.steps == 20
    for record in walker.history:
        assert record["direction"] in [d.value for d in Direction]
        if not record["moved"]:
            assert record["position_before"] == record["position_after"]

def test_random_walker_deterministic():
    w1 = generate_world(64, 64, seed=21)
    w2 = generate_world(64, 64, seed=21)
    a = RandomWalker(w1, seed=8)
    b = RandomWalker(w2, seed=8)
    for _ in range(30):
        a.step()
        b.step()

    assert a.history == b.history
    assert w1 == w2

def test_frontier_walker_explores_more(world):
    start = world.grid.explored.sum()
    runner = ExpeditionRunner(FrontierWalker(world, seed=2))
    stats = runner.run(40)

    assert stats["steps"] == 40
    assert stats["moved"] + stats["blocked"] == 40
    assert world.grid.explored.sum() >= start
    assert 0.0 < stats["explored_fraction"] <= 1.0
    assert stats["position"] == list(world.current_player_position)

def test_frontier_walker_prefers_fog(world):
    walker = FrontierWalker(world, seed=3)
    x, y = world.current_player_position
    options = [d for d in Direction if world.tracker.can_enter(x + d.offset[0], y + d.offset[1])]
    if options:
        assert walker.decide() in options

def test_make_walker(world):
    assert isinstance(make_walker("random", world, 0), RandomWalker)
    assert isinstance(make_walker("frontier", world, 0), FrontierWalker)
    with pytest.raises(ValueError, match="not found"):
        make_walker("teleport", world)
