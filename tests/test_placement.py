import pytest
import itertools
import numpy as np
from ridesaga.world_iface.runner.engine import generate_world
from ridesaga.world_iface.runner.registry import default_registry
from ridesaga.world_iface.runner.regions import identify_regions, region_at
from ridesaga.world_iface.runner.settlements import settlement_scores, place_settlements, place_dungeons, place_landmarks
from ridesaga.world_iface.runner.roads import trace, paint, link, connect
from ridesaga.world_iface.runner.world_map import Grid, Region, PointOfInterest, PoiKind, Service, TerrainType, BiomeType, TERRAIN_CODES

@pytest.fixture(scope="module")
def world():
    return generate_world(96, 96, seed=2024)

def _plains(width, height):
    grid = Grid.blank(width, height)
    grid.terrain[:] = TERRAIN_CODES[TerrainType.PLAINS]
    grid.movement_cost[:] = 1.0
    grid.elevation[:] = 50.0
    return grid

def _region(cx, cy, w, h):
    return Region(id="region_0", name="Test", center_x=cx, center_y=cy, width=w, height=h,
                  biome=BiomeType.TEMPERATE, main_terrain=TerrainType.PLAINS)

def test_settlement_spacing(world):
    towns = world.settlements()
    assert len(towns) > 0
    for a, b in itertools.combinations(towns, 2):
        assert np.hypot(a.x - b.x, a.y - b.y) >= world.width / 10

def test_points_of_interest_marked(world):
    kinds = {PoiKind.TOWN: TerrainType.SETTLEMENT, PoiKind.VILLAGE: TerrainType.SETTLEMENT,
             PoiKind.DUNGEON: TerrainType.DUNGEON, PoiKind.LANDMARK: TerrainType.LANDMARK}
    ids = [p.id for p in world.points_of_interest]
    assert len(ids) == len(set(ids))
    for poi in world.points_of_interest:
        assert world.grid.point_of_interest_id[poi.y, poi.x] == poi.id
        assert world.grid.terrain_at(poi.x, poi.y) is kinds[poi.kind]
        assert world.point_of_interest_at(poi.x, poi.y) is poi
        if poi.is_settlement:
            assert Service.INN in poi.services
        else:
            assert poi.services is None

def test_points_of_interest_inside_regions(world):
    for poi in world.points_of_interest:
        assert region_at(world.regions, poi.x, poi.y) is not None

def test_region_count_and_spacing(world):
    assert 1 <= len(world.regions) <= 96 // 30
    for a, b in itertools.combinations(world.regions, 2):
        assert np.hypot(a.center_x - b.center_x, a.center_y - b.center_y) >= world.width / 5
    for r in world.regions:
        assert 10 <= r.width <= 29
        assert 10 <= r.height <= 29
        assert r.name

def test_identify_regions_skips_ocean():
    grid = Grid.blank(60, 60)
    grid.terrain[20:40, 20:40] = TERRAIN_CODES[TerrainType.PLAINS]
    regions = identify_regions(grid, {}, np.random.default_rng(1), np.random.default_rng(2))

    assert len(regions) >= 1
    for r in regions:
        assert grid.terrain_at(r.center_x, r.center_y) is TerrainType.PLAINS

def test_settlement_scores_prefer_water():
    grid = _plains(20, 20)
    grid.set_terrain(10, 10, TerrainType.RIVER, 2.0)
    scores = settlement_scores(grid, {})

    assert scores[10, 11] > scores[10, 15]
    assert scores[10, 15] == pytest.approx(10.0)
    assert scores[10, 11] == pytest.approx(10.0 + 5.0 * (1.0 - 1.0 / 3.0) + 15.0)

def test_settlements_pick_top_candidates():
    grid = _plains(30, 30)
    grid.set_terrain(15, 15, TerrainType.LAKE, 100.0)
    placed = place_settlements(grid, [_region(15, 15, 20, 20)], default_registry(), {"per_region": 1},
                               np.random.default_rng(3), np.random.default_rng(4))

    assert len(placed) == 1
    poi = placed[0]
    assert 0 < np.hypot(poi.x - 15, poi.y - 15) <= 1.5, "Best sites sit next to fresh water"

def test_settlements_respect_spacing():
    grid = _plains(40, 40)
    placed = place_settlements(grid, [_region(20, 20, 29, 29)], default_registry(), {"per_region": 10},
                               np.random.default_rng(3), np.random.default_rng(4))
    assert len(placed) > 1
    for a, b in itertools.combinations(placed, 2):
        assert np.hypot(a.x - b.x, a.y - b.y) >= 4.0

def test_dungeons_need_rough_ground():
    grid = _plains(30, 30)
    grid.set_terrain(5, 5, TerrainType.HILLS, 1.5)
    grid.set_terrain(6, 6, TerrainType.FOREST, 1.2)
    regions = [_region(5, 5, 10, 10), _region(6, 6, 10, 10)]
    dungeons = place_dungeons(grid, regions, default_registry(), {"dungeons_per_region": 1.0},
                              np.random.default_rng(0), np.random.default_rng(1))

    assert sorted(d.position for d in dungeons) == [(5, 5), (6, 6)]
    assert [d.id for d in dungeons] == ["dungeon_0", "dungeon_1"]
    assert all(grid.terrain_at(*d.position) is TerrainType.DUNGEON for d in dungeons)

def test_landmarks_avoid_water():
    grid = Grid.blank(20, 20)
    grid.set_terrain(3, 4, TerrainType.FOREST, 1.2)
    landmarks = place_landmarks(grid, [_region(5, 5, 10, 10)] * 2, default_registry(), {"landmarks_per_region": 1.0},
                                np.random.default_rng(0), np.random.default_rng(1))

    assert [l.position for l in landmarks] == [(3, 4)]
    assert grid.point_of_interest_id[4, 3] == landmarks[0].id

def test_trace_reaches_target():
    cells = trace((0, 0), (20, 15), np.random.default_rng(9))
    last = cells[-1]

    assert cells[0] == (0, 0)
    assert np.hypot(last[0] - 20, last[1] - 15) <= 2.0
    assert len(cells) <= 4 * 25 + 10

def test_trace_same_cell():
    assert trace((4, 4), (4, 4), np.random.default_rng(0)) == []

def test_link_bridges_rivers():
    grid = _plains(12, 10)
    for y in range(10):
        grid.set_terrain(5, y, TerrainType.RIVER, 2.0)
    a = PointOfInterest(id="settlement_0", name="A", kind=PoiKind.TOWN, x=0, y=5)
    b = PointOfInterest(id="settlement_1", name="B", kind=PoiKind.VILLAGE, x=10, y=5)
    grid.point_of_interest_id[5, 0] = a.id
    grid.point_of_interest_id[5, 10] = b.id
    link(grid, a, b, True, default_registry(), np.random.default_rng(0), jitter=0.0)

    assert grid.terrain_at(5, 5) is TerrainType.BRIDGE
    assert grid.movement_cost[5, 5] == pytest.approx(1.0)
    assert grid.terrain_at(5, 4) is TerrainType.RIVER
    assert grid.terrain_at(0, 5) is TerrainType.PLAINS, "Endpoints keep their terrain"
    for x in (1, 2, 3, 4, 6, 7, 8, 9):
        assert grid.terrain_at(x, 5) is TerrainType.ROAD
        assert grid.movement_cost[5, x] == pytest.approx(0.8)
    assert a.connected_to == ["settlement_1"]
    assert b.connected_to == ["settlement_0"]

def test_paint_keeps_roads_and_water():
    grid = _plains(6, 1)
    reg = default_registry()
    grid.set_terrain(1, 0, TerrainType.ROAD, 0.8)
    grid.set_terrain(2, 0, TerrainType.OCEAN, 100.0)
    grid.set_terrain(3, 0, TerrainType.LAKE, 100.0)
    painted = paint(grid, [(0, 0), (1, 0), (2, 0), (3, 0), (4, 0), (9, 0)], False, reg)

    assert painted == 2
    assert grid.terrain_at(0, 0) is TerrainType.PATH
    assert grid.movement_cost[0, 0] == pytest.approx(0.9)
    assert grid.terrain_at(1, 0) is TerrainType.ROAD
    assert grid.terrain_at(2, 0) is TerrainType.OCEAN
    assert grid.terrain_at(3, 0) is TerrainType.LAKE

def test_connect_links_every_settlement():
    grid = _plains(40, 40)
    pois = [
        PointOfInterest(id="settlement_0", name="A", kind=PoiKind.VILLAGE, x=5, y=5),
        PointOfInterest(id="settlement_1", name="B", kind=PoiKind.VILLAGE, x=30, y=30),
        PointOfInterest(id="settlement_2", name="C", kind=PoiKind.TOWN, x=8, y=30),
        PointOfInterest(id="dungeon_0", name="D", kind=PoiKind.DUNGEON, x=20, y=20),
    ]
    links = connect(grid, pois, default_registry(), {"poi_link_chance": 1.0}, np.random.default_rng(1))

    assert links == 4
    for poi in pois:
        assert poi.connected_to
    assert "settlement_2" in pois[0].connected_to
    assert grid.terrain_mask(TerrainType.ROAD).any()
    assert grid.terrain_mask(TerrainType.PATH).any()

def test_world_roads_connect(world):
    towns = world.settlements()
    if len(towns) > 1:
        assert all(t.connected_to for t in towns)
    ids = {p.id for p in world.points_of_interest}
    for poi in world.points_of_interest:
        assert set(poi.connected_to) <= ids
