import pytest
import numpy as np
from ridesaga.world_iface.runner.engine import load_scenario, assemble_fields, build_world
from ridesaga.world_iface.runner import initgen
from ridesaga.world_iface.runner.world_map import TerrainType

SCENARIO = "ridesaga/world_iface/scenarios/world-a.yaml"

@pytest.fixture
def fields():
    cfg = load_scenario(SCENARIO)
    return assemble_fields(cfg)

@pytest.fixture
def world():
    return build_world(load_scenario(SCENARIO))

def test_fields_clamped(fields):
    for name, arr in fields.items():
        assert arr.shape == (96, 96)
        assert arr.dtype == np.float32
        assert np.all(arr >= 0.0), f"{name} has values < 0"
        assert np.all(arr <= 100.0), f"{name} has values > 100"
        assert not np.any(np.isnan(arr)), f"NaN detected in {name}"

def test_world_cells_clamped(world):
    g = world.grid
    for arr in (g.elevation, g.humidity, g.temperature):
        assert arr.min() >= 0.0
        assert arr.max() <= 100.0

def test_land_and_sea(fields):
    e = fields["elevation"]
    assert (e < 30).any(), "Ocean basins must produce water"
    assert (e >= 30).any(), "Map must contain land"
    assert (e > 70).any(), "Mountain ranges must produce high ground"

def test_temperature_midline_hot(fields):
    temp = fields["temperature"]
    north = temp[0:10, :].mean()
    middle = temp[43:53, :].mean()
    south = temp[-10:, :].mean()

    assert middle > north, "Midline must be warmer than the north edge"
    assert middle > south, "Midline must be warmer than the south edge"

def test_temperature_drops_with_elevation():
    E = np.zeros((20, 10), dtype=np.float32)
    E[:, 5:] = 100.0
    T = initgen.temperature(20, 10, {"lapse": 40.0}, E)

    assert np.allclose(T[10, :5] - T[10, 5:], 40.0)

def test_latitude_factor_peaks_at_midline():
    lat = initgen.latitude_factor(10)
    assert lat[5] == pytest.approx(1.0)
    assert lat[0] == pytest.approx(0.0)
    assert lat.argmax() == 5

def test_humidity_water_bonus():
    E = np.full((40, 40), 50.0, dtype=np.float32)
    E[18:22, 18:22] = 10.0
    params = {"humidity_jitter": 0.0, "water_radius": 10.0, "water_bonus": 20.0}
    H = initgen.humidity(40, 40, params, 0, E)
    base = initgen.humidity(40, 40, params, 0, np.full((40, 40), 50.0, dtype=np.float32))

    assert H[20, 24] > base[20, 24], "Cells near water must be more humid"
    assert H[20, 38] == pytest.approx(base[20, 38]), "Cells beyond the search radius keep their base humidity"

def test_smoothing_blend():
    arr = np.zeros((10, 10), dtype=np.float32)
    arr[5, 5] = 100.0
    out = initgen.smooth(arr, {"smoothing_radius": 2, "smoothing_keep": 0.7})

    assert out[5, 5] == pytest.approx(70.0 + 0.3 * 100.0 / 25.0, rel=1e-5)
    assert out[5, 7] == pytest.approx(0.3 * 100.0 / 25.0, rel=1e-5)
    assert out[0, 0] == 0.0

def test_flat_field_stays_flat():
    params = {"tiles_per_range": 1000, "tiles_per_basin": 1000, "noise_point_fraction": 0.0, "base_elevation": 42.0, "diffusion_noise": 0.0}
    e = initgen.elevation(20, 20, params, 3)

    assert np.allclose(e, 42.0), "Diffusing an unseeded field must not change it"

def test_terrain_movement_invariants(world):
    g = world.grid
    assert np.all(g.movement_cost[g.terrain_mask(TerrainType.OCEAN)] >= 100.0)
    assert np.all(g.movement_cost[g.terrain_mask(TerrainType.LAKE)] >= 100.0)
    assert np.all(g.movement_cost[g.terrain_mask(TerrainType.RIVER)] >= 2.0)
    assert np.all(g.movement_cost >= 0.0)
    assert np.all(g.danger_level >= 0)
