import pytest
import json
import tempfile
import os
from ridesaga.world_iface.runner.engine import generate_world, save_world, write_world
from ridesaga.world_iface.runner.hydrator import load_world, verify_checksums, get_manifest, terrain_histogram
from ridesaga.world_iface.runner.errors import ChecksumMismatch
from ridesaga.world_iface.runner.world_map import WorldMap

@pytest.fixture
def test_run():
    with tempfile.TemporaryDirectory() as tmpdir:
        world = generate_world(48, 40, seed=99)
        run_dir = save_world(world, tmpdir, label="hydrator")
        yield run_dir, world

def test_load_world_round_trip(test_run):
    run_dir, world = test_run
    loaded = load_world(run_dir)

    assert loaded == world
    assert loaded.grid.elevation.dtype == world.grid.elevation.dtype
    assert loaded.points_of_interest == world.points_of_interest
    assert loaded.regions == world.regions

def test_loaded_world_accepts_moves(test_run):
    run_dir, world = test_run
    loaded = load_world(run_dir)
    g = loaded.grid
    for layer in [g.elevation, g.humidity, g.temperature, g.terrain, g.biome,
                  g.movement_cost, g.danger_level, g.explored, g.point_of_interest_id]:
        assert layer.flags.writeable

    for d in ["north", "east", "south", "west", "east", "east"]:
        assert loaded.move(d) == world.move(d)
    assert loaded == world

def test_dict_round_trip():
    world = generate_world(40, 40, seed=8)
    data = json.loads(json.dumps(world.to_dict()))
    restored = WorldMap.from_dict(data)

    assert restored == world
    assert restored.to_dict() == world.to_dict()

def test_round_trip_after_exploring(test_run):
    run_dir, world = test_run
    for d in ["east", "east", "south", "west", "north"]:
        world.move(d)
    write_world(world, run_dir, label="hydrator")
    loaded = load_world(run_dir)

    assert loaded == world
    assert loaded.current_player_position == world.current_player_position

def test_verify_checksums(test_run):
    run_dir, world = test_run
    checked = verify_checksums(run_dir)

    assert "manifest.json" in checked
    assert os.path.join("grid", "cells.parquet") in checked

def test_tampered_artifact_rejected(test_run):
    run_dir, world = test_run
    with open(os.path.join(run_dir, "streams", "points_of_interest.ndjson"), "a") as f:
        f.write("\n")

    with pytest.raises(ChecksumMismatch):
        load_world(run_dir)
    assert load_world(run_dir, verify=False).points_of_interest == world.points_of_interest

def test_get_manifest(test_run):
    run_dir, world = test_run
    m = get_manifest(run_dir)

    assert m["label"] == "hydrator"
    assert m["seed"] == 99

def test_terrain_histogram(test_run):
    run_dir, world = test_run
    hist = terrain_histogram(run_dir)

    assert sum(hist.values()) == 48 * 40
    assert hist.get("settlement", 0) == len(world.settlements())
