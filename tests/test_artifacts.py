import pytest
import os
import json
import tempfile
import pandas as pd
from ridesaga.world_iface.runner.engine import load_scenario, build_world, save_world

SCENARIO = "ridesaga/world_iface/scenarios/world-a.yaml"

@pytest.fixture
def test_run():
    with tempfile.TemporaryDirectory() as tmpdir:
        cfg = load_scenario(SCENARIO)
        world = build_world(cfg)
        run_dir = save_world(world, tmpdir, label="artifacts", cfg=cfg)
        yield run_dir, world

def test_manifest_exists(test_run):
    run_dir, world = test_run
    manifest_path = os.path.join(run_dir, "manifest.json")
    assert os.path.exists(manifest_path), "manifest.json must exist"

    with open(manifest_path, "r") as f:
        manifest = json.load(f)

    assert manifest["label"] == "artifacts"
    assert manifest["seed"] == 1337
    assert manifest["world"] == {"width": 96, "height": 96}
    assert manifest["player_position"] == list(world.current_player_position)
    assert manifest["scenario_hash"] == world.scenario_hash
    assert manifest["runtime_s"] > 0.0
    assert "terrain_elevation" in manifest["seed_partitions"]

def test_runtime_includes_generation():
    with tempfile.TemporaryDirectory() as tmpdir:
        world = build_world(load_scenario(SCENARIO))
        run_dir = save_world(world, tmpdir, label="timed", runtime_s=2.5)
        with open(os.path.join(run_dir, "manifest.json"), "r") as f:
            manifest = json.load(f)

    assert manifest["runtime_s"] >= 2.5

def test_scenario_saved(test_run):
    run_dir, world = test_run
    with open(os.path.join(run_dir, "scenario.json"), "r") as f:
        cfg = json.load(f)

    assert "_scenario_hash" in cfg
    assert "world" in cfg
    assert "randomness" in cfg
    assert "terrain" in cfg

def test_cells_parquet(test_run):
    run_dir, world = test_run
    df = pd.read_parquet(os.path.join(run_dir, "grid", "cells.parquet"))

    assert len(df) == 96 * 96
    for col in ["x", "y", "elevation", "humidity", "temperature", "terrain", "biome",
                "movement_cost", "danger_level", "explored", "point_of_interest_id"]:
        assert col in df.columns
    assert df["explored"].sum() == world.grid.explored.sum()
    assert df["point_of_interest_id"].notna().sum() == len(world.points_of_interest)

def test_regions_parquet(test_run):
    run_dir, world = test_run
    df = pd.read_parquet(os.path.join(run_dir, "grid", "regions.parquet"))

    assert len(df) == len(world.regions)
    assert list(df["id"]) == [r.id for r in world.regions]

def test_points_of_interest_stream(test_run):
    run_dir, world = test_run
    with open(os.path.join(run_dir, "streams", "points_of_interest.ndjson"), "r") as f:
        rows = [json.loads(line) for line in f if line.strip()]

    assert [r["id"] for r in rows] == [p.id for p in world.points_of_interest]

def test_checksums_written(test_run):
    run_dir, world = test_run
    names = sorted(os.listdir(os.path.join(run_dir, "checksums")))

    assert names == sorted([
        "manifest.json.blake3", "scenario.json.blake3", "cells.parquet.blake3",
        "regions.parquet.blake3", "points_of_interest.ndjson.blake3",
    ])
    for name in names:
        with open(os.path.join(run_dir, "checksums", name), "r") as f:
            assert len(f.read().strip()) == 64
