import os
import json
import numpy as np
import pandas as pd
from typing import Dict, Any, List

from .engine import ARTIFACTS, file_digest
from .errors import ChecksumMismatch
from .world_map import WorldMap, Grid, Region, PointOfInterest, TerrainType, BiomeType, TERRAIN_CODES, BIOME_CODES

def get_manifest(run_dir: str) -> Dict[str, Any]:
    with open(os.path.join(run_dir, "manifest.json"), "r") as f:
        return json.load(f)

def get_scenario(run_dir: str) -> Dict[str, Any]:
    scenario_path = os.path.join(run_dir, "scenario.json")
    if not os.path.exists(scenario_path):
        return {}
    with open(scenario_path, "r") as f:
        return json.load(f)

def verify_checksums(run_dir: str) -> List[str]:
    checked = []
    for artifact in ARTIFACTS:
        fp = os.path.join(run_dir, artifact)
        cp = os.path.join(run_dir, "checksums", os.path.basename(artifact) + ".blake3")
        if not os.path.exists(cp):
            continue
        with open(cp, "r") as f:
            expected = f.read().strip()
        if not os.path.exists(fp):
            raise ChecksumMismatch(artifact, expected, "missing")
        actual = file_digest(fp)
        if actual != expected:
            raise ChecksumMismatch(artifact, expected, actual)
        checked.append(artifact)
    return checked

def load_grid(run_dir: str, width: int, height: int) -> Grid:
    df = pd.read_parquet(os.path.join(run_dir, "grid", "cells.parquet"))
    df = df.sort_values(["y", "x"], kind="stable")
    shape = (height, width)
    terrain_lookup = {t.value: TERRAIN_CODES[t] for t in TerrainType}
    biome_lookup = {b.value: BIOME_CODES[b] for b in BiomeType}
    poi = df["point_of_interest_id"].astype(object)
    poi = poi.where(poi.notna(), None)
    return Grid(
        width=width,
        height=height,
        elevation=df["elevation"].to_numpy(dtype=np.float32, copy=True).reshape(shape),
        humidity=df["humidity"].to_numpy(dtype=np.float32, copy=True).reshape(shape),
        temperature=df["temperature"].to_numpy(dtype=np.float32, copy=True).reshape(shape),
        terrain=np.array([terrain_lookup[v] for v in df["terrain"]], dtype=np.int8).reshape(shape),
        biome=np.array([biome_lookup[v] for v in df["biome"]], dtype=np.int8).reshape(shape),
        movement_cost=df["movement_cost"].to_numpy(dtype=np.float32, copy=True).reshape(shape),
        danger_level=df["danger_level"].to_numpy(dtype=np.int16, copy=True).reshape(shape),
        explored=df["explored"].to_numpy(dtype=bool, copy=True).reshape(shape),
        point_of_interest_id=np.array(poi.tolist(), dtype=object).reshape(shape),
    )

def load_regions(run_dir: str) -> List[Region]:
    df = pd.read_parquet(os.path.join(run_dir, "grid", "regions.parquet"))
    return [Region.from_dict(row) for row in df.to_dict(orient="records")]

def load_points_of_interest(run_dir: str) -> List[PointOfInterest]:
    pois = []
    with open(os.path.join(run_dir, "streams", "points_of_interest.ndjson"), "r") as s:
        for line in s:
            if line.strip():
                pois.append(PointOfInterest.from_dict(json.loads(line)))
    return pois

def load_world(run_dir: str, verify: bool = True) -> WorldMap:
    if verify:
        verify_checksums(run_dir)
    m = get_manifest(run_dir)
    width = int(m["world"]["width"])
    height = int(m["world"]["height"])
    x, y = m["player_position"]
    return WorldMap(
        width=width,
        height=height,
        seed=int(m["seed"]),
        grid=load_grid(run_dir, width, height),
        regions=load_regions(run_dir),
        points_of_interest=load_points_of_interest(run_dir),
        current_player_position=(int(x), int(y)),
        exploration=dict(m.get("exploration", {})),
        scenario_hash=str(m.get("scenario_hash", "")),
    )

def terrain_histogram(run_dir: str) -> Dict[str, int]:
    df = pd.read_parquet(os.path.join(run_dir, "grid", "cells.parquet"), columns=["terrain"])
    counts = df["terrain"].value_counts()
    return {str(k): int(v) for k, v in counts.sort_index().items()}
