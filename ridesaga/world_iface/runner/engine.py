import os, copy, json, time, hashlib, logging, yaml, numpy as np, pandas as pd
from typing import Any, Dict, List, Optional
from jsonschema import validate
from blake3 import blake3
from .errors import InvalidDimensions
from .registry import build_registry, default_terrain, apply_danger_levels
from . import initgen, climate, hydrology, regions, settlements, roads
from .world_map import WorldMap, Grid, TERRAINS, BIOMES
from ..schemas.schema import get_schema
logger = logging.getLogger(__name__)
SCHEMA_VERSION = "1.0"
ARTIFACTS = [
    "manifest.json",
    "scenario.json",
    os.path.join("grid", "cells.parquet"),
    os.path.join("grid", "regions.parquet"),
    os.path.join("streams", "points_of_interest.ndjson"),
]
def scenario_defaults() -> Dict[str, Any]:
    return {
        "world": {"type": "grid", "width": 96, "height": 96, "wrap": {"x": True, "y": True}},
        "randomness": {"seed": 1337, "partitions": {"terrain_elevation": 1, "climate": 2, "biome": 3, "hydrology": 4, "regions": 5, "settlements": 6, "roads": 7, "naming": 8, "exploration": 9}},
        "elevation_profile": {"tiles_per_range": 25, "range_peak": 80.0, "range_jitter": 20.0, "range_falloff": 30.0, "tiles_per_basin": 40, "basin_depth": 20.0, "noise_point_fraction": 0.001, "base_elevation": 42.0, "diffusion_passes": 5, "diffusion_noise": 5.0},
        "climate_profile": {"lapse": 40.0, "base_humidity": 60.0, "humidity_jitter": 40.0, "ridge_elevation": 60.0, "orographic": 20.0, "water_elevation": 30.0, "water_radius": 10.0, "water_bonus": 20.0, "smoothing_radius": 2, "smoothing_keep": 0.7, "volcanic_chance": 0.05},
        "hydrology_profile": {"river_count": 3, "river_source_elevation": 70.0, "river_spacing_divisor": 5, "river_mouth_elevation": 15.0, "tiles_per_lake": 40, "lake_elevation": [15.0, 40.0], "lake_radius": [3, 7], "lake_level": 15.0},
        "regions": {"tiles_per_region": 30, "spacing_divisor": 5, "placement_attempts": 100, "size": [10, 29]},
        "settlements": {"per_region": 3, "spacing_divisor": 10, "top_candidates": 3, "town_chance": 0.3, "water_radius": 3, "plains_bonus": 10.0, "water_weight": 5.0, "water_bonus": 15.0, "path_weight": 2.0, "village_shop_chance": 0.5, "village_blacksmith_chance": 0.3, "dungeons_per_region": 0.7, "landmarks_per_region": 0.5},
        "roads": {"jitter": 0.3, "poi_link_chance": 0.7},
        "exploration": {"reveal_radius": 3, "start_radius": 5, "discover_distance": 5, "explore_distance": 1, "region_discover_percent": 5, "impassable_cost": 50.0},
        "terrain": default_terrain(),
    }
def load_scenario(path: str) -> Dict[str, Any]:
    with open(path, "r") as f:
        cfg = yaml.safe_load(f)
    validate(cfg, get_schema())
    cfg = apply_defaults(cfg)
    cfg["_scenario_hash"] = stable_hash(cfg)
    return cfg
def apply_defaults(cfg: Dict[str, Any]) -> Dict[str, Any]:
    defaults = scenario_defaults()
    for block, values in defaults.items():
        if block not in cfg:
            cfg[block] = values
        elif isinstance(values, dict):
            for k, v in values.items():
                cfg[block].setdefault(k, v)
    wrap = cfg["world"]["wrap"]
    wrap.setdefault("x", True)
    wrap.setdefault("y", True)
    return cfg
def stable_hash(obj: Any) -> str:
    body = {k: v for k, v in obj.items() if k != "_scenario_hash"} if isinstance(obj, dict) else obj
    s = json.dumps(body, sort_keys=True, separators=(",", ":"))
    return hashlib.blake2b(s.encode("utf-8"), digest_size=16).hexdigest()
def build_seed_partitions(base_seed: int, partitions: Dict[str, int]) -> Dict[str, np.random.Generator]:
    seeds = {}
    for k, off in partitions.items():
        seeds[k] = np.random.default_rng(int(base_seed + off))
    return seeds
def check_dimensions(width: Any, height: Any):
    for v in (width, height):
        if isinstance(v, bool) or not isinstance(v, (int, np.integer)) or v <= 0:
            raise InvalidDimensions(width, height)
def resolve_scenario(width: int, height: int, seed: Optional[int] = None, cfg: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    check_dimensions(width, height)
    if cfg is None:
        cfg = scenario_defaults()
    else:
        cfg = apply_defaults({k: copy.deepcopy(v) for k, v in cfg.items() if k != "_scenario_hash"})
    cfg["world"]["width"] = int(width)
    cfg["world"]["height"] = int(height)
    if seed is None:
        seed = int(np.random.SeedSequence().entropy % (2 ** 31))
    cfg["randomness"]["seed"] = int(seed)
    validate(cfg, get_schema())
    cfg["_scenario_hash"] = stable_hash(cfg)
    return cfg
def assemble_fields(cfg: Dict[str, Any]) -> Dict[str, np.ndarray]:
    h = int(cfg["world"]["height"])
    w = int(cfg["world"]["width"])
    wrapx = bool(cfg["world"]["wrap"]["x"])
    wrapy = bool(cfg["world"]["wrap"]["y"])
    ep = cfg["elevation_profile"]
    cp = cfg["climate_profile"]
    e_seed = int(cfg["randomness"]["seed"] + cfg["randomness"]["partitions"]["terrain_elevation"])
    c_seed = int(cfg["randomness"]["seed"] + cfg["randomness"]["partitions"]["climate"])
    E = initgen.elevation(h, w, ep, e_seed, wrapx, wrapy)
    T = initgen.temperature(h, w, cp, E)
    H = initgen.humidity(h, w, cp, c_seed, E, wrapx, wrapy)
    H, T = initgen.smooth_climate(H, T, cp, wrapx, wrapy)
    out = {"elevation": E, "humidity": H, "temperature": T}
    for k in out:
        out[k] = np.clip(out[k], 0.0, 100.0).astype(np.float32)
    return out
def build_world(cfg: Dict[str, Any]) -> WorldMap:
    t0 = time.time()
    h = int(cfg["world"]["height"])
    w = int(cfg["world"]["width"])
    check_dimensions(w, h)
    seed = int(cfg["randomness"]["seed"])
    reg = build_registry(cfg)
    seeds = build_seed_partitions(seed, cfg["randomness"]["partitions"])
    fields = assemble_fields(cfg)
    gate = seeds["biome"].random((h, w))
    grid = climate.build_grid(fields["elevation"], fields["humidity"], fields["temperature"], gate, reg)
    climate.assign_biomes(grid, seeds["biome"], cfg["climate_profile"])
    hp = cfg["hydrology_profile"]
    hydrology.carve_rivers(grid, reg, hp)
    hydrology.carve_lakes(grid, reg, hp, seeds["hydrology"])
    world_regions = regions.identify_regions(grid, cfg["regions"], seeds["regions"], seeds["naming"])
    sp = cfg["settlements"]
    pois = settlements.place_settlements(grid, world_regions, reg, sp, seeds["settlements"], seeds["naming"])
    pois += settlements.place_dungeons(grid, world_regions, reg, sp, seeds["settlements"], seeds["naming"])
    pois += settlements.place_landmarks(grid, world_regions, reg, sp, seeds["settlements"], seeds["naming"])
    roads.connect(grid, pois, reg, cfg["roads"], seeds["roads"])
    apply_danger_levels(grid, reg)
    world = WorldMap(
        width=w,
        height=h,
        seed=seed,
        grid=grid,
        regions=world_regions,
        points_of_interest=pois,
        exploration=dict(cfg["exploration"]),
        scenario_hash=cfg.get("_scenario_hash", stable_hash(cfg)),
    )
    world.tracker.place_player(seeds["exploration"])
    logger.info("Generated %dx%d world (seed %d): %d regions, %d points of interest in %.2fs",
                w, h, seed, len(world_regions), len(pois), time.time() - t0)
    return world
def generate_world(width: int, height: int, seed: Optional[int] = None, cfg: Optional[Dict[str, Any]] = None) -> WorldMap:
    return build_world(resolve_scenario(width, height, seed, cfg))
def file_digest(path: str) -> str:
    h = blake3()
    with open(path, "rb") as f:
        while True:
            b = f.read(1048576)
            if not b:
                break
            h.update(b)
    return h.hexdigest()
def write_checksums(run_dir: str, files: List[str]):
    os.makedirs(os.path.join(run_dir, "checksums"), exist_ok=True)
    for fp in files:
        out = os.path.join(run_dir, "checksums", os.path.basename(fp) + ".blake3")
        with open(out, "w") as o:
            o.write(file_digest(fp))
def cells_frame(grid: Grid) -> pd.DataFrame:
    ys, xs = np.indices((grid.height, grid.width))
    return pd.DataFrame({
        "x": xs.ravel().astype(np.int32),
        "y": ys.ravel().astype(np.int32),
        "elevation": grid.elevation.ravel(),
        "humidity": grid.humidity.ravel(),
        "temperature": grid.temperature.ravel(),
        "terrain": [TERRAINS[c].value for c in grid.terrain.ravel()],
        "biome": [BIOMES[c].value for c in grid.biome.ravel()],
        "movement_cost": grid.movement_cost.ravel(),
        "danger_level": grid.danger_level.ravel(),
        "explored": grid.explored.ravel(),
        "point_of_interest_id": pd.Series(grid.point_of_interest_id.ravel(), dtype=object),
    })
def write_world(world: WorldMap, run_dir: str, cfg: Optional[Dict[str, Any]] = None, label: Optional[str] = None, runtime_s: float = 0.0) -> str:
    t0 = time.time()
    os.makedirs(os.path.join(run_dir, "grid"), exist_ok=True)
    os.makedirs(os.path.join(run_dir, "streams"), exist_ok=True)
    manifest = {
        "schema_version": SCHEMA_VERSION,
        "scenario_hash": world.scenario_hash,
        "seed": world.seed,
        "seed_partitions": cfg["randomness"]["partitions"] if cfg else {},
        "created": int(time.time()),
        "world": {"width": world.width, "height": world.height},
        "label": label or os.path.basename(os.path.normpath(run_dir)).replace("run-", "", 1),
        "player_position": list(world.current_player_position),
        "exploration": world.exploration,
    }
    if cfg is not None:
        with open(os.path.join(run_dir, "scenario.json"), "w") as f:
            json.dump(cfg, f, separators=(",", ":"), sort_keys=True)
    cells_frame(world.grid).to_parquet(os.path.join(run_dir, "grid", "cells.parquet"), index=False)
    dfr = pd.DataFrame([r.to_dict() for r in world.regions], columns=[
        "id", "name", "description", "center_x", "center_y", "width", "height",
        "biome", "main_terrain", "discovered", "explored_percent"])
    dfr.to_parquet(os.path.join(run_dir, "grid", "regions.parquet"), index=False)
    with open(os.path.join(run_dir, "streams", "points_of_interest.ndjson"), "w") as s:
        for poi in world.points_of_interest:
            s.write(json.dumps(poi.to_dict(), sort_keys=True) + "\n")
    manifest["runtime_s"] = runtime_s + (time.time() - t0)
    with open(os.path.join(run_dir, "manifest.json"), "w") as f:
        json.dump(manifest, f, separators=(",", ":"), sort_keys=True)
    files = [os.path.join(run_dir, a) for a in ARTIFACTS]
    files = [fp for fp in files if os.path.exists(fp)]
    write_checksums(run_dir, files)
    return run_dir
def save_world(world: WorldMap, out_dir: str, label: Optional[str] = None, cfg: Optional[Dict[str, Any]] = None, runtime_s: float = 0.0) -> str:
    os.makedirs(out_dir, exist_ok=True)
    run_label = label or time.strftime("%Y%m%d-%H%M%S")
    run_dir = os.path.join(out_dir, f"run-{run_label}")
    write_world(world, run_dir, cfg, run_label, runtime_s)
    logger.info("Saved world to %s", run_dir)
    return run_dir
