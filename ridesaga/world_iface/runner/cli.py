import os, json, time, typer, yaml, logging
from typing import Optional
from jsonschema import validate
from ..schemas.schema import get_schema
from .engine import scenario_defaults, stable_hash
app = typer.Typer(add_completion=False)
ABBREVIATIONS = {"n": "north", "s": "south", "e": "east", "w": "west"}
@app.callback()
def main(log_level: str = typer.Option("WARNING", help="Logging level for the run")):
    logging.basicConfig(level=getattr(logging, log_level.upper(), logging.WARNING), format="%(asctime)s %(levelname)s %(name)s: %(message)s")
@app.command()
def init():
    d = scenario_defaults()
    out = os.path.join("ridesaga", "world_iface", "scenarios")
    os.makedirs(out, exist_ok=True)
    p = os.path.join(out, "world-a.yaml")
    with open(p, "w") as f:
        yaml.safe_dump(d, f, sort_keys=True)
    typer.echo(p)
@app.command()
def validate_scenario(path: str):
    with open(path, "r") as f:
        cfg = yaml.safe_load(f)
    validate(cfg, get_schema())
    typer.echo(stable_hash(cfg))
@app.command()
def generate(path: str, out: str = "runs", label: Optional[str] = None, seed: Optional[int] = None, width: Optional[int] = None, height: Optional[int] = None):
    from .engine import load_scenario, resolve_scenario, build_world, save_world
    cfg = load_scenario(path)
    w = width if width is not None else cfg["world"]["width"]
    h = height if height is not None else cfg["world"]["height"]
    s = seed if seed is not None else cfg["randomness"]["seed"]
    cfg = resolve_scenario(w, h, s, cfg)
    t0 = time.time()
    world = build_world(cfg)
    rd = save_world(world, out, label, cfg, time.time() - t0)
    typer.echo(os.path.abspath(rd))
@app.command()
def inspect(run_dir: str):
    import pandas as pd
    from .hydrator import get_manifest, terrain_histogram, load_points_of_interest
    m = get_manifest(run_dir)
    typer.echo(json.dumps({"label": m.get("label"), "seed": m.get("seed"), "world": m.get("world"), "player_position": m.get("player_position"), "runtime_s": m.get("runtime_s")}, separators=(",", ":"), sort_keys=True))
    typer.echo(json.dumps(terrain_histogram(run_dir), separators=(",", ":"), sort_keys=True))
    pois = load_points_of_interest(run_dir)
    if pois:
        df = pd.DataFrame([{"id": p.id, "name": p.name, "kind": p.kind.value, "x": p.x, "y": p.y, "discovered": p.discovered, "links": len(p.connected_to)} for p in pois])
        typer.echo(df.to_string(index=False))
@app.command()
def explore(run_dir: str, moves: str = "", steps: int = 0, walker: str = "random", seed: int = 0):
    from .engine import write_world
    from .hydrator import load_world, get_manifest, get_scenario
    from ...explorer_iface.walkers import make_walker, ExpeditionRunner
    world = load_world(run_dir)
    results = []
    for token in [t.strip().lower() for t in moves.split(",") if t.strip()]:
        results.append(world.move(ABBREVIATIONS.get(token, token)))
    stats = None
    if steps > 0:
        stats = ExpeditionRunner(make_walker(walker, world, seed)).run(steps)
    label = get_manifest(run_dir).get("label")
    write_world(world, run_dir, get_scenario(run_dir) or None, label)
    typer.echo(json.dumps({"position": list(world.current_player_position), "moves": results, "expedition": stats}, separators=(",", ":"), sort_keys=True))
    for r in world.regions:
        typer.echo(f"{r.id} {r.name}: {r.explored_percent}% explored, discovered={r.discovered}")
if __name__ == "__main__":
    app()
