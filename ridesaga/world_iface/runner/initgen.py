import numpy as np
from numpy.typing import NDArray
from scipy.ndimage import distance_transform_edt
from .kernels import box_mean
def _rng(seed: int) -> np.random.Generator:
    return np.random.default_rng(seed)
def _stamp_ranges(seeds, mask, params: dict, g: np.random.Generator):
    h, w = seeds.shape
    count = int(w // int(params.get("tiles_per_range", 25)))
    peak = float(params.get("range_peak", 80.0))
    jitter = float(params.get("range_jitter", 20.0))
    falloff = float(params.get("range_falloff", 30.0))
    for _ in range(count):
        sx = int(g.integers(0, w))
        sy = int(g.integers(0, h))
        length = int(g.random() * (w / 3.0) + w / 6.0)
        angle = g.random() * 2.0 * np.pi
        dx = np.cos(angle)
        dy = np.sin(angle)
        half = length / 2.0
        for j in range(length):
            x = int(np.floor(sx + dx * j)) % w
            y = int(np.floor(sy + dy * j)) % h
            dist = abs(j - half) / half
            seeds[y, x] = peak + g.random() * jitter - dist * falloff
            mask[y, x] = True
def _stamp_basins(seeds, mask, params: dict, g: np.random.Generator):
    h, w = seeds.shape
    count = int(w // int(params.get("tiles_per_basin", 40)))
    depth = float(params.get("basin_depth", 20.0))
    for _ in range(count):
        cx = int(g.integers(0, w))
        cy = int(g.integers(0, h))
        radius = g.random() * (w / 8.0) + w / 8.0
        r = int(np.ceil(radius))
        yy, xx = np.mgrid[-r:r + 1, -r:r + 1]
        d = np.hypot(xx, yy)
        inside = d <= radius
        ys = (cy + yy[inside]) % h
        xs = (cx + xx[inside]) % w
        seeds[ys, xs] = depth - depth * (1.0 - d[inside] / radius)
        mask[ys, xs] = True
def _stamp_points(seeds, mask, params: dict, g: np.random.Generator):
    h, w = seeds.shape
    n = int(w * h * float(params.get("noise_point_fraction", 0.001)))
    if n <= 0:
        return
    xs = g.integers(0, w, n)
    ys = g.integers(0, h, n)
    seeds[ys, xs] = g.random(n) * 100.0
    mask[ys, xs] = True
def elevation(h: int, w: int, params: dict, seed: int, wrapx: bool = True, wrapy: bool = True) -> NDArray[np.float32]:
    g = _rng(seed)
    seeds = np.zeros((h, w), dtype=np.float32)
    mask = np.zeros((h, w), dtype=bool)
    _stamp_ranges(seeds, mask, params, g)
    _stamp_basins(seeds, mask, params, g)
    _stamp_points(seeds, mask, params, g)
    base = float(params.get("base_elevation", 42.0))
    e = np.where(mask, np.clip(seeds, 0.0, 100.0), base).astype(np.float32)
    amp = float(params.get("diffusion_noise", 5.0))
    for _ in range(int(params.get("diffusion_passes", 5))):
        mean = box_mean(e, 1, wrapx, wrapy)
        noise = ((g.random((h, w)) - 0.5) * amp).astype(np.float32)
        e = np.where(mask, e, np.clip(mean + noise, 0.0, 100.0)).astype(np.float32)
    return e
def latitude_factor(h: int) -> NDArray[np.float32]:
    half = h / 2.0
    y = np.arange(h, dtype=np.float32)
    return (1.0 - np.abs(y - half) / half).astype(np.float32)
def temperature(h: int, w: int, params: dict, E: NDArray[np.float32]) -> NDArray[np.float32]:
    lapse = float(params.get("lapse", 40.0))
    lat = latitude_factor(h)[:, None]
    t = lat * 100.0 - E / 100.0 * lapse
    return np.clip(t, 0.0, 100.0).astype(np.float32)
def _water_distance(water, radius: float, wrapx: bool, wrapy: bool):
    r = int(np.ceil(radius))
    py = r if wrapy else 0
    px = r if wrapx else 0
    padded = np.pad(water, ((py, py), (px, px)), mode="wrap")
    d = distance_transform_edt(~padded)
    h, w = water.shape
    return d[py:py + h, px:px + w]
def humidity(h: int, w: int, params: dict, seed: int, E: NDArray[np.float32], wrapx: bool = True, wrapy: bool = True) -> NDArray[np.float32]:
    g = _rng(seed)
    base = float(params.get("base_humidity", 60.0))
    jitter = float(params.get("humidity_jitter", 40.0))
    ridge = float(params.get("ridge_elevation", 60.0))
    orographic = float(params.get("orographic", 20.0))
    water_level = float(params.get("water_elevation", 30.0))
    radius = float(params.get("water_radius", 10.0))
    bonus = float(params.get("water_bonus", 20.0))
    lat = latitude_factor(h)[:, None]
    hum = lat * base + g.random((h, w)) * jitter
    high = E > ridge
    windward = np.zeros((h, w), dtype=bool)
    windward[:, 1:] = E[:, :-1] < E[:, 1:]
    leeward = np.zeros((h, w), dtype=bool)
    leeward[:, :-1] = E[:, 1:] < E[:, :-1]
    hum = hum + np.where(high & windward, orographic, np.where(high & leeward, -orographic, 0.0))
    water = E < water_level
    if water.any():
        d = _water_distance(water, radius, wrapx, wrapy)
        hum = hum + np.where(d <= radius, bonus * (1.0 - d / radius), 0.0)
    return np.clip(hum, 0.0, 100.0).astype(np.float32)
def smooth(arr: NDArray[np.float32], params: dict, wrapx: bool = True, wrapy: bool = True) -> NDArray[np.float32]:
    radius = int(params.get("smoothing_radius", 2))
    keep = float(params.get("smoothing_keep", 0.7))
    if radius <= 0:
        return arr
    out = keep * arr + (1.0 - keep) * box_mean(arr.astype(np.float32), radius, wrapx, wrapy)
    return np.clip(out, 0.0, 100.0).astype(np.float32)
def smooth_climate(H: NDArray[np.float32], T: NDArray[np.float32], params: dict, wrapx: bool = True, wrapy: bool = True):
    return smooth(H, params, wrapx, wrapy), smooth(T, params, wrapx, wrapy)
