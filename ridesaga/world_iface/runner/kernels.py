import numpy as np
from numba import njit
@njit(cache=True, fastmath=True)
def box_mean(arr, radius, wrapx, wrapy):
    h, w = arr.shape
    out = np.empty_like(arr)
    for y in range(h):
        for x in range(w):
            s = 0.0
            n = 0
            for dy in range(-radius, radius + 1):
                yy = y + dy
                if wrapy:
                    yy = (yy + h) % h
                elif yy < 0 or yy >= h:
                    continue
                for dx in range(-radius, radius + 1):
                    xx = x + dx
                    if wrapx:
                        xx = (xx + w) % w
                    elif xx < 0 or xx >= w:
                        continue
                    s += arr[yy, xx]
                    n += 1
            out[y, x] = s / n
    return out
@njit(cache=True)
def descend(elev, x, y, stop_below, max_steps):
    h, w = elev.shape
    xs = np.empty(max_steps + 1, dtype=np.int64)
    ys = np.empty(max_steps + 1, dtype=np.int64)
    xs[0] = x
    ys[0] = y
    n = 1
    for _ in range(max_steps):
        if elev[y, x] < stop_below:
            break
        lowest = elev[y, x]
        nx = -1
        ny = -1
        for dy in range(-1, 2):
            for dx in range(-1, 2):
                if dx == 0 and dy == 0:
                    continue
                cx = x + dx
                cy = y + dy
                if cx < 0 or cx >= w or cy < 0 or cy >= h:
                    continue
                if elev[cy, cx] < lowest:
                    lowest = elev[cy, cx]
                    nx = cx
                    ny = cy
        if nx < 0:
            break
        x = nx
        y = ny
        xs[n] = x
        ys[n] = y
        n += 1
    return xs[:n], ys[:n]
@njit(cache=True)
def proximity_scores(fresh, paths, radius):
    h, w = fresh.shape
    weighted = np.zeros((h, w), dtype=np.float64)
    near = np.zeros((h, w), dtype=np.bool_)
    path_count = np.zeros((h, w), dtype=np.int64)
    r2 = radius * radius
    for y in range(h):
        for x in range(w):
            for dy in range(-radius, radius + 1):
                cy = y + dy
                if cy < 0 or cy >= h:
                    continue
                for dx in range(-radius, radius + 1):
                    cx = x + dx
                    if cx < 0 or cx >= w:
                        continue
                    if dx * dx + dy * dy > r2:
                        continue
                    if fresh[cy, cx]:
                        near[y, x] = True
                        weighted[y, x] += 1.0 - np.sqrt(dx * dx + dy * dy) / radius
                    if paths[cy, cx]:
                        path_count[y, x] += 1
    return weighted, near, path_count
