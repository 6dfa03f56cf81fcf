from typing import Optional, Tuple

import numpy as np
from matplotlib.path import Path


def round_to_pixels(device_x, device_y) -> Tuple[np.ndarray, np.ndarray]:
    """
    Round device coordinates to integer pixels for raster output.

    Parameters
    ----------
    device_x, device_y : array-like
        Device-space coordinates.

    Returns
    -------
    Tuple[np.ndarray, np.ndarray]
        Integer pixel coordinates (int64).
    """
    px = np.rint(np.asarray(device_x, dtype=np.float64)).astype(np.int64)
    py = np.rint(np.asarray(device_y, dtype=np.float64)).astype(np.int64)
    return px, py


def to_path(
    device_x,
    device_y,
    count: Optional[int] = None,
    vectorized: bool = True,
) -> Path:
    """
    Build a single open polyline path from reduced device coordinates.

    Parameters
    ----------
    device_x, device_y : array-like
        Device-space coordinates, e.g. the buffers filled by the reducer.
    count : Optional[int], default=None
        Number of valid points. If None, all points are used.
    vectorized : bool, default=True
        Keep double precision (vector export). If False, coordinates are
        rounded to pixels first (raster output).

    Returns
    -------
    Path
        Path with one MOVETO followed by LINETO segments and no fill.
    """
    device_x = np.asarray(device_x, dtype=np.float64)
    device_y = np.asarray(device_y, dtype=np.float64)
    if count is None:
        count = min(len(device_x), len(device_y))
    if count < 0 or count > len(device_x) or count > len(device_y):
        raise ValueError(
            f"count={count} out of range for buffers of length {len(device_x)} and {len(device_y)}"
        )

    if count == 0:
        return Path(np.empty((0, 2)))

    xs, ys = device_x[:count], device_y[:count]
    if not vectorized:
        xs, ys = round_to_pixels(xs, ys)

    vertices = np.column_stack([xs, ys]).astype(np.float64)
    codes = np.full(count, Path.LINETO, dtype=Path.code_type)
    codes[0] = Path.MOVETO
    return Path(vertices, codes)


def reduce_to_path(reducer, x, y, vectorized: bool = True) -> Path:
    """Reduce a sample series with ``reducer`` and return it as a path."""
    device_x, device_y = reducer.reduce(x, y)
    return to_path(device_x, device_y, vectorized=vectorized)
