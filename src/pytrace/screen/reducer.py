from typing import Tuple

import numpy as np
from loguru import logger
from numba import njit

from pytrace.screen.viewport import Viewport
from pytrace.settings import DEFAULT_TOLERANCE


@njit
def _to_device_x(x_value, x_min, x_scale, origin_x):
    return origin_x + (x_value - x_min) * x_scale


@njit
def _to_device_y(y_value, y_min, y_scale, origin_y):
    return origin_y - (y_value - y_min) * y_scale


@njit
def _transform_data_to_screen_numba(
    x: np.ndarray,
    y: np.ndarray,
    x_min: float,
    x_max: float,
    y_min: float,
    x_scale: float,
    y_scale: float,
    origin_x: float,
    origin_y: float,
    apply_reduction: bool,
    tolerance: float,
    out_x: np.ndarray,
    out_y: np.ndarray,
) -> int:
    """
    Numba-optimized transform of a sample series to device space with reduction.

    Parameters
    ----------
    x, y : np.ndarray
        Model-space sample coordinates.
    x_min, x_max : float
        Visible x window in model space.
    y_min : float
        Model-space y value mapped onto ``origin_y``.
    x_scale, y_scale : float
        Model to device scale factors.
    origin_x, origin_y : float
        Device coordinates of the window's left edge and bottom edge.
    apply_reduction : bool
        Whether redundant points may be elided.
    tolerance : float
        Device-space y distance under which a point is redundant.
    out_x, out_y : np.ndarray
        Output buffers, at least ``len(x)`` long.

    Returns
    -------
    int
        Number of points written to the output buffers.
    """
    n = len(x)
    count = 0

    # Before-range: find the move-to anchor.
    first = -1
    for i in range(n):
        if x[i] >= x_min:
            first = i
            break
    if first < 0:
        return 0

    prev_y = _to_device_y(y[first], y_min, y_scale, origin_y)
    out_x[0] = _to_device_x(x[first], x_min, x_scale, origin_x)
    out_y[0] = prev_y
    count = 1

    # Scanning: ``invariant`` is set while samples sit within tolerance of the
    # sample before them and have not been written yet.
    invariant = False
    for i in range(first + 1, n):
        x_value = x[i]
        if x_value > x_max:
            # Close a pending flat run at the window edge. This also supplies
            # the second point when only the anchor was emitted; the anchor
            # itself is never repeated.
            if invariant:
                out_x[count] = _to_device_x(x[i - 1], x_min, x_scale, origin_x)
                out_y[count] = _to_device_y(y[i - 1], y_min, y_scale, origin_y)
                count += 1
            break

        x_pos = _to_device_x(x_value, x_min, x_scale, origin_x)
        y_pos = _to_device_y(y[i], y_min, y_scale, origin_y)
        redundant = (
            apply_reduction
            and y_pos >= prev_y - tolerance
            and y_pos <= prev_y + tolerance
        )

        if i == n - 1:
            if invariant and not redundant:
                out_x[count] = _to_device_x(x[i - 1], x_min, x_scale, origin_x)
                out_y[count] = _to_device_y(y[i - 1], y_min, y_scale, origin_y)
                count += 1
            # The final sample is never elided.
            out_x[count] = x_pos
            out_y[count] = y_pos
            count += 1
            break

        if redundant:
            # The redundancy test always compares against the previous sample.
            invariant = True
            prev_y = y_pos
            continue

        if invariant:
            # Close the flat run before moving on to the changed value.
            out_x[count] = _to_device_x(x[i - 1], x_min, x_scale, origin_x)
            out_y[count] = _to_device_y(y[i - 1], y_min, y_scale, origin_y)
            count += 1
            invariant = False

        out_x[count] = x_pos
        out_y[count] = y_pos
        count += 1
        prev_y = y_pos

    return count


def _as_series(values, name: str) -> np.ndarray:
    arr = np.ascontiguousarray(values, dtype=np.float64)
    if arr.ndim != 1:
        raise ValueError(f"{name} must be one-dimensional, got shape {arr.shape}")
    return arr


def transform_data_to_screen(
    x: np.ndarray,
    y: np.ndarray,
    x_min: float,
    x_max: float,
    y_min: float,
    x_scale: float,
    y_scale: float,
    origin_x: float,
    origin_y: float,
    apply_reduction: bool,
    tolerance: float,
    out_x: np.ndarray,
    out_y: np.ndarray,
) -> int:
    """
    Transform model-space samples to device space, eliding redundant points.

    The first sample at or beyond ``x_min`` is always emitted, as is the last
    sample inside the window. Interior samples whose device-y stays within
    ``tolerance`` of the sample before them are dropped; when such a flat run
    ends, the final sample of the run is emitted before the new value so the
    flat segment is kept instead of a slope.

    Parameters
    ----------
    x, y : np.ndarray
        Model-space sample coordinates of equal length.
    x_min, x_max : float
        Visible x window in model space. ``x_min <= x_max`` is assumed.
    y_min : float
        Model-space y value mapped onto ``origin_y``.
    x_scale, y_scale : float
        Model to device scale factors.
    origin_x, origin_y : float
        Device coordinates of the window's left edge and bottom edge.
    apply_reduction : bool
        If False every in-range point is emitted and ``tolerance`` is ignored.
    tolerance : float
        Non-negative device-space y tolerance.
    out_x, out_y : np.ndarray
        Caller-owned float64 buffers at least ``len(x)`` long. They are
        written in place.

    Returns
    -------
    int
        Number of valid entries in ``out_x`` and ``out_y``.

    Raises
    ------
    ValueError
        If the inputs have mismatched lengths or the buffers are too short.
    """
    x_arr = _as_series(x, "x")
    y_arr = _as_series(y, "y")
    if len(x_arr) != len(y_arr):
        raise ValueError(
            f"x and y must have the same length ({len(x_arr)} != {len(y_arr)})"
        )
    for name, buf in (("out_x", out_x), ("out_y", out_y)):
        if not isinstance(buf, np.ndarray) or buf.ndim != 1:
            raise ValueError(f"{name} must be a one-dimensional numpy array")
        if len(buf) < len(x_arr):
            raise ValueError(
                f"{name} has length {len(buf)}, need at least {len(x_arr)}"
            )

    return _transform_data_to_screen_numba(
        x_arr,
        y_arr,
        float(x_min),
        float(x_max),
        float(y_min),
        float(x_scale),
        float(y_scale),
        float(origin_x),
        float(origin_y),
        bool(apply_reduction),
        float(tolerance),
        out_x,
        out_y,
    )


class CoordinateReducer:
    """
    Reduces sample series to device-space polylines for a fixed viewport.

    Stateless between calls apart from its configuration, so a single
    instance can serve several series, including from several threads.
    """

    # Reduced outputs above this size are probably not what the caller wants
    LARGE_OUTPUT_WARNING_THRESHOLD = 100000

    def __init__(
        self,
        viewport: Viewport,
        apply_reduction: bool = True,
        tolerance: float = DEFAULT_TOLERANCE,
    ):
        """
        Initialise the reducer.

        Parameters
        ----------
        viewport : Viewport
            Model window and device mapping.
        apply_reduction : bool, default=True
            Whether to elide redundant points. Disable for exact output.
        tolerance : float, default=DEFAULT_TOLERANCE
            Device-space y tolerance for the redundancy test.

        Raises
        ------
        ValueError
            If ``tolerance`` is negative or not finite.
        """
        if not np.isfinite(tolerance) or tolerance < 0:
            raise ValueError(f"tolerance must be a non-negative number, got {tolerance}")
        self.viewport = viewport
        self.apply_reduction = apply_reduction
        self.tolerance = float(tolerance)

    def reduce_into(
        self, x: np.ndarray, y: np.ndarray, out_x: np.ndarray, out_y: np.ndarray
    ) -> int:
        """Reduce into caller-owned buffers and return the point count."""
        x_arr = _as_series(x, "x")
        y_arr = _as_series(y, "y")
        if np.isnan(x_arr).any() or np.isnan(y_arr).any():
            logger.warning("Input contains NaN values; they pass through unchanged")

        vp = self.viewport
        count = transform_data_to_screen(
            x_arr,
            y_arr,
            vp.x_min,
            vp.x_max,
            vp.y_min,
            vp.x_scale,
            vp.y_scale,
            vp.origin_x,
            vp.origin_y,
            self.apply_reduction,
            self.tolerance,
            out_x,
            out_y,
        )
        logger.debug(
            f"Reduced {len(x_arr)} samples to {count} points "
            f"(x window=[{vp.x_min}, {vp.x_max}], reduction={self.apply_reduction}, tolerance={self.tolerance})"
        )
        if count > self.LARGE_OUTPUT_WARNING_THRESHOLD:
            logger.warning(
                f"Reduced polyline still has {count} points. "
                f"Consider narrowing the view or raising the tolerance."
            )
        return count

    def reduce(self, x: np.ndarray, y: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        """
        Reduce a sample series to device-space coordinates.

        Parameters
        ----------
        x, y : np.ndarray
            Model-space sample coordinates.

        Returns
        -------
        Tuple[np.ndarray, np.ndarray]
            Device x and y of the reduced polyline.
        """
        x_arr = _as_series(x, "x")
        y_arr = _as_series(y, "y")
        out_x = np.empty(len(x_arr), dtype=np.float64)
        out_y = np.empty(len(x_arr), dtype=np.float64)
        count = self.reduce_into(x_arr, y_arr, out_x, out_y)
        return out_x[:count], out_y[:count]

    def transform(self, x: np.ndarray, y: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        """Map every sample to device space, without clipping or reduction."""
        return self.viewport.model_to_device(x, y)
