from typing import Tuple

import numpy as np
from loguru import logger


def _check_bounds(low: float, high: float, axis: str) -> None:
    if not np.isfinite(low) or not np.isfinite(high):
        raise ValueError(f"Non-finite {axis} bounds: ({low}, {high})")
    if low > high:
        raise ValueError(f"Reversed {axis} bounds: {axis}_min={low} > {axis}_max={high}")


class Viewport:
    """
    Visible model-space window and its affine mapping onto device space.

    Device y grows downwards, so model ``y_min`` lands on ``origin_y`` (the
    bottom edge of the chart) and larger values move up.
    """

    def __init__(
        self,
        x_min: float,
        x_max: float,
        y_min: float,
        y_max: float,
        origin_x: float = 0.0,
        origin_y: float = 0.0,
        x_scale: float = 1.0,
        y_scale: float = 1.0,
    ):
        """
        Initialise the viewport.

        Parameters
        ----------
        x_min, x_max : float
            Visible x range in model space.
        y_min, y_max : float
            Visible y range in model space.
        origin_x : float, default=0.0
            Device x of the left edge (``ulx``).
        origin_y : float, default=0.0
            Device y of the bottom edge (``lry``).
        x_scale, y_scale : float, default=1.0
            Device units per model unit.

        Raises
        ------
        ValueError
            If either range is reversed or not finite.
        """
        _check_bounds(x_min, x_max, "x")
        _check_bounds(y_min, y_max, "y")
        self.x_min = float(x_min)
        self.x_max = float(x_max)
        self.y_min = float(y_min)
        self.y_max = float(y_max)
        self.origin_x = float(origin_x)
        self.origin_y = float(origin_y)
        self.x_scale = float(x_scale)
        self.y_scale = float(y_scale)

    @classmethod
    def from_device_rect(
        cls,
        x_min: float,
        x_max: float,
        y_min: float,
        y_max: float,
        ulx: float,
        uly: float,
        lrx: float,
        lry: float,
    ) -> "Viewport":
        """
        Build a viewport that fits the model window into a device rectangle.

        Parameters
        ----------
        x_min, x_max, y_min, y_max : float
            Model-space window.
        ulx, uly : float
            Upper-left corner of the chart area in device space.
        lrx, lry : float
            Lower-right corner of the chart area in device space.

        Returns
        -------
        Viewport
            Viewport anchored at ``(ulx, lry)``.

        Raises
        ------
        ValueError
            If a model axis has zero span or the bounds are reversed.
        """
        _check_bounds(x_min, x_max, "x")
        _check_bounds(y_min, y_max, "y")
        if x_max == x_min or y_max == y_min:
            raise ValueError(
                f"Cannot derive scale from a zero-span window: x=({x_min}, {x_max}), y=({y_min}, {y_max})"
            )

        x_scale = (lrx - ulx) / (x_max - x_min)
        y_scale = (lry - uly) / (y_max - y_min)
        logger.debug(
            f"Derived viewport scales x_scale={x_scale:.6g}, y_scale={y_scale:.6g} for device rect ({ulx}, {uly})-({lrx}, {lry})"
        )
        return cls(x_min, x_max, y_min, y_max, ulx, lry, x_scale, y_scale)

    @property
    def device_width(self) -> float:
        return (self.x_max - self.x_min) * self.x_scale

    def model_to_device(self, x, y) -> Tuple[np.ndarray, np.ndarray]:
        """Convert model coordinates to device coordinates."""
        x = np.asarray(x, dtype=np.float64)
        y = np.asarray(y, dtype=np.float64)
        device_x = self.origin_x + (x - self.x_min) * self.x_scale
        device_y = self.origin_y - (y - self.y_min) * self.y_scale
        return device_x, device_y

    def device_to_model(self, device_x, device_y) -> Tuple[np.ndarray, np.ndarray]:
        """Convert device coordinates back to model coordinates."""
        if self.x_scale == 0 or self.y_scale == 0:
            raise ValueError("Cannot invert a viewport with a zero scale factor")
        device_x = np.asarray(device_x, dtype=np.float64)
        device_y = np.asarray(device_y, dtype=np.float64)
        x = self.x_min + (device_x - self.origin_x) / self.x_scale
        y = self.y_min + (self.origin_y - device_y) / self.y_scale
        return x, y

    def contains_x(self, x) -> np.ndarray:
        """Boolean mask of samples whose x lies in the visible window."""
        x = np.asarray(x, dtype=np.float64)
        return (x >= self.x_min) & (x <= self.x_max)

    def with_x_range(self, x_min: float, x_max: float) -> "Viewport":
        """
        Return a viewport showing a new x window in the same device width.

        Used for zooming and panning: the device rectangle stays put and the
        x scale is re-derived.
        """
        _check_bounds(x_min, x_max, "x")
        if x_max == x_min:
            raise ValueError(f"Cannot zoom to a zero-span x window at {x_min}")

        x_scale = self.device_width / (x_max - x_min)
        logger.debug(
            f"View changed to x=[{x_min}, {x_max}], x_scale {self.x_scale:.6g} -> {x_scale:.6g}"
        )
        return Viewport(
            x_min,
            x_max,
            self.y_min,
            self.y_max,
            self.origin_x,
            self.origin_y,
            x_scale,
            self.y_scale,
        )

    def __repr__(self) -> str:
        return (
            f"Viewport(x=[{self.x_min}, {self.x_max}], y=[{self.y_min}, {self.y_max}], "
            f"origin=({self.origin_x}, {self.origin_y}), scale=({self.x_scale}, {self.y_scale}))"
        )
