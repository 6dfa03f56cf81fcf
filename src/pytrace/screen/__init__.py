"""
Screen-space components for PyTrace.

This package maps model-space sample series onto device space and reduces
them to the polyline a renderer actually needs to stroke.
"""

from pytrace.screen.polyline import reduce_to_path, round_to_pixels, to_path
from pytrace.screen.reducer import CoordinateReducer, transform_data_to_screen
from pytrace.screen.viewport import Viewport

__all__ = [
    "CoordinateReducer",
    "transform_data_to_screen",
    "Viewport",
    "round_to_pixels",
    "to_path",
    "reduce_to_path",
]
