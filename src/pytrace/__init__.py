"""
PyTrace: screen-space reduction of large data series

Maps model-space samples onto device space and drops the points that would
not change the rendered trace.
"""

from pytrace.screen.polyline import reduce_to_path, round_to_pixels, to_path
from pytrace.screen.reducer import CoordinateReducer, transform_data_to_screen
from pytrace.screen.viewport import Viewport
from pytrace.settings import DEFAULT_TOLERANCE, configure_logging

__all__ = [
    # Reduction
    "CoordinateReducer",
    "transform_data_to_screen",
    "Viewport",
    # Polyline output
    "round_to_pixels",
    "to_path",
    "reduce_to_path",
    # Settings
    "DEFAULT_TOLERANCE",
    "configure_logging",
]
