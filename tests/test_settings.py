import numpy as np
import pytest
from loguru import logger

from pytrace import CoordinateReducer, Viewport, configure_logging


@pytest.fixture
def reset_logger():
    yield
    logger.remove()


def test_configure_logging_filters_by_level(capsys, reset_logger):
    configure_logging("warning")
    logger.info("hidden message")
    logger.warning("visible message")

    captured = capsys.readouterr()
    assert "visible message" in captured.err
    assert "hidden message" not in captured.err


def test_reducer_debug_logging(capsys, reset_logger):
    configure_logging("DEBUG")
    reducer = CoordinateReducer(Viewport(0.0, 2.0, 0.0, 1.0))
    reducer.reduce([0.0, 1.0, 2.0], [0.0, 0.5, 1.0])

    captured = capsys.readouterr()
    assert "Reduced 3 samples to 3 points" in captured.err


def test_reduce_into_warns_about_nan(capsys, reset_logger):
    configure_logging("WARNING")
    reducer = CoordinateReducer(Viewport(0.0, 2.0, 0.0, 1.0))
    out_x = np.empty(3)
    out_y = np.empty(3)

    count = reducer.reduce_into([0.0, 1.0, 2.0], [0.0, np.nan, 1.0], out_x, out_y)

    assert count == 3
    assert "NaN" in capsys.readouterr().err


def test_large_output_warning(capsys, reset_logger, monkeypatch):
    configure_logging("WARNING")
    monkeypatch.setattr(CoordinateReducer, "LARGE_OUTPUT_WARNING_THRESHOLD", 2)
    reducer = CoordinateReducer(Viewport(0.0, 3.0, 0.0, 3.0))

    reducer.reduce([0.0, 1.0, 2.0, 3.0], [0.0, 1.0, 0.0, 1.0])

    assert "still has 4 points" in capsys.readouterr().err


def test_no_large_output_warning_below_threshold(capsys, reset_logger):
    configure_logging("WARNING")
    reducer = CoordinateReducer(Viewport(0.0, 3.0, 0.0, 3.0))

    reducer.reduce([0.0, 1.0, 2.0, 3.0], [0.0, 1.0, 0.0, 1.0])

    assert "still has" not in capsys.readouterr().err
