from warnings import warn

import matplotlib as mpl
import matplotlib.pyplot as plt
import numpy as np
from loguru import logger
from matplotlib.patches import PathPatch

from pytrace import CoordinateReducer, Viewport, configure_logging, reduce_to_path

# --- User configuration dictionary ---
CONFIG = {
    "N_SAMPLES": 200000,  # number of samples in the synthetic series
    "STEP_EVERY": 20000,  # samples between level changes of the step signal
    "NOISE": 1e-4,  # model-space noise added on top of the steps
    "TOLERANCE": 0.5,  # device-space y tolerance (pixels)
    "LOG_LEVEL": "INFO",  # logging level: DEBUG, INFO, SUCCESS, WARNING, ERROR, CRITICAL
    # Device rectangle of the chart area (ulx, uly, lrx, lry)
    "DEVICE_RECT": (60.0, 20.0, 860.0, 420.0),
    "VIEWS": [
        {"x_min": 0.0, "x_max": 1.0},
        {"x_min": 0.25, "x_max": 0.45},
    ],
}


def make_series(n_samples: int, step_every: int, noise: float):
    """Synthetic step signal with a little noise."""
    rng = np.random.default_rng(0)
    x = np.linspace(0.0, 1.0, n_samples)
    y = (np.arange(n_samples) // step_every % 3).astype(np.float64)
    y += rng.normal(0.0, noise, n_samples)
    return x, y


def main() -> None:
    """
    Reduce a synthetic series for each configured view and plot the result.
    """
    configure_logging(CONFIG.get("LOG_LEVEL", "INFO"))

    x, y = make_series(CONFIG["N_SAMPLES"], CONFIG["STEP_EVERY"], CONFIG["NOISE"])
    ulx, uly, lrx, lry = CONFIG["DEVICE_RECT"]

    fig, axes = plt.subplots(len(CONFIG["VIEWS"]), 1, squeeze=False)
    for ax, view in zip(axes[:, 0], CONFIG["VIEWS"]):
        viewport = Viewport.from_device_rect(
            view["x_min"], view["x_max"], -0.5, 2.5, ulx, uly, lrx, lry
        )
        reducer = CoordinateReducer(viewport, tolerance=CONFIG["TOLERANCE"])
        path = reduce_to_path(reducer, x, y, vectorized=False)
        logger.success(
            f"View x=[{view['x_min']}, {view['x_max']}]: {len(x)} samples -> {len(path.vertices)} points"
        )

        ax.add_patch(PathPatch(path, fill=False, color="black"))
        ax.set_xlim(ulx, lrx)
        ax.set_ylim(lry, uly)  # device y grows downwards
        ax.set_title(f"x=[{view['x_min']}, {view['x_max']}]")

    plt.show()


if __name__ == "__main__":
    # Set Matplotlib rcParams directly here
    for optn, val in {
        "figure.constrained_layout.use": True,
        "figure.dpi": 90,
        "font.family": ("sans-serif",),
        "font.size": 11,
        "lines.linewidth": 1.8,
        "xtick.direction": "in",
        "ytick.direction": "in",
        "axes.linewidth": 1.4,
    }.items():
        if isinstance(val, (list, tuple)):
            val = tuple(val)
        try:
            mpl.rcParams[optn] = val
        except KeyError:
            warn(f"mpl rcparams key '{optn}' not recognised as a valid rc parameter.")
    main()
