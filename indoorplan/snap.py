"""Grid snapping for pointer-derived coordinates."""

# Indoorplan imports
from indoorplan import config
from indoorplan.models import Position

# Standard library imports
from typing import Sequence

# Third-party imports
import numpy as np


def snap_coord(coord: Sequence[float], enabled: bool, interval: float = config.SNAP_GRID_INTERVAL) -> Position:
    """
    Snap a coordinate to the grid if snapping is enabled.

    Each axis is rounded independently to the nearest multiple of ``interval``.
    Snapping an already snapped coordinate returns the same value.

    Args:
        coord: (x, y) coordinate.
        enabled: When False the coordinate is returned unchanged.
        interval: Grid spacing, defaults to config.SNAP_GRID_INTERVAL.

    Returns:
        Position: The (possibly snapped) coordinate.
    """
    if not enabled:
        return (coord[0], coord[1])
    # Half-up rounding per axis
    x = float(np.floor(coord[0] / interval + 0.5)) * interval
    y = float(np.floor(coord[1] / interval + 0.5)) * interval
    return (x, y)
