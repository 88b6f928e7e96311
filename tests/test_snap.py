# Indoorplan imports
from indoorplan import config
from indoorplan.snap import snap_coord

# Third-party imports
import pytest


class TestSnapCoord:
    """Test suite for snap_coord"""

    def test_disabled_is_identity(self):
        assert snap_coord((0.000123, -0.000074), False) == (0.000123, -0.000074)

    def test_enabled_rounds_each_axis_to_grid(self):
        x, y = snap_coord((0.000123, -0.000074), True)
        assert x == pytest.approx(0.0001)
        assert y == pytest.approx(-0.00005)

    def test_default_interval_from_config(self):
        x, _ = snap_coord((config.SNAP_GRID_INTERVAL * 3.2, 0.0), True)
        assert x == pytest.approx(config.SNAP_GRID_INTERVAL * 3)

    def test_custom_interval(self):
        assert snap_coord((1.3, 2.8), True, interval=0.5) == (1.5, 3.0)

    def test_half_rounds_up(self):
        assert snap_coord((0.25, -0.25), True, interval=0.5) == (0.5, 0.0)

    @pytest.mark.parametrize("coord", [
        (0.000123, -0.000074),
        (-122.41941, 37.77493),
        (151.2093, -33.8688),
        (0.0, 0.0),
    ])
    def test_idempotent(self, coord):
        """Snapping an already snapped coordinate is a no-op"""
        once = snap_coord(coord, True)
        assert snap_coord(once, True) == once
