"""
Indoorplan Configuration Module
===============================

Centralized configuration for floor levels, editing tolerances and output paths.
Coordinates are in the units of whatever planar projection the caller feeds in
(the defaults below assume longitude/latitude degrees).
"""

# fmt: off
# autopep8: off

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Tuple


@dataclass(frozen=True)
class FloorDef:
    """A configured floor level: label used as index, elevation in metres."""
    index:      str
    elevation:  float
    label:      str


# Root directory of the project
PROJECT_ROOT        = Path(__file__).parent.parent

# Output directory for exports, override with INDOORPLAN_OUTPUTS_DIR
OUTPUTS_DIR         = Path(os.getenv("INDOORPLAN_OUTPUTS_DIR", str(PROJECT_ROOT / "outputs")))

# ============================================================================
# FLOOR LEVELS
# ============================================================================
FLOORS: List[FloorDef] = [
    FloorDef(index="B2", elevation=-8, label="B2"),
    FloorDef(index="B1", elevation=-4, label="B1"),
    FloorDef(index="1F", elevation=0,  label="1F"),
    FloorDef(index="2F", elevation=4,  label="2F"),
]

DEFAULT_FLOOR_INDEX = 2         # 1F
FLOOR_HEIGHT        = 4         # metres

# ============================================================================
# EDITING
# ============================================================================
# Grid snap interval in degrees (~5 m at mid-latitudes)
SNAP_GRID_INTERVAL  = 0.00005

# Stair half-extents in degrees (~3 m x 5 m)
STAIR_WIDTH         = 0.00003
STAIR_LENGTH        = 0.00005

# Max distance from a click to a wall for a door to attach (~10 m)
DOOR_WALL_THRESHOLD = 0.0001

# Pointer tolerance used by the geometric hit-test (~1 m)
HIT_TOLERANCE       = 0.00001

# Undo history depth
MAX_UNDO            = 50

# Floor polygon used when the footprint is neither Polygon nor MultiPolygon
FALLBACK_CENTER:    Tuple[float, float] = (-122.4194, 37.7749)
FALLBACK_HALF_SIZE: Tuple[float, float] = (0.0003, 0.0002)
