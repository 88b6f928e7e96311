"""
Building entry/exit and floor-polygon derivation.

The building-selection collaborator supplies an identifier and a footprint;
this module turns the footprint into the floor polygon shown on every level
and keeps it in sync when the floor changes.
"""

# Indoorplan imports
from indoorplan import config
from indoorplan.geometry_utils import create_rect_polygon
from indoorplan.map_store import MapStore
from indoorplan.models import Geometry, MultiPolygon, Polygon

# Standard library imports
import copy
import logging
import time
from typing import Any, Mapping, Optional

logger = logging.getLogger(__name__)


def derive_floor_polygon(footprint: Optional[Geometry]) -> Polygon:
    """
    Floor polygon for a building footprint.

    Polygon footprints are deep-copied; for a MultiPolygon only the first member
    is used. Anything else (including None) yields a fixed-size rectangle at
    config.FALLBACK_CENTER.
    """
    if isinstance(footprint, Polygon):
        return copy.deepcopy(footprint)
    if isinstance(footprint, MultiPolygon) and footprint.coordinates:
        return Polygon(copy.deepcopy(footprint.coordinates[0]))
    cx, cy = config.FALLBACK_CENTER
    hw, hh = config.FALLBACK_HALF_SIZE
    return create_rect_polygon(cx, cy, hw, hh)


def resolve_building_id(feature: Mapping[str, Any]) -> str:
    """Building id from a map feature: its id, then properties.osm_id, then a timestamp id."""
    if feature.get("id"):
        return str(feature["id"])
    osm_id = (feature.get("properties") or {}).get("osm_id")
    if osm_id:
        return str(osm_id)
    return f"bldg-{int(time.time() * 1000)}"


class BuildingSession:
    """Drives building lifecycle on a MapStore and regenerates floor polygons."""

    def __init__(self, store: MapStore):
        self.store = store

    def enter(self, building_id: str, footprint: Optional[Geometry]) -> None:
        if self.store.inside_building:
            logger.debug(f"Replacing building {self.store.building_id} with {building_id}")
        self.store.enter_building(building_id, footprint)
        self.regenerate_floor()

    def enter_feature(self, feature: Mapping[str, Any], footprint: Optional[Geometry]) -> Optional[str]:
        """Enter the building a map feature was clicked on; ignored when already inside."""
        if self.store.inside_building:
            return None
        building_id = resolve_building_id(feature)
        self.enter(building_id, footprint)
        return building_id

    def change_floor(self, idx: int) -> None:
        self.store.set_floor(idx)
        if self.store.inside_building:
            self.regenerate_floor()

    def regenerate_floor(self) -> None:
        """Regenerate the current floor's polygon from the stored footprint."""
        self.store.set_floor_polygon(derive_floor_polygon(self.store.building_footprint))

    def exit(self) -> None:
        self.store.exit_building()
