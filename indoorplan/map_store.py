"""
Map store: the single mutable aggregate behind the indoor floor-plan editor.

Holds building/session state, one FloorData per configured floor level and the
undo log. Every structural mutation (add/remove/update) pushes exactly one undo
entry before it is applied, so the newest entry is always one step behind the
live state. Selection, mode, tool and snap flags are not undoable.

Usage:
    from indoorplan import MapStore, ObjectType, Point
    store = MapStore()
    store.enter_building("bldg-1", footprint)
    door = store.add_object(ObjectType.ELEVATOR, Point((0.0, 0.0)))
    store.undo()
"""

# Indoorplan imports
from indoorplan import config
from indoorplan.export import build_export_payload
from indoorplan.models import (
    AppMode,
    FloorData,
    Geometry,
    IndoorObject,
    ObjectType,
    Polygon,
    make_props,
    validate_geometry,
)
from indoorplan.undo_log import UndoLog

# Standard library imports
import copy
import logging
import uuid
from typing import Any, List, Mapping, Optional, Sequence

logger = logging.getLogger(__name__)


class MapStore:
    """Session state, per-floor object store and undo history.

    Args:
        floor_defs: Floor levels instantiated on every building entry.
        default_floor_idx: Floor selected when a building is entered.
        max_undo: Undo history depth.
    """

    def __init__(
        self,
        floor_defs:         Sequence[config.FloorDef]   = tuple(config.FLOORS),
        default_floor_idx:  int                         = config.DEFAULT_FLOOR_INDEX,
        max_undo:           int                         = config.MAX_UNDO,
    ):
        self.floor_defs:            List[config.FloorDef]   = list(floor_defs)
        self.default_floor_idx:     int                     = default_floor_idx

        # Building
        self.building_id:           Optional[str]           = None
        self.building_footprint:    Optional[Geometry]      = None
        self.inside_building:       bool                    = False

        # Floors
        self.current_floor_idx:     int                     = default_floor_idx
        self.floors:                List[FloorData]         = []

        # Editing
        self.mode:                  AppMode                 = AppMode.BROWSE
        self.active_tool:           Optional[ObjectType]    = None
        self.snap_enabled:          bool                    = False
        self.selected_object_id:    Optional[str]           = None

        # Undo
        self.undo_log:              UndoLog                 = UndoLog(max_undo)

        # User-facing notice
        self.toast_message:         Optional[str]           = None

    # -------------------------------------------------------------------------
    # Session lifecycle
    # -------------------------------------------------------------------------

    def enter_building(self, building_id: str, footprint: Optional[Geometry]) -> None:
        """Enter a building: fresh empty floors, no selection, empty undo log, edit mode."""
        self.building_id        = building_id
        self.building_footprint = footprint
        self.inside_building    = True
        self.current_floor_idx  = self.default_floor_idx
        self.selected_object_id = None
        self.undo_log.clear()
        self.mode               = AppMode.EDIT
        self.floors             = [
            FloorData(floor_index=f.index, elevation=f.elevation) for f in self.floor_defs
        ]
        logger.info(f"Entered building {building_id} ({len(self.floors)} floors)")

    def exit_building(self) -> None:
        """Discard all building and floor state and return to browse mode."""
        logger.info(f"Exited building {self.building_id}")
        self.building_id        = None
        self.building_footprint = None
        self.inside_building    = False
        self.floors             = []
        self.selected_object_id = None
        self.undo_log.clear()
        self.mode               = AppMode.BROWSE
        self.active_tool        = None

    def set_floor(self, idx: int) -> None:
        """Switch the current floor and clear selection. The undo log is kept.

        Raises:
            IndexError: If ``idx`` is outside the configured floor levels.
        """
        if not 0 <= idx < len(self.floor_defs):
            raise IndexError(f"Floor index {idx} out of range (0..{len(self.floor_defs) - 1})")
        self.current_floor_idx  = idx
        self.selected_object_id = None
        logger.info(f"Switched to floor {self.floor_defs[idx].label}")

    def set_floor_polygon(self, polygon: Optional[Polygon]) -> None:
        """Replace the current floor's polygon (derived data, not undoable)."""
        floor = self.get_current_floor()
        if floor is None:
            return
        floor.floor_polygon = polygon

    # -------------------------------------------------------------------------
    # UI flags
    # -------------------------------------------------------------------------

    def set_mode(self, mode: AppMode) -> None:
        self.mode = AppMode(mode)

    def set_tool(self, tool: Optional[ObjectType]) -> None:
        self.active_tool = ObjectType(tool) if tool is not None else None

    def set_snap_enabled(self, enabled: bool) -> None:
        self.snap_enabled = bool(enabled)

    def show_toast(self, message: str) -> None:
        self.toast_message = message

    def clear_toast(self) -> None:
        self.toast_message = None

    # -------------------------------------------------------------------------
    # Object mutations (undoable)
    # -------------------------------------------------------------------------

    def add_object(
        self,
        object_type: ObjectType,
        geometry: Geometry,
        extra_props: Optional[Mapping[str, Any]] = None,
    ) -> Optional[IndoorObject]:
        """
        Create an object on the current floor and append it (top of z-order).

        Args:
            object_type: Wall, Door, Stair or Elevator.
            geometry: Geometry matching the object type (2-point LineString for walls).
                      A copy is stored, never the caller's instance.
            extra_props: Props merged over the defaults (rotation 0).

        Returns:
            IndoorObject: The created object, or None when no building is entered.

        Raises:
            ValueError: If the geometry does not suit the object type.
        """
        object_type = ObjectType(object_type)
        validate_geometry(object_type, geometry)
        floor = self.get_current_floor()
        if floor is None:
            logger.warning(f"add_object({object_type.value}) ignored: no building entered")
            return None

        obj = IndoorObject(
            id=str(uuid.uuid4()),
            type=object_type,
            geometry=copy.deepcopy(geometry),
            props=make_props(object_type, extra_props),
        )
        self.undo_log.push(self.current_floor_idx, floor.objects)
        floor.objects.append(obj)
        logger.debug(f"Added {object_type.value} {obj.id} on floor {floor.floor_index}")
        return obj

    def remove_object(self, object_id: str) -> None:
        """Remove an object from the current floor; unknown ids are ignored."""
        floor = self.get_current_floor()
        if floor is None:
            return
        idx = floor.index_of(object_id)
        if idx == -1:
            logger.debug(f"remove_object: unknown id {object_id}")
            return

        self.undo_log.push(self.current_floor_idx, floor.objects)
        floor.objects.pop(idx)
        if self.selected_object_id == object_id:
            self.selected_object_id = None
        logger.debug(f"Removed {object_id} from floor {floor.floor_index}")

    def update_object(
        self,
        object_id: str,
        geometry: Optional[Geometry] = None,
        props: Optional[Mapping[str, Any]] = None,
    ) -> None:
        """
        Update an object on the current floor; unknown ids are ignored.

        ``geometry`` replaces the stored geometry wholesale; ``props`` is merged
        key-wise so keys absent from the update keep their previous value.
        """
        floor = self.get_current_floor()
        if floor is None:
            return
        idx = floor.index_of(object_id)
        if idx == -1:
            logger.debug(f"update_object: unknown id {object_id}")
            return

        obj = floor.objects[idx]
        if geometry is not None:
            validate_geometry(obj.type, geometry)

        self.undo_log.push(self.current_floor_idx, floor.objects)
        if geometry is not None:
            obj.geometry = copy.deepcopy(geometry)
        if props:
            obj.props.merge(props)
        logger.debug(f"Updated {object_id} on floor {floor.floor_index}")

    def select_object(self, object_id: Optional[str]) -> None:
        """Set the selection (not validated, not undoable)."""
        self.selected_object_id = object_id

    def undo(self) -> bool:
        """
        Restore the floor recorded in the newest undo entry.

        The entry's snapshot fully replaces that floor's objects, regardless of
        which floor is currently displayed. Selection is cleared.

        Returns:
            bool: False if there was nothing to undo or the entry's floor no
                  longer exists, True otherwise.
        """
        entry = self.undo_log.pop()
        if entry is None:
            return False
        if not 0 <= entry.floor_idx < len(self.floors):
            logger.warning(f"Undo entry for floor index {entry.floor_idx} dropped: no such floor")
            return False
        self.floors[entry.floor_idx].objects = entry.snapshot
        self.selected_object_id = None
        logger.debug(f"Undo on floor index {entry.floor_idx} ({len(self.undo_log)} left)")
        return True

    # -------------------------------------------------------------------------
    # Read accessors
    # -------------------------------------------------------------------------

    def get_current_floor(self) -> Optional[FloorData]:
        if 0 <= self.current_floor_idx < len(self.floors):
            return self.floors[self.current_floor_idx]
        return None

    def get_current_objects(self) -> List[IndoorObject]:
        floor = self.get_current_floor()
        return floor.objects if floor is not None else []

    def get_selected_object(self) -> Optional[IndoorObject]:
        if self.selected_object_id is None:
            return None
        return self.get_object(self.selected_object_id)

    def get_object(self, object_id: str) -> Optional[IndoorObject]:
        for obj in self.get_current_objects():
            if obj.id == object_id:
                return obj
        return None

    def export_payload(self) -> dict:
        """Deep snapshot of all floors in the interchange shape (see export.py)."""
        return build_export_payload(self.building_id, self.floors)
