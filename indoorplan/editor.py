"""
Interaction controller for the indoor floor-plan editor.

Turns pointer and key events (in world coordinates) into MapStore operations:
selection, two-click wall drawing, door-to-wall snapping, stair/elevator
placement, drag-move and rotate-to-angle. Only transient gesture state lives
here (pending wall start, drag id/offset); object data is always read from
and written through the store.

Controls:
    Click           Select object (no tool) or place with the active tool
    Click, Click    Wall tool: start point, end point
    Drag            Move the selected object (no tool active)
    Ctrl/Cmd+Z      Undo
    Delete          Remove selected object
    Escape          Cancel pending wall, clear selection and tool
"""

# Indoorplan imports
from indoorplan import config
from indoorplan.geometry_utils import (
    centroid,
    create_rect_polygon,
    get_object_center,
    midpoint,
    point_to_segment_distance,
    rotate_points,
    translate_geometry,
)
from indoorplan.map_store import MapStore
from indoorplan.models import (
    AppMode,
    IndoorObject,
    LineString,
    ObjectType,
    Point,
    Polygon,
    Position,
)
from indoorplan.snap import snap_coord

# Standard library imports
import logging
from functools import partial
from typing import Callable, List, Optional, Sequence, Tuple

# Third-party imports
import numpy as np
from matplotlib.path import Path as MplPath

logger = logging.getLogger(__name__)

DOOR_REJECTED_MESSAGE = "Door must be placed on a wall"

# (objects, x, y) -> ids of struck objects, nearest first
HitTest = Callable[[Sequence[IndoorObject], float, float], List[str]]


def _close_ring(points: List[Position]) -> List[Position]:
    return points + [points[0]]


def _distance_to_object(obj: IndoorObject, x: float, y: float) -> float:
    geom = obj.geometry
    if isinstance(geom, Point):
        return float(np.hypot(x - geom.coordinates[0], y - geom.coordinates[1]))
    if isinstance(geom, LineString):
        return min(
            point_to_segment_distance((x, y), a, b).distance
            for a, b in zip(geom.coordinates[:-1], geom.coordinates[1:])
        )
    if isinstance(geom, Polygon):
        ring = geom.outer_ring
        if MplPath(ring).contains_point((x, y)):
            return 0.0
        return min(
            point_to_segment_distance((x, y), a, b).distance
            for a, b in zip(ring[:-1], ring[1:])
        )
    return float("inf")


def geometric_hit_test(
    objects: Sequence[IndoorObject],
    x: float,
    y: float,
    tolerance: float = config.HIT_TOLERANCE,
) -> List[str]:
    """
    Ids of objects whose shape lies within ``tolerance`` of (x, y), nearest first.

    Walls are hit along their segment, doors/elevators around their point and
    stairs anywhere inside or near their outline. Ties keep store (z) order.
    """
    hits: List[Tuple[float, int, str]] = []
    for order, obj in enumerate(objects):
        dist = _distance_to_object(obj, x, y)
        if dist <= tolerance:
            hits.append((dist, order, obj.id))
    hits.sort()
    return [object_id for _, _, object_id in hits]


class Editor:
    """Stateful gesture handler bound to one MapStore.

    Args:
        store: The map store all effects are routed through.
        hit_test: Callable returning struck object ids nearest first. Defaults
                  to ``geometric_hit_test``; a renderer may inject one that
                  queries its rendered features instead.
        hit_tolerance: Tolerance for the default hit-test.
        on_pan_change: Called with False when a drag starts and True when it ends.
        on_preview_change: Called with the (start, end) wall preview segment or None.
    """

    def __init__(
        self,
        store:              MapStore,
        hit_test:           Optional[HitTest]                                       = None,
        hit_tolerance:      float                                                   = config.HIT_TOLERANCE,
        on_pan_change:      Optional[Callable[[bool], None]]                        = None,
        on_preview_change:  Optional[Callable[[Optional[Tuple[Position, Position]]], None]] = None,
    ):
        self.store                                          = store
        self.hit_test:          HitTest                     = hit_test or partial(geometric_hit_test, tolerance=hit_tolerance)
        self.on_pan_change                                  = on_pan_change
        self.on_preview_change                              = on_preview_change

        # Wall 2-click state
        self.wall_first_point:  Optional[Position]          = None
        self.wall_preview:      Optional[Tuple[Position, Position]] = None

        # Drag state
        self.is_dragging:       bool                        = False
        self.drag_object_id:    Optional[str]               = None
        self.drag_offset:       Position                    = (0.0, 0.0)
        self.pan_enabled:       bool                        = True

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _set_wall_preview(self, start: Optional[Position], end: Optional[Position]) -> None:
        self.wall_preview = (start, end) if start is not None and end is not None else None
        if self.on_preview_change is not None:
            self.on_preview_change(self.wall_preview)

    def _set_pan(self, enabled: bool) -> None:
        self.pan_enabled = enabled
        if self.on_pan_change is not None:
            self.on_pan_change(enabled)

    def _hits(self, x: float, y: float) -> List[str]:
        return self.hit_test(self.store.get_current_objects(), x, y)

    def _pointer_enabled(self) -> bool:
        return self.store.inside_building and self.store.mode == AppMode.EDIT

    def set_tool(self, tool: Optional[ObjectType]) -> None:
        """Change the active tool; a pending wall is discarded."""
        self.cancel_wall()
        self.store.set_tool(tool)

    def cancel_wall(self) -> None:
        """Drop a pending wall start point without committing anything."""
        if self.wall_first_point is not None:
            logger.debug("Pending wall cancelled")
        self.wall_first_point = None
        self._set_wall_preview(None, None)

    # -------------------------------------------------------------------------
    # Pointer events
    # -------------------------------------------------------------------------

    def on_click(self, x: float, y: float) -> Optional[IndoorObject]:
        """Handle a click: select (no tool) or place with the active tool.

        Returns the created object, if any. Ignored outside a building or in
        browse mode.
        """
        if not self._pointer_enabled():
            return None
        coord = snap_coord((x, y), self.store.snap_enabled)
        tool = self.store.active_tool

        if tool is None:
            hits = self._hits(x, y)
            self.store.select_object(hits[0] if hits else None)
            return None

        if tool == ObjectType.WALL:
            return self._handle_wall_click(coord)
        if tool == ObjectType.DOOR:
            return self._handle_door_click(coord)
        if tool == ObjectType.STAIR:
            return self.store.add_object(
                ObjectType.STAIR,
                create_rect_polygon(coord[0], coord[1], config.STAIR_WIDTH, config.STAIR_LENGTH),
            )
        if tool == ObjectType.ELEVATOR:
            return self.store.add_object(ObjectType.ELEVATOR, Point(coord))
        return None

    def _handle_wall_click(self, coord: Position) -> Optional[IndoorObject]:
        if self.wall_first_point is None:
            self.wall_first_point = coord
            self._set_wall_preview(coord, coord)
            return None
        wall = self.store.add_object(ObjectType.WALL, LineString([self.wall_first_point, coord]))
        self.wall_first_point = None
        self._set_wall_preview(None, None)
        return wall

    def _handle_door_click(self, coord: Position) -> Optional[IndoorObject]:
        """Attach a door at the projection of ``coord`` onto the nearest wall."""
        best_dist = float("inf")
        best_nearest: Optional[Position] = None
        best_wall_id: Optional[str] = None

        for wall in self.store.get_current_objects():
            if wall.type != ObjectType.WALL:
                continue
            a, b = wall.geometry.coordinates
            distance, nearest = point_to_segment_distance(coord, a, b)
            if distance < best_dist:
                best_dist, best_nearest, best_wall_id = distance, nearest, wall.id

        if best_nearest is None or best_dist > config.DOOR_WALL_THRESHOLD:
            logger.info(f"Door placement rejected at {coord}: no wall within {config.DOOR_WALL_THRESHOLD}")
            self.store.show_toast(DOOR_REJECTED_MESSAGE)
            return None

        return self.store.add_object(ObjectType.DOOR, Point(best_nearest), {"wall_id": best_wall_id})

    def on_mouse_move(self, x: float, y: float) -> None:
        """Update an in-progress drag, or the wall preview while a wall is pending."""
        if not self._pointer_enabled():
            return
        snap = self.store.snap_enabled
        if self.is_dragging and self.drag_object_id is not None:
            obj = self.store.get_object(self.drag_object_id)
            if obj is None:
                return
            new_center = snap_coord((x - self.drag_offset[0], y - self.drag_offset[1]), snap)
            current_center = get_object_center(obj.geometry)
            dx = new_center[0] - current_center[0]
            dy = new_center[1] - current_center[1]
            if dx == 0 and dy == 0:
                return
            self.store.update_object(obj.id, geometry=translate_geometry(obj.geometry, dx, dy))
            return

        if self.store.active_tool == ObjectType.WALL and self.wall_first_point is not None:
            self._set_wall_preview(self.wall_first_point, snap_coord((x, y), snap))

    def on_mouse_down(self, x: float, y: float) -> bool:
        """Start dragging the selected object if the pointer is on it.

        Returns True when a drag started.
        """
        if not self._pointer_enabled() or self.store.active_tool is not None:
            return False
        selected = self.store.get_selected_object()
        if selected is None:
            return False
        if selected.id not in self._hits(x, y):
            return False

        center = get_object_center(selected.geometry)
        self.is_dragging    = True
        self.drag_object_id = selected.id
        self.drag_offset    = (x - center[0], y - center[1])
        self._set_pan(False)
        return True

    def on_mouse_up(self, x: Optional[float] = None, y: Optional[float] = None) -> None:
        # Not gated on mode: a started drag is always released
        if self.is_dragging:
            self.is_dragging    = False
            self.drag_object_id = None
            self._set_pan(True)

    # -------------------------------------------------------------------------
    # Rotation
    # -------------------------------------------------------------------------

    def rotate_selected_to(self, target_angle: float) -> None:
        """
        Rotate the selected object to an absolute angle in degrees.

        Walls rotate both endpoints about their midpoint and stairs every ring
        vertex about the polygon centroid, by (target - current rotation).
        Doors and elevators only store the new angle; their point stays put.
        """
        obj = self.store.get_selected_object()
        if obj is None:
            return

        target_angle = target_angle % 360
        delta = target_angle - (obj.props.rotation or 0)
        if delta == 0:
            return

        if obj.type == ObjectType.WALL:
            coords = obj.geometry.coordinates
            new_geometry = LineString(rotate_points(coords, midpoint(coords), delta))
            self.store.update_object(obj.id, geometry=new_geometry, props={"rotation": target_angle})
        elif obj.type == ObjectType.STAIR:
            center = centroid(obj.geometry.coordinates)
            new_geometry = Polygon([_close_ring(rotate_points(ring[:-1], center, delta))
                                    for ring in obj.geometry.coordinates])
            self.store.update_object(obj.id, geometry=new_geometry, props={"rotation": target_angle})
        else:
            self.store.update_object(obj.id, props={"rotation": target_angle})

    # -------------------------------------------------------------------------
    # Keyboard
    # -------------------------------------------------------------------------

    def delete_selected(self) -> bool:
        selected = self.store.get_selected_object()
        if selected is None:
            return False
        self.store.remove_object(selected.id)
        return True

    def on_key(self, key: str, ctrl: bool = False) -> bool:
        """Dispatch a key press. Returns True if the key was handled."""
        if ctrl and key.lower() == "z":
            self.store.undo()
            return True
        if key in ("Delete", "Backspace"):
            return self.delete_selected()
        if key == "Escape":
            self.cancel_wall()
            self.store.select_object(None)
            self.store.set_tool(None)
            return True
        return False
