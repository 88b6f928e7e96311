from .models import (
    AppMode,
    DoorProps,
    ElevatorProps,
    FloorData,
    IndoorObject,
    LineString,
    MultiPolygon,
    ObjectType,
    Point,
    Polygon,
    StairProps,
    UndoEntry,
    WallProps,
    geometry_from_dict,
)
from .map_store import MapStore
from .undo_log import UndoLog
from .editor import Editor, geometric_hit_test
from .building import BuildingSession, derive_floor_polygon
from .export import build_export_payload, export_json, export_objects_csv
from .snap import snap_coord
from . import geometry_utils, config
