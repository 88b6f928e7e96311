"""
Data model for the indoor floor-plan editor.

This module contains:
- Point, LineString, Polygon, MultiPolygon: 2D geometries with GeoJSON-style dict conversion
- ObjectType, AppMode: editor enumerations
- WallProps, DoorProps, StairProps, ElevatorProps: per-type object properties
- IndoorObject, FloorData, UndoEntry: the records held by the map store
"""

# Standard library imports
import copy
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, ClassVar, Dict, List, Mapping, Optional, Tuple, Union

Position = Tuple[float, float]


def _as_position(coord) -> Position:
    return (float(coord[0]), float(coord[1]))


# -----------------------------------------------------------------------------
# Geometry
# -----------------------------------------------------------------------------

@dataclass
class Point:
    coordinates: Position
    type: ClassVar[str] = "Point"

    def __post_init__(self):
        self.coordinates = _as_position(self.coordinates)

    def to_dict(self) -> dict:
        return {"type": self.type, "coordinates": list(self.coordinates)}


@dataclass
class LineString:
    coordinates: List[Position]
    type: ClassVar[str] = "LineString"

    def __post_init__(self):
        self.coordinates = [_as_position(c) for c in self.coordinates]
        if len(self.coordinates) < 2:
            raise ValueError("LineString requires at least 2 positions")

    def to_dict(self) -> dict:
        return {"type": self.type, "coordinates": [list(c) for c in self.coordinates]}


def _check_ring(ring: List[Position]) -> None:
    if len(ring) < 4:
        raise ValueError(f"Polygon ring requires at least 4 positions, got {len(ring)}")
    if ring[0] != ring[-1]:
        raise ValueError("Polygon ring must be closed (first position equals last)")


@dataclass
class Polygon:
    """Polygon as a list of rings, the first being the outer ring.

    Rings must be closed. Self-intersection is not checked.
    """
    coordinates: List[List[Position]]
    type: ClassVar[str] = "Polygon"

    def __post_init__(self):
        self.coordinates = [[_as_position(c) for c in ring] for ring in self.coordinates]
        if not self.coordinates:
            raise ValueError("Polygon requires an outer ring")
        for ring in self.coordinates:
            _check_ring(ring)

    @property
    def outer_ring(self) -> List[Position]:
        return self.coordinates[0]

    def to_dict(self) -> dict:
        return {
            "type": self.type,
            "coordinates": [[list(c) for c in ring] for ring in self.coordinates],
        }


@dataclass
class MultiPolygon:
    """Only used to carry building footprints; never stored on an object."""
    coordinates: List[List[List[Position]]]
    type: ClassVar[str] = "MultiPolygon"

    def __post_init__(self):
        self.coordinates = [
            [[_as_position(c) for c in ring] for ring in polygon]
            for polygon in self.coordinates
        ]

    def to_dict(self) -> dict:
        return {
            "type": self.type,
            "coordinates": [[[list(c) for c in ring] for ring in poly] for poly in self.coordinates],
        }


Geometry = Union[Point, LineString, Polygon, MultiPolygon]

GEOMETRY_TYPES = {cls.type: cls for cls in (Point, LineString, Polygon, MultiPolygon)}


def geometry_from_dict(data: Mapping[str, Any]) -> Geometry:
    """Build a geometry from a GeoJSON-style ``{"type", "coordinates"}`` mapping.

    Raises:
        ValueError: If the geometry type is not one of the supported types.
    """
    geom_type = data.get("type")
    if geom_type not in GEOMETRY_TYPES:
        raise ValueError(f"Unsupported geometry type: {geom_type!r}")
    return GEOMETRY_TYPES[geom_type](data["coordinates"])


# -----------------------------------------------------------------------------
# Enumerations
# -----------------------------------------------------------------------------

class ObjectType(str, Enum):
    WALL     = "Wall"
    DOOR     = "Door"
    STAIR    = "Stair"
    ELEVATOR = "Elevator"


class AppMode(str, Enum):
    BROWSE = "browse"
    EDIT   = "edit"


# -----------------------------------------------------------------------------
# Object properties
# -----------------------------------------------------------------------------

# Exported key -> attribute name
_PROP_ALIASES = {"wallId": "wall_id"}
_EXPORT_NAMES = {attr: key for key, attr in _PROP_ALIASES.items()}


@dataclass
class ObjectProps:
    """Properties shared by every indoor object.

    Attributes:
        rotation: Absolute rotation in degrees, [0, 360).
        extra: Open key/value extension fields carried through export.
    """
    rotation: float = 0.0
    extra: Dict[str, Any] = field(default_factory=dict)

    def merge(self, updates: Mapping[str, Any]) -> None:
        """Shallow key-wise merge; keys not present in ``updates`` keep their value.

        Unknown keys land in ``extra`` under their exported name, and an
        ``extra`` mapping is merged into it rather than nested.

        Raises:
            ValueError: If ``extra`` is given as something other than a mapping.
        """
        known = {f.name for f in fields(self) if f.name != "extra"}
        for key, value in updates.items():
            attr = _PROP_ALIASES.get(key, key)
            if attr in known:
                setattr(self, attr, value)
            elif attr == "extra":
                if not isinstance(value, Mapping):
                    raise ValueError(f"extra props must be a mapping, got {type(value).__name__}")
                self.merge({k: v for k, v in value.items() if k != "extra"})
            else:
                self.extra[_EXPORT_NAMES.get(attr, key)] = value

    def to_dict(self) -> dict:
        out = {"rotation": self.rotation}
        out.update(self.extra)
        return out


@dataclass
class WallProps(ObjectProps):
    pass


@dataclass
class DoorProps(ObjectProps):
    wall_id: Optional[str] = None

    def to_dict(self) -> dict:
        out = super().to_dict()
        if self.wall_id is not None:
            out["wallId"] = self.wall_id
        return out


@dataclass
class StairProps(ObjectProps):
    pass


@dataclass
class ElevatorProps(ObjectProps):
    pass


PROPS_BY_TYPE = {
    ObjectType.WALL:     WallProps,
    ObjectType.DOOR:     DoorProps,
    ObjectType.STAIR:    StairProps,
    ObjectType.ELEVATOR: ElevatorProps,
}


def make_props(object_type: ObjectType, values: Optional[Mapping[str, Any]] = None) -> ObjectProps:
    """Create default props for ``object_type`` (rotation 0) merged with ``values``."""
    props = PROPS_BY_TYPE[ObjectType(object_type)]()
    if values:
        props.merge(values)
    return props


def validate_geometry(object_type: ObjectType, geometry: Geometry) -> None:
    """Check that ``geometry`` is a shape the object type can hold.

    Raises:
        ValueError: On a wall that is not a 2-vertex LineString or a geometry
                    type the object type does not use.
    """
    expected = {
        ObjectType.WALL:     LineString,
        ObjectType.DOOR:     Point,
        ObjectType.STAIR:    Polygon,
        ObjectType.ELEVATOR: Point,
    }[ObjectType(object_type)]
    if not isinstance(geometry, expected):
        raise ValueError(
            f"{ObjectType(object_type).value} requires {expected.type} geometry, got {geometry.type}")
    if isinstance(geometry, LineString) and len(geometry.coordinates) != 2:
        raise ValueError(f"Wall LineString must have exactly 2 vertices, got {len(geometry.coordinates)}")


# -----------------------------------------------------------------------------
# Store records
# -----------------------------------------------------------------------------

@dataclass
class IndoorObject:
    id: str
    type: ObjectType
    geometry: Geometry
    props: ObjectProps

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "type": ObjectType(self.type).value,
            "geometry": self.geometry.to_dict(),
            "props": copy.deepcopy(self.props.to_dict()),
        }


@dataclass
class FloorData:
    floor_index: str
    elevation: float
    floor_polygon: Optional[Polygon] = None
    objects: List[IndoorObject] = field(default_factory=list)

    def index_of(self, object_id: str) -> int:
        """Position of ``object_id`` in ``objects``, or -1 if absent."""
        for i, obj in enumerate(self.objects):
            if obj.id == object_id:
                return i
        return -1


@dataclass
class UndoEntry:
    """Pre-mutation snapshot of one floor's object list."""
    floor_idx: int
    snapshot: List[IndoorObject]
