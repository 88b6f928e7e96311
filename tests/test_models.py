# Indoorplan imports
from indoorplan.models import (
    DoorProps,
    IndoorObject,
    LineString,
    ObjectType,
    Point,
    Polygon,
    WallProps,
    geometry_from_dict,
    make_props,
    validate_geometry,
)

# Third-party imports
import pytest


class TestGeometryModels:
    """Test suite for geometry construction and validation"""

    def test_positions_coerced_to_float_tuples(self):
        line = LineString([[0, 0], [1, 2]])
        assert line.coordinates == [(0.0, 0.0), (1.0, 2.0)]

    def test_polygon_requires_closed_ring(self):
        with pytest.raises(ValueError, match="closed"):
            Polygon([[(0, 0), (1, 0), (1, 1), (0, 1)]])

    def test_polygon_requires_four_positions(self):
        with pytest.raises(ValueError, match="at least 4"):
            Polygon([[(0, 0), (1, 0), (0, 0)]])

    def test_linestring_requires_two_positions(self):
        with pytest.raises(ValueError):
            LineString([(0, 0)])

    def test_geometry_from_dict(self):
        geom = geometry_from_dict({"type": "Point", "coordinates": [1, 2]})
        assert geom == Point((1.0, 2.0))

    def test_geometry_dict_round_trip(self):
        poly = Polygon([[(0, 0), (1, 0), (1, 1), (0, 0)]])
        assert geometry_from_dict(poly.to_dict()) == poly

    def test_geometry_from_dict_unknown_type(self):
        with pytest.raises(ValueError, match="Unsupported"):
            geometry_from_dict({"type": "GeometryCollection", "coordinates": []})


class TestValidateGeometry:
    """Test suite for per-type geometry checks"""

    def test_wall_must_have_two_vertices(self):
        with pytest.raises(ValueError, match="exactly 2"):
            validate_geometry(ObjectType.WALL, LineString([(0, 0), (1, 0), (2, 0)]))

    def test_door_requires_point(self):
        with pytest.raises(ValueError, match="Point"):
            validate_geometry(ObjectType.DOOR, LineString([(0, 0), (1, 0)]))

    def test_valid_combinations(self):
        validate_geometry(ObjectType.WALL, LineString([(0, 0), (1, 0)]))
        validate_geometry(ObjectType.ELEVATOR, Point((0, 0)))
        validate_geometry(ObjectType.STAIR, Polygon([[(0, 0), (1, 0), (1, 1), (0, 0)]]))


class TestProps:
    """Test suite for object props variants"""

    def test_default_rotation_zero(self):
        assert make_props(ObjectType.WALL).rotation == 0

    def test_props_type_per_object_type(self):
        assert isinstance(make_props(ObjectType.WALL), WallProps)
        assert isinstance(make_props(ObjectType.DOOR), DoorProps)

    def test_merge_keeps_existing_keys(self):
        props = make_props(ObjectType.STAIR, {"label": "Main", "rotation": 15})
        props.merge({"rotation": 30})
        assert props.rotation == 30
        assert props.extra == {"label": "Main"}

    def test_wall_id_alias(self):
        props = make_props(ObjectType.DOOR, {"wallId": "w-1"})
        assert props.wall_id == "w-1"
        assert props.to_dict() == {"rotation": 0.0, "wallId": "w-1"}

    def test_door_without_wall_id_omits_key(self):
        assert "wallId" not in make_props(ObjectType.DOOR).to_dict()

    def test_wall_id_on_non_door_uses_export_name(self):
        props = make_props(ObjectType.STAIR, {"wall_id": "w-1"})
        assert props.extra == {"wallId": "w-1"}
        assert props.to_dict() == {"rotation": 0.0, "wallId": "w-1"}

    def test_extra_key_merged_not_nested(self):
        props = make_props(ObjectType.ELEVATOR, {"extra": {"label": "Lift A"}})
        props.merge({"extra": {"capacity": 8}})
        assert props.extra == {"label": "Lift A", "capacity": 8}
        assert "extra" not in props.to_dict()

    def test_extra_key_must_be_mapping(self):
        with pytest.raises(ValueError):
            make_props(ObjectType.WALL, {"extra": "oops"})

    def test_object_to_dict(self):
        obj = IndoorObject("e1", ObjectType.ELEVATOR, Point((1, 2)), make_props(ObjectType.ELEVATOR))
        assert obj.to_dict() == {
            "id": "e1",
            "type": "Elevator",
            "geometry": {"type": "Point", "coordinates": [1.0, 2.0]},
            "props": {"rotation": 0.0},
        }
