# Indoorplan imports
from indoorplan import config
from indoorplan.export import (
    CSV_COLUMNS,
    build_export_payload,
    export_json,
    export_objects_csv,
    payload_to_dataframe,
)
from indoorplan.map_store import MapStore
from indoorplan.models import LineString, ObjectType, Point

# Standard library imports
import json

# Third-party imports
import pandas as pd
import pytest


# Test fixtures
@pytest.fixture
def store():
    """Store with a wall and an attached door on 1F and an elevator on B1"""
    s = MapStore()
    s.enter_building("bldg-9", None)
    wall = s.add_object(ObjectType.WALL, LineString([(0.0, 0.0), (10.0, 0.0)]))
    s.add_object(ObjectType.DOOR, Point((5.0, 0.0)), {"wall_id": wall.id, "label": "Entry"})
    s.set_floor(1)
    s.add_object(ObjectType.ELEVATOR, Point((2.0, 3.0)))
    return s


class TestExportPayload:
    """Test suite for build_export_payload"""

    def test_shape(self, store):
        payload = build_export_payload(store.building_id, store.floors)
        assert payload["buildingId"] == "bldg-9"
        assert [f["floorIndex"] for f in payload["floors"]] == ["B2", "B1", "1F", "2F"]
        assert [f["elevation"] for f in payload["floors"]] == [-8, -4, 0, 4]

        wall, door = payload["floors"][2]["objects"]
        assert wall["type"] == "Wall"
        assert wall["geometry"] == {"type": "LineString", "coordinates": [[0.0, 0.0], [10.0, 0.0]]}
        assert door["props"] == {"rotation": 0.0, "label": "Entry", "wallId": wall["id"]}
        assert set(door) == {"id", "type", "geometry", "props"}

    def test_payload_is_json_serialisable(self, store):
        json.dumps(store.export_payload())

    def test_snapshot_independent_of_store(self, store):
        payload = store.export_payload()
        before = json.dumps(payload, sort_keys=True)

        store.set_floor(2)
        door = store.get_current_objects()[1]
        store.update_object(door.id, props={"rotation": 90, "label": "Changed"})
        store.remove_object(store.get_current_objects()[0].id)

        assert json.dumps(payload, sort_keys=True) == before

    def test_reproducible(self, store):
        assert store.export_payload() == store.export_payload()

    def test_empty_session(self):
        assert build_export_payload(None, []) == {"buildingId": None, "floors": []}


class TestExportFiles:
    """Test suite for JSON and CSV writers"""

    def test_export_json(self, store, tmp_path):
        out = export_json(store.export_payload(), tmp_path / "nested" / "map.json")
        assert out.exists()
        with open(out) as f:
            assert json.load(f) == store.export_payload()

    def test_export_json_default_path(self, store, tmp_path, monkeypatch):
        monkeypatch.setattr(config, "OUTPUTS_DIR", tmp_path)
        out = export_json(store.export_payload())
        assert out == tmp_path / "indoor-map-bldg-9.json"
        assert out.exists()

    def test_default_path_unknown_building(self, tmp_path, monkeypatch):
        monkeypatch.setattr(config, "OUTPUTS_DIR", tmp_path)
        out = export_json(build_export_payload(None, []))
        assert out.name == "indoor-map-unknown.json"

    def test_dataframe_rows(self, store):
        df = payload_to_dataframe(store.export_payload())
        assert list(df.columns) == CSV_COLUMNS
        assert len(df) == 3
        door = df[df["type"] == "Door"].iloc[0]
        assert door["floor_index"] == "1F"
        assert door["center_x"] == pytest.approx(5.0)
        wall = df[df["type"] == "Wall"].iloc[0]
        assert door["wall_id"] == wall["id"]
        assert wall["center_x"] == pytest.approx(5.0)

    def test_export_csv(self, store, tmp_path):
        out = export_objects_csv(store.export_payload(), tmp_path / "objects.csv")
        df = pd.read_csv(out)
        assert len(df) == 3
        assert sorted(df["type"]) == ["Door", "Elevator", "Wall"]
        assert json.loads(df[df["type"] == "Elevator"].iloc[0]["geometry"]) == {
            "type": "Point", "coordinates": [2.0, 3.0]}
