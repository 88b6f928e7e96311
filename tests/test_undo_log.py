# Indoorplan imports
from indoorplan.models import IndoorObject, ObjectType, Point, make_props
from indoorplan.undo_log import UndoLog

# Third-party imports
import pytest


def make_object(object_id="o1", x=0.0):
    return IndoorObject(object_id, ObjectType.ELEVATOR, Point((x, 0.0)), make_props(ObjectType.ELEVATOR))


class TestUndoLog:
    """Test suite for UndoLog"""

    def test_empty(self):
        log = UndoLog()
        assert len(log) == 0
        assert not log
        assert log.pop() is None
        assert log.peek() is None

    def test_push_pop_lifo(self):
        log = UndoLog()
        log.push(0, [])
        log.push(2, [make_object()])
        assert log.pop().floor_idx == 2
        assert log.pop().floor_idx == 0
        assert log.pop() is None

    def test_snapshot_is_deep_copy(self):
        obj = make_object()
        objects = [obj]
        log = UndoLog()
        log.push(1, objects)

        objects.append(make_object("o2"))
        obj.props.rotation = 90

        snapshot = log.peek().snapshot
        assert [o.id for o in snapshot] == ["o1"]
        assert snapshot[0].props.rotation == 0
        assert snapshot[0] is not obj

    def test_capacity_discards_oldest(self):
        log = UndoLog(max_entries=3)
        for i in range(5):
            log.push(i, [])
        assert len(log) == 3
        assert [e.floor_idx for e in log.entries] == [2, 3, 4]

    def test_clear(self):
        log = UndoLog()
        log.push(0, [])
        log.clear()
        assert len(log) == 0

    def test_invalid_capacity(self):
        with pytest.raises(ValueError):
            UndoLog(max_entries=0)
