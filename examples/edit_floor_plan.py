"""
Indoorplan: Scripted Floor-Plan Editing Session

Drives the editing engine the same way a map UI would: enter a building from
its footprint, place walls with the two-click wall tool, attach a door, drop
a stair and an elevator, drag and rotate, undo, then export the result.

Controls (as wired by a UI through Editor.on_key / pointer handlers):
    Click         Select object, or place with the active tool
    Drag          Move the selected object
    Ctrl+Z        Undo (50 levels, per floor)
    Delete        Remove selected object
    Escape        Cancel pending wall, clear selection and tool

Outputs:
    outputs/indoor-map-<building>.json    interchange payload
    outputs/indoor-map-<building>.csv     one row per object
"""

# fmt: off
# autopep8: off

import logging

from indoorplan import BuildingSession, Editor, MapStore, ObjectType, Polygon
from indoorplan.export import export_json, export_objects_csv

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s",
)


if __name__ == "__main__":
    footprint = Polygon([[
        (-122.4200, 37.7745),
        (-122.4188, 37.7745),
        (-122.4188, 37.7753),
        (-122.4200, 37.7753),
        (-122.4200, 37.7745),
    ]])

    store   = MapStore()
    session = BuildingSession(store)
    editor  = Editor(store)

    session.enter("bldg-demo", footprint)
    store.set_snap_enabled(True)

    # Outer wall along the south edge
    editor.set_tool(ObjectType.WALL)
    editor.on_click(-122.4199, 37.7746)
    editor.on_mouse_move(-122.4194, 37.7746)
    editor.on_click(-122.4189, 37.7746)

    # Door a little off the wall snaps onto it
    editor.set_tool(ObjectType.DOOR)
    door = editor.on_click(-122.4194, 37.77462)

    editor.set_tool(ObjectType.STAIR)
    editor.on_click(-122.4197, 37.7750)

    editor.set_tool(ObjectType.ELEVATOR)
    elevator = editor.on_click(-122.4191, 37.7750)

    # Select the elevator, drag it one grid step east, then rotate it
    editor.set_tool(None)
    store.select_object(elevator.id)
    if editor.on_mouse_down(*elevator.geometry.coordinates):
        x, y = elevator.geometry.coordinates
        editor.on_mouse_move(x + 0.00005, y)
        editor.on_mouse_up()
    editor.rotate_selected_to(90)

    # Second floor, then undo back through history
    session.change_floor(3)
    editor.set_tool(ObjectType.ELEVATOR)
    editor.on_click(-122.4191, 37.7750)
    editor.on_key("z", ctrl=True)

    payload = store.export_payload()
    print(f"Door attached to wall: {door.props.wall_id if door else 'rejected'}")
    print(f"Undo entries remaining: {len(store.undo_log)}")
    export_json(payload)
    export_objects_csv(payload)
