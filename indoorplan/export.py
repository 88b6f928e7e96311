"""
Export of map store floors to the interchange JSON shape and a flat CSV table.

Payload shape:
    {
      "buildingId": str | None,
      "floors": [
        {"floorIndex": str, "elevation": float,
         "objects": [{"id", "type", "geometry": {GeoJSON}, "props": {...}}]}
      ]
    }
"""

# Indoorplan imports
from indoorplan import config
from indoorplan.geometry_utils import get_object_center
from indoorplan.models import FloorData, geometry_from_dict

# Standard library imports
import json
import logging
from pathlib import Path
from typing import Optional, Sequence

# Third-party imports
import pandas as pd

logger = logging.getLogger(__name__)

CSV_COLUMNS = [
    "floor_index", "elevation", "id", "type", "rotation", "wall_id",
    "center_x", "center_y", "geometry",
]


def build_export_payload(building_id: Optional[str], floors: Sequence[FloorData]) -> dict:
    """
    Build a deep, self-contained snapshot of every floor's objects.

    The returned dict shares no mutable state with the store, so later edits
    never alter a payload already handed to a persistence collaborator.

    Args:
        building_id: Current building identifier (may be None).
        floors: Floors in configured order.

    Returns:
        dict: The export payload.
    """
    return {
        "buildingId": building_id,
        "floors": [
            {
                "floorIndex": f.floor_index,
                "elevation": f.elevation,
                "objects": [o.to_dict() for o in f.objects],
            }
            for f in floors
        ],
    }


def default_export_path(payload: dict, suffix: str = ".json") -> Path:
    return config.OUTPUTS_DIR / f"indoor-map-{payload.get('buildingId') or 'unknown'}{suffix}"


def export_json(payload: dict, output_path: Optional[Path] = None) -> Path:
    """Write the payload as indented JSON. Returns the written path."""
    output_path = Path(output_path) if output_path is not None else default_export_path(payload)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w") as f:
        json.dump(payload, f, indent=2)
    logger.info(f"Indoor map JSON exported to {output_path}")
    return output_path


def payload_to_dataframe(payload: dict) -> pd.DataFrame:
    """Flatten the payload to one row per object."""
    rows = []
    for floor in payload["floors"]:
        for obj in floor["objects"]:
            cx, cy = get_object_center(geometry_from_dict(obj["geometry"]))
            rows.append({
                "floor_index":  floor["floorIndex"],
                "elevation":    floor["elevation"],
                "id":           obj["id"],
                "type":         obj["type"],
                "rotation":     obj["props"].get("rotation", 0),
                "wall_id":      obj["props"].get("wallId"),
                "center_x":     cx,
                "center_y":     cy,
                "geometry":     json.dumps(obj["geometry"]),
            })
    return pd.DataFrame(rows, columns=CSV_COLUMNS)


def export_objects_csv(payload: dict, output_path: Optional[Path] = None) -> Path:
    """Write the flattened object table as CSV. Returns the written path."""
    output_path = Path(output_path) if output_path is not None else default_export_path(payload, ".csv")
    output_path.parent.mkdir(parents=True, exist_ok=True)
    df = payload_to_dataframe(payload)
    df.to_csv(output_path, index=False)
    logger.info(f"Exported {len(df)} objects to {output_path}")
    return output_path
