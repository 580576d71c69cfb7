"""Placer — positions component bodies on the schematic grid.

Submodules:
  models        Output dataclasses (Placement, PlacementError).
  geometry      Body sizing, grid snapping, overlap detection.
  engine        Flow layout, incremental placement, drag and reset.
  serialization JSON conversion (placements_to_dict, parse_placements).
"""

from .models import Placement, Placements, PlacementError
from .engine import (
    place_components, place_missing, move_component, reset_placements, snap_placements,
)
from .serialization import placements_to_dict, parse_placements
from .geometry import component_size, snap_to_grid, find_overlaps

__all__ = [
    # Models
    "Placement", "Placements", "PlacementError",
    # Engine
    "place_components", "place_missing", "move_component", "reset_placements",
    "snap_placements",
    # Serialization
    "placements_to_dict", "parse_placements",
    # Geometry
    "component_size", "snap_to_grid", "find_overlaps",
]
