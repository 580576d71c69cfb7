"""Schematic data — dataclasses, parsing, validation, and serialization."""

from .models import (
    PIN_SIDES, NET_TYPES, Pin, Component, Connection, Net, SchematicData,
)
from .parsing import parse_schematic
from .validation import validate_schematic
from .serialization import schematic_to_dict

__all__ = [
    # Models
    "PIN_SIDES", "NET_TYPES",
    "Pin", "Component", "Connection", "Net", "SchematicData",
    # Parsing / Validation / Serialization
    "parse_schematic", "validate_schematic", "schematic_to_dict",
]
