"""Schematic serialization — convert SchematicData to JSON-safe dicts."""

from __future__ import annotations

from .models import SchematicData


def schematic_to_dict(data: SchematicData) -> dict:
    """Convert SchematicData to a JSON-serializable dict (camelCase keys)."""
    return {
        "components": [
            {
                "id": c.id,
                "name": c.name,
                **({"description": c.description} if c.description else {}),
                **({"footprintType": c.footprint_type} if c.footprint_type else {}),
                "pins": [
                    {
                        "pinNumber": p.pin_number,
                        "name": p.name,
                        "side": p.side,
                        "type": p.type,
                        **({"description": p.description} if p.description else {}),
                    }
                    for p in c.pins
                ],
            }
            for c in data.components
        ],
        "nets": [
            {
                "id": n.id,
                "name": n.name,
                **({"type": n.type} if n.type else {}),
                "connections": [
                    {"componentId": conn.component_id, "pin": conn.pin}
                    for conn in n.connections
                ],
            }
            for n in data.nets
        ],
    }
