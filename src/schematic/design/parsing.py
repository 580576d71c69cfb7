"""Schematic parsing — convert raw dicts/JSON into SchematicData.

Accepts the camelCase shape emitted by the data-generation stage
(``pinNumber``, ``componentId``) as well as snake_case keys.
"""

from __future__ import annotations

from .models import (
    PIN_SIDES, NET_TYPES, Pin, Component, Connection, Net, SchematicData,
)


def parse_schematic(data: dict) -> SchematicData:
    """Parse a raw dict (from JSON / request body) into SchematicData."""
    components = [_parse_component(c) for c in data.get("components", [])]
    nets = [_parse_net(n) for n in data.get("nets", [])]
    return SchematicData(components=components, nets=nets)


def _parse_component(data: dict) -> Component:
    pins = data.get("pins") or []
    if not isinstance(pins, list):
        raise ValueError(f"Component '{data.get('id')}': 'pins' must be a list")
    return Component(
        id=str(data["id"]),
        name=str(data.get("name", data["id"])),
        pins=[_parse_pin(p) for p in pins],
        description=data.get("description", ""),
        footprint_type=data.get("footprintType", data.get("footprint_type", "")),
    )


def _parse_pin(data: dict) -> Pin:
    number = data.get("pinNumber", data.get("pin_number", ""))
    side = data.get("side") or "left"
    if side not in PIN_SIDES:
        side = "left"
    return Pin(
        pin_number=number,
        name=str(data.get("name", number)),
        side=side,
        type=data.get("type", "Passive"),
        description=data.get("description", ""),
    )


def _parse_net(data: dict) -> Net:
    net_type = data.get("type")
    if net_type not in NET_TYPES:
        net_type = None
    return Net(
        id=str(data["id"]),
        name=str(data.get("name", data["id"])),
        connections=[
            Connection(
                component_id=str(c.get("componentId", c.get("component_id"))),
                pin=c["pin"],
            )
            for c in data.get("connections", [])
        ],
        type=net_type,
    )
