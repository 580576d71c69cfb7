"""Schematic validation — report net-list problems without failing layout.

Layout and routing tolerate every problem reported here (unknown pins
fall back to a default point, short nets produce no routes).  This
module surfaces them so the caller can decide what to do.
"""

from __future__ import annotations

from .models import SchematicData


def validate_schematic(data: SchematicData) -> list[str]:
    """Validate SchematicData. Returns problem messages (empty = valid)."""
    errors: list[str] = []
    comp_map = {}

    # ── Component IDs must be unique ──
    for comp in data.components:
        if comp.id in comp_map:
            errors.append(f"Duplicate component id '{comp.id}'")
        comp_map.setdefault(comp.id, comp)

    # ── Pins need an identifier a net can refer to ──
    for comp in data.components:
        for i, pin in enumerate(comp.pins):
            if str(pin.pin_number) == "" and not pin.name:
                errors.append(f"Component '{comp.id}': pin #{i} has no number or name")

    # ── Net IDs must be unique ──
    seen_nets: set[str] = set()
    for net in data.nets:
        if net.id in seen_nets:
            errors.append(f"Duplicate net id '{net.id}'")
        seen_nets.add(net.id)

    # ── Connections ──
    for net in data.nets:
        if len(net.connections) < 2:
            errors.append(f"Net '{net.id}': must have at least 2 connections")
        for conn in net.connections:
            comp = comp_map.get(conn.component_id)
            if comp is None:
                errors.append(
                    f"Net '{net.id}': unknown component '{conn.component_id}'"
                )
                continue
            if not any(p.matches(conn.pin) for p in comp.pins):
                errors.append(
                    f"Net '{net.id}': unknown pin '{conn.pin}' on "
                    f"'{conn.component_id}'"
                )

    return errors
