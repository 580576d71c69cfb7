"""Schematic data model — components, pins, nets and their connections."""

from __future__ import annotations

from dataclasses import dataclass, field


PIN_SIDES = ("left", "right", "top", "bottom")
NET_TYPES = ("signal", "power", "ground")


@dataclass
class Pin:
    pin_number: str | int
    name: str
    side: str = "left"                  # "left" | "right" | "top" | "bottom"
    type: str = "Passive"               # "Power" | "Input" | "Output" | "IO" | "Clock" | "Passive"
    description: str = ""

    def matches(self, identifier: str | int) -> bool:
        """True if *identifier* names this pin by number or by name."""
        ident = str(identifier)
        return str(self.pin_number) == ident or self.name == ident


@dataclass
class Component:
    id: str
    name: str
    pins: list[Pin] = field(default_factory=list)
    description: str = ""
    footprint_type: str = ""


@dataclass
class Connection:
    component_id: str
    pin: str | int


@dataclass
class Net:
    id: str
    name: str
    connections: list[Connection] = field(default_factory=list)
    type: str | None = None             # "signal" | "power" | "ground"


@dataclass
class SchematicData:
    """Components and nets produced by the data-generation stage."""

    components: list[Component]
    nets: list[Net]
