"""Eagle CAD XML schematic (.sch) writer.

Consumes the layout as computed by the placer and router: body
rectangles, pin positions from the pin locator, and routed polylines.
Nothing here re-derives geometry from raw pin data.

Eagle's Y axis points up while layout Y points down, so every Y value
is negated.  Part positions are body centres.
"""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET

from src.schematic.config import EAGLE_SCALE_MM_PER_PX, LAYOUT_RULES, LayoutRules
from src.schematic.design.models import Component, SchematicData
from src.schematic.placer.models import Placement, Placements
from src.schematic.router.models import Route
from src.schematic.router.pins import partition_pins, pin_offset


EAGLE_VERSION = "9.6.2"
LIBRARY_NAME = "AutoSchematicLib"

# Pin rotation so the pin line points away from the body.
PIN_ROTATION = {"left": "R180", "right": "R0", "top": "R90", "bottom": "R270"}

LAYERS = (
    ("91", "Nets", "2"),
    ("92", "Busses", "1"),
    ("93", "Pins", "2"),
    ("94", "Symbols", "4"),
    ("95", "Names", "7"),
    ("96", "Values", "7"),
)

_DEFAULT_BODY = Placement(x=0, y=0, w=100, h=100)


def clean_name(name: str) -> str:
    """Restrict a name to characters Eagle accepts in identifiers."""
    return re.sub(r"[^a-zA-Z0-9_-]", "_", name)


def _fmt(v: float) -> str:
    return f"{v:.2f}"


def generate_eagle_schematic(
    schematic: SchematicData,
    placements: Placements,
    routes: list[Route] | None = None,
    *,
    scale: float = EAGLE_SCALE_MM_PER_PX,
    rules: LayoutRules = LAYOUT_RULES,
) -> str:
    """Render the layout as an Eagle 9.x schematic XML document."""
    root = ET.Element("eagle", version=EAGLE_VERSION)
    drawing = ET.SubElement(root, "drawing")

    settings = ET.SubElement(drawing, "settings")
    ET.SubElement(settings, "setting", alwaysvectorfont="no")
    ET.SubElement(settings, "setting", verticaltext="up")
    ET.SubElement(
        drawing, "grid",
        distance="0.1", unitdist="inch", unit="inch", style="lines",
        multiple="1", display="no", altdistance="0.01",
        altunitdist="inch", altunit="inch",
    )

    layers = ET.SubElement(drawing, "layers")
    for number, name, color in LAYERS:
        ET.SubElement(layers, "layer", number=number, name=name, color=color,
                      fill="1", visible="yes", active="yes")

    sch = ET.SubElement(drawing, "schematic",
                        xreflabel="%F%N/%S.%C%R", xrefpart="/%S.%C%R")

    # ── Library: one symbol + deviceset per component ──────────────
    libraries = ET.SubElement(sch, "libraries")
    library = ET.SubElement(libraries, "library", name=LIBRARY_NAME)
    ET.SubElement(library, "packages")
    symbols = ET.SubElement(library, "symbols")
    for comp in schematic.components:
        body = placements.get(comp.id, _DEFAULT_BODY)
        _add_symbol(symbols, comp, body, scale, rules)

    devicesets = ET.SubElement(library, "devicesets")
    for comp in schematic.components:
        sym = clean_name(comp.name)
        ds = ET.SubElement(devicesets, "deviceset", name=sym, prefix="U")
        gates = ET.SubElement(ds, "gates")
        ET.SubElement(gates, "gate", name="G$1", symbol=sym, x="0", y="0")

    # ── Parts ──────────────────────────────────────────────────────
    parts = ET.SubElement(sch, "parts")
    for i, comp in enumerate(schematic.components):
        ET.SubElement(parts, "part", name=f"U{i + 1}", library=LIBRARY_NAME,
                      deviceset=clean_name(comp.name), device="")

    # ── Sheet ──────────────────────────────────────────────────────
    sheets = ET.SubElement(sch, "sheets")
    sheet = ET.SubElement(sheets, "sheet")
    ET.SubElement(sheet, "plain")
    instances = ET.SubElement(sheet, "instances")
    for i, comp in enumerate(schematic.components):
        p = placements.get(comp.id)
        if p is None:
            continue
        cx, cy = p.center
        ET.SubElement(instances, "instance", part=f"U{i + 1}", gate="G$1",
                      x=_fmt(cx * scale), y=_fmt(-cy * scale))
    ET.SubElement(sheet, "busses")

    nets = ET.SubElement(sheet, "nets")
    by_net: dict[str, list[Route]] = {}
    for r in routes or []:
        by_net.setdefault(r.net_name, []).append(r)
    for net_name, net_routes in by_net.items():
        net_el = ET.SubElement(nets, "net", name=clean_name(net_name))
        net_el.set("class", "0")
        for r in net_routes:
            seg = ET.SubElement(net_el, "segment")
            for (x1, y1), (x2, y2) in zip(r.path, r.path[1:]):
                ET.SubElement(seg, "wire",
                              x1=_fmt(x1 * scale), y1=_fmt(-y1 * scale),
                              x2=_fmt(x2 * scale), y2=_fmt(-y2 * scale),
                              width="0.1524", layer="91")

    ET.indent(root)
    body = ET.tostring(root, encoding="unicode")
    return (
        '<?xml version="1.0" encoding="utf-8"?>\n'
        '<!DOCTYPE eagle SYSTEM "eagle.dtd">\n'
        f"{body}\n"
    )


def _add_symbol(
    symbols: ET.Element,
    comp: Component,
    body: Placement,
    scale: float,
    rules: LayoutRules,
) -> None:
    """Box outline, name/value texts and pins, centred on the origin."""
    half_w = body.w * scale / 2
    half_h = body.h * scale / 2
    sym = ET.SubElement(symbols, "symbol", name=clean_name(comp.name))

    corners = [(-half_w, half_h), (half_w, half_h), (half_w, -half_h), (-half_w, -half_h)]
    for (x1, y1), (x2, y2) in zip(corners, corners[1:] + corners[:1]):
        ET.SubElement(sym, "wire", x1=_fmt(x1), y1=_fmt(y1), x2=_fmt(x2), y2=_fmt(y2),
                      width="0.254", layer="94")

    ET.SubElement(sym, "text", x=_fmt(-half_w), y=_fmt(half_h + 1),
                  size="1.778", layer="95").text = ">NAME"
    ET.SubElement(sym, "text", x=_fmt(-half_w), y=_fmt(-(half_h + 3)),
                  size="1.778", layer="96").text = ">VALUE"

    seen: dict[str, int] = {}
    for side, group in partition_pins(comp).items():
        for idx, pin in enumerate(group):
            dx, dy = pin_offset(side, idx, len(group), body, rules)
            name = pin.name or str(pin.pin_number)
            # Eagle requires unique pin names within a symbol.
            n = seen.get(name, 0)
            seen[name] = n + 1
            if n:
                name = f"{name}@{n}"
            ET.SubElement(sym, "pin", name=name,
                          x=_fmt(-half_w + dx * scale), y=_fmt(half_h - dy * scale),
                          length="middle", rot=PIN_ROTATION[side])
