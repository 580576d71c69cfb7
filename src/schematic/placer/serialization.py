"""Placement serialization — JSON conversion."""

from __future__ import annotations

from .models import Placement, Placements


def placements_to_dict(placements: Placements) -> dict:
    """Serialize placements to ``{id: {x, y, w, h}}``."""
    return {
        cid: {"x": p.x, "y": p.y, "w": p.w, "h": p.h}
        for cid, p in placements.items()
    }


def parse_placements(data: dict) -> Placements:
    """Parse a positions dict back into Placements.

    Raises ValueError if an entry lacks one of x/y/w/h or holds a
    non-numeric value.
    """
    placements: Placements = {}
    for cid, p in data.items():
        try:
            placements[str(cid)] = Placement(
                x=int(p["x"]),
                y=int(p["y"]),
                w=int(p["w"]),
                h=int(p["h"]),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(f"Placement '{cid}': expected numeric x, y, w, h ({e!r})") from e
    return placements
