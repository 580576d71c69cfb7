"""Routing serialization — JSON conversion."""

from __future__ import annotations

from .models import Route, RoutingResult, UnresolvedPin


def route_to_dict(r: Route) -> dict:
    return {
        "id": r.id,
        "netId": r.net_id,
        "netName": r.net_name,
        "segment": r.segment_index,
        "color": r.color,
        "path": [{"x": x, "y": y} for x, y in r.path],
        **({"fallback": True} if r.fallback else {}),
        **({"crossed": list(r.crossed)} if r.crossed else {}),
    }


def routing_to_dict(result: RoutingResult) -> dict:
    """Serialize a RoutingResult to a JSON-safe dict."""
    return {
        "routes": [route_to_dict(r) for r in result.routes],
        "unresolved_pins": [
            {"net_id": u.net_id, "component_id": u.component_id, "pin": u.pin}
            for u in result.unresolved_pins
        ],
        "skipped_nets": list(result.skipped_nets),
    }


def parse_routes(data: list[dict]) -> list[Route]:
    """Parse a list of route dicts back into Routes."""
    routes = []
    for r in data:
        route_id = r["id"]
        net_id, _, seg = route_id.rpartition("-")
        routes.append(Route(
            id=route_id,
            net_id=r.get("netId", net_id),
            net_name=r.get("netName", ""),
            segment_index=int(r.get("segment", seg or 0)),
            color=r.get("color", ""),
            path=[(int(p["x"]), int(p["y"])) for p in r["path"]],
            fallback=bool(r.get("fallback", False)),
            crossed=list(r.get("crossed", [])),
        ))
    return routes


def parse_routing(data: dict) -> RoutingResult:
    """Parse a routing dict back into a RoutingResult."""
    return RoutingResult(
        routes=parse_routes(data.get("routes", [])),
        unresolved_pins=[
            UnresolvedPin(net_id=u["net_id"], component_id=u["component_id"], pin=u["pin"])
            for u in data.get("unresolved_pins", [])
        ],
        skipped_nets=list(data.get("skipped_nets", [])),
    )
