"""Router — Manhattan wire routing between component pins.

Submodules:
  models        Output dataclasses, colours and configuration constants.
  grid          Pixel/grid mapping and the obstacle field.
  pins          Pin location by side and access direction.
  pathfinder    A* pathfinding with turn penalty and fallback.
  engine        Per-net chain routing.
  serialization JSON conversion (routing_to_dict, parse_routing).
"""

from .models import Route, RoutingResult, RouterConfig, UnresolvedPin, UnresolvedPinError
from .engine import route_nets, route, net_color
from .serialization import routing_to_dict, parse_routing, route_to_dict, parse_routes

__all__ = [
    # Models
    "Route", "RoutingResult", "RouterConfig", "UnresolvedPin", "UnresolvedPinError",
    # Engine
    "route_nets", "route", "net_color",
    # Serialization
    "routing_to_dict", "parse_routing", "route_to_dict", "parse_routes",
]
