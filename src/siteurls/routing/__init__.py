"""Route security configuration."""

from siteurls.routing.index import (
    MappingRouteSource,
    RouteSecurityIndex,
    RouteSource,
    clear_route_index_cache,
    resolve_route_index,
)
from siteurls.routing.route import RouteSecurity, route_identifier

__all__ = [
    "MappingRouteSource",
    "RouteSecurity",
    "RouteSecurityIndex",
    "RouteSource",
    "clear_route_index_cache",
    "resolve_route_index",
    "route_identifier",
]
