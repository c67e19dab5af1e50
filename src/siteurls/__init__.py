"""siteurls — absolute and partial URLs for a web application's routes.

Decides per route whether to use https, and which host, port and path
prefix to emit, from the route configuration, the site's transport
settings and the deployment's mount path.

Basic usage::

    from siteurls import Deployment, MappingRouteSource, UrlBuilder

    routes = MappingRouteSource("shop", {"checkout": True, "home": False})
    shop = Deployment("shop", mount_path="/shop", routes=routes)

    builder = UrlBuilder.from_deployment(shop)
    url, secure = builder.full_url("checkout/confirm")

Inside a request::

    request = RequestContext(shop, path="/shop/control/home", server_host="shop.example.com")
    builder = UrlBuilder.from_request(request, SqliteSiteStore("sites.db"))
"""

__version__ = "0.1.0"
__all__ = [
    "ConfigurationError",
    "DataAccessError",
    "Deployment",
    "MappingRouteSource",
    "OutputError",
    "RequestContext",
    "RouteSecurity",
    "RouteSecurityIndex",
    "SiteRecord",
    "SiteTransportProfile",
    "SiteUrlsError",
    "SqliteSiteStore",
    "UrlBuilder",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import siteurls`` cheap; ``anyio`` and ``sqlite3`` load only
    when the builder or the store is first used.
    """
    if name == "UrlBuilder":
        from siteurls.builder import UrlBuilder

        return UrlBuilder

    if name == "SiteTransportProfile":
        from siteurls.config import SiteTransportProfile

        return SiteTransportProfile

    if name == "Deployment":
        from siteurls.deployment import Deployment

        return Deployment

    if name == "RequestContext":
        from siteurls.http.request import RequestContext

        return RequestContext

    if name in ("MappingRouteSource", "RouteSecurity", "RouteSecurityIndex"):
        from siteurls import routing as _routing

        return getattr(_routing, name)

    if name in ("DataAccessError", "SiteRecord", "SqliteSiteStore"):
        from siteurls import data as _data

        return getattr(_data, name)

    if name in ("ConfigurationError", "OutputError", "SiteUrlsError"):
        from siteurls import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
