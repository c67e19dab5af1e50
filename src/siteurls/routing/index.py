"""Route security index and its configuration sources.

The index is built once per configuration load and is read-only
afterwards. Loaded indexes are cached by source key so every builder
created for the same deployment shares one index.

Thread safety:
    The cache is guarded by a ``threading.Lock``. Indexes themselves
    are immutable and can be shared freely.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Hashable, Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Protocol, runtime_checkable

from siteurls.errors import ConfigurationError
from siteurls.routing.route import RouteSecurity

logger = logging.getLogger("siteurls.routing")


def _flag(uri: str, https: object) -> bool:
    """Return *https* as a bool; only booleans and the integers 0 and 1 are accepted."""
    if isinstance(https, bool):
        return https
    if isinstance(https, int) and https in (0, 1):
        return bool(https)
    msg = f"Route {uri!r} has https flag {https!r}, expected a bool"
    raise TypeError(msg)


class RouteSecurityIndex:
    """Immutable mapping of route identifier to "requires https".

    Usage::

        index = RouteSecurityIndex.from_mapping({"checkout": True, "home": False})
        index.get("checkout")  # True
        index.get("missing")   # None
    """

    __slots__ = ("_routes",)

    def __init__(self, routes: Mapping[str, bool] | None = None) -> None:
        """Raises ``TypeError`` if a flag is neither a bool nor 0/1."""
        self._routes: Mapping[str, bool] = MappingProxyType(
            {str(uri): _flag(uri, https) for uri, https in (routes or {}).items()}
        )

    @classmethod
    def from_mapping(cls, routes: Mapping[str, bool]) -> RouteSecurityIndex:
        return cls(routes)

    @classmethod
    def from_routes(cls, routes: Iterable[RouteSecurity]) -> RouteSecurityIndex:
        """Build an index from route entries. Later duplicates win."""
        return cls({r.uri: r.https for r in routes})

    def get(self, uri: str) -> bool | None:
        """Return the route's https flag, or ``None`` if the route is unknown."""
        return self._routes.get(uri)

    def __contains__(self, uri: object) -> bool:
        return uri in self._routes

    def __len__(self) -> int:
        return len(self._routes)

    def __iter__(self) -> Iterator[str]:
        return iter(self._routes)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RouteSecurityIndex):
            return NotImplemented
        return dict(self._routes) == dict(other._routes)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"RouteSecurityIndex({dict(self._routes)!r})"


@runtime_checkable
class RouteSource(Protocol):
    """Where a deployment's route configuration comes from.

    ``key`` identifies the source for caching. ``load()`` returns either
    a ``{uri: https}`` mapping or an iterable of ``RouteSecurity``.
    """

    @property
    def key(self) -> Hashable: ...

    def load(self) -> Mapping[str, bool] | Iterable[RouteSecurity]: ...


@dataclass(frozen=True, slots=True)
class MappingRouteSource:
    """An in-memory route source.

    Usage::

        source = MappingRouteSource("shop", {"checkout": True, "home": False})
    """

    key: Hashable
    routes: Mapping[str, bool] = field(default_factory=dict, hash=False)

    def load(self) -> Mapping[str, bool]:
        return self.routes


_cache: dict[Hashable, RouteSecurityIndex] = {}
_cache_lock = threading.Lock()


def _build_index(loaded: Mapping[str, bool] | Iterable[RouteSecurity]) -> RouteSecurityIndex:
    if isinstance(loaded, Mapping):
        return RouteSecurityIndex.from_mapping(loaded)
    routes = list(loaded)
    for entry in routes:
        if not isinstance(entry, RouteSecurity):
            msg = f"Route source returned {type(entry).__name__}, expected RouteSecurity"
            raise TypeError(msg)
    return RouteSecurityIndex.from_routes(routes)


def resolve_route_index(source: RouteSource | None) -> RouteSecurityIndex:
    """Load the route index for *source*, reusing a cached copy when present.

    Raises:
        ConfigurationError: If *source* is missing or its configuration
            cannot be read or understood.
    """
    if source is None:
        msg = "No route configuration source is available for this deployment"
        raise ConfigurationError(msg)

    key = source.key
    with _cache_lock:
        cached = _cache.get(key)
    if cached is not None:
        return cached

    try:
        index = _build_index(source.load())
    except (OSError, ValueError, KeyError, TypeError) as exc:
        msg = f"Could not load route configuration {key!r}: {exc}"
        raise ConfigurationError(msg) from exc

    logger.debug("Loaded %d routes from %r", len(index), key)
    with _cache_lock:
        # Another thread may have loaded the same source meanwhile; keep the first.
        return _cache.setdefault(key, index)


def clear_route_index_cache() -> None:
    """Drop every cached index. Subsequent resolves reload their source."""
    with _cache_lock:
        _cache.clear()
