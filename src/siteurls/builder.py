"""URL builder for internal routes.

Decides per route whether a URL uses https and assembles
``scheme://host[:port]`` and ``prefix/path`` from three inputs resolved
at construction time:

- a ``RouteSecurityIndex`` (which routes require https),
- a ``SiteTransportProfile`` (whether the site allows https, hosts, ports),
- a path prefix (the deployment's control path).

Basic usage::

    builder = UrlBuilder.from_request(request, store)
    url, secure = builder.full_url("checkout/confirm")

    # Or into an existing buffer
    buf = io.StringIO()
    secure = builder.build_full_url(buf, "checkout/confirm", use_ssl=False)

Thread safety:
    A builder holds only immutable values and can be shared between
    threads. Building is pure string work; the only I/O happens in the
    factories, through the route source and the site store.
"""

from __future__ import annotations

import dataclasses
import functools
import io
import logging
from typing import Protocol

import anyio

from siteurls.config import SiteTransportProfile
from siteurls.data.sites import SiteStore
from siteurls.deployment import Deployment, control_path, find_site_id
from siteurls.errors import OutputError
from siteurls.http.request import RequestContext
from siteurls.routing.index import RouteSecurityIndex, resolve_route_index
from siteurls.routing.route import route_identifier

logger = logging.getLogger("siteurls.builder")


class Writable(Protocol):
    """Anything URL text can be written to (``io.StringIO``, a text file, ...)."""

    def write(self, s: str, /) -> object: ...


def _write(buffer: Writable, *parts: str) -> None:
    try:
        for part in parts:
            buffer.write(part)
    except (OSError, ValueError) as exc:
        msg = f"Could not write URL to {type(buffer).__name__}: {exc}"
        raise OutputError(msg) from exc


def _profile_for_site(site_id: str | None, store: SiteStore | None) -> SiteTransportProfile:
    """Look up *site_id* in *store*; defaults when either is missing or no record exists."""
    if site_id is None or store is None:
        return SiteTransportProfile.defaults()
    record = store.fetch_site(site_id)
    if record is None:
        logger.debug("Site %r not found, using default transport profile", site_id)
        return SiteTransportProfile.defaults()
    return SiteTransportProfile.from_record(record)


def resolve_site_profile(request: RequestContext, store: SiteStore | None) -> SiteTransportProfile:
    """Derive the transport profile for a live request.

    Starts from the deployment's site record (or the defaults), then fills
    empty hosts with the host the request arrived on, and the empty port
    of the request's own scheme with the port it arrived on. Values from
    the site record are never replaced.
    """
    profile = _profile_for_site(find_site_id(request.deployment), store)
    changes: dict[str, str] = {}
    if request.server_host:
        if not profile.secure_host:
            changes["secure_host"] = request.server_host
        if not profile.plain_host:
            changes["plain_host"] = request.server_host
    if request.server_port is not None:
        port_field = "secure_port" if request.secure else "plain_port"
        if not getattr(profile, port_field):
            changes[port_field] = str(request.server_port)
    return dataclasses.replace(profile, **changes) if changes else profile


class UrlBuilder:
    """Builds absolute and partial URLs for a deployment's routes.

    Create one with ``from_request`` inside a request, or with
    ``from_deployment`` when there is no request (scheduled jobs, mail
    rendering). The constructor takes already-resolved values.
    Instances are immutable; attribute assignment raises ``AttributeError``.
    """

    __slots__ = ("_index", "_log", "_prefix", "_profile")

    def __init__(
        self,
        index: RouteSecurityIndex,
        profile: SiteTransportProfile,
        prefix: str,
        *,
        log: logging.Logger | None = None,
    ) -> None:
        object.__setattr__(self, "_index", index)
        object.__setattr__(self, "_profile", profile)
        object.__setattr__(self, "_prefix", prefix)
        object.__setattr__(self, "_log", log or logger)

    def __setattr__(self, name: str, value: object) -> None:
        msg = f"UrlBuilder is immutable; cannot set {name!r}"
        raise AttributeError(msg)

    def __delattr__(self, name: str) -> None:
        msg = f"UrlBuilder is immutable; cannot delete {name!r}"
        raise AttributeError(msg)

    # -- Factories --

    @classmethod
    def from_request(
        cls,
        request: RequestContext,
        store: SiteStore | None = None,
        *,
        log: logging.Logger | None = None,
    ) -> UrlBuilder:
        """Create a builder for a live request.

        The site profile is computed once per request and kept in
        ``request.profile``; later builders for the same request reuse it.

        Raises:
            ConfigurationError: If the deployment's routes cannot be loaded.
            DataAccessError: If the site store fails.
        """
        profile = request.profile.get_or_compute(lambda: resolve_site_profile(request, store))
        index = resolve_route_index(request.deployment.routes)
        return cls(index, profile, request.prefix, log=log)

    @classmethod
    def from_deployment(
        cls,
        deployment: Deployment,
        store: SiteStore | None = None,
        *,
        log: logging.Logger | None = None,
    ) -> UrlBuilder:
        """Create a builder without a request.

        The site record is looked up on every call; nothing is memoized.

        Raises:
            ConfigurationError: If the deployment's routes cannot be loaded.
            DataAccessError: If the site store fails.
        """
        profile = _profile_for_site(find_site_id(deployment), store)
        index = resolve_route_index(deployment.routes)
        return cls(index, profile, control_path(deployment), log=log)

    @classmethod
    async def from_deployment_async(
        cls,
        deployment: Deployment,
        store: SiteStore | None = None,
        *,
        log: logging.Logger | None = None,
    ) -> UrlBuilder:
        """``from_deployment`` run in a worker thread via ``anyio.to_thread``."""
        build = functools.partial(cls.from_deployment, deployment, store, log=log)
        return await anyio.to_thread.run_sync(build)

    # -- Properties --

    @property
    def index(self) -> RouteSecurityIndex:
        return self._index

    @property
    def profile(self) -> SiteTransportProfile:
        return self._profile

    @property
    def prefix(self) -> str:
        return self._prefix

    # -- Building --

    def is_secure(self, url: str, use_ssl: bool = False) -> bool:
        """Return whether *url* would be built with https.

        The route's own setting replaces *use_ssl* when the route is known;
        https is only ever used when the site enables it.
        """
        return self._decide(url, use_ssl)[0]

    def _decide(self, url: str, use_ssl: bool) -> tuple[bool, str, bool]:
        uri = route_identifier(url)
        route_https = self._index.get(uri)
        wanted = use_ssl if route_https is None else route_https
        return self._profile.secure_enabled and wanted, uri, route_https is not None

    def build_host_part(self, buffer: Writable, url: str, use_ssl: bool = False) -> bool:
        """Write ``scheme://host[:port]`` for *url* to *buffer*.

        *use_ssl* is the default for routes missing from the index. Returns
        the final https decision.

        Raises:
            OutputError: If writing to *buffer* fails.
        """
        secure, uri, known = self._decide(url, use_ssl)
        scheme, host, port = self._profile.scheme_host(secure)
        if port:
            _write(buffer, scheme, host, ":", port)
        else:
            _write(buffer, scheme, host)
        if not known:
            self._log.warning("The route %r was not found in the route configuration", uri)
        return secure

    def build_path_part(self, buffer: Writable, url: str) -> None:
        """Write ``prefix/url`` to *buffer*. *url* is written verbatim.

        Raises:
            OutputError: If writing to *buffer* fails.
        """
        if url.startswith("/"):
            _write(buffer, self._prefix, url)
        else:
            _write(buffer, self._prefix, "/", url)

    def build_full_url(self, buffer: Writable, url: str, use_ssl: bool = False) -> bool:
        """Write the host part then the path part of *url* to *buffer*.

        Returns the https decision. If the path part fails, the host part
        stays in *buffer*.
        """
        secure = self.build_host_part(buffer, url, use_ssl)
        self.build_path_part(buffer, url)
        return secure

    # -- String conveniences --

    def host_part(self, url: str, use_ssl: bool = False) -> tuple[str, bool]:
        buf = io.StringIO()
        secure = self.build_host_part(buf, url, use_ssl)
        return buf.getvalue(), secure

    def path_part(self, url: str) -> str:
        buf = io.StringIO()
        self.build_path_part(buf, url)
        return buf.getvalue()

    def full_url(self, url: str, use_ssl: bool = False) -> tuple[str, bool]:
        """Return ``(absolute_url, secure)`` for *url*."""
        buf = io.StringIO()
        secure = self.build_full_url(buf, url, use_ssl)
        return buf.getvalue(), secure

    def __repr__(self) -> str:
        return f"UrlBuilder(prefix={self._prefix!r}, routes={len(self._index)}, profile={self._profile!r})"
