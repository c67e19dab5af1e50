"""Request context for URL building.

Frozen request metadata plus one explicit memo slot for the derived
site transport profile. The memo belongs to a single request and is
discarded with it.
"""

import threading
from collections.abc import Callable
from dataclasses import dataclass, field

from siteurls.config import SiteTransportProfile
from siteurls.deployment import Deployment, control_path


class ProfileMemo:
    """Holds the site transport profile computed for one request.

    ``get_or_compute`` runs *compute* at most once; later calls return the
    stored profile. If *compute* raises, nothing is stored and the next
    call tries again.
    """

    __slots__ = ("_lock", "_value")

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._value: SiteTransportProfile | None = None

    @property
    def value(self) -> SiteTransportProfile | None:
        return self._value

    def get_or_compute(self, compute: Callable[[], SiteTransportProfile]) -> SiteTransportProfile:
        if self._value is not None:
            return self._value
        with self._lock:
            if self._value is None:
                self._value = compute()
            return self._value

    def __repr__(self) -> str:
        return f"<ProfileMemo {self._value!r}>"


@dataclass(frozen=True, slots=True)
class RequestContext:
    """What URL building needs to know about a live request.

    ``control_path`` is the prefix the request was dispatched under; it
    defaults to the deployment's control path. ``server_host`` and
    ``server_port`` are the host and port the request arrived on, and
    ``secure`` tells whether it arrived over https.
    """

    deployment: Deployment
    path: str = "/"
    control_path: str = ""
    server_host: str = ""
    server_port: int | None = None
    secure: bool = False

    # Computed once per request by UrlBuilder.from_request
    profile: ProfileMemo = field(default_factory=ProfileMemo, repr=False, compare=False)

    @property
    def prefix(self) -> str:
        """The path prefix to emit before route paths."""
        return self.control_path or control_path(self.deployment)
