"""Site transport configuration.

SiteTransportProfile is a frozen dataclass — immutable after creation,
no string-key dict lookups.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from siteurls.data.sites import SiteRecord

DEFAULT_HOST = "localhost"


def _text(value: object) -> str:
    if value is None:
        return ""
    return str(value)


@dataclass(frozen=True, slots=True)
class SiteTransportProfile:
    """Whether a site may use https, and which host/port to emit per scheme.

    Empty hosts render as ``localhost``. Empty ports are left out of the
    URL entirely::

        profile = SiteTransportProfile(secure_enabled=True, secure_host="shop.example.com")
    """

    secure_enabled: bool = False
    secure_host: str = ""
    secure_port: str = ""
    plain_host: str = ""
    plain_port: str = ""

    @classmethod
    def defaults(cls) -> SiteTransportProfile:
        """The profile used when no site record is available: https disabled, nothing set."""
        return cls()

    @classmethod
    def from_record(cls, record: SiteRecord) -> SiteTransportProfile:
        """Derive a profile from a stored site record.

        ``None`` columns become empty strings (or ``False``). Integer ports
        are rendered as strings.
        """
        return cls(
            secure_enabled=bool(record.enable_https),
            secure_host=_text(record.https_host),
            secure_port=_text(record.https_port),
            plain_host=_text(record.http_host),
            plain_port=_text(record.http_port),
        )

    def scheme_host(self, secure: bool) -> tuple[str, str, str]:
        """Return ``(scheme, host, port)`` for the given transport.

        The host falls back to ``localhost``; the port may be empty.
        """
        if secure:
            return "https://", self.secure_host or DEFAULT_HOST, self.secure_port
        return "http://", self.plain_host or DEFAULT_HOST, self.plain_port
