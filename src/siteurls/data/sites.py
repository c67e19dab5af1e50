"""Site records and the stores that hold them.

A site record carries the transport settings of one web site: whether
https is enabled and which host/port to use for each scheme. Builders
only need ``fetch_site``; anything implementing ``SiteStore`` will do.

``SqliteSiteStore`` reads the ``web_site`` table with stdlib ``sqlite3``.
It opens one connection per lookup so a store can be shared between
threads without locking.
"""

import logging
import sqlite3
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, runtime_checkable

from siteurls.data._mapping import map_row
from siteurls.data.errors import QueryError, StoreConnectionError

logger = logging.getLogger("siteurls.data")

SCHEMA = """
CREATE TABLE IF NOT EXISTS web_site (
    site_id      TEXT PRIMARY KEY,
    enable_https INTEGER NOT NULL DEFAULT 0,
    https_host   TEXT,
    https_port   TEXT,
    http_host    TEXT,
    http_port    TEXT
)
"""


@dataclass(frozen=True, slots=True)
class SiteRecord:
    """One row of the ``web_site`` table."""

    site_id: str
    enable_https: bool = False
    https_host: str | None = None
    https_port: str | None = None
    http_host: str | None = None
    http_port: str | None = None


@runtime_checkable
class SiteStore(Protocol):
    """Looks up site records by id. Returns ``None`` when no site matches."""

    def fetch_site(self, site_id: str) -> SiteRecord | None: ...


class SqliteSiteStore:
    """Site records stored in a SQLite database.

    Usage::

        store = SqliteSiteStore("sites.db")
        store.create_schema()
        store.save(SiteRecord("shop", enable_https=True, https_host="shop.example.com"))
        store.fetch_site("shop")
    """

    __slots__ = ("_path",)

    def __init__(self, path: str | Path) -> None:
        self._path = str(path)

    def _connect(self) -> sqlite3.Connection:
        try:
            conn = sqlite3.connect(self._path)
        except sqlite3.Error as exc:
            msg = f"Could not open site store {self._path!r}: {exc}"
            raise StoreConnectionError(msg) from exc
        conn.row_factory = sqlite3.Row
        return conn

    def create_schema(self) -> None:
        """Create the ``web_site`` table if it does not exist."""
        conn = self._connect()
        try:
            with conn:
                conn.execute(SCHEMA)
        except sqlite3.Error as exc:
            msg = f"Could not create site schema: {exc}"
            raise QueryError(msg) from exc
        finally:
            conn.close()

    def save(self, record: SiteRecord) -> None:
        """Insert or replace *record*."""
        conn = self._connect()
        try:
            with conn:
                conn.execute(
                    "INSERT OR REPLACE INTO web_site "
                    "(site_id, enable_https, https_host, https_port, http_host, http_port) "
                    "VALUES (?, ?, ?, ?, ?, ?)",
                    (
                        record.site_id,
                        int(record.enable_https),
                        record.https_host,
                        record.https_port,
                        record.http_host,
                        record.http_port,
                    ),
                )
        except sqlite3.Error as exc:
            msg = f"Could not save site {record.site_id!r}: {exc}"
            raise QueryError(msg) from exc
        finally:
            conn.close()

    def fetch_site(self, site_id: str) -> SiteRecord | None:
        conn = self._connect()
        try:
            row = conn.execute("SELECT * FROM web_site WHERE site_id = ?", (site_id,)).fetchone()
        except sqlite3.Error as exc:
            msg = f"Site lookup for {site_id!r} failed: {exc}"
            raise QueryError(msg) from exc
        finally:
            conn.close()

        if row is None:
            logger.debug("No web_site row for %r", site_id)
            return None
        return map_row(SiteRecord, row)
