"""Site record access for siteurls.

Plain dataclasses out, ``sqlite3`` underneath. Not an ORM.

Basic usage::

    from siteurls.data import SqliteSiteStore

    store = SqliteSiteStore("sites.db")
    record = store.fetch_site("shop")
"""

from siteurls.data.errors import DataAccessError, QueryError, StoreConnectionError
from siteurls.data.sites import SiteRecord, SiteStore, SqliteSiteStore

__all__ = [
    "DataAccessError",
    "QueryError",
    "SiteRecord",
    "SiteStore",
    "SqliteSiteStore",
    "StoreConnectionError",
]
