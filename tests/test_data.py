"""Tests for siteurls.data — site records in SQLite."""

import sqlite3
from dataclasses import dataclass

import pytest

from siteurls.data import (
    DataAccessError,
    QueryError,
    SiteRecord,
    SiteStore,
    SqliteSiteStore,
    StoreConnectionError,
)
from siteurls.data._mapping import map_row
from siteurls.errors import SiteUrlsError


@pytest.fixture
def store(tmp_path) -> SqliteSiteStore:
    store = SqliteSiteStore(tmp_path / "sites.db")
    store.create_schema()
    return store


class TestSqliteSiteStore:
    def test_round_trip(self, store) -> None:
        record = SiteRecord(
            "shop",
            enable_https=True,
            https_host="shop.example.com",
            https_port="8443",
            http_host="www.example.com",
            http_port=None,
        )
        store.save(record)

        assert store.fetch_site("shop") == record

    def test_missing_site(self, store) -> None:
        assert store.fetch_site("nope") is None

    def test_save_replaces(self, store) -> None:
        store.save(SiteRecord("shop", enable_https=False))
        store.save(SiteRecord("shop", enable_https=True))

        assert store.fetch_site("shop").enable_https is True

    def test_rows_written_elsewhere(self, tmp_path) -> None:
        path = tmp_path / "legacy.db"
        store = SqliteSiteStore(path)
        store.create_schema()
        with sqlite3.connect(path) as conn:
            conn.execute(
                "INSERT INTO web_site (site_id, enable_https, https_port) VALUES (?, ?, ?)",
                ("legacy", 1, 443),
            )
        conn.close()

        record = store.fetch_site("legacy")

        assert record.enable_https is True
        assert record.https_port == "443"
        assert record.http_host is None

    def test_missing_table(self, tmp_path) -> None:
        store = SqliteSiteStore(tmp_path / "empty.db")

        with pytest.raises(QueryError, match="'shop'"):
            store.fetch_site("shop")

    def test_unreachable_database(self, tmp_path) -> None:
        store = SqliteSiteStore(tmp_path / "missing" / "dir" / "sites.db")

        with pytest.raises(StoreConnectionError) as excinfo:
            store.fetch_site("shop")

        assert isinstance(excinfo.value.__cause__, sqlite3.Error)

    def test_errors_share_a_base(self) -> None:
        assert issubclass(QueryError, DataAccessError)
        assert issubclass(StoreConnectionError, DataAccessError)
        assert issubclass(DataAccessError, SiteUrlsError)

    def test_satisfies_protocol(self, store) -> None:
        assert isinstance(store, SiteStore)


@dataclass(frozen=True, slots=True)
class _Row:
    name: str
    flag: bool
    note: str | None = None


class TestMapRow:
    def test_coerces_annotated_types(self) -> None:
        row = map_row(_Row, {"name": 1, "flag": "Y"})

        assert row == _Row(name="1", flag=True)

    def test_flag_strings(self) -> None:
        assert map_row(_Row, {"name": "a", "flag": "N"}).flag is False
        assert map_row(_Row, {"name": "a", "flag": "true"}).flag is True
        assert map_row(_Row, {"name": "a", "flag": 0}).flag is False

    def test_other_annotations_pass_through(self) -> None:
        @dataclass(frozen=True, slots=True)
        class Counted:
            total: int

        assert map_row(Counted, {"total": "45"}).total == "45"

    def test_optional_and_none(self) -> None:
        row = map_row(_Row, {"name": "a", "flag": 1, "note": 7})
        assert row.note == "7"
        assert map_row(_Row, {"name": "a", "flag": 1, "note": None}).note is None

    def test_extra_columns_ignored(self) -> None:
        row = map_row(_Row, {"name": "a", "flag": 1, "extra": "x"})
        assert row.name == "a"

    def test_missing_required_field(self) -> None:
        with pytest.raises(TypeError):
            map_row(_Row, {"name": "a"})

    def test_not_a_dataclass(self) -> None:
        with pytest.raises(TypeError, match="not a dataclass"):
            map_row(dict, {"a": 1})
