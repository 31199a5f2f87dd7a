"""Tests for newsrelay.cache."""

import sqlite3
from unittest.mock import patch

import pytest

from newsrelay.cache import MISS, MemoryContentCache, SQLiteContentCache
from newsrelay.errors import CacheError


@pytest.fixture(params=["sqlite", "memory"])
def cache(request, tmp_path):
    if request.param == "sqlite":
        return SQLiteContentCache(str(tmp_path / "cache.db"))
    return MemoryContentCache()


class TestContentCacheContract:
    def test_put_then_get_round_trip(self, cache) -> None:
        assert cache.put("katine/football", "penguins", 1, '{"a": 1}')
        assert cache.get("katine/football", "penguins", 1) == '{"a": 1}'

    def test_missing_entry_is_miss_marker(self, cache) -> None:
        assert cache.get("katine/football", "penguins", 1) == MISS

    def test_exact_key_matching(self, cache) -> None:
        cache.put("katine/football", "penguins", 1, "x")

        assert cache.get("katine/football", "Penguins", 1) == MISS
        assert cache.get("katine/football", "penguins", 2) == MISS
        assert cache.get("katine/Football", "penguins", 1) == MISS

    def test_put_overwrites(self, cache) -> None:
        cache.put("t", "q", 1, "old")
        cache.put("t", "q", 1, "new")

        assert cache.get("t", "q", 1) == "new"

    def test_clear(self, cache) -> None:
        cache.put("t", "q", 1, "x")

        assert cache.clear()
        assert cache.get("t", "q", 1) == MISS

    @pytest.mark.parametrize(
        "tag_id, query, page",
        [(None, "q", 1), ("t", None, 1), ("t", "q", 0), ("t", "q", -3)],
    )
    def test_bad_key_is_failure(self, cache, tag_id, query, page) -> None:
        assert cache.get(tag_id, query, page) is None
        assert cache.put(tag_id, query, page, "x") is False

    def test_none_content_rejected(self, cache) -> None:
        assert cache.put("t", "q", 1, None) is False


class TestSQLiteContentCache:
    def test_persists_across_instances(self, tmp_path) -> None:
        path = str(tmp_path / "cache.db")
        SQLiteContentCache(path).put("t", "q", 1, "kept")

        assert SQLiteContentCache(path).get("t", "q", 1) == "kept"

    def test_setup_failure_is_critical(self, tmp_path) -> None:
        with pytest.raises(CacheError) as excinfo:
            SQLiteContentCache(str(tmp_path / "missing" / "dir" / "cache.db"))

        assert excinfo.value.critical

    def test_read_failure_returns_none(self, tmp_path) -> None:
        cache = SQLiteContentCache(str(tmp_path / "cache.db"))

        with patch.object(cache, "_connect", side_effect=sqlite3.OperationalError("locked")):
            assert cache.get("t", "q", 1) is None
            assert cache.put("t", "q", 1, "x") is False
            assert cache.clear() is False
