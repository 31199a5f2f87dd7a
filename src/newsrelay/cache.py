"""
Persistent content cache keyed by (tag id, query, page).
"""

from __future__ import annotations

import logging
import sqlite3
from contextlib import closing
from typing import Dict, Optional, Protocol, Tuple

from .errors import CacheError


logger = logging.getLogger(__name__)

# Returned by ``get`` when nothing is cached; ``None`` means the lookup failed.
MISS = ""


class ContentCache(Protocol):
    def get(self, tag_id: Optional[str], query: Optional[str], page: int) -> Optional[str]: ...

    def put(self, tag_id: Optional[str], query: Optional[str], page: int, content: Optional[str]) -> bool: ...

    def clear(self) -> bool: ...


def _valid_key(tag_id: Optional[str], query: Optional[str], page: int) -> bool:
    return tag_id is not None and query is not None and page >= 1


class SQLiteContentCache:
    """
    Content cache stored in a single SQLite table.

    Every operation opens its own connection, so each get/put/clear is atomic
    on its own and the cache can be shared between threads.
    """

    def __init__(self, path: str = "gedata.db") -> None:
        self.path = path
        if not self.setup():
            raise CacheError("Failed to set up connection.", critical=True)

    def _connect(self) -> sqlite3.Connection:
        return sqlite3.connect(self.path)

    def setup(self) -> bool:
        try:
            with closing(self._connect()) as conn, conn:
                conn.execute(
                    """
                    CREATE TABLE IF NOT EXISTS ContentCache (
                        tag_id TEXT NOT NULL,
                        query TEXT NOT NULL,
                        page INTEGER NOT NULL,
                        content TEXT NOT NULL,
                        PRIMARY KEY (tag_id, query, page)
                    )
                    """
                )
        except sqlite3.Error as error:
            logger.error("Could not set up content cache at %s: %s", self.path, error)
            return False
        return True

    def put(self, tag_id: Optional[str], query: Optional[str], page: int, content: Optional[str]) -> bool:
        """
        Cache ``content``, replacing anything already stored for the key.
        """

        if not _valid_key(tag_id, query, page) or content is None:
            return False
        try:
            with closing(self._connect()) as conn, conn:
                conn.execute(
                    "INSERT OR REPLACE INTO ContentCache VALUES (?, ?, ?, ?)",
                    (tag_id, query, page, content),
                )
        except sqlite3.Error as error:
            logger.error("Content cache write failed: %s", error)
            return False
        return True

    def get(self, tag_id: Optional[str], query: Optional[str], page: int) -> Optional[str]:
        """
        Return the cached content, ``MISS`` when nothing is stored, or None on
        bad parameters or a database failure.
        """

        if not _valid_key(tag_id, query, page):
            return None
        try:
            with closing(self._connect()) as conn:
                row = conn.execute(
                    "SELECT content FROM ContentCache WHERE tag_id = ? AND query = ? AND page = ?",
                    (tag_id, query, page),
                ).fetchone()
        except sqlite3.Error as error:
            logger.error("Content cache read failed: %s", error)
            return None
        if row is None:
            return MISS
        return row[0]

    def clear(self) -> bool:
        try:
            with closing(self._connect()) as conn, conn:
                conn.execute("DELETE FROM ContentCache")
        except sqlite3.Error as error:
            logger.error("Content cache clear failed: %s", error)
            return False
        return True


class MemoryContentCache:
    """
    Dictionary-backed cache with the same contract, for tests and throwaway sessions.
    """

    def __init__(self) -> None:
        self._entries: Dict[Tuple[str, str, int], str] = {}

    def put(self, tag_id: Optional[str], query: Optional[str], page: int, content: Optional[str]) -> bool:
        if not _valid_key(tag_id, query, page) or content is None:
            return False
        self._entries[(tag_id, query, page)] = content
        return True

    def get(self, tag_id: Optional[str], query: Optional[str], page: int) -> Optional[str]:
        if not _valid_key(tag_id, query, page):
            return None
        return self._entries.get((tag_id, query, page), MISS)

    def clear(self) -> bool:
        self._entries.clear()
        return True
