"""
Shared runtime state written by the credential lifecycle.
"""

from __future__ import annotations

import threading
from enum import Enum
from typing import Dict, Optional


INVALIDATED = "INVALIDATED"


class RuntimeKey(str, Enum):
    REDDIT_TOKEN = "reddit_token"
    REDDIT_USERNAME = "reddit_username"


class RuntimeState:
    """
    Thread-safe key to optional-string map.

    Individual reads and writes are atomic. Reading several keys is not: use
    ``snapshot`` and treat the result as a point-in-time copy. A key that was
    never written and a key explicitly set to None both read as None.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._data: Dict[str, Optional[str]] = {}

    def get(self, key: RuntimeKey) -> Optional[str]:
        with self._lock:
            return self._data.get(key.value)

    def put(self, key: RuntimeKey, value: Optional[str]) -> None:
        with self._lock:
            self._data[key.value] = value

    def snapshot(self) -> Dict[str, Optional[str]]:
        with self._lock:
            return dict(self._data)
