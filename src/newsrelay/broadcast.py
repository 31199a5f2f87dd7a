"""
Observer list notified when the system changes state.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, List, Optional


logger = logging.getLogger(__name__)

Observer = Callable[[], None]


class ObserverBus:
    """
    Ordered set of zero-argument callbacks.

    ``broadcast`` runs every observer synchronously on the calling thread, in
    registration order. Observers get no payload; they query the system for
    whatever changed. The observer list is copied under a lock before
    iterating, so observers may be added or removed from any thread, including
    from inside a callback.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._observers: List[Observer] = []

    def add(self, observer: Optional[Observer]) -> bool:
        if observer is None:
            return False
        with self._lock:
            self._observers.append(observer)
        return True

    def remove(self, observer: Optional[Observer]) -> bool:
        with self._lock:
            try:
                self._observers.remove(observer)
            except ValueError:
                return False
        return True

    def broadcast(self) -> None:
        with self._lock:
            observers = list(self._observers)
        logger.debug("Broadcasting to %d observer(s)", len(observers))
        for observer in observers:
            observer()

    def __len__(self) -> int:
        with self._lock:
            return len(self._observers)
