"""
Reddit credential lifecycle: acquire a token, publish it through the runtime
state, and invalidate it in the background once it expires.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Executor
from enum import Enum
from typing import Optional

from .broadcast import ObserverBus
from .errors import CommsError
from .manager import CommsManager
from .models import CredentialRequest, Token
from .runtime import INVALIDATED, RuntimeKey, RuntimeState


logger = logging.getLogger(__name__)


class LifecycleState(str, Enum):
    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATING = "authenticating"
    AUTHENTICATED = "authenticated"
    INVALIDATING = "invalidating"


class Sleeper:
    """
    Duration sleep used by the expiry watcher. Waking up early because
    ``cancelled`` was set returns False.
    """

    def sleep(self, seconds: float, cancelled: Optional[threading.Event] = None) -> bool:
        event = cancelled or threading.Event()
        return not event.wait(seconds)


class CredentialLifecycle:
    """
    Drive UNAUTHENTICATED -> AUTHENTICATING -> AUTHENTICATED -> INVALIDATING
    -> UNAUTHENTICATED.

    Each successful ``authenticate`` submits one expiry watcher to ``pool``.
    When the token's lifetime has passed the watcher writes ``INVALIDATED``
    into the token slot, broadcasts, and then clears the slot, all while
    holding the lifecycle lock. Re-authenticating cancels the previous
    watcher, which then exits without touching the runtime state.
    """

    def __init__(
        self,
        comms: CommsManager,
        runtime: RuntimeState,
        bus: ObserverBus,
        pool: Executor,
        sleeper: Optional[Sleeper] = None,
    ) -> None:
        self.comms = comms
        self.runtime = runtime
        self.bus = bus
        self.pool = pool
        self.sleeper = sleeper or Sleeper()
        self._lock = threading.RLock()
        self._state = LifecycleState.UNAUTHENTICATED
        self._generation = 0
        self._cancelled: Optional[threading.Event] = None
        self._closed = False

    @property
    def state(self) -> LifecycleState:
        with self._lock:
            return self._state

    def authenticate(self, username: str, password: str) -> Token:
        """
        Fetch a token and start its expiry watcher.

        Raises ``CommsError`` when no token could be obtained or the lifecycle
        has been closed; the previous state (and any token still in force) is
        left as it was.
        """

        with self._lock:
            if self._closed:
                raise CommsError.local("Reddit authentication is unavailable after shutdown.")
            previous = self._state
            self._state = LifecycleState.AUTHENTICATING

        try:
            token = self.comms.get_reddit_token(CredentialRequest(username, password))
        except Exception:
            with self._lock:
                self._state = previous
            raise

        with self._lock:
            if self._closed:
                self._state = previous
                raise CommsError.local("Reddit authentication is unavailable after shutdown.")
            self.cancel()
            self._generation += 1
            cancelled = threading.Event()
            self._cancelled = cancelled
            self.runtime.put(RuntimeKey.REDDIT_TOKEN, token.token)
            self.runtime.put(RuntimeKey.REDDIT_USERNAME, username)
            self._state = LifecycleState.AUTHENTICATED
            self.pool.submit(self._watch, self._generation, token, cancelled)

        logger.info("Authenticated %s; token valid for %d seconds", username, token.expiry)
        return token

    def cancel(self) -> None:
        """Stop the pending expiry watcher, if any."""
        with self._lock:
            if self._cancelled is not None:
                self._cancelled.set()
                self._cancelled = None

    def close(self) -> None:
        """Cancel the pending watcher and refuse any further authentication."""
        with self._lock:
            self._closed = True
            self.cancel()

    def _watch(self, generation: int, token: Token, cancelled: threading.Event) -> None:
        try:
            self.sleeper.sleep(token.expiry, cancelled)
        except Exception:
            # Interrupted sleeps still invalidate the token.
            logger.warning("Token expiry sleep was interrupted", exc_info=True)

        with self._lock:
            if generation != self._generation or cancelled.is_set():
                logger.debug("Expiry watcher %d superseded", generation)
                return
            self._state = LifecycleState.INVALIDATING
            self.runtime.put(RuntimeKey.REDDIT_TOKEN, INVALIDATED)
            try:
                self.bus.broadcast()
            finally:
                # An observer may have re-authenticated during the broadcast.
                if generation == self._generation:
                    self.runtime.put(RuntimeKey.REDDIT_TOKEN, None)
                    self._state = LifecycleState.UNAUTHENTICATED
                    self._cancelled = None
        logger.info("Reddit token expired")
