"""
System facade consumed by front ends.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, List, Optional, Sequence

from .broadcast import Observer, ObserverBus
from .cache import ContentCache
from .environment import INPUT_API_KEY, SENDGRID_API_EMAIL, SENDGRID_API_KEY, Environment
from .errors import CommsError
from .lifecycle import CredentialLifecycle, LifecycleState, Sleeper
from .manager import CommsManager
from .models import (
    Content,
    ContentQuery,
    MessageRequest,
    PostRequest,
    Tag,
    TagQuery,
    contents_from_document,
    tags_from_document,
)
from .runtime import INVALIDATED, RuntimeKey, RuntimeState


logger = logging.getLogger(__name__)

POOL_SIZE = 2


class System:
    """
    Everything a front end needs: searching, caching, sharing, Reddit
    authentication and a session reading list.

    No operation raises on failure. A failing call returns an empty list or
    False and signals the problem to observers: ``is_error_state`` is True
    only while observers run, and ``error_message`` keeps the last message
    afterwards.
    """

    def __init__(
        self,
        content_online: bool = False,
        message_online: bool = False,
        social_online: bool = False,
        cache: Optional[ContentCache] = None,
        *,
        page_size: int = 10,
        comms: Optional[CommsManager] = None,
        environment: Optional[Environment] = None,
    ) -> None:
        self.environment = environment or Environment()
        self.comms = comms or CommsManager(
            content_online,
            message_online,
            social_online,
            environment=self.environment,
        )
        self.comms.inject_cache(cache)
        self.page_size = page_size

        self.runtime = RuntimeState()
        self.observers = ObserverBus()
        self.error_state = False
        self.error_msg: Optional[str] = None

        self.pool = ThreadPoolExecutor(max_workers=POOL_SIZE, thread_name_prefix="newsrelay")
        self.lifecycle = CredentialLifecycle(self.comms, self.runtime, self.observers, self.pool)

        self._reading_list: List[Content] = []

    def __enter__(self) -> "System":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.shutdown()

    # System modules

    def inject_comms_manager(self, comms: Optional[CommsManager]) -> bool:
        if comms is None:
            return False
        self.comms = comms
        self.lifecycle.comms = comms
        return True

    def inject_environment(self, environment: Optional[Environment]) -> bool:
        if environment is None:
            return False
        self.environment = environment
        return True

    def inject_sleeper(self, sleeper: Optional[Sleeper]) -> bool:
        if sleeper is None:
            return False
        self.lifecycle.sleeper = sleeper
        return True

    @property
    def runtime_data(self) -> Dict[str, Optional[str]]:
        """Copy of the runtime data; see ``RuntimeKey`` for the possible keys."""
        return self.runtime.snapshot()

    @property
    def auth_state(self) -> LifecycleState:
        return self.lifecycle.state

    # System state / observation

    def add_observer(self, observer: Optional[Observer]) -> bool:
        return self.observers.add(observer)

    def remove_observer(self, observer: Optional[Observer]) -> bool:
        return self.observers.remove(observer)

    @property
    def is_error_state(self) -> bool:
        return self.error_state

    @property
    def error_message(self) -> Optional[str]:
        return self.error_msg

    def _scream_error(self, message: str) -> None:
        logger.warning(message)
        self.error_state = True
        self.error_msg = message
        self.observers.broadcast()
        self.error_state = False

    def check_environment(self, content: bool, message: bool) -> bool:
        """
        Signal an error for every missing variable the chosen live APIs need.
        """

        required: List[str] = []
        if content:
            required.append(INPUT_API_KEY)
        if message:
            required.extend([SENDGRID_API_KEY, SENDGRID_API_EMAIL])

        ok = True
        for key in required:
            if self.environment.getenv(key) is None:
                self._scream_error(
                    f"Environment Variable {key} is missing.\n"
                    "Core functionality cannot work without this variable; "
                    "please set it and try again."
                )
                ok = False
        return ok

    def shutdown(self) -> None:
        self.lifecycle.close()
        self.pool.shutdown(wait=True, cancel_futures=True)

    # Guardian operations

    def get_tags(self, query: str) -> List[Tag]:
        try:
            document = self.comms.get_tags(TagQuery(query, 1, self.page_size))
            return tags_from_document(document)
        except CommsError as error:
            self._scream_error(f"Tag getting error: {error}")
        except (KeyError, TypeError, ValueError) as error:
            self._scream_error(f"Tag getting error: malformed response ({error!r})")
        return []

    def is_cached_content(self, tag: Tag, query: str, page: int) -> bool:
        return self.comms.is_content_cached(ContentQuery(tag, query, page, self.page_size))

    def clear_cache(self) -> None:
        if not self.comms.clear_content_cache():
            self._scream_error("Failed to clear content cache.")

    def get_content(self, tag: Tag, query: str, page: int, use_cache: bool = False) -> List[Content]:
        try:
            document = self.comms.get_content(ContentQuery(tag, query, page, self.page_size), use_cache)
            return contents_from_document(document)
        except CommsError as error:
            self._scream_error(f"Content getting error: {error}")
        except (KeyError, TypeError, ValueError) as error:
            self._scream_error(f"Content getting error: malformed response ({error!r})")
        return []

    # Email operations

    def send_email(self, tag: Tag, items: Sequence[Content], recipient: str) -> bool:
        try:
            return self.comms.send_email(MessageRequest(recipient, tag, tuple(items)))
        except CommsError as error:
            self._scream_error(f"Email sending error: {error}")
            return False

    # Reddit operations

    def authenticate_reddit(self, username: str, password: str) -> bool:
        """
        Fetch a Reddit token and keep it in the runtime data until it expires.

        On expiry the ``reddit_token`` slot reads ``INVALIDATED`` while
        observers are notified, then goes back to None.
        """

        try:
            self.lifecycle.authenticate(username, password)
        except CommsError as error:
            self._scream_error(f"Error Authenticating for Reddit: {error}")
            return False
        return True

    def post_reddit(self, tag: Tag, items: Sequence[Content]) -> bool:
        data = self.runtime.snapshot()
        token = data.get(RuntimeKey.REDDIT_TOKEN.value)
        if token == INVALIDATED:
            token = None
        request = PostRequest(
            data.get(RuntimeKey.REDDIT_USERNAME.value),
            token,
            tag,
            tuple(items),
        )
        try:
            return self.comms.post_reddit(request)
        except CommsError as error:
            self._scream_error(f"Reddit posting error: {error}")
            return False

    # Reading list operations

    @property
    def reading_list(self) -> List[Content]:
        return list(self._reading_list)

    def add_to_reading_list(self, content: Optional[Content]) -> bool:
        """Append ``content`` unless it is None or already on the list."""
        if content is None or content in self._reading_list:
            return False
        self._reading_list.append(content)
        return True

    def remove_from_reading_list(self, content: Optional[Content]) -> bool:
        try:
            self._reading_list.remove(content)
        except ValueError:
            return False
        return True
