"""
Communications manager: picks a transport per capability, applies the content
cache policy, and turns every failure into a ``CommsError``.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Mapping, Optional, Sequence

from .cache import MISS, ContentCache
from .environment import (
    INPUT_API_KEY,
    REDDIT_API_CLIENT,
    REDDIT_API_SECRET,
    SENDGRID_API_EMAIL,
    SENDGRID_API_KEY,
    Environment,
)
from .errors import CommsError, is_transport_status
from .models import ContentQuery, CredentialRequest, MessageRequest, PostRequest, TagQuery, Token
from .offline import OfflineTransport
from .online import OnlineTransport
from .parser import ResponseParser
from .transport import Capability, Response, Transport, TransportMode


logger = logging.getLogger(__name__)


REQUIRED_KEYS: Mapping[Capability, Sequence[str]] = {
    Capability.CONTENT: (INPUT_API_KEY,),
    Capability.MESSAGE: (SENDGRID_API_KEY, SENDGRID_API_EMAIL),
    Capability.SOCIAL: (REDDIT_API_CLIENT, REDDIT_API_SECRET),
}

Document = Dict[str, Any]


class CommsManager:
    """
    Single point of dispatch for tag search, content search, email sending,
    Reddit token requests and Reddit posting.

    Each capability is served by the live or the offline transport according
    to its ``TransportMode``. Caching only ever applies to live content
    search, and only when a cache has been injected.
    """

    def __init__(
        self,
        content_online: bool = False,
        message_online: bool = False,
        social_online: bool = False,
        *,
        online: Optional[Transport] = None,
        offline: Optional[Transport] = None,
        environment: Optional[Environment] = None,
        parser: Optional[ResponseParser] = None,
        cache: Optional[ContentCache] = None,
    ) -> None:
        self.environment = environment or Environment()
        self.online: Transport = online or OnlineTransport(self.environment)
        self.offline: Transport = offline or OfflineTransport()
        self.parser = parser or ResponseParser()
        self.cache = cache
        self.modes: Dict[Capability, TransportMode] = {}
        self.set_modes(content_online, message_online, social_online)

    # Module injection / system state

    def inject_cache(self, cache: Optional[ContentCache]) -> None:
        """Use ``cache`` for content caching; None turns caching off."""
        self.cache = cache

    def inject_parser(self, parser: Optional[ResponseParser]) -> None:
        if parser is not None:
            self.parser = parser

    def inject_drivers(self, online: Optional[Transport], offline: Optional[Transport]) -> None:
        if online is not None:
            self.online = online
        if offline is not None:
            self.offline = offline

    def inject_environment(self, environment: Optional[Environment]) -> None:
        if environment is not None:
            self.environment = environment
            if isinstance(self.online, OnlineTransport):
                self.online.environment = environment

    def set_modes(self, content: bool, message: bool, social: bool) -> None:
        """True selects the live API for that capability, False the offline stand-in."""
        self.modes = {
            Capability.CONTENT: TransportMode.from_flag(content),
            Capability.MESSAGE: TransportMode.from_flag(message),
            Capability.SOCIAL: TransportMode.from_flag(social),
        }

    def is_live(self, capability: Capability) -> bool:
        return self.modes[capability] is TransportMode.LIVE

    def _driver(self, capability: Capability) -> Transport:
        if self.is_live(capability):
            return self.online
        return self.offline

    def _require_environment(self, capability: Capability) -> None:
        if not self.is_live(capability):
            return
        for key in REQUIRED_KEYS[capability]:
            if self.environment.getenv(key) is None:
                raise CommsError.local(f"Required environment variable {key} is missing.")

    def _parse_validate(self, response: Response, label: str) -> Document:
        document = self.parser.parse(response.body)
        if document is None:
            raise CommsError.local(f"Unparsable {label} response: {response.body}")
        if is_transport_status(response.status_code):
            raise CommsError(response.status_code, _guardian_message(document))
        return document

    # Guardian operations

    def get_tags(self, query: TagQuery) -> Document:
        self._require_environment(Capability.CONTENT)
        logger.info("Searching tags for %r (%s)", query.query, self.modes[Capability.CONTENT].value)
        response = self._driver(Capability.CONTENT).get_tags(query)
        return self._parse_validate(response, "tags")

    def is_content_cached(self, query: ContentQuery) -> bool:
        """
        Whether live content for ``query`` is already cached. Always false when
        offline or without a cache.
        """

        if not self.is_live(Capability.CONTENT) or self.cache is None:
            return False
        cached = self.cache.get(query.tag.id, query.query, query.page)
        return bool(cached)

    def clear_content_cache(self) -> bool:
        """Clear the cache; trivially succeeds when offline or without a cache."""
        if not self.is_live(Capability.CONTENT) or self.cache is None:
            return True
        return self.cache.clear()

    def _fetch_content(self, query: ContentQuery) -> Document:
        response = self.online.get_content(query)
        document = self._parse_validate(response, "content")
        # Keep the cache warm for later reads even when the caller skipped it.
        if self.cache is not None:
            if not self.cache.put(query.tag.id, query.query, query.page, json.dumps(document)):
                raise CommsError.local("Failed to cache content response.")
        return document

    def get_content(self, query: ContentQuery, use_cache: bool = False) -> Document:
        self._require_environment(Capability.CONTENT)

        if not self.is_live(Capability.CONTENT):
            return self._parse_validate(self.offline.get_content(query), "content")

        if not use_cache or self.cache is None:
            return self._fetch_content(query)

        cached = self.cache.get(query.tag.id, query.query, query.page)
        if cached is None:
            logger.error("Content cache lookup failed for %s/%r/%d", query.tag.id, query.query, query.page)
            raise CommsError.local("Critical DB error during content cache getting.")
        if cached == MISS:
            logger.debug("Cache miss for %s/%r/%d", query.tag.id, query.query, query.page)
            return self._fetch_content(query)

        logger.debug("Cache hit for %s/%r/%d", query.tag.id, query.query, query.page)
        document = self.parser.parse(cached)
        if document is None:
            raise CommsError.local("Cached content could not be parsed.")
        return document

    # Email operations

    def send_email(self, request: MessageRequest) -> bool:
        """
        Send the digest email. An empty response body means success; anything
        else is an error of some kind.
        """

        self._require_environment(Capability.MESSAGE)
        logger.info("Sending email (%s)", self.modes[Capability.MESSAGE].value)
        response = self._driver(Capability.MESSAGE).send_email(request)

        if response.body == "":
            return True

        document = self.parser.parse(response.body)
        if document is None:
            raise CommsError.local(f"Unparsable email send response: {response.body}")
        if is_transport_status(response.status_code):
            raise CommsError(response.status_code, _sendgrid_message(document))
        raise CommsError.local("Unknown error in email sending")

    # Reddit operations

    def get_reddit_token(self, request: CredentialRequest) -> Token:
        self._require_environment(Capability.SOCIAL)
        logger.info("Requesting Reddit token (%s)", self.modes[Capability.SOCIAL].value)
        response = self._driver(Capability.SOCIAL).get_reddit_token(request)

        document = self.parser.parse(response.body)
        if document is None:
            raise CommsError.local(f"Unparsable Reddit token response: {response.body}")
        if is_transport_status(response.status_code):
            raise CommsError(response.status_code, "Error getting Reddit access token.")
        if document.get("error") is not None:
            if document["error"] == "invalid_grant":
                raise CommsError.local("Invalid credentials to get a Reddit token.")
            raise CommsError.local("Unknown Reddit token getting error.")

        if document.get("access_token") is None or document.get("expires_in") is None:
            raise CommsError.local("Reddit token getting does not have expected fields")

        try:
            return Token(str(document["access_token"]), int(document["expires_in"]))
        except (TypeError, ValueError) as error:
            raise CommsError.local(f"Reddit token expiry is not a number: {document['expires_in']!r}") from error

    def post_reddit(self, request: PostRequest) -> bool:
        self._require_environment(Capability.SOCIAL)

        if request.token is None:
            raise CommsError.local("Trying to post with missing Reddit token.")

        logger.info("Posting to Reddit (%s)", self.modes[Capability.SOCIAL].value)
        response = self._driver(Capability.SOCIAL).post_reddit(request)
        if is_transport_status(response.status_code):
            raise CommsError(response.status_code, "Error posting to Reddit.")
        return True


def _guardian_message(document: Mapping[str, Any]) -> str:
    body = document.get("response")
    if isinstance(body, Mapping) and isinstance(body.get("message"), str):
        return body["message"]
    return "Unknown error response from The Guardian."


def _sendgrid_message(document: Mapping[str, Any]) -> str:
    errors = document.get("errors")
    if not isinstance(errors, list):
        return "Unknown error response from SendGrid."

    messages = []
    for error in errors:
        if not isinstance(error, Mapping):
            continue
        text = str(error.get("message", ""))
        if error.get("field") is not None:
            text = f"Problem with field {error['field']}; {text}"
        messages.append(text)
    return ", ".join(messages)
