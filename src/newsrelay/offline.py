"""
Offline transport returning the same canned responses every time.
"""

from __future__ import annotations

import json
import logging
import time

from .models import ContentQuery, CredentialRequest, MessageRequest, PostRequest, TagQuery
from .transport import Response, format_output_body


logger = logging.getLogger(__name__)


TAGS_DOCUMENT = {
    "response": {
        "status": "ok",
        "userTier": "free",
        "total": 65,
        "startIndex": 1,
        "pageSize": 10,
        "currentPage": 1,
        "pages": 7,
        "results": [
            {
                "id": "katine/football",
                "type": "keyword",
                "webTitle": "Football",
                "webUrl": "http://www.theguardian.com/katine/football",
                "apiUrl": "http://beta.content.guardianapis.com/katine/football",
                "sectionId": "katine",
                "sectionName": "Katine",
            }
        ],
    }
}

_SALMOND_ID = (
    "politics/blog/2014/feb/17/"
    "alex-salmond-speech-first-minister-scottish-independence-eu-currency-live"
)

CONTENT_DOCUMENT = {
    "response": {
        "status": "ok",
        "userTier": "free",
        "total": 1,
        "startIndex": 1,
        "pageSize": 10,
        "currentPage": 1,
        "pages": 1,
        "orderBy": "newest",
        "results": [
            {
                "id": _SALMOND_ID,
                "sectionId": "politics",
                "sectionName": "Politics",
                "webPublicationDate": "2014-02-17T12:05:47Z",
                "webTitle": "Alex Salmond speech – first minister hits back over Scottish independence – live",
                "webUrl": f"https://www.theguardian.com/{_SALMOND_ID}",
                "apiUrl": f"https://content.guardianapis.com/{_SALMOND_ID}",
            },
            {
                "id": _SALMOND_ID,
                "sectionId": "politics",
                "sectionName": "Politics",
                "webPublicationDate": "2014-02-17T12:05:47Z",
                "webTitle": "Pingu becomes President of the Antarctic; what happens next?",
                "webUrl": "https://www.youtube.com/watch?v=aYNXqKaZWR4",
                "apiUrl": f"https://content.guardianapis.com/{_SALMOND_ID}",
            },
        ],
    }
}

TOKEN_DOCUMENT = {
    "access_token": "pingu's key",
    "token_type": "bearer",
    "expires_in": 86400,
    "scope": "*",
}


class OfflineTransport:
    """
    Stand-in for the live APIs. Never reports an HTTP error status.

    ``delay`` (seconds) is added to every call except token requests, to
    simulate slow communications.
    """

    def __init__(self, delay: float = 0.0) -> None:
        self.delay = delay

    def _simulate_delay(self) -> None:
        if self.delay > 0:
            time.sleep(self.delay)

    def get_tags(self, query: TagQuery) -> Response:
        self._simulate_delay()
        return Response(json.dumps(TAGS_DOCUMENT), 200)

    def get_content(self, query: ContentQuery) -> Response:
        self._simulate_delay()
        return Response(json.dumps(CONTENT_DOCUMENT), 200)

    def send_email(self, request: MessageRequest) -> Response:
        self._simulate_delay()
        logger.info("Offline email to %s:\n%s", request.recipient, format_output_body(request.tag, request.items))
        # SendGrid answers a successful send with an empty body
        return Response("", 200)

    def get_reddit_token(self, request: CredentialRequest) -> Response:
        return Response(json.dumps(TOKEN_DOCUMENT), 200)

    def post_reddit(self, request: PostRequest) -> Response:
        self._simulate_delay()
        logger.info("Offline Reddit post:\n%s", format_output_body(request.tag, request.items))
        return Response("", 200)
