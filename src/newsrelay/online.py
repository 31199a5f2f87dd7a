"""
Live transport backed by the Guardian, SendGrid and Reddit HTTP APIs.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional

import httpx

from .config import Settings
from .environment import (
    INPUT_API_KEY,
    REDDIT_API_CLIENT,
    REDDIT_API_SECRET,
    SENDGRID_API_EMAIL,
    SENDGRID_API_KEY,
    Environment,
)
from .errors import CommsError
from .models import ContentQuery, CredentialRequest, MessageRequest, PostRequest, TagQuery
from .transport import Response, format_output_body


logger = logging.getLogger(__name__)


class OnlineTransport:
    """
    Perform real network calls. Every failure to get an HTTP response at all
    is reported as a local ``CommsError``; HTTP error statuses are returned
    untouched for the manager to classify.
    """

    def __init__(
        self,
        environment: Optional[Environment] = None,
        settings: Optional[Settings] = None,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self.environment = environment or Environment()
        self.settings = settings or Settings()
        self._client = client

    @contextmanager
    def _session(self) -> Iterator[httpx.Client]:
        if self._client is not None:
            yield self._client
            return
        with httpx.Client(
            timeout=self.settings.timeout,
            headers={"User-Agent": self.settings.user_agent},
        ) as client:
            yield client

    def _send(self, method: str, url: str, **kwargs: Any) -> Response:
        logger.debug("%s %s", method, url)
        try:
            with self._session() as client:
                response = client.request(method, url, **kwargs)
        except httpx.HTTPError as error:
            raise CommsError.local(f"{type(error).__name__} thrown; {error}") from error
        return Response(response.text, response.status_code)

    def _guardian_get(self, endpoint: str, params: Dict[str, Any]) -> Response:
        query = {"api-key": self.environment.getenv(INPUT_API_KEY), **params, "format": "json"}
        return self._send("GET", f"{self.settings.guardian_url}{endpoint}", params=query)

    def get_tags(self, query: TagQuery) -> Response:
        return self._guardian_get(
            "/tags",
            {"q": query.query, "page": query.page, "page-size": query.page_size},
        )

    def get_content(self, query: ContentQuery) -> Response:
        return self._guardian_get(
            "/search",
            {
                "q": query.query,
                "tag": query.tag.id,
                "page": query.page,
                "page-size": query.page_size,
            },
        )

    def send_email(self, request: MessageRequest) -> Response:
        data = {
            "personalizations": [{"to": [{"email": request.recipient}]}],
            "from": {"email": self.environment.getenv(SENDGRID_API_EMAIL)},
            "subject": f"GE Client: Articles for tag {request.tag.id}",
            "content": [
                {
                    "type": "text/plain",
                    "value": format_output_body(request.tag, request.items),
                }
            ],
        }
        headers = {"Authorization": f"Bearer {self.environment.getenv(SENDGRID_API_KEY)}"}
        return self._send("POST", f"{self.settings.sendgrid_url}/v3/mail/send", json=data, headers=headers)

    def get_reddit_token(self, request: CredentialRequest) -> Response:
        auth = (
            self.environment.getenv(REDDIT_API_CLIENT) or "",
            self.environment.getenv(REDDIT_API_SECRET) or "",
        )
        form = {
            "grant_type": "password",
            "username": request.username,
            "password": request.password,
        }
        return self._send(
            "POST",
            f"{self.settings.reddit_url}/api/v1/access_token",
            data=form,
            auth=auth,
            headers={"User-Agent": self.settings.user_agent},
        )

    def post_reddit(self, request: PostRequest) -> Response:
        form = {
            "title": f"GE Client: Articles for tag {request.tag.id}",
            "sr": f"u_{request.username}",
            "text": format_output_body(request.tag, request.items),
            "kind": "self",
        }
        headers = {
            "Authorization": f"bearer {request.token}",
            "User-Agent": self.settings.user_agent,
        }
        return self._send("POST", f"{self.settings.reddit_oauth_url}/api/submit", data=form, headers=headers)
