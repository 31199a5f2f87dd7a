"""
Driver contract shared by the live and offline transports.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Protocol

from .models import Content, ContentQuery, CredentialRequest, MessageRequest, PostRequest, Tag, TagQuery


class Capability(str, Enum):
    CONTENT = "content"
    MESSAGE = "message"
    SOCIAL = "social"


class TransportMode(str, Enum):
    LIVE = "live"
    OFFLINE = "offline"

    @classmethod
    def from_flag(cls, online: bool) -> "TransportMode":
        return cls.LIVE if online else cls.OFFLINE


@dataclass(frozen=True)
class Response:
    body: str
    status_code: int


class Transport(Protocol):
    def get_tags(self, query: TagQuery) -> Response: ...

    def get_content(self, query: ContentQuery) -> Response: ...

    def send_email(self, request: MessageRequest) -> Response: ...

    def get_reddit_token(self, request: CredentialRequest) -> Response: ...

    def post_reddit(self, request: PostRequest) -> Response: ...


def format_output_body(tag: Tag, items: Iterable[Content]) -> str:
    """
    Render the plain-text digest sent by email or posted to Reddit.
    """

    lines = [f"Here are some articles for the tag {tag.id}:\n"]
    for item in items:
        lines.append(f"- {item.web_title} | Published {item.web_publication_date}\n")
    return "".join(lines)
