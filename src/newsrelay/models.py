"""
Core data structures used throughout newsrelay.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence


@dataclass(frozen=True)
class Tag:
    """
    A Guardian tag. Two tags are the same tag when their ids match.
    """

    id: str
    type: str = field(default="", compare=False)
    web_title: str = field(default="", compare=False)
    web_url: str = field(default="", compare=False)
    api_url: str = field(default="", compare=False)

    def __str__(self) -> str:
        return self.id

    @classmethod
    def from_result(cls, item: Mapping[str, Any]) -> "Tag":
        return cls(
            id=item["id"],
            type=item["type"],
            web_title=item["webTitle"],
            web_url=item["webUrl"],
            api_url=item["apiUrl"],
        )


@dataclass(frozen=True)
class Content:
    """
    A single article, remembered together with the result page it came from.
    """

    id: str
    section_id: str
    section_name: str
    web_publication_date: str
    web_title: str
    web_url: str
    api_url: str
    page: int
    total_pages: int

    def __str__(self) -> str:
        return f"{self.web_title} - {self.section_name} (published {self.web_publication_date})"

    @classmethod
    def from_result(cls, item: Mapping[str, Any], page: int, total_pages: int) -> "Content":
        return cls(
            id=item["id"],
            section_id=item["sectionId"],
            section_name=item["sectionName"],
            web_publication_date=item["webPublicationDate"],
            web_title=item["webTitle"],
            web_url=item["webUrl"],
            api_url=item["apiUrl"],
            page=page,
            total_pages=total_pages,
        )


@dataclass(frozen=True)
class Token:
    token: str
    expiry: int


@dataclass(frozen=True)
class TagQuery:
    query: str
    page: int = 1
    page_size: int = 10


@dataclass(frozen=True)
class ContentQuery:
    tag: Tag
    query: str
    page: int = 1
    page_size: int = 10


@dataclass(frozen=True)
class MessageRequest:
    recipient: str
    tag: Tag
    items: Sequence[Content] = ()


@dataclass(frozen=True)
class CredentialRequest:
    username: str
    password: str = field(repr=False)


@dataclass(frozen=True)
class PostRequest:
    username: Optional[str]
    token: Optional[str] = field(repr=False)
    tag: Tag
    items: Sequence[Content] = ()


def tags_from_document(document: Mapping[str, Any]) -> List[Tag]:
    results = document["response"]["results"]
    return [Tag.from_result(item) for item in results]


def contents_from_document(document: Mapping[str, Any]) -> List[Content]:
    data: Dict[str, Any] = document["response"]
    page = int(data["currentPage"])
    total_pages = int(data["pages"])
    return [Content.from_result(item, page, total_pages) for item in data["results"]]
