"""Shared fixtures for newsrelay tests."""

import json
from unittest.mock import MagicMock

import pytest

from newsrelay.environment import Environment
from newsrelay.manager import CommsManager
from newsrelay.models import Content, Tag
from newsrelay.transport import Response


FULL_ENV = {
    "INPUT_API_KEY": "key1",
    "SENDGRID_API_KEY": "post office keys",
    "SENDGRID_API_EMAIL": "post office address",
    "REDDIT_API_CLIENT": "client",
    "REDDIT_API_SECRET": "secret",
}

CONTENT_DOC = {
    "response": {
        "status": "ok",
        "currentPage": 2,
        "pages": 5,
        "results": [
            {
                "id": "world/2024/jan/01/penguins",
                "sectionId": "world",
                "sectionName": "World news",
                "webPublicationDate": "2024-01-01T09:00:00Z",
                "webTitle": "Penguins march on",
                "webUrl": "https://www.theguardian.com/world/2024/jan/01/penguins",
                "apiUrl": "https://content.guardianapis.com/world/2024/jan/01/penguins",
            }
        ],
    }
}


@pytest.fixture
def env() -> Environment:
    return Environment(FULL_ENV, dotenv=False)


@pytest.fixture
def tag() -> Tag:
    return Tag("fishing_spots", "advice", "Cool Fishing Spots", "url", "url")


@pytest.fixture
def content_item() -> Content:
    return Content("beach", "place", "places", "2022", "The Beach", "url", "url", 1, 10)


@pytest.fixture
def online_driver() -> MagicMock:
    driver = MagicMock()
    driver.get_tags.return_value = Response('{"response": {"results": []}}', 200)
    driver.get_content.return_value = Response(json.dumps(CONTENT_DOC), 200)
    driver.send_email.return_value = Response("", 202)
    driver.get_reddit_token.return_value = Response('{"access_token": "tok", "expires_in": 60}', 200)
    driver.post_reddit.return_value = Response("", 200)
    return driver


@pytest.fixture
def offline_driver() -> MagicMock:
    driver = MagicMock()
    driver.get_tags.return_value = Response('{"response": {"results": []}}', 200)
    driver.get_content.return_value = Response(json.dumps(CONTENT_DOC), 200)
    driver.send_email.return_value = Response("", 200)
    driver.get_reddit_token.return_value = Response('{"access_token": "offline", "expires_in": 86400}', 200)
    driver.post_reddit.return_value = Response("", 200)
    return driver


@pytest.fixture
def manager(online_driver, offline_driver, env) -> CommsManager:
    return CommsManager(online=online_driver, offline=offline_driver, environment=env)


@pytest.fixture
def content_doc() -> dict:
    return json.loads(json.dumps(CONTENT_DOC))
