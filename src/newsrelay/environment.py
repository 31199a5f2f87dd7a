"""
Key lookup over the process environment.
"""

from __future__ import annotations

import os
from typing import Mapping, Optional

from dotenv import load_dotenv


INPUT_API_KEY = "INPUT_API_KEY"
SENDGRID_API_KEY = "SENDGRID_API_KEY"
SENDGRID_API_EMAIL = "SENDGRID_API_EMAIL"
REDDIT_API_CLIENT = "REDDIT_API_CLIENT"
REDDIT_API_SECRET = "REDDIT_API_SECRET"


class Environment:
    """
    Resolve configuration keys, preferring explicit overrides over ``os.environ``.

    A ``.env`` file in the working directory is loaded once on construction,
    without replacing variables that are already set.
    """

    def __init__(self, overrides: Optional[Mapping[str, Optional[str]]] = None, *, dotenv: bool = True) -> None:
        if dotenv:
            load_dotenv()
        self._overrides = dict(overrides or {})

    def getenv(self, key: str) -> Optional[str]:
        if key in self._overrides:
            return self._overrides[key]
        return os.environ.get(key)
