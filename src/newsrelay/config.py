"""Runtime settings for newsrelay."""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv


GUARDIAN_URL = "https://content.guardianapis.com"
SENDGRID_URL = "https://api.sendgrid.com"
REDDIT_URL = "https://www.reddit.com"
REDDIT_OAUTH_URL = "https://oauth.reddit.com"
USER_AGENT = "GEClient/0.1"


@dataclass
class Settings:
    guardian_url: str = GUARDIAN_URL
    sendgrid_url: str = SENDGRID_URL
    reddit_url: str = REDDIT_URL
    reddit_oauth_url: str = REDDIT_OAUTH_URL
    user_agent: str = USER_AGENT
    timeout: float = 15.0
    page_size: int = 10
    cache_path: str = "gedata.db"
    offline_delay: float = 0.0
    content_online: bool = False
    message_online: bool = False
    social_online: bool = False


def load_settings(
    content_online: bool = False,
    message_online: bool = False,
    social_online: bool = False,
) -> Settings:
    """Build settings from defaults plus ``NEWSRELAY_*`` environment overrides.

    Args:
        content_online: Use the live Guardian API.
        message_online: Use the live SendGrid API.
        social_online: Use the live Reddit API.

    Returns:
        Loaded Settings object
    """
    load_dotenv()

    return Settings(
        timeout=float(os.environ.get("NEWSRELAY_TIMEOUT", 15.0)),
        page_size=int(os.environ.get("NEWSRELAY_PAGE_SIZE", 10)),
        cache_path=os.environ.get("NEWSRELAY_CACHE_PATH", "gedata.db"),
        offline_delay=float(os.environ.get("NEWSRELAY_OFFLINE_DELAY", 0.0)),
        content_online=content_online,
        message_online=message_online,
        social_online=social_online,
    )
