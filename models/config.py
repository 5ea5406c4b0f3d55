"""Configuration for the Dev Content MCP.

``Settings`` is built once at startup from the environment (and an optional
``.env`` file) and handed to every adapter. It is frozen: nothing mutates
configuration after the server starts.
"""

import os
from enum import Enum
from pathlib import Path
from typing import Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field


class ResponseFormat(str, Enum):
    """Output format for search results."""

    MARKDOWN = "markdown"
    JSON = "json"


def _env(environ: Mapping[str, str], name: str) -> Optional[str]:
    value = environ.get(name, "").strip()
    return value or None


class Settings(BaseModel):
    """Immutable runtime configuration."""

    model_config = ConfigDict(frozen=True)

    # Google Programmable Search
    google_search_engine_id: Optional[str] = None
    google_search_api_key: Optional[str] = None

    # Stack Exchange (key is optional, raises the daily quota)
    stackexchange_api_key: Optional[str] = None
    stackexchange_site: str = "stackoverflow"

    # Local checkout of mdn/content, pointing at its ``files`` directory
    mdn_content_dir: Optional[Path] = None

    # Reddit (script or installed app with a refresh token)
    reddit_client_id: Optional[str] = None
    reddit_client_secret: Optional[str] = None
    reddit_refresh_token: Optional[str] = None
    reddit_comment_depth: int = Field(default=4, ge=1, le=10)
    reddit_comment_limit: int = Field(default=20, ge=1, le=500)

    # Firecrawl-compatible scrape endpoint, e.g. https://api.firecrawl.dev/v1/scrape
    scrape_endpoint: Optional[str] = None
    scrape_api_key: Optional[str] = None

    http_timeout: float = Field(default=30.0, gt=0)
    scrape_timeout: float = Field(default=60.0, gt=0)
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from environment variables.

        Call ``load_dotenv()`` first if a ``.env`` file should be honoured.
        """
        env = os.environ if environ is None else environ
        values = {
            "google_search_engine_id": _env(env, "GOOGLE_SEARCH_ENGINE_ID"),
            "google_search_api_key": _env(env, "GOOGLE_SEARCH_API_KEY"),
            "stackexchange_api_key": _env(env, "STACKEXCHANGE_API_KEY"),
            "mdn_content_dir": _env(env, "MDN_CONTENT_DIR"),
            "reddit_client_id": _env(env, "REDDIT_CLIENT_ID"),
            "reddit_client_secret": _env(env, "REDDIT_CLIENT_SECRET"),
            "reddit_refresh_token": _env(env, "REDDIT_REFRESH_TOKEN"),
            "reddit_comment_depth": _env(env, "REDDIT_COMMENT_DEPTH"),
            "reddit_comment_limit": _env(env, "REDDIT_COMMENT_LIMIT"),
            "scrape_endpoint": _env(env, "SCRAPE_ENDPOINT"),
            "scrape_api_key": _env(env, "FIRECRAWL_API_KEY"),
            "http_timeout": _env(env, "HTTP_TIMEOUT"),
            "scrape_timeout": _env(env, "SCRAPE_TIMEOUT"),
            "log_level": _env(env, "LOG_LEVEL"),
        }
        # Unset variables fall back to field defaults
        return cls(**{k: v for k, v in values.items() if v is not None})

    @property
    def google_configured(self) -> bool:
        return bool(self.google_search_engine_id and self.google_search_api_key)

    @property
    def reddit_configured(self) -> bool:
        return all(
            [self.reddit_client_id, self.reddit_client_secret, self.reddit_refresh_token]
        )

    def capabilities(self) -> Dict[str, bool]:
        """Which sources can be used with this configuration."""
        return {
            "google_search": self.google_configured,
            "stackoverflow": True,
            "mdn": self.mdn_content_dir is not None,
            "reddit": self.reddit_configured,
            "fallback_scrape": self.scrape_endpoint is not None,
        }
