"""
Dev Content API Integrations.

This package wraps the external sources the gateway reads from. Every
function takes the shared ``httpx.AsyncClient`` (where it talks HTTP) and the
frozen ``Settings``, and raises ``core.errors`` exceptions instead of
returning empty results on failure.

Available Sources:
─────────────────────────────────────────────────────────────────────────────
    google           Google Programmable Search (web search)
    stackexchange    Stack Overflow questions and answers
    mdn              MDN documentation from a local mdn/content checkout
    reddit           Reddit submissions and comment trees (redditwarp)
    firecrawl        Fallback page scraping (Firecrawl-compatible endpoint)

Configuration:
─────────────────────────────────────────────────────────────────────────────
Set keys in environment variables or a .env file:

    GOOGLE_SEARCH_ENGINE_ID   https://programmablesearchengine.google.com
    GOOGLE_SEARCH_API_KEY     https://developers.google.com/custom-search
    STACKEXCHANGE_API_KEY     https://stackapps.com (optional, higher limits)
    MDN_CONTENT_DIR           path to mdn/content/files
    REDDIT_CLIENT_ID          https://www.reddit.com/prefs/apps
    REDDIT_CLIENT_SECRET
    REDDIT_REFRESH_TOKEN
    SCRAPE_ENDPOINT           e.g. https://api.firecrawl.dev/v1/scrape (optional)
    FIRECRAWL_API_KEY         https://firecrawl.dev (optional)
"""

from api.firecrawl import scrape as scrape_page
from api.google import search as search_web
from api.mdn import load as load_mdn_page
from api.reddit import fetch_thread as fetch_reddit_thread
from api.stackexchange import fetch_answers, fetch_questions

__all__ = [
    "search_web",
    "fetch_questions",
    "fetch_answers",
    "load_mdn_page",
    "fetch_reddit_thread",
    "scrape_page",
]
