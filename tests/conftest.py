"""Pytest configuration, shared fixtures and lightweight asyncio support.

Coroutine test functions are run on a fresh event loop by the hook below,
so the suite does not need ``pytest-asyncio``.
"""

from __future__ import annotations

import asyncio
import inspect
from pathlib import Path
from typing import Any, Callable

import httpx
import pytest

from models.config import Settings


def pytest_pyfunc_call(pyfuncitem: pytest.Function) -> bool | None:
    """Execute coroutine test functions on an event loop.

    When a collected test function is a coroutine, run it to completion on a
    dedicated event loop. Returning ``True`` tells pytest the call was handled,
    preventing the default (which would error on an un-awaited coroutine).
    """

    test_obj = pyfuncitem.obj
    if not inspect.iscoroutinefunction(test_obj):
        return None

    bound_args = {
        name: value
        for name, value in pyfuncitem.funcargs.items()
        if name in inspect.signature(test_obj).parameters
    }

    loop = asyncio.new_event_loop()
    try:
        asyncio.set_event_loop(loop)
        loop.run_until_complete(test_obj(**bound_args))
    finally:
        loop.close()
        asyncio.set_event_loop(None)

    return True


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Settings with every source configured and MDN under ``tmp_path``."""
    return Settings(
        google_search_engine_id="engine-id",
        google_search_api_key="google-key",
        mdn_content_dir=tmp_path / "files",
        reddit_client_id="client-id",
        reddit_client_secret="client-secret",
        reddit_refresh_token="refresh-token",
    )


@pytest.fixture
def bare_settings() -> Settings:
    """Settings with nothing configured."""
    return Settings()


@pytest.fixture
def mock_client() -> Callable[[Callable[[httpx.Request], httpx.Response]], httpx.AsyncClient]:
    """Factory for an ``httpx.AsyncClient`` answering through ``handler``."""

    def make(handler: Callable[[httpx.Request], Any]) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return make
