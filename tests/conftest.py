"""
Game Price Resolver — Shared pytest Fixtures & Configuration

Provides common fixtures for all test modules:
- Mock async HTTP client (respx)
- Storefront fixtures (Steam JSON, PlayStation HTML)
- Test settings with retries and backoff disabled
- Captured structlog events (keeps stdout clean for CLI assertions)
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, AsyncGenerator, Generator

import httpx
import pytest
import respx
from structlog.testing import capture_logs

from gameprice.config import Settings

FIXTURES_DIR = Path(__file__).parent / "fixtures"


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


@pytest.fixture
def test_settings() -> Settings:
    """Settings with no retry delay so failure paths stay fast."""
    return Settings(
        STEAM_MAX_RETRIES=1,
        STEAM_BACKOFF_SECONDS=0.0,
        HTTP_TIMEOUT_SECONDS=2.0,
    )


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def captured_logs() -> Generator[list[dict[str, Any]], None, None]:
    """Route every structlog event into a list instead of stdout."""
    with capture_logs() as logs:
        yield logs


# ---------------------------------------------------------------------------
# Mock Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_router() -> respx.MockRouter:
    """
    respx router intercepting every httpx request.

    Unmocked requests fail the test, so nothing reaches a live storefront.
    """
    with respx.mock(assert_all_called=False) as router:
        yield router


@pytest.fixture
async def mock_async_http_client(
    mock_router: respx.MockRouter,
) -> AsyncGenerator[httpx.AsyncClient, None]:
    """Shared async HTTP client routed through the respx mock."""
    async with httpx.AsyncClient(timeout=2.0) as client:
        yield client


# ---------------------------------------------------------------------------
# Fixture Loaders
# ---------------------------------------------------------------------------


@pytest.fixture(scope="session")
def steam_rdr2_payload() -> dict[str, Any]:
    """App-details payload for Red Dead Redemption 2 (app 1174180)."""
    with open(FIXTURES_DIR / "steam_rdr2.json", encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture(scope="session")
def playstation_product_html() -> str:
    """Product page for a full game priced in GBP."""
    return (FIXTURES_DIR / "playstation_product.html").read_text(encoding="utf-8")


@pytest.fixture(scope="session")
def playstation_addon_html() -> str:
    """Add-on page priced in EUR with no thumbnail or primary price element."""
    return (FIXTURES_DIR / "playstation_addon.html").read_text(encoding="utf-8")
