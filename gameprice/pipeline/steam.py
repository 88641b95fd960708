"""
Game Price Resolver — Steam App-Details Client

Fetches product data from Steam's public app-details API. The country
code is forced to the UK so prices are quoted in GBP. Steam reports
prices in minor units (pence); they are converted to major units here.

Steam is expected to be reliably available, so failures are raised as
UpstreamUnavailable and surface to the caller. There is no fallback.
"""

from __future__ import annotations

import asyncio
from decimal import Decimal
from typing import Any

import httpx
import structlog

from gameprice.config import Settings, settings as default_settings
from gameprice.errors import UpstreamUnavailable
from gameprice.models.listing import ProductType, StorefrontData

logger = structlog.get_logger(__name__)

_RETRYABLE_STATUS = frozenset({429, 500, 502, 503, 504})


class SteamClient:
    """
    Async client for the Steam app-details API.

    Pass a shared httpx.AsyncClient to reuse one connection pool across
    adapters; otherwise the client opens and closes its own.

    Usage:
        async with SteamClient() as client:
            data = await client.fetch_app("1174180")
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient | None = None,
        config: Settings | None = None,
        max_retries: int | None = None,
        base_backoff: float | None = None,
    ) -> None:
        self._settings = config or default_settings
        self._client = http_client
        self._owns_client = http_client is None
        self._max_retries = (
            self._settings.STEAM_MAX_RETRIES if max_retries is None else max_retries
        )
        self._base_backoff = (
            self._settings.STEAM_BACKOFF_SECONDS if base_backoff is None else base_backoff
        )

    async def __aenter__(self) -> SteamClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._settings.HTTP_TIMEOUT_SECONDS,
                headers={"User-Agent": self._settings.USER_AGENT},
            )
        return self

    async def __aexit__(self, *args: Any) -> None:
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    async def _request(self, app_id: str) -> dict[str, Any]:
        """
        GET app details with retry logic and exponential backoff.

        Retries 429 / 5xx responses and transport errors (including
        timeouts); any other HTTP error fails immediately.
        """
        assert self._client is not None, "Client not initialized. Use 'async with'."

        params = {
            "appids": app_id,
            "cc": self._settings.STEAM_COUNTRY_CODE,
            "l": self._settings.STEAM_LANGUAGE,
        }
        last_error: Exception | None = None

        for attempt in range(self._max_retries + 1):
            try:
                response = await self._client.get(
                    self._settings.STEAM_APPDETAILS_URL, params=params
                )
                response.raise_for_status()
                return response.json()

            except httpx.HTTPStatusError as e:
                last_error = e
                logger.warning(
                    "steam_http_error",
                    app_id=app_id,
                    status_code=e.response.status_code,
                    attempt=attempt + 1,
                    source="steam",
                )
                if e.response.status_code not in _RETRYABLE_STATUS:
                    break

            except httpx.RequestError as e:
                last_error = e
                logger.warning(
                    "steam_request_error",
                    app_id=app_id,
                    error=str(e),
                    error_type=type(e).__name__,
                    attempt=attempt + 1,
                    source="steam",
                )

            except ValueError as e:
                # Body was not JSON; retrying will not help
                last_error = e
                logger.error(
                    "steam_invalid_json",
                    app_id=app_id,
                    error=str(e),
                    source="steam",
                )
                break

            if attempt < self._max_retries:
                await asyncio.sleep(self._base_backoff * (2 ** attempt))

        raise UpstreamUnavailable("Failed to fetch Steam game data") from last_error

    # -----------------------------------------------------------------------
    # Public API
    # -----------------------------------------------------------------------

    async def fetch_app(self, app_id: str) -> StorefrontData:
        """
        Fetch and parse one app's store data.

        Args:
            app_id: Numeric Steam app id.

        Returns:
            StorefrontData with the original (undiscounted) price.

        Raises:
            UpstreamUnavailable: On request failure or a non-success payload.
        """
        logger.info("steam_fetch_app", app_id=app_id, source="steam")

        payload = await self._request(app_id)
        data = parse_app_details(app_id, payload)

        logger.info(
            "steam_fetch_app_complete",
            app_id=app_id,
            title=data.title,
            price=str(data.price),
            currency=data.currency,
            product_type=data.product_type.value,
            source="steam",
        )
        return data


def parse_app_details(app_id: str, payload: Any) -> StorefrontData:
    """
    Parse an app-details payload into StorefrontData.

    Raises:
        UpstreamUnavailable: If the entry for app_id is missing or not successful.
    """
    entry = payload.get(app_id) if isinstance(payload, dict) else None
    if not isinstance(entry, dict) or not entry.get("success"):
        logger.warning("steam_response_unsuccessful", app_id=app_id, source="steam")
        raise UpstreamUnavailable("Failed to fetch game data from Steam")

    details: dict[str, Any] = entry.get("data") or {}

    price = Decimal("0")
    currency: str | None = None
    overview = details.get("price_overview")
    if isinstance(overview, dict) and not details.get("is_free"):
        price = Decimal(str(overview.get("initial", 0))) / Decimal("100")
        currency = overview.get("currency")

    product_type = ProductType.DLC if details.get("type") == "dlc" else ProductType.GAME

    return StorefrontData(
        title=details.get("name", ""),
        image=details.get("header_image", ""),
        price=price,
        currency=currency,
        product_type=product_type,
    )
