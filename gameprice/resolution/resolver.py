"""
Game Price Resolver — Resolution Façade

Turns one raw caller input into one ProductListing:

1. Dispatch on input shape (Steam / PlayStation / neither).
2. Steam: extract app id → API fetch → listing. Failures are rejected;
   there is no fallback.
3. PlayStation: normalize to the en-gb URL → live scrape. If the scrape
   fails for any reason the fallback strategy answers instead, and the
   outcome is tagged so it never passes for a genuine success.

Resolutions share nothing but the HTTP client, so any number can run
concurrently.
"""

from __future__ import annotations

from typing import Any

import httpx
import structlog

from gameprice.config import Settings, settings as default_settings
from gameprice.errors import IdentifierNotFound, ResolutionFailed, UnsupportedStore
from gameprice.models.listing import Platform, ProductListing
from gameprice.pipeline.steam import SteamClient
from gameprice.resolution.outcome import (
    Rejected,
    ResolutionOutcome,
    ResolutionStrategy,
    Resolved,
)
from gameprice.resolution.strategies import (
    fallback_playstation_listing,
    live_playstation_listing,
    live_steam_listing,
)
from gameprice.scraper.playstation import PlayStationScraper
from gameprice.utils.identifiers import detect_platform
from gameprice.utils.urls import normalize_playstation_url

logger = structlog.get_logger(__name__)


class GamePriceResolver:
    """
    Resolves storefront URLs and product codes into ProductListings.

    Usage:
        async with GamePriceResolver() as resolver:
            listing = await resolver.resolve(
                "https://store.steampowered.com/app/1174180/Red_Dead_Redemption_2/"
            )
    """

    def __init__(
        self,
        config: Settings | None = None,
        http_client: httpx.AsyncClient | None = None,
        steam_client: SteamClient | None = None,
        playstation_scraper: PlayStationScraper | None = None,
    ) -> None:
        self._settings = config or default_settings
        self._client = http_client
        self._owns_client = http_client is None
        self._steam = steam_client
        self._playstation = playstation_scraper

    async def __aenter__(self) -> GamePriceResolver:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._settings.HTTP_TIMEOUT_SECONDS,
                headers={"User-Agent": self._settings.USER_AGENT},
            )
        if self._steam is None:
            self._steam = SteamClient(http_client=self._client, config=self._settings)
        if self._playstation is None:
            self._playstation = PlayStationScraper(http_client=self._client, config=self._settings)
        return self

    async def __aexit__(self, *args: Any) -> None:
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    # -----------------------------------------------------------------------
    # Public API
    # -----------------------------------------------------------------------

    async def resolve(self, raw_input: str) -> ProductListing:
        """
        Resolve an input to a listing.

        Raises:
            ResolutionFailed: For unsupported or malformed input, or a
                Steam-path failure.
        """
        outcome = await self.resolve_outcome(raw_input)
        if isinstance(outcome, Rejected):
            raise outcome.error
        return outcome.listing

    async def resolve_outcome(self, raw_input: str) -> ResolutionOutcome:
        """Resolve an input to a Resolved or Rejected outcome; never raises ResolutionFailed."""
        platform = detect_platform(raw_input)
        logger.info(
            "resolution_started",
            raw_input=raw_input,
            platform=platform.value if platform else None,
            source="resolver",
        )

        if platform is None:
            return self._reject(raw_input, UnsupportedStore(raw_input))
        if platform == Platform.STEAM:
            return await self._resolve_steam(raw_input)
        return await self._resolve_playstation(raw_input)

    def preview_playstation(self, product_id: str) -> ProductListing:
        """
        Build the placeholder listing for a bare PlayStation product id
        without touching the network.

        Raises:
            IdentifierNotFound: If the id is blank.
        """
        if not product_id.strip():
            raise IdentifierNotFound(Platform.PSN, product_id)
        normalized = normalize_playstation_url(product_id)
        return fallback_playstation_listing(normalized, self._settings)

    # -----------------------------------------------------------------------
    # Platform paths
    # -----------------------------------------------------------------------

    async def _resolve_steam(self, raw_input: str) -> ResolutionOutcome:
        assert self._steam is not None, "Resolver not initialized. Use 'async with'."
        try:
            listing = await live_steam_listing(raw_input, self._steam)
        except ResolutionFailed as e:
            return self._reject(raw_input, e)
        except Exception as e:
            logger.error(
                "steam_resolution_unexpected_error",
                raw_input=raw_input,
                error=str(e),
                error_type=type(e).__name__,
                source="resolver",
            )
            error = ResolutionFailed("Failed to fetch Steam game data")
            error.__cause__ = e
            return self._reject(raw_input, error)

        return self._resolve(raw_input, listing, ResolutionStrategy.LIVE)

    async def _resolve_playstation(self, raw_input: str) -> ResolutionOutcome:
        assert self._playstation is not None, "Resolver not initialized. Use 'async with'."
        try:
            normalized = normalize_playstation_url(raw_input)
        except ResolutionFailed as e:
            return self._reject(raw_input, e)

        try:
            listing = await live_playstation_listing(normalized, self._playstation)
        except Exception as e:
            # CancelledError is a BaseException and is not absorbed here
            logger.warning(
                "playstation_fallback_used",
                raw_input=raw_input,
                normalized_url=normalized.normalized_url,
                error=str(e),
                error_type=type(e).__name__,
                source="resolver",
            )
            listing = fallback_playstation_listing(normalized, self._settings)
            return self._resolve(raw_input, listing, ResolutionStrategy.FALLBACK)

        return self._resolve(raw_input, listing, ResolutionStrategy.LIVE)

    # -----------------------------------------------------------------------
    # Terminal states
    # -----------------------------------------------------------------------

    @staticmethod
    def _resolve(
        raw_input: str,
        listing: ProductListing,
        strategy: ResolutionStrategy,
    ) -> Resolved:
        logger.info(
            "resolution_succeeded",
            raw_input=raw_input,
            platform=listing.platform.value,
            strategy=strategy.value,
            url=listing.url,
            price=str(listing.price),
            discounted=str(listing.discounted),
            currency=listing.currency,
            source="resolver",
        )
        return Resolved(listing=listing, strategy=strategy)

    @staticmethod
    def _reject(raw_input: str, error: ResolutionFailed) -> Rejected:
        logger.warning(
            "resolution_rejected",
            raw_input=raw_input,
            error=str(error),
            error_type=type(error).__name__,
            source="resolver",
        )
        return Rejected(error=error)


async def resolve(raw_input: str, config: Settings | None = None) -> ProductListing:
    """One-shot convenience wrapper that opens and closes its own resolver."""
    async with GamePriceResolver(config=config) as resolver:
        return await resolver.resolve(raw_input)
