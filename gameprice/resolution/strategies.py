"""
Game Price Resolver — Listing Strategies

Two strategies, kept apart so the availability-over-accuracy policy is
visible and testable on its own:

1. Live: fetch from the storefront and build the listing from real data.
2. Fallback (PlayStation only): a deterministic placeholder built from
   the normalized URL alone, with no network access.

The resolver decides which one runs.
"""

from __future__ import annotations

import structlog

from gameprice.config import Settings, settings as default_settings
from gameprice.models.listing import (
    NormalizedUrl,
    Platform,
    ProductListing,
    ProductType,
)
from gameprice.pipeline.steam import SteamClient
from gameprice.scraper.playstation import PlayStationScraper
from gameprice.utils.identifiers import extract_steam_app_id
from gameprice.utils.urls import build_steam_app_url, product_id_from_url

logger = structlog.get_logger(__name__)

_UNKNOWN_GAME = "Unknown Game"


async def live_steam_listing(raw_input: str, client: SteamClient) -> ProductListing:
    """
    Resolve a Steam input against the app-details API.

    Raises:
        IdentifierNotFound: If the input has no app id.
        UpstreamUnavailable: If the API call fails.
    """
    app_id = extract_steam_app_id(raw_input)
    data = await client.fetch_app(app_id)
    return ProductListing.from_storefront(
        data,
        platform=Platform.STEAM,
        url=build_steam_app_url(app_id),
        original_url=raw_input,
    )


async def live_playstation_listing(
    normalized: NormalizedUrl,
    scraper: PlayStationScraper,
) -> ProductListing:
    """
    Resolve a normalized PlayStation URL by scraping the product page.

    Raises:
        ScrapeFailed: If the page request fails.
    """
    data = await scraper.fetch_product(normalized.normalized_url)
    return ProductListing.from_storefront(
        data,
        platform=Platform.PSN,
        url=normalized.normalized_url,
        original_url=normalized.original_url,
    )


def fallback_playstation_listing(
    normalized: NormalizedUrl,
    config: Settings | None = None,
) -> ProductListing:
    """
    Build the placeholder listing used when a PlayStation scrape fails.

    Title is derived from the product id in the normalized URL; price is
    the fixed example price (59.99 GBP, discounted 23.99).
    """
    cfg = config or default_settings
    product_id = product_id_from_url(normalized.normalized_url) or _UNKNOWN_GAME

    return ProductListing(
        title=f"PlayStation Game ({product_id})",
        platform=Platform.PSN,
        product_type=ProductType.GAME,
        image=cfg.FALLBACK_IMAGE_URL,
        price=cfg.FALLBACK_PRICE,
        currency="GBP",
        url=normalized.normalized_url,
        original_url=normalized.original_url,
    )
