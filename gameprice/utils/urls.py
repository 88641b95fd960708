"""
Game Price Resolver — URL Normalizer

Builds the one canonical fetch URL per platform. PlayStation URLs are
always rewritten to the en-gb region so that every product is priced in
the same currency and served with the same markup, whatever region the
caller pasted.
"""

from __future__ import annotations

import re

import structlog

from gameprice.config import settings
from gameprice.errors import IdentifierNotFound
from gameprice.models.listing import NormalizedUrl, Platform, PlatformIdentifier
from gameprice.utils.identifiers import extract_playstation_product_id, extract_steam_app_id

logger = structlog.get_logger(__name__)

_PS_DOMAIN = "store.playstation.com"
_PRODUCT_SEGMENT_RE = re.compile(r"/product/([^/?#]+)")


def build_playstation_product_url(product_id: str) -> str:
    """https://store.playstation.com/en-gb/product/<product_id>"""
    base = settings.PLAYSTATION_STORE_BASE_URL.rstrip("/")
    return f"{base}/{settings.PLAYSTATION_REGION}/product/{product_id}"


def build_steam_app_url(app_id: str) -> str:
    """https://store.steampowered.com/app/<app_id>"""
    base = settings.STEAM_STORE_BASE_URL.rstrip("/")
    return f"{base}/app/{app_id}"


def normalize_identifier(identifier: PlatformIdentifier) -> str:
    """Canonical fetch URL for an already-extracted identifier."""
    if identifier.platform == Platform.STEAM:
        return build_steam_app_url(identifier.value)
    return build_playstation_product_url(identifier.value)


def normalize_playstation_url(raw: str) -> NormalizedUrl:
    """
    Normalize a PlayStation URL or bare product id to the en-gb product URL.

    Without the store domain the trimmed input is taken as the product id
    verbatim; no extraction is attempted, so suffixed codes such as
    "EP9000-PPSA01284_00-0000000000000000" are kept whole.

    Raises:
        IdentifierNotFound: If the input is empty, or is a store URL
            with no recognisable product id.
    """
    if _PS_DOMAIN not in raw.lower():
        product_id = raw.strip()
        if not product_id:
            raise IdentifierNotFound(Platform.PSN, raw)
    else:
        product_id = extract_playstation_product_id(raw)

    normalized = build_playstation_product_url(product_id)
    logger.debug(
        "playstation_url_normalized",
        original_url=raw,
        normalized_url=normalized,
        source="urls",
    )
    return NormalizedUrl(normalized_url=normalized, original_url=raw)


def normalize_steam_url(raw: str) -> NormalizedUrl:
    """
    Rebuild the canonical Steam store URL from the app id in the input.

    Raises:
        IdentifierNotFound: If the input has no app id.
    """
    app_id = extract_steam_app_id(raw)
    return NormalizedUrl(normalized_url=build_steam_app_url(app_id), original_url=raw)


def product_id_from_url(url: str) -> str | None:
    """Return the path segment after /product/ in a PlayStation URL."""
    match = _PRODUCT_SEGMENT_RE.search(url)
    return match.group(1) if match else None
