"""
Game Price Resolver — Identifier Extractor

Recognizes which storefront a raw input belongs to and pulls out its
canonical identifier:

- Steam: the numeric app id from a store URL or a steam://rungame link.
- PlayStation: the product code (<BASE>-<SKU>_<NN>) from a store URL,
  a legacy tid= hash route, or a bare code with or without the dash.

PlayStation matching is an ordered chain of matchers; the first one that
returns an id wins. All PlayStation matching is case-insensitive and the
id is returned exactly as written in the input.
"""

from __future__ import annotations

import re
from typing import Callable

import structlog

from gameprice.errors import IdentifierNotFound
from gameprice.models.listing import Platform, PlatformIdentifier

logger = structlog.get_logger(__name__)

# ---------------------------------------------------------------------------
# Grammars
# ---------------------------------------------------------------------------

_STEAM_APP_RE = re.compile(r"(?:store\.steampowered\.com/app/|steam://rungame/)(\d+)", re.IGNORECASE)

_PS_PRODUCT_PATH_RE = re.compile(r"/product/([A-Z0-9]+-[A-Z0-9]+_[0-9]+)", re.IGNORECASE)
_PS_TID_RE = re.compile(r"tid=([A-Z0-9]+_[0-9]+)", re.IGNORECASE)
_PS_DASHED_RE = re.compile(
    r"^([A-Z0-9]{2,6}-[A-Z0-9]{4,9}_[0-9]{2})(?:-[A-Z0-9]+)?$", re.IGNORECASE
)
_PS_UNDASHED_RE = re.compile(
    r"^([A-Z0-9]{2,6})([A-Z0-9]{4,9}_[0-9]{2})(?:-[A-Z0-9]+)?$", re.IGNORECASE
)

# Input-shape markers used by the dispatcher
_STEAM_MARKERS = ("store.steampowered.com", "steam://")
_PS_DOMAIN = "store.playstation.com"
_PS_BARE_DASHED_PREFIX_RE = re.compile(r"^[A-Z0-9]+-[A-Z0-9]+_[0-9]+", re.IGNORECASE)
# Over-matches: any string starting with two alphanumerics and "_<digits>"
_PS_BARE_UNDASHED_PREFIX_RE = re.compile(r"^[A-Z0-9]+[A-Z0-9]+_[0-9]+", re.IGNORECASE)


# ---------------------------------------------------------------------------
# PlayStation matcher chain
# ---------------------------------------------------------------------------

def _match_product_path(raw: str) -> str | None:
    """https://store.playstation.com/<region>/product/EP9000-CUSA07410_00..."""
    match = _PS_PRODUCT_PATH_RE.search(raw)
    return match.group(1) if match else None


def _match_tid_route(raw: str) -> str | None:
    """https://store.playstation.com/#!/en-gb/tid=CUSA07410_00"""
    match = _PS_TID_RE.search(raw)
    return match.group(1) if match else None


def _match_dashed_code(raw: str) -> str | None:
    """EP9000-PPSA01284_00 or EP9000-PPSA01284_00-0000000000000000"""
    match = _PS_DASHED_RE.match(raw.strip())
    return match.group(1) if match else None


def _match_undashed_code(raw: str) -> str | None:
    """EP9000PPSA01284_00[-SUFFIX], rebuilt as EP9000-PPSA01284_00."""
    match = _PS_UNDASHED_RE.match(raw.strip())
    if not match:
        return None
    return f"{match.group(1)}-{match.group(2)}"


PLAYSTATION_MATCHERS: tuple[Callable[[str], str | None], ...] = (
    _match_product_path,
    _match_tid_route,
    _match_dashed_code,
    _match_undashed_code,
)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def extract_steam_app_id(raw: str) -> str:
    """
    Extract the Steam app id from a store URL or steam:// link.

    Trailing path segments (slug, query, fragment) are ignored.

    Raises:
        IdentifierNotFound: If no app id is present.

    Examples:
        >>> extract_steam_app_id("https://store.steampowered.com/app/1174180/Red_Dead_Redemption_2/")
        '1174180'
    """
    match = _STEAM_APP_RE.search(raw)
    if not match:
        logger.debug("steam_app_id_not_found", raw_input=raw, source="identifiers")
        raise IdentifierNotFound(Platform.STEAM, raw)
    return match.group(1)


def extract_playstation_product_id(raw: str) -> str:
    """
    Extract a PlayStation product id by running the matcher chain in order.

    Raises:
        IdentifierNotFound: If no matcher recognises the input.
    """
    for matcher in PLAYSTATION_MATCHERS:
        product_id = matcher(raw)
        if product_id:
            logger.debug(
                "playstation_product_id_matched",
                matcher=matcher.__name__,
                product_id=product_id,
                source="identifiers",
            )
            return product_id

    logger.debug("playstation_product_id_not_found", raw_input=raw, source="identifiers")
    raise IdentifierNotFound(Platform.PSN, raw)


def extract_identifier(raw: str) -> PlatformIdentifier:
    """
    Extract a platform-tagged identifier, trying Steam first.

    Raises:
        IdentifierNotFound: Naming PlayStation, the last grammar attempted.
    """
    try:
        return PlatformIdentifier(Platform.STEAM, extract_steam_app_id(raw))
    except IdentifierNotFound:
        pass
    return PlatformIdentifier(Platform.PSN, extract_playstation_product_id(raw))


def detect_platform(raw: str) -> Platform | None:
    """
    Classify an input's shape for dispatch.

    PlayStation-shaped inputs carry the store domain or start like a
    product code. The undashed rule also accepts unrelated strings such
    as "save_2"; that permissiveness is intentional so a best-effort
    fetch is attempted rather than rejecting the input.

    Returns:
        The platform, or None when the input matches neither.
    """
    text = raw.strip()
    if not text:
        return None

    lowered = text.lower()
    if (
        _PS_DOMAIN in lowered
        or _PS_BARE_DASHED_PREFIX_RE.match(text)
        or _PS_BARE_UNDASHED_PREFIX_RE.match(text)
    ):
        return Platform.PSN
    if any(marker in lowered for marker in _STEAM_MARKERS):
        return Platform.STEAM
    return None
