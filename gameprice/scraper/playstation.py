"""
Game Price Resolver — PlayStation Store Page Scraper

Fetches a PlayStation Store product page and extracts title, image and
price with CSS selectors. The store's markup is unstable, so every field
is best-effort: a missing element yields an empty or zero value. Only a
failed page request is fatal (ScrapeFailed), which the resolver turns
into its fallback listing.
"""

from __future__ import annotations

import re
from decimal import Decimal
from typing import Any

import httpx
import structlog
from bs4 import BeautifulSoup

from gameprice.config import Settings, settings as default_settings
from gameprice.errors import ScrapeFailed
from gameprice.models.listing import ProductType, StorefrontData

logger = structlog.get_logger(__name__)

# Selectors ordered by priority
TITLE_SELECTORS = ['h1[data-qa="mfe-game-title#name"]']
IMAGE_SELECTORS = [
    ('img[data-qa="mfe-game-title#thumbnail"]', "src"),
    ('meta[property="og:image"]', "content"),
]
PRICE_SELECTORS = [
    ".psw-t-title-m",
    '[data-qa="mfe-game-title#price"] span',
]
BREADCRUMB_SELECTOR = ".psw-breadcrumb"

_PRICE_RE = re.compile(r"([£€$])\s*(\d[\d,]*(?:\.\d+)?)")
_DECIMAL_COMMA_RE = re.compile(r"^\d+,\d{2}$")
_CURRENCY_BY_SYMBOL = {"£": "GBP", "€": "EUR", "$": "USD"}
_DLC_MARKERS = ("dlc", "add-on")


class PlayStationScraper:
    """
    Page scraper for PlayStation Store product pages.

    Usage:
        async with PlayStationScraper() as scraper:
            data = await scraper.fetch_product(
                "https://store.playstation.com/en-gb/product/EP9000-PPSA01284_00"
            )
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient | None = None,
        config: Settings | None = None,
    ) -> None:
        self._settings = config or default_settings
        self._client = http_client
        self._owns_client = http_client is None

    async def __aenter__(self) -> PlayStationScraper:
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

    def _headers(self) -> dict[str, str]:
        return {
            "User-Agent": self._settings.USER_AGENT,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
            "Accept-Language": self._settings.PLAYSTATION_ACCEPT_LANGUAGE,
        }

    async def fetch_product(self, url: str) -> StorefrontData:
        """
        Fetch a product page and extract its store data.

        Args:
            url: Normalized en-gb product URL.

        Returns:
            StorefrontData; missing fields are empty or zero.

        Raises:
            ScrapeFailed: If the page request fails or returns a non-2xx status.
        """
        assert self._client is not None, "Scraper not initialized. Use 'async with'."

        logger.info("playstation_fetch_page", url=url, source="playstation")
        try:
            response = await self._client.get(
                url, headers=self._headers(), follow_redirects=True
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.warning(
                "playstation_http_error",
                url=url,
                status_code=e.response.status_code,
                source="playstation",
            )
            raise ScrapeFailed("Failed to scrape PlayStation game data") from e
        except httpx.RequestError as e:
            logger.warning(
                "playstation_request_error",
                url=url,
                error=str(e),
                error_type=type(e).__name__,
                source="playstation",
            )
            raise ScrapeFailed("Failed to scrape PlayStation game data") from e

        data = parse_product_page(response.text)
        logger.info(
            "playstation_fetch_page_complete",
            url=url,
            title=data.title,
            price=str(data.price),
            currency=data.currency,
            product_type=data.product_type.value,
            source="playstation",
        )
        return data


def parse_product_page(html: str) -> StorefrontData:
    """Extract StorefrontData from product page markup."""
    soup = BeautifulSoup(html, "html.parser")

    title = _first_text(soup, TITLE_SELECTORS)
    image = _first_attr(soup, IMAGE_SELECTORS)
    price_text = _first_text(soup, PRICE_SELECTORS)
    price, currency = parse_price_text(price_text)

    breadcrumbs = " ".join(el.get_text(" ", strip=True) for el in soup.select(BREADCRUMB_SELECTOR))
    product_type = classify_product_type(title, breadcrumbs)

    if not title:
        logger.debug("playstation_title_missing", source="playstation")
    if not price_text:
        logger.debug("playstation_price_missing", source="playstation")

    return StorefrontData(
        title=title,
        image=image,
        price=price,
        currency=currency,
        product_type=product_type,
    )


def parse_price_text(text: str | None) -> tuple[Decimal, str]:
    """
    Parse a price string like '£59.99' into (amount, currency).

    The leading symbol sets the currency: £ → GBP, € → EUR, $ → USD.
    Text without a symbol-prefixed number gives (0, default currency).
    """
    if text:
        match = _PRICE_RE.search(text)
        if match:
            return _parse_amount(match.group(2)), _CURRENCY_BY_SYMBOL[match.group(1)]
    return Decimal("0"), default_settings.DEFAULT_CURRENCY


def _parse_amount(raw: str) -> Decimal:
    """'1,299.99' → 1299.99, '19,99' → 19.99, '1,299' → 1299."""
    if "," in raw and "." not in raw and _DECIMAL_COMMA_RE.search(raw):
        return Decimal(raw.replace(",", "."))
    return Decimal(raw.replace(",", ""))


def classify_product_type(title: str, breadcrumbs: str) -> ProductType:
    """DLC when the breadcrumb trail or title mentions DLC or add-on."""
    haystack = f"{breadcrumbs} {title}".lower()
    if any(marker in haystack for marker in _DLC_MARKERS):
        return ProductType.DLC
    return ProductType.GAME


def _first_text(soup: BeautifulSoup, selectors: list[str]) -> str:
    """Concatenated text of the first selector that yields any."""
    for selector in selectors:
        text = " ".join(el.get_text(" ", strip=True) for el in soup.select(selector)).strip()
        if text:
            return text
    return ""


def _first_attr(soup: BeautifulSoup, selectors: list[tuple[str, str]]) -> str:
    """First non-empty attribute value across (selector, attribute) pairs."""
    for selector, attr in selectors:
        element = soup.select_one(selector)
        if element is not None:
            value = element.get(attr)
            if isinstance(value, str) and value.strip():
                return value.strip()
    return ""
