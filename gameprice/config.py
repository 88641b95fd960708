"""
Game Price Resolver — Configuration & Constants

Every storefront endpoint, region code, timeout and pricing constant lives
here. No hardcoded values in business logic, and no credentials: nothing
in this service needs a secret, and anything that ever does must come
from the environment.

Usage:
    from gameprice.config import settings
"""

from __future__ import annotations

from decimal import Decimal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Central configuration for the resolver.

    Loads from environment variables (or a local .env file) with
    fallback defaults.
    """

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    # -----------------------------------------------------------------------
    # Runtime
    # -----------------------------------------------------------------------
    LOG_LEVEL: str = "INFO"
    HTTP_TIMEOUT_SECONDS: float = 10.0      # Applies to both outbound calls
    USER_AGENT: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/126.0.0.0 Safari/537.36"
    )

    # -----------------------------------------------------------------------
    # Steam: public app-details API
    # -----------------------------------------------------------------------
    STEAM_STORE_BASE_URL: str = "https://store.steampowered.com"
    STEAM_APPDETAILS_URL: str = "https://store.steampowered.com/api/appdetails"
    STEAM_COUNTRY_CODE: str = "uk"          # Forces GBP price quotes
    STEAM_LANGUAGE: str = "english"
    STEAM_MAX_RETRIES: int = 2              # Retries on 429 / 5xx / transport errors
    STEAM_BACKOFF_SECONDS: float = 0.5

    # -----------------------------------------------------------------------
    # PlayStation Store: product page scrape
    # -----------------------------------------------------------------------
    PLAYSTATION_STORE_BASE_URL: str = "https://store.playstation.com"
    PLAYSTATION_REGION: str = "en-gb"       # Canonical region for every product URL
    PLAYSTATION_ACCEPT_LANGUAGE: str = "en-GB,en;q=0.9"

    # -----------------------------------------------------------------------
    # Pricing: markdown policy
    # The shop charges 40% of the original listed price on every platform.
    # -----------------------------------------------------------------------
    MARKDOWN_RATE: Decimal = Decimal("0.4")
    DEFAULT_CURRENCY: str = "GBP"

    # -----------------------------------------------------------------------
    # PlayStation fallback listing (returned when the page scrape fails)
    # -----------------------------------------------------------------------
    FALLBACK_PRICE: Decimal = Decimal("59.99")
    FALLBACK_IMAGE_URL: str = (
        "https://upload.wikimedia.org/wikipedia/commons/thumb/0/00/"
        "PlayStation_logo.svg/2560px-PlayStation_logo.svg.png"
    )


# Singleton instance
settings = Settings()
