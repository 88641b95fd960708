"""
Game Price Resolver — Listing Models

ProductListing is the only entity that leaves the resolver. The smaller
value types (PlatformIdentifier, NormalizedUrl, StorefrontData) only
live for the duration of one resolution call.
"""

from __future__ import annotations

import re
from decimal import Decimal
from enum import Enum
from typing import Any, NamedTuple

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

from gameprice.config import settings
from gameprice.engine.pricing import calculate_discounted_price, to_decimal_price

_CURRENCY_RE = re.compile(r"^[A-Z]{3}$")


class Platform(str, Enum):
    """Source storefront."""
    STEAM = "Steam"
    PSN = "PSN"


class ProductType(str, Enum):
    GAME = "Game"
    DLC = "DLC"


class PlatformIdentifier(NamedTuple):
    """Tagged identifier: a Steam app id or a PlayStation product id."""
    platform: Platform
    value: str


class NormalizedUrl(NamedTuple):
    """Canonical fetch URL plus the caller's input, kept verbatim."""
    normalized_url: str
    original_url: str


def normalize_currency(value: Any) -> str:
    """Upper-case a 3-letter ISO 4217 code, or fall back to the default currency."""
    if isinstance(value, str):
        code = value.strip().upper()
        if _CURRENCY_RE.match(code):
            return code
    return settings.DEFAULT_CURRENCY


class StorefrontData(BaseModel):
    """Raw product data as returned by either storefront adapter."""

    title: str = ""
    image: str = ""
    price: Decimal = Field(default=Decimal("0.00"), description="Original price, 2dp")
    currency: str = Field(default_factory=lambda: settings.DEFAULT_CURRENCY)
    product_type: ProductType = ProductType.GAME

    @field_validator("price", mode="before")
    @classmethod
    def parse_price(cls, v: Any) -> Decimal:
        return to_decimal_price(v)

    @field_validator("currency", mode="before")
    @classmethod
    def parse_currency(cls, v: Any) -> str:
        return normalize_currency(v)

    @field_validator("title", "image", mode="before")
    @classmethod
    def none_to_empty(cls, v: Any) -> str:
        return "" if v is None else v


class ProductListing(BaseModel):
    """
    Normalized product record returned to the calling layer.

    Immutable once built. `discounted` is derived from `price` and can
    never be set independently, so it always matches price × markdown rate.
    Attribute names are snake_case; the wire shape produced by
    to_response() uses the camelCase names the calling layer expects.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    title: str
    platform: Platform
    product_type: ProductType = Field(default=ProductType.GAME, alias="productType")
    image: str = ""
    price: Decimal
    currency: str = Field(default_factory=lambda: settings.DEFAULT_CURRENCY)
    url: str
    original_url: str = Field(alias="originalUrl")

    @field_validator("price", mode="before")
    @classmethod
    def parse_price(cls, v: Any) -> Decimal:
        return to_decimal_price(v)

    @field_validator("currency", mode="before")
    @classmethod
    def parse_currency(cls, v: Any) -> str:
        return normalize_currency(v)

    @field_validator("image", mode="before")
    @classmethod
    def none_to_empty(cls, v: Any) -> str:
        return "" if v is None else v

    @computed_field  # type: ignore[prop-decorator]
    @property
    def discounted(self) -> Decimal:
        return calculate_discounted_price(self.price)

    @classmethod
    def from_storefront(
        cls,
        data: StorefrontData,
        platform: Platform,
        url: str,
        original_url: str,
    ) -> ProductListing:
        """Stamp adapter output with its platform and both URLs."""
        return cls(
            title=data.title,
            platform=platform,
            product_type=data.product_type,
            image=data.image,
            price=data.price,
            currency=data.currency,
            url=url,
            original_url=original_url,
        )

    def to_response(self) -> dict[str, Any]:
        """
        Serialize to the calling layer's response shape.

        Money fields become JSON numbers with two-place rounding; enums
        become their string values.
        """
        return {
            "title": self.title,
            "platform": self.platform.value,
            "productType": self.product_type.value,
            "image": self.image,
            "price": float(self.price),
            "discounted": float(self.discounted),
            "currency": self.currency,
            "url": self.url,
            "originalUrl": self.original_url,
        }
