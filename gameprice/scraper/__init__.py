"""Game Price Resolver — Storefront page scrapers."""

from gameprice.scraper.playstation import PlayStationScraper, parse_product_page

__all__ = ["PlayStationScraper", "parse_product_page"]
