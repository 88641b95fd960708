from gameprice.utils.identifiers import (
    detect_platform,
    extract_identifier,
    extract_playstation_product_id,
    extract_steam_app_id,
)
from gameprice.utils.urls import (
    normalize_identifier,
    normalize_playstation_url,
    normalize_steam_url,
    product_id_from_url,
)

__all__ = [
    "detect_platform",
    "extract_identifier",
    "extract_playstation_product_id",
    "extract_steam_app_id",
    "normalize_identifier",
    "normalize_playstation_url",
    "normalize_steam_url",
    "product_id_from_url",
]
