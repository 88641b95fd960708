"""
Tests for the identifier extractor (gameprice/utils/identifiers.py).

Covers:
- Steam app id extraction from store URLs and steam:// links
- PlayStation matcher chain: product path, tid route, dashed and undashed codes
- Platform detection used by the resolver's dispatch step
"""

from __future__ import annotations

import pytest

from gameprice.errors import IdentifierNotFound
from gameprice.models.listing import Platform, PlatformIdentifier
from gameprice.utils.identifiers import (
    PLAYSTATION_MATCHERS,
    detect_platform,
    extract_identifier,
    extract_playstation_product_id,
    extract_steam_app_id,
)


class TestExtractSteamAppId:
    @pytest.mark.parametrize(
        "raw",
        [
            "https://store.steampowered.com/app/1174180",
            "https://store.steampowered.com/app/1174180/",
            "https://store.steampowered.com/app/1174180/Red_Dead_Redemption_2/",
            "https://store.steampowered.com/app/1174180/Red_Dead_Redemption_2/?snr=1_4_4__129_1",
            "http://store.steampowered.com/app/1174180#app_reviews_hash",
            "steam://rungame/1174180/76561202255233023/",
        ],
    )
    def test_app_id_independent_of_trailing_segments(self, raw: str) -> None:
        assert extract_steam_app_id(raw) == "1174180"

    def test_short_app_id(self) -> None:
        assert extract_steam_app_id("https://store.steampowered.com/app/10/CounterStrike/") == "10"

    @pytest.mark.parametrize(
        "raw",
        [
            "https://store.steampowered.com/bundle/12345",
            "https://store.steampowered.com/app/",
            "https://steamcommunity.com/app/1174180",
            "1174180",
        ],
    )
    def test_rejects_other_shapes(self, raw: str) -> None:
        with pytest.raises(IdentifierNotFound) as exc_info:
            extract_steam_app_id(raw)
        assert exc_info.value.platform == Platform.STEAM
        assert "Steam" in str(exc_info.value)


class TestExtractPlayStationProductId:
    @pytest.mark.parametrize(
        "region",
        ["en-gb", "de-de", "fr-fr", "ja-jp", "en-us"],
    )
    def test_product_url_any_region(self, region: str) -> None:
        raw = f"https://store.playstation.com/{region}/product/EP9000-PPSA01284_00-0000000000000000"
        assert extract_playstation_product_id(raw) == "EP9000-PPSA01284_00"

    def test_product_url_with_query_and_fragment(self) -> None:
        raw = (
            "https://store.playstation.com/en-gb/product/EP9000-PPSA01284_00-0000000000000000"
            "?PlatformPrivacyWs1=all&psappver=19.15.0&smcid=psapp#gameOverview"
        )
        assert extract_playstation_product_id(raw) == "EP9000-PPSA01284_00"

    def test_product_url_is_case_insensitive(self) -> None:
        raw = "https://store.playstation.com/en-us/product/up0001-cusa00288_00-ACUNITYMASTERPS4"
        assert extract_playstation_product_id(raw) == "up0001-cusa00288_00"

    def test_legacy_tid_route(self) -> None:
        raw = "https://store.playstation.com/#!/en-gb/tid=CUSA07410_00"
        assert extract_playstation_product_id(raw) == "CUSA07410_00"

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("EP9000-PPSA01284_00", "EP9000-PPSA01284_00"),
            ("EP9000-PPSA01284_00-0000000000000000", "EP9000-PPSA01284_00"),
            ("UP1004-CUSA03041_00-REDEMPTION000002", "UP1004-CUSA03041_00"),
            ("  EP9000-PPSA01284_00  ", "EP9000-PPSA01284_00"),
        ],
    )
    def test_bare_dashed_code(self, raw: str, expected: str) -> None:
        assert extract_playstation_product_id(raw) == expected

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("EP9000PPSA01284_00", "EP9000-PPSA01284_00"),
            ("EP9000PPSA01284_00-0000000000000000", "EP9000-PPSA01284_00"),
            ("UP1004CUSA03041_00-REDEMPTION000002", "UP1004-CUSA03041_00"),
        ],
    )
    def test_bare_undashed_code_is_rebuilt(self, raw: str, expected: str) -> None:
        assert extract_playstation_product_id(raw) == expected

    @pytest.mark.parametrize(
        "raw",
        [
            "not-a-valid-url",
            "https://store.playstation.com/en-gb/concept/10002694",
            "EP9000-PPSA01284",
            "",
        ],
    )
    def test_unrecognised_input_raises(self, raw: str) -> None:
        with pytest.raises(IdentifierNotFound) as exc_info:
            extract_playstation_product_id(raw)
        assert exc_info.value.platform == Platform.PSN

    def test_matchers_run_in_declared_order(self) -> None:
        names = [matcher.__name__ for matcher in PLAYSTATION_MATCHERS]
        assert names == [
            "_match_product_path",
            "_match_tid_route",
            "_match_dashed_code",
            "_match_undashed_code",
        ]

    def test_product_path_wins_over_tid(self) -> None:
        raw = "https://store.playstation.com/en-gb/product/EP9000-PPSA01284_00?tid=CUSA07410_00"
        assert extract_playstation_product_id(raw) == "EP9000-PPSA01284_00"


class TestExtractIdentifier:
    def test_steam(self) -> None:
        result = extract_identifier("https://store.steampowered.com/app/1174180/")
        assert result == PlatformIdentifier(Platform.STEAM, "1174180")

    def test_playstation(self) -> None:
        result = extract_identifier("EP9000-PPSA01284_00")
        assert result == PlatformIdentifier(Platform.PSN, "EP9000-PPSA01284_00")

    def test_neither_names_last_grammar(self) -> None:
        with pytest.raises(IdentifierNotFound) as exc_info:
            extract_identifier("not-a-valid-url")
        assert exc_info.value.platform == Platform.PSN


class TestDetectPlatform:
    @pytest.mark.parametrize(
        "raw",
        [
            "https://store.steampowered.com/app/1174180/Red_Dead_Redemption_2/",
            "https://store.steampowered.com/",
            "steam://rungame/1174180",
        ],
    )
    def test_steam_shaped(self, raw: str) -> None:
        assert detect_platform(raw) == Platform.STEAM

    @pytest.mark.parametrize(
        "raw",
        [
            "https://store.playstation.com/en-gb/product/EP9000-PPSA01284_00",
            "https://STORE.PLAYSTATION.COM/de-de/product/EP9000-PPSA01284_00",
            "https://store.playstation.com/en-gb/concept/10002694",
            "EP9000-PPSA01284_00",
            "EP9000-PPSA01284_00-0000000000000000",
            "EP9000PPSA01284_00",
            "ep9000-ppsa01284_00",
        ],
    )
    def test_playstation_shaped(self, raw: str) -> None:
        assert detect_platform(raw) == Platform.PSN

    def test_permissive_underscore_suffix(self) -> None:
        """Known over-match: any '<alnum><alnum>_<digits>' prefix reads as PlayStation."""
        assert detect_platform("save_2") == Platform.PSN

    @pytest.mark.parametrize(
        "raw",
        [
            "not-a-valid-url",
            "https://www.gog.com/en/game/the_witcher_3_wild_hunt",
            "https://www.xbox.com/en-GB/games/store/forza/9NKX70BBCDRN",
            "",
            "   ",
        ],
    )
    def test_neither(self, raw: str) -> None:
        assert detect_platform(raw) is None
