from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import pytest

from processor.asp_registry import (
    DEFAULT_BADGE_COLOR,
    DTI_SUB_SERVICE_IDS,
    UPPER_TO_LOWER_MAP,
    VALID_ASP_NAMES,
)
from processor.asp_utils import (
    get_asp_badge_color,
    get_asp_display_name,
    get_dti_service_from_url,
    get_provider_label,
    is_dti_sub_service,
    is_valid_asp_name,
    map_legacy_provider,
    normalize_asp_name,
    sort_by_display_order,
)


@pytest.mark.parametrize("raw, expected", [
    ("FANZA", "fanza"),
    ("MGS", "mgs"),
    ("DUGA", "duga"),
    ("SOKMIL", "sokmil"),
    ("FC2", "fc2"),
    ("JAPANSKA", "japanska"),
    ("Japanska", "japanska"),
    ("1PONDO", "1pondo"),
    ("10MUSUME", "10musume"),
    ("APEX", "duga"),
    ("DMM", "fanza"),
    ("b10f.jp", "b10f"),
])
def test_normalize_legacy_codes(raw, expected):
    assert normalize_asp_name(raw) == expected


@pytest.mark.parametrize("raw, expected", [
    ("カリビアンコム", "caribbeancom"),
    ("カリビアンコムプレミアム", "caribbeancompr"),
    ("カリビアンコムPR", "caribbeancompr"),
    ("一本道", "1pondo"),
    ("天然むすめ", "10musume"),
    ("パコパコママ", "pacopacomama"),
    ("ムラムラ", "muramura"),
    ("ムラムラってくる素人", "muramura"),
    ("Tokyo Hot", "tokyohot"),
    ("トウキョウホット", "tokyohot"),
    ("MGS動画", "mgs"),
])
def test_normalize_japanese_names(raw, expected):
    assert normalize_asp_name(raw) == expected


@pytest.mark.parametrize("url, expected", [
    ("https://www.caribbeancom.com/moviepages/123456-001/index.html", "caribbeancom"),
    ("https://www.caribbeancompr.com/moviepages/123456-001/index.html", "caribbeancompr"),
    ("https://www.1pondo.tv/movies/123456_001/", "1pondo"),
    ("https://www.heyzo.com/moviepages/1234/", "heyzo"),
    ("https://www.10musume.com/moviepages/123456_01/", "10musume"),
    ("https://www.pacopacomama.com/moviepages/123456_001/", "pacopacomama"),
    ("https://www.muramura.tv/moviepages/123456/", "muramura"),
    ("https://www.tokyo-hot.com/e/n1234.html", "tokyohot"),
    ("https://www.heydouga.com/moviepages/1234-567/", "heydouga"),
    ("https://x1x.com/sample", "x1x"),
    ("https://av9898.com/sample", "av9898"),
])
def test_normalize_dti_resolves_sub_service_from_url(url, expected):
    assert normalize_asp_name("DTI", url) == expected


def test_normalize_dti_unknown_url_falls_back():
    assert normalize_asp_name("DTI", "https://unknown-dti-site.com/") == "dti"


def test_normalize_dti_without_url():
    assert normalize_asp_name("DTI") == "dti"
    assert normalize_asp_name("DTI", None) == "dti"
    assert normalize_asp_name("DTI", "") == "dti"


def test_normalize_dti_code_is_case_insensitive():
    assert normalize_asp_name("dti", "https://www.1pondo.tv/movies/1/") == "1pondo"
    assert normalize_asp_name("Dti") == "dti"


def test_url_is_ignored_for_non_dti_names():
    assert normalize_asp_name("FANZA", "https://www.1pondo.tv/movies/1/") == "fanza"


def test_normalize_passthrough_and_empty():
    assert normalize_asp_name("fanza") == "fanza"
    assert normalize_asp_name("caribbeancom") == "caribbeancom"
    assert normalize_asp_name("UNKNOWN") == "unknown"
    assert normalize_asp_name("NewService") == "newservice"
    assert normalize_asp_name("") == ""


def test_normalize_is_case_insensitive_for_codes():
    for code, slug in UPPER_TO_LOWER_MAP.items():
        assert normalize_asp_name(code) == slug
        assert normalize_asp_name(code.lower()) == slug, code
        assert normalize_asp_name(code.upper()) == slug, code


@pytest.mark.parametrize("raw", ["B10F.jp", "B10F.JP", "b10f.JP", "Sokmil", "Apex", "dmm", "NewService", "UNKNOWN"])
def test_normalize_is_idempotent(raw):
    once = normalize_asp_name(raw)
    assert normalize_asp_name(once) == once


def test_mixed_case_db_code_resolves_to_slug():
    assert normalize_asp_name("B10F.jp") == "b10f"
    assert is_valid_asp_name("B10F.JP")


def test_display_name():
    assert get_asp_display_name("fanza") == "FANZA"
    assert get_asp_display_name("FANZA") == "FANZA"
    assert get_asp_display_name("mgs") == "MGS動画"
    assert get_asp_display_name("caribbeancompr") == "カリビアンコムPR"
    assert get_asp_display_name("1pondo") == "一本道"
    assert get_asp_display_name("tokyohot") == "Tokyo Hot"
    assert get_asp_display_name("unknownservice") == "unknownservice"
    assert get_asp_display_name("UnknownService") == "unknownservice"


def test_display_name_round_trips_to_valid_slug():
    for slug in VALID_ASP_NAMES:
        assert is_valid_asp_name(slug)
        assert is_valid_asp_name(get_asp_display_name(slug)), slug
        assert normalize_asp_name(get_asp_display_name(slug)) == slug


def test_is_valid_asp_name():
    for name in ("fanza", "mgs", "duga", "sokmil", "fc2", "caribbeancom", "1pondo", "heyzo", "japanska", "b10f"):
        assert is_valid_asp_name(name)
    assert is_valid_asp_name("FANZA")
    assert is_valid_asp_name("カリビアンコム")
    assert is_valid_asp_name("一本道")
    assert not is_valid_asp_name("invalid")
    assert not is_valid_asp_name("unknown")
    assert not is_valid_asp_name("")


def test_is_dti_sub_service():
    for name in (
        "caribbeancom", "caribbeancompr", "1pondo", "heyzo", "10musume",
        "pacopacomama", "muramura", "tokyohot", "heydouga", "dti", "DTI",
        "CARIBBEANCOM", "HEYZO", "カリビアンコム", "一本道",
    ):
        assert is_dti_sub_service(name), name
    for name in ("fanza", "mgs", "duga", "sokmil", "fc2", "japanska", "", "unknown"):
        assert not is_dti_sub_service(name), name


def test_dti_sub_service_set_contains_generic_code():
    assert "dti" in DTI_SUB_SERVICE_IDS


def test_badge_color():
    assert get_asp_badge_color("fanza").bg == "bg-pink-600"
    assert get_asp_badge_color("fanza").text == "text-white"
    assert get_asp_badge_color("mgs").bg == "bg-blue-600"
    assert get_asp_badge_color("caribbeancom").bg == "bg-teal-600"
    assert get_asp_badge_color("FANZA") == get_asp_badge_color("fanza")
    assert get_asp_badge_color("unknown") == DEFAULT_BADGE_COLOR
    assert get_asp_badge_color("unknown").bg == "bg-gray-600"


def test_get_dti_service_from_url():
    assert get_dti_service_from_url("https://www.heyzo.com/moviepages/1/") == "heyzo"
    assert get_dti_service_from_url("https://example.com/") is None
    assert get_dti_service_from_url(None) is None


def test_map_legacy_provider():
    assert map_legacy_provider("FANZA") == "fanza"
    assert map_legacy_provider("apex") == "duga"
    assert map_legacy_provider("DMM") == "fanza"
    assert map_legacy_provider("caribbeancom") == "dti"
    assert map_legacy_provider("一本道") == "dti"
    assert map_legacy_provider("nothing") is None
    assert map_legacy_provider("") is None


def test_get_provider_label():
    assert get_provider_label("SOKMIL") == "ソクミル"
    assert get_provider_label("B10F") == "b10f.jp"
    assert get_provider_label("TOKYOHOT") == "Tokyo-Hot"
    assert get_provider_label("SOMETHING") == "SOMETHING"


def test_sort_by_display_order():
    assert sort_by_display_order(["fc2", "zzz", "fanza", "sokmil", "aaa"]) == [
        "sokmil", "fanza", "fc2", "aaa", "zzz",
    ]
