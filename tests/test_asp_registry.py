from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import pytest

from processor.asp_registry import (
    ADULT_V_ASPS,
    ASP_DISPLAY_NAMES,
    ASP_DISPLAY_ORDER,
    ASP_REGISTRY,
    ASP_STATS_NAME_MAP,
    ASP_TO_PROVIDER_ID,
    DTI_SUB_SERVICE_IDS,
    DTI_URL_PATTERNS,
    FANZA_ASPS,
    FOLDED_CODE_MAP,
    JA_TO_EN_MAP,
    LEGACY_PROVIDER_MAP,
    PROVIDER_TO_ASP_MAPPING,
    UPPER_TO_LOWER_MAP,
    VALID_ASP_NAMES,
    VALID_PROVIDER_IDS,
    get_asp_entry,
    get_asp_entry_by_db_name,
)


def test_registry_ids_are_unique_lowercase():
    ids = [e.id for e in ASP_REGISTRY]
    assert len(ids) == len(set(ids))
    assert all(i == i.lower() for i in ids)


def test_every_slug_has_one_display_name():
    assert set(ASP_DISPLAY_NAMES) == VALID_ASP_NAMES


def test_dti_url_patterns():
    assert DTI_URL_PATTERNS["caribbeancom.com"] == "caribbeancom"
    assert DTI_URL_PATTERNS["1pondo.tv"] == "1pondo"
    assert len(DTI_URL_PATTERNS) > 10


def test_lookup_tables():
    assert JA_TO_EN_MAP["カリビアンコム"] == "caribbeancom"
    assert JA_TO_EN_MAP["一本道"] == "1pondo"
    assert UPPER_TO_LOWER_MAP["FANZA"] == "fanza"
    assert UPPER_TO_LOWER_MAP["MGS"] == "mgs"
    assert ASP_DISPLAY_NAMES["fanza"] == "FANZA"
    assert ASP_DISPLAY_NAMES["mgs"] == "MGS動画"
    assert "fanza" in VALID_ASP_NAMES
    assert "invalid" not in VALID_ASP_NAMES


def test_aggregator_code_not_in_code_table():
    assert "DTI" not in UPPER_TO_LOWER_MAP


def test_tables_are_read_only():
    with pytest.raises(TypeError):
        JA_TO_EN_MAP["new"] = "x"
    with pytest.raises(AttributeError):
        VALID_ASP_NAMES.add("x")


def test_display_order():
    assert ASP_DISPLAY_ORDER[:5] == ("sokmil", "duga", "fanza", "b10f", "mgs")
    assert "dti" not in ASP_DISPLAY_ORDER
    assert "10musume" not in ASP_DISPLAY_ORDER


def test_site_lists():
    assert "SOKMIL" in ADULT_V_ASPS
    assert "caribbeancom" in ADULT_V_ASPS
    assert "FANZA" not in ADULT_V_ASPS
    assert FANZA_ASPS == ("FANZA",)


def test_provider_ids_exclude_sub_services():
    assert "dti" in VALID_PROVIDER_IDS
    assert "caribbeancom" not in VALID_PROVIDER_IDS
    assert set(VALID_PROVIDER_IDS) | DTI_SUB_SERVICE_IDS == VALID_ASP_NAMES


def test_provider_mappings():
    assert PROVIDER_TO_ASP_MAPPING["duga"] == ("DUGA", "APEX")
    assert ASP_TO_PROVIDER_ID["人妻斬り"] == "muramura"
    assert ASP_TO_PROVIDER_ID["金髪天國"] == "tokyohot"
    assert ASP_TO_PROVIDER_ID["ソクミル"] == "sokmil"
    assert LEGACY_PROVIDER_MAP["heyzo"] == "dti"
    assert LEGACY_PROVIDER_MAP["b10f.jp"] == "b10f"


def test_stats_name_map():
    assert ASP_STATS_NAME_MAP["b10f.jp"] == "b10f.jp"
    assert ASP_STATS_NAME_MAP["caribbeancompr"] == "カリビアンコムプレミアム"
    assert "FANZA" not in ASP_STATS_NAME_MAP
    assert "DTI" not in ASP_STATS_NAME_MAP


def test_entry_lookups():
    assert get_asp_entry("heyzo").url_pattern == "heyzo.com"
    assert get_asp_entry("nope") is None
    assert get_asp_entry_by_db_name("APEX").id == "duga"
    assert get_asp_entry_by_db_name("apex") is None


def test_folded_code_map():
    assert FOLDED_CODE_MAP["B10F.JP"] == "b10f"
    assert FOLDED_CODE_MAP["JAPANSKA"] == "japanska"
    assert "DTI" not in FOLDED_CODE_MAP
    assert all(k == k.upper() for k in FOLDED_CODE_MAP)
    assert set(FOLDED_CODE_MAP.values()) == set(UPPER_TO_LOWER_MAP.values())
