"""ASP registry -- single source of truth for every affiliate service provider.

Adding a new ASP only requires one more ``AspEntry`` in ``ASP_REGISTRY``.
Every lookup table below (Japanese aliases, DB codes, display names, badge
colors, DTI URL patterns, ...) is derived from it once at import time and
exposed read-only.

DTI 계열:
  - ``dti`` is the generic aggregator code stored in ``product_sources.asp_name``
  - sub-services (caribbeancom, 1pondo, heyzo, ...) carry ``parent_id="dti"``
    and a ``url_pattern`` used to resolve the real brand from the product URL
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping


@dataclass(frozen=True)
class BadgeColor:
    """Tailwind class triple for an ASP badge."""

    bg: str
    text: str
    border: str


@dataclass(frozen=True)
class AspEntry:
    id: str
    display_name: str
    db_names: tuple[str, ...]
    display_order: int | None
    in_adult_v: bool
    in_fanza: bool
    badge_color: BadgeColor
    provider_label: str
    ja_aliases: tuple[str, ...] = ()
    parent_id: str | None = None
    url_pattern: str | None = None


DTI_CODE = "DTI"
DTI_FALLBACK = "dti"

DEFAULT_BADGE_COLOR = BadgeColor("bg-gray-600", "text-white", "border-gray-500")


def _badge(color: str, shade: int = 600) -> BadgeColor:
    return BadgeColor(f"bg-{color}-{shade}", "text-white", f"border-{color}-{shade - 100}")


# ── Registry ──
ASP_REGISTRY: tuple[AspEntry, ...] = (
    # ---- 주요 ASP ----
    AspEntry(
        id="sokmil", display_name="SOKMIL", db_names=("SOKMIL", "ソクミル"),
        display_order=0, in_adult_v=True, in_fanza=False,
        badge_color=_badge("purple"), provider_label="ソクミル",
    ),
    AspEntry(
        id="duga", display_name="DUGA", db_names=("DUGA", "APEX"),
        display_order=1, in_adult_v=True, in_fanza=False,
        badge_color=_badge("orange"), provider_label="DUGA",
    ),
    AspEntry(
        id="fanza", display_name="FANZA", db_names=("FANZA", "DMM"),
        display_order=2, in_adult_v=False, in_fanza=True,
        badge_color=_badge("pink"), provider_label="FANZA",
    ),
    AspEntry(
        id="b10f", display_name="B10F", db_names=("B10F", "b10f.jp"),
        display_order=3, in_adult_v=True, in_fanza=False,
        badge_color=_badge("emerald"), provider_label="b10f.jp",
    ),
    AspEntry(
        id="mgs", display_name="MGS動画", db_names=("MGS",), ja_aliases=("MGS動画",),
        display_order=4, in_adult_v=True, in_fanza=False,
        badge_color=_badge("blue"), provider_label="MGS動画",
    ),
    AspEntry(
        id="fc2", display_name="FC2", db_names=("FC2",),
        display_order=7, in_adult_v=True, in_fanza=False,
        badge_color=_badge("red"), provider_label="FC2",
    ),
    AspEntry(
        id="japanska", display_name="Japanska", db_names=("Japanska", "JAPANSKA"),
        display_order=12, in_adult_v=True, in_fanza=False,
        badge_color=_badge("indigo"), provider_label="Japanska",
    ),
    AspEntry(
        id=DTI_FALLBACK, display_name="DTI", db_names=(DTI_CODE,),
        display_order=None, in_adult_v=False, in_fanza=False,
        badge_color=DEFAULT_BADGE_COLOR, provider_label="DTI",
    ),
    # ---- DTI 서브 서비스 ----
    AspEntry(
        id="caribbeancompr", display_name="カリビアンコムPR", db_names=("CARIBBEANCOMPR",),
        ja_aliases=("カリビアンコムプレミアム", "カリビアンコムPR"),
        parent_id=DTI_FALLBACK, url_pattern="caribbeancompr.com",
        display_order=5, in_adult_v=True, in_fanza=False,
        badge_color=_badge("teal", 700), provider_label="カリビアンコムプレミアム",
    ),
    AspEntry(
        id="heyzo", display_name="HEYZO", db_names=("HEYZO",),
        parent_id=DTI_FALLBACK, url_pattern="heyzo.com",
        display_order=6, in_adult_v=True, in_fanza=False,
        badge_color=_badge("sky"), provider_label="HEYZO",
    ),
    AspEntry(
        id="1pondo", display_name="一本道", db_names=("1PONDO",), ja_aliases=("一本道",),
        parent_id=DTI_FALLBACK, url_pattern="1pondo.tv",
        display_order=8, in_adult_v=True, in_fanza=False,
        badge_color=_badge("cyan"), provider_label="一本道",
    ),
    AspEntry(
        id="caribbeancom", display_name="カリビアンコム", db_names=("CARIBBEANCOM",),
        ja_aliases=("カリビアンコム",),
        parent_id=DTI_FALLBACK, url_pattern="caribbeancom.com",
        display_order=9, in_adult_v=True, in_fanza=False,
        badge_color=_badge("teal"), provider_label="カリビアンコム",
    ),
    AspEntry(
        id="heydouga", display_name="Hey動画", db_names=("HEYDOUGA",), ja_aliases=("Hey動画",),
        parent_id=DTI_FALLBACK, url_pattern="heydouga.com",
        display_order=10, in_adult_v=True, in_fanza=False,
        badge_color=_badge("amber"), provider_label="Hey動画",
    ),
    AspEntry(
        id="x1x", display_name="X1X", db_names=("X1X",),
        parent_id=DTI_FALLBACK, url_pattern="x1x.com",
        display_order=11, in_adult_v=True, in_fanza=False,
        badge_color=DEFAULT_BADGE_COLOR, provider_label="x1x.com",
    ),
    AspEntry(
        id="enkou55", display_name="エンコウ55", db_names=("ENKOU55",), ja_aliases=("エンコウ55",),
        parent_id=DTI_FALLBACK, url_pattern="enkou55.com",
        display_order=13, in_adult_v=True, in_fanza=False,
        badge_color=DEFAULT_BADGE_COLOR, provider_label="エンコウ55",
    ),
    AspEntry(
        id="urekko", display_name="ウレッコ", db_names=("UREKKO",), ja_aliases=("ウレッコ",),
        parent_id=DTI_FALLBACK, url_pattern="urekko",
        display_order=14, in_adult_v=True, in_fanza=False,
        badge_color=DEFAULT_BADGE_COLOR, provider_label="ウレッコ",
    ),
    AspEntry(
        id="tvdeav", display_name="TVDEAV", db_names=("TVDEAV",),
        parent_id=DTI_FALLBACK, url_pattern="tvdeav",
        display_order=15, in_adult_v=True, in_fanza=False,
        badge_color=DEFAULT_BADGE_COLOR, provider_label="TVDEAV",
    ),
    AspEntry(
        id="tokyohot", display_name="Tokyo Hot", db_names=("TOKYOHOT",),
        ja_aliases=("Tokyo Hot", "トウキョウホット"),
        parent_id=DTI_FALLBACK, url_pattern="tokyo-hot.com",
        display_order=16, in_adult_v=True, in_fanza=False,
        badge_color=_badge("red", 700), provider_label="Tokyo-Hot",
    ),
    AspEntry(
        id="10musume", display_name="天然むすめ", db_names=("10MUSUME",), ja_aliases=("天然むすめ",),
        parent_id=DTI_FALLBACK, url_pattern="10musume.com",
        display_order=None, in_adult_v=True, in_fanza=False,
        badge_color=_badge("rose"), provider_label="天然むすめ",
    ),
    AspEntry(
        id="pacopacomama", display_name="パコパコママ", db_names=("PACOPACOMAMA",),
        ja_aliases=("パコパコママ",),
        parent_id=DTI_FALLBACK, url_pattern="pacopacomama.com",
        display_order=None, in_adult_v=True, in_fanza=False,
        badge_color=_badge("fuchsia"), provider_label="パコパコママ",
    ),
    AspEntry(
        id="muramura", display_name="ムラムラ", db_names=("MURAMURA",),
        ja_aliases=("ムラムラ", "ムラムラってくる素人"),
        parent_id=DTI_FALLBACK, url_pattern="muramura.tv",
        display_order=None, in_adult_v=True, in_fanza=False,
        badge_color=DEFAULT_BADGE_COLOR, provider_label="ムラムラってくる素人",
    ),
    AspEntry(
        id="av9898", display_name="AV9898", db_names=("AV9898",),
        parent_id=DTI_FALLBACK, url_pattern="av9898.com",
        display_order=None, in_adult_v=False, in_fanza=False,
        badge_color=DEFAULT_BADGE_COLOR, provider_label="AV9898",
    ),
    AspEntry(
        id="honnamatv", display_name="ホンナマTV", db_names=("HONNAMATV",), ja_aliases=("ホンナマTV",),
        parent_id=DTI_FALLBACK, url_pattern="honnamatv.com",
        display_order=None, in_adult_v=False, in_fanza=False,
        badge_color=DEFAULT_BADGE_COLOR, provider_label="honnamatv",
    ),
)


# ── Derived tables (built once at import time) ──

# URL substring -> slug, registry order (first match wins)
DTI_URL_PATTERNS: Mapping[str, str] = MappingProxyType({
    e.url_pattern: e.id for e in ASP_REGISTRY if e.url_pattern
})

# Japanese alias -> slug
JA_TO_EN_MAP: Mapping[str, str] = MappingProxyType({
    ja: e.id for e in ASP_REGISTRY for ja in e.ja_aliases
})

# DB code -> slug. The aggregator code DTI needs a URL to resolve, so it is
# handled separately by the normalizer.
UPPER_TO_LOWER_MAP: Mapping[str, str] = MappingProxyType({
    db: e.id for e in ASP_REGISTRY for db in e.db_names if db != DTI_CODE
})

# Uppercased DB code -> slug, so any casing of a stored code (``B10F.jp``,
# ``Japanska``) lands on the same slug as the code itself.
FOLDED_CODE_MAP: Mapping[str, str] = MappingProxyType({
    code.upper(): slug for code, slug in UPPER_TO_LOWER_MAP.items()
})

ASP_DISPLAY_NAMES: Mapping[str, str] = MappingProxyType({
    e.id: e.display_name for e in ASP_REGISTRY
})

VALID_ASP_NAMES: frozenset[str] = frozenset(e.id for e in ASP_REGISTRY)

# UI filter order; entries without display_order are hidden
ASP_DISPLAY_ORDER: tuple[str, ...] = tuple(
    e.id for e in sorted(
        (e for e in ASP_REGISTRY if e.display_order is not None),
        key=lambda e: e.display_order,
    )
)

ASP_BADGE_COLORS: Mapping[str, BadgeColor] = MappingProxyType({
    e.id: e.badge_color for e in ASP_REGISTRY
})

PROVIDER_LABEL_MAP: Mapping[str, str] = MappingProxyType({
    db: e.provider_label for e in ASP_REGISTRY for db in e.db_names
})

PROVIDER_TO_ASP_MAPPING: Mapping[str, tuple[str, ...]] = MappingProxyType({
    e.id: e.db_names for e in ASP_REGISTRY
})

_LEGACY_PROVIDER_ALIASES: dict[str, str] = {
    "DMM": "fanza",
    "人妻斬り": "muramura",
    "金髪天國": "tokyohot",
}

# slug / DB code / Japanese alias -> provider id
ASP_TO_PROVIDER_ID: Mapping[str, str] = MappingProxyType({
    **{e.id: e.id for e in ASP_REGISTRY},
    **{db: e.id for e in ASP_REGISTRY for db in e.db_names},
    **{ja: e.id for e in ASP_REGISTRY for ja in e.ja_aliases},
    **_LEGACY_PROVIDER_ALIASES,
})

# Main ASPs are listed by DB code, DTI sub-services by slug
ADULT_V_ASPS: tuple[str, ...] = tuple(
    e.db_names[0] if e.parent_id is None else e.id
    for e in ASP_REGISTRY if e.in_adult_v
)

FANZA_ASPS: tuple[str, ...] = tuple(e.db_names[0] for e in ASP_REGISTRY if e.in_fanza)

# Top-level providers only (no DTI sub-services)
VALID_PROVIDER_IDS: tuple[str, ...] = tuple(e.id for e in ASP_REGISTRY if e.parent_id is None)

# The generic ``dti`` counts as a member alongside its sub-services.
DTI_SUB_SERVICE_IDS: frozenset[str] = frozenset(
    [DTI_FALLBACK] + [e.id for e in ASP_REGISTRY if e.parent_id == DTI_FALLBACK]
)


def _build_legacy_provider_map() -> dict[str, str]:
    legacy: dict[str, str] = {}
    for e in ASP_REGISTRY:
        if e.parent_id is None:
            legacy[e.id] = e.id
            for db in e.db_names:
                legacy[db.lower()] = e.id
        elif e.parent_id == DTI_FALLBACK:
            legacy[e.id] = DTI_FALLBACK
            for ja in e.ja_aliases:
                legacy[ja] = DTI_FALLBACK
    legacy["apex"] = "duga"
    legacy["dmm"] = "fanza"
    return legacy


LEGACY_PROVIDER_MAP: Mapping[str, str] = MappingProxyType(_build_legacy_provider_map())


def _stats_key(e: AspEntry) -> str:
    if e.parent_id:
        return e.id
    db_name = e.db_names[0]
    return "b10f.jp" if db_name == "B10F" else db_name


# Stats table label map (fanza and the bare DTI code are reported elsewhere)
ASP_STATS_NAME_MAP: Mapping[str, str] = MappingProxyType({
    _stats_key(e): e.provider_label
    for e in ASP_REGISTRY if e.id not in (DTI_FALLBACK, "fanza")
})

_BY_ID: dict[str, AspEntry] = {e.id: e for e in ASP_REGISTRY}


def get_asp_entry(asp_id: str) -> AspEntry | None:
    """Look up a registry entry by canonical slug."""
    return _BY_ID.get(asp_id)


def get_asp_entry_by_db_name(db_name: str) -> AspEntry | None:
    """Look up a registry entry by the value stored in ``asp_name``."""
    for e in ASP_REGISTRY:
        if db_name in e.db_names:
            return e
    return None
