"""ASP name normalization helpers.

Every raw ``asp_name`` seen in crawled data (``FANZA``, ``fanza``, ``カリビアンコム``,
``DTI`` + product URL, ...) collapses to one canonical lowercase slug here.
Unknown names are never an error: they pass through lowercased.
"""

from __future__ import annotations

from typing import Iterable

from loguru import logger

from processor.asp_registry import (
    ASP_BADGE_COLORS,
    ASP_DISPLAY_NAMES,
    ASP_DISPLAY_ORDER,
    DEFAULT_BADGE_COLOR,
    DTI_CODE,
    DTI_FALLBACK,
    DTI_SUB_SERVICE_IDS,
    DTI_URL_PATTERNS,
    FOLDED_CODE_MAP,
    JA_TO_EN_MAP,
    LEGACY_PROVIDER_MAP,
    PROVIDER_LABEL_MAP,
    UPPER_TO_LOWER_MAP,
    VALID_ASP_NAMES,
    BadgeColor,
)


def get_dti_service_from_url(url: str | None) -> str | None:
    """Return the DTI sub-service slug whose URL pattern appears in ``url``."""
    if not url:
        return None
    for pattern, slug in DTI_URL_PATTERNS.items():
        if pattern in url:
            return slug
    return None


def normalize_asp_name(raw: str, source_url: str | None = None) -> str:
    """Normalize any raw ASP name to its canonical slug.

    Precedence:
      1. Japanese display name / alias
      2. DB code, exact then case-insensitive
      3. generic ``DTI`` code, resolved through ``source_url``
      4. lowercase passthrough
    """
    if not raw:
        return ""

    slug = JA_TO_EN_MAP.get(raw)
    if slug:
        return slug

    upper = raw.upper()
    slug = UPPER_TO_LOWER_MAP.get(raw) or FOLDED_CODE_MAP.get(upper)
    if slug:
        return slug

    if upper == DTI_CODE:
        if not source_url:
            return DTI_FALLBACK
        slug = get_dti_service_from_url(source_url)
        if slug is None:
            logger.debug("DTI url not matched to a sub-service: {}", source_url[:120])
            return DTI_FALLBACK
        return slug

    return raw.lower()


def get_asp_display_name(raw: str) -> str:
    """Return the UI display name, or the normalized value when unregistered."""
    slug = normalize_asp_name(raw)
    return ASP_DISPLAY_NAMES.get(slug, slug)


def is_valid_asp_name(raw: str) -> bool:
    return normalize_asp_name(raw) in VALID_ASP_NAMES


def is_dti_sub_service(raw: str) -> bool:
    """True for DTI sub-brands (and the generic ``dti`` itself)."""
    return normalize_asp_name(raw) in DTI_SUB_SERVICE_IDS


def get_asp_badge_color(raw: str) -> BadgeColor:
    return ASP_BADGE_COLORS.get(normalize_asp_name(raw), DEFAULT_BADGE_COLOR)


def map_legacy_provider(name: str) -> str | None:
    """Map a legacy provider name to its top-level provider id.

    DTI sub-services collapse to ``dti``. Returns None when unknown.
    """
    if not name:
        return None
    return LEGACY_PROVIDER_MAP.get(name) or LEGACY_PROVIDER_MAP.get(name.lower())


def get_provider_label(db_name: str) -> str:
    """Return the label for a stored ``asp_name`` value."""
    return PROVIDER_LABEL_MAP.get(db_name, db_name)


def sort_by_display_order(slugs: Iterable[str]) -> list[str]:
    """Sort slugs in UI filter order; unlisted slugs go last, alphabetically."""
    rank = {slug: i for i, slug in enumerate(ASP_DISPLAY_ORDER)}
    return sorted(slugs, key=lambda s: (rank.get(s, len(rank)), s))
