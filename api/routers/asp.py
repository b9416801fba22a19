"""ASP registry / normalization / stats API router."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from database import get_db
from database.schemas import AspEntryOut, AspNormalizeOut, AspStatOut, BadgeColorOut
from processor.asp_queries import get_asp_stats
from processor.asp_registry import ASP_REGISTRY, get_asp_entry
from processor.asp_utils import (
    get_asp_badge_color,
    get_asp_display_name,
    is_dti_sub_service,
    is_valid_asp_name,
    normalize_asp_name,
    sort_by_display_order,
)

logger = logging.getLogger("aspscope.api.asp")

router = APIRouter(
    prefix="/api/asp",
    tags=["asp"],
    redirect_slashes=False,
)


def _entry_out(entry) -> AspEntryOut:
    return AspEntryOut(
        id=entry.id,
        display_name=entry.display_name,
        db_names=list(entry.db_names),
        ja_aliases=list(entry.ja_aliases),
        parent_id=entry.parent_id,
        url_pattern=entry.url_pattern,
        display_order=entry.display_order,
        in_adult_v=entry.in_adult_v,
        in_fanza=entry.in_fanza,
        provider_label=entry.provider_label,
        badge_color=BadgeColorOut.model_validate(entry.badge_color),
    )


@router.get("", response_model=list[AspEntryOut])
async def list_asps(include_hidden: bool = Query(False, description="display_order 없는 ASP 포함")):
    """List registered ASPs in UI display order."""
    entries = [e for e in ASP_REGISTRY if include_hidden or e.display_order is not None]
    order = sort_by_display_order(e.id for e in entries)
    by_id = {e.id: e for e in entries}
    return [_entry_out(by_id[asp_id]) for asp_id in order]


@router.get("/normalize", response_model=AspNormalizeOut)
async def normalize(
    name: str = Query(..., description="원본 asp_name"),
    url: str | None = Query(None, description="DTI 판별용 상품 URL"),
):
    """Normalize a raw ASP name (optionally with its product URL)."""
    asp = normalize_asp_name(name, url)
    return AspNormalizeOut(
        raw=name,
        url=url,
        asp=asp,
        display_name=get_asp_display_name(asp),
        is_valid=is_valid_asp_name(asp),
        is_dti_sub_service=is_dti_sub_service(asp),
        badge_color=BadgeColorOut.model_validate(get_asp_badge_color(asp)),
    )


@router.get("/stats", response_model=list[AspStatOut])
async def asp_stats(db: AsyncSession = Depends(get_db)):
    """Product/performer counts per canonical ASP."""
    try:
        return await get_asp_stats(db)
    except Exception:
        logger.exception("asp stats query failed")
        raise


@router.get("/{slug}", response_model=AspEntryOut)
async def get_asp(slug: str):
    """Registry entry for any raw form of an ASP name."""
    entry = get_asp_entry(normalize_asp_name(slug))
    if entry is None:
        raise HTTPException(status_code=404, detail=f"Unknown ASP: {slug}")
    return _entry_out(entry)
