"""ASP-aware queries over product_sources.

Normalization runs inside the DB (``CASE`` from ``asp_sql``) so grouping and
filtering by canonical ASP never pulls raw rows into Python. Statements alias
``product_sources`` as ``ps`` and ``products`` as ``p``; configured column
references must use those aliases.
"""

from __future__ import annotations

from typing import Iterable

from loguru import logger
from sqlalchemy import bindparam, desc, distinct, func, literal_column, select, text
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import TextClause

from database.models import Product, ProductPerformer, ProductSource
from processor.asp_registry import ASP_DISPLAY_NAMES
from processor.asp_sql import ColumnRef, asp_normalization_column, build_asp_normalization_sql
from processor.asp_utils import normalize_asp_name
from processor.config import asp_settings

_ps = ProductSource.__table__.alias("ps")
_p = Product.__table__.alias("p")
_pp = ProductPerformer.__table__.alias("pp")


def _columns(
    name_column: ColumnRef | str | None,
    url_column: ColumnRef | str | None,
) -> tuple[ColumnRef, ColumnRef]:
    name = name_column or asp_settings.name_column
    url = url_column or asp_settings.url_column
    return (
        name if isinstance(name, ColumnRef) else ColumnRef(name),
        url if isinstance(url, ColumnRef) else ColumnRef(url),
    )


def build_asp_filter_conditions(
    include_asps: Iterable[str] = (),
    exclude_asps: Iterable[str] = (),
    name_column: ColumnRef | str | None = None,
    url_column: ColumnRef | str | None = None,
) -> tuple[TextClause, TextClause]:
    """Build (include, exclude) WHERE clauses on the normalized ASP.

    Slug lists are bound as expanding parameters. Empty lists give ``TRUE``.
    The exclude clause keeps rows whose ``asp_name`` is NULL.
    """
    name, url = _columns(name_column, url_column)
    norm = build_asp_normalization_sql(name, url)
    include_asps = list(include_asps)
    exclude_asps = list(exclude_asps)

    include_cond = text("TRUE")
    if include_asps:
        include_cond = text(f"({norm}) IN :include_asps").bindparams(
            bindparam("include_asps", value=include_asps, expanding=True)
        )

    exclude_cond = text("TRUE")
    if exclude_asps:
        exclude_cond = text(
            f"({name} IS NULL OR ({norm}) NOT IN :exclude_asps)"
        ).bindparams(bindparam("exclude_asps", value=exclude_asps, expanding=True))

    return include_cond, exclude_cond


async def list_product_ids_by_asp(
    session: AsyncSession,
    include_asps: Iterable[str] = (),
    exclude_asps: Iterable[str] = (),
    limit: int = 100,
) -> list[int]:
    """Product ids having at least one source that passes the ASP filters."""
    include_cond, exclude_cond = build_asp_filter_conditions(include_asps, exclude_asps)
    stmt = (
        select(_ps.c.product_id)
        .select_from(_ps.outerjoin(_p, _ps.c.product_id == _p.c.id))
        .where(include_cond)
        .where(exclude_cond)
        .order_by(_ps.c.product_id)
        .distinct()
        .limit(limit)
    )
    result = await session.execute(stmt)
    return [r[0] for r in result.all()]


async def get_asp_stats(
    session: AsyncSession,
    excluded: set[str] | None = None,
) -> list[dict]:
    """Product/performer counts per canonical ASP.

    Returns: [{"asp", "display_name", "product_count", "performer_count"}, ...]
    sorted by product_count desc.
    """
    if excluded is None:
        excluded = asp_settings.excluded_asps
    name, url = _columns(None, None)
    norm = asp_normalization_column(name, url)

    stmt = (
        select(
            norm.label("asp_name"),
            func.count(distinct(_ps.c.product_id)).label("product_count"),
            func.count(distinct(_pp.c.performer_id)).label("performer_count"),
        )
        .select_from(
            _ps.outerjoin(_p, _ps.c.product_id == _p.c.id)
            .outerjoin(_pp, _ps.c.product_id == _pp.c.product_id)
        )
        .where(_ps.c.asp_name.isnot(None))
        .group_by(norm)
        .order_by(desc("product_count"))
    )
    rows = (await session.execute(stmt)).all()

    merged: dict[str, dict] = {}
    for asp_name, product_count, performer_count in rows:
        slug = normalize_asp_name(asp_name or "")
        if not slug or slug in excluded:
            continue
        entry = merged.setdefault(slug, {
            "asp": slug,
            "display_name": ASP_DISPLAY_NAMES.get(slug, slug),
            "product_count": 0,
            "performer_count": 0,
        })
        entry["product_count"] += int(product_count or 0)
        entry["performer_count"] += int(performer_count or 0)

    stats = sorted(merged.values(), key=lambda s: (-s["product_count"], s["asp"]))
    logger.info("asp stats: {} groups ({} excluded)", len(stats), len(excluded))
    return stats


async def get_performer_product_count_by_asp(
    session: AsyncSession,
    performer_id: int,
) -> list[dict]:
    """Product count per canonical ASP for a single performer."""
    name, url = _columns(None, None)
    norm = asp_normalization_column(name, url)

    stmt = (
        select(norm.label("asp_name"), func.count(distinct(_ps.c.product_id)).label("cnt"))
        .select_from(
            _pp.join(_ps, _pp.c.product_id == _ps.c.product_id)
            .outerjoin(_p, _ps.c.product_id == _p.c.id)
        )
        .where(_pp.c.performer_id == performer_id)
        .where(_ps.c.asp_name.isnot(None))
        .group_by(norm)
    )
    rows = (await session.execute(stmt)).all()
    counts = [{"asp": r.asp_name, "count": int(r.cnt)} for r in rows if r.asp_name is not None]
    return sorted(counts, key=lambda c: (-c["count"], c["asp"]))


async def find_normalization_drift(session: AsyncSession, limit: int | None = None) -> list[dict]:
    """Distinct (asp_name, url) pairs where SQL and in-process normalization disagree."""
    name, url = _columns(None, None)
    norm = asp_normalization_column(name, url)

    stmt = (
        select(_ps.c.asp_name, literal_column(url.name).label("source_url"), norm.label("sql_asp"))
        .select_from(_ps.outerjoin(_p, _ps.c.product_id == _p.c.id))
        .where(_ps.c.asp_name.isnot(None))
        .distinct()
    )
    rows = (await session.execute(stmt)).all()

    drift = []
    for raw, source_url, sql_asp in rows:
        expected = normalize_asp_name(raw, source_url)
        if sql_asp != expected:
            drift.append({"raw": raw, "url": source_url, "sql": sql_asp, "python": expected})
            if limit and len(drift) >= limit:
                break

    if drift:
        logger.warning("asp normalization drift: {} pairs", len(drift))
    return drift
