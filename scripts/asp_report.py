"""ASP 현황 리포트 -- ASP별 상품/출연자 수 + SQL/파이썬 정규화 불일치 검사.

Usage:
    python scripts/asp_report.py                 # ASP별 통계
    python scripts/asp_report.py --verify        # SQL CASE vs normalize_asp_name 불일치 검사
    python scripts/asp_report.py --sql           # 정규화 CASE 식 출력
    python scripts/asp_report.py --name DTI --url https://www.1pondo.tv/movies/1/
"""

import argparse
import asyncio
import sys
from pathlib import Path

_root = str(Path(__file__).resolve().parent.parent)
sys.path.insert(0, _root)

from dotenv import load_dotenv
load_dotenv(Path(_root) / ".env")

from loguru import logger
logger.remove()
logger.add(sys.stderr, level="INFO")

from database import async_session, init_db
from processor.asp_queries import find_normalization_drift, get_asp_stats
from processor.asp_sql import build_asp_normalization_sql
from processor.asp_utils import (
    get_asp_display_name,
    is_dti_sub_service,
    is_valid_asp_name,
    normalize_asp_name,
)
from processor.config import asp_settings


def _print_normalized(name: str, url: str | None):
    asp = normalize_asp_name(name, url)
    logger.info(f"  raw={name!r} url={url!r}")
    logger.info(f"  -> {asp} ({get_asp_display_name(asp)})")
    logger.info(f"     valid={is_valid_asp_name(asp)} dti_sub_service={is_dti_sub_service(asp)}")


async def _report(limit: int):
    async with async_session() as session:
        stats = await get_asp_stats(session)

    logger.info(f"== ASP별 현황 ({len(stats)}) ==")
    for row in stats[:limit]:
        logger.info(
            f"  {row['asp']:16s} {row['display_name']:20s} "
            f"products={row['product_count']:>7d} performers={row['performer_count']:>6d}"
        )
    if len(stats) > limit:
        logger.info(f"  ... {len(stats) - limit}건 생략")


async def _verify(limit: int) -> int:
    async with async_session() as session:
        drift = await find_normalization_drift(session, limit=limit)

    if not drift:
        logger.info("SQL/파이썬 정규화 불일치 없음")
        return 0

    logger.warning(f"== 불일치 {len(drift)}건 ==")
    for item in drift:
        logger.warning(
            f"  raw={item['raw']!r} url={(item['url'] or '')[:80]!r} "
            f"sql={item['sql']!r} python={item['python']!r}"
        )
    return 1


async def main() -> int:
    parser = argparse.ArgumentParser(description="ASP 현황 리포트")
    parser.add_argument("--verify", action="store_true", help="SQL/파이썬 정규화 불일치 검사")
    parser.add_argument("--sql", action="store_true", help="정규화 CASE 식 출력")
    parser.add_argument("--name", help="단일 asp_name 정규화")
    parser.add_argument("--url", help="--name 과 함께 쓰는 상품 URL")
    parser.add_argument("--limit", type=int, default=asp_settings.report_limit)
    args = parser.parse_args()

    if args.sql:
        print(build_asp_normalization_sql(asp_settings.name_column, asp_settings.url_column))
        return 0

    if args.name is not None:
        _print_normalized(args.name, args.url)
        return 0

    await init_db()
    if args.verify:
        return await _verify(args.limit)

    await _report(args.limit)
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
