"""ASP 처리 전역 설정."""

from pydantic_settings import BaseSettings


class AspSettings(BaseSettings):
    # 통계에서 제외할 ASP (콤마 구분, 정규화 slug)
    stats_excluded_asps: str = "fanza"

    # CASE 식에 들어가는 컬럼 (신뢰된 식별자만)
    name_column: str = "ps.asp_name"
    url_column: str = "p.default_thumbnail_url"

    # 리포트
    report_limit: int = 50

    model_config = {"env_prefix": "ASP_"}

    @property
    def excluded_asps(self) -> set[str]:
        return {s.strip().lower() for s in self.stats_excluded_asps.split(",") if s.strip()}


asp_settings = AspSettings()
