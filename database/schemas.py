"""Pydantic 스키마 -- API 응답 직렬화.

ASP 필드 네이밍 규칙:
  - asp / slug: 정규화된 소문자 ID (fanza, caribbeancom, ...)
  - raw: product_sources.asp_name 에 저장된 원본 값 (FANZA, DTI, カリビアンコム, ...)
  - display_name: UI 표시명
"""

from pydantic import BaseModel, ConfigDict, Field


# ── Badge ──
class BadgeColorOut(BaseModel):
    bg: str
    text: str
    border: str
    model_config = ConfigDict(from_attributes=True)


# ── Registry ──
class AspEntryOut(BaseModel):
    id: str
    display_name: str
    db_names: list[str]
    ja_aliases: list[str] = Field(default_factory=list)
    parent_id: str | None = None
    url_pattern: str | None = None
    display_order: int | None = None
    in_adult_v: bool
    in_fanza: bool
    provider_label: str
    badge_color: BadgeColorOut
    model_config = ConfigDict(from_attributes=True)


# ── Normalize ──
class AspNormalizeOut(BaseModel):
    raw: str
    url: str | None = None
    asp: str
    display_name: str
    is_valid: bool = Field(description="정규화 결과가 레지스트리에 등록된 ASP인지")
    is_dti_sub_service: bool
    badge_color: BadgeColorOut


# ── Stats ──
class AspStatOut(BaseModel):
    asp: str
    display_name: str
    product_count: int = Field(description="ASP별 고유 상품 수")
    performer_count: int = Field(description="ASP별 고유 출연자 수")
