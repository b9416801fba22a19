"""AspScope DB 모델 -- 상품/ASP 소스/출연자. (SQLite/PostgreSQL 호환)"""

from datetime import datetime

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import DeclarativeBase, relationship


class Base(DeclarativeBase):
    pass


# ─────────────────────────────────────────────
# 1. 상품
# ─────────────────────────────────────────────
class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True)
    normalized_product_id = Column(String(100), nullable=False, unique=True)
    title = Column(Text, nullable=False)
    default_thumbnail_url = Column(Text)
    created_at = Column(DateTime, default=datetime.utcnow)

    sources = relationship("ProductSource", back_populates="product")
    performers = relationship("ProductPerformer", back_populates="product")


# ─────────────────────────────────────────────
# 2. ASP 소스 (상품 x ASP)
# ─────────────────────────────────────────────
class ProductSource(Base):
    __tablename__ = "product_sources"

    id = Column(Integer, primary_key=True)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False)
    # raw value from the crawler: "FANZA", "DTI", "カリビアンコム", ...
    asp_name = Column(String(100))
    original_product_id = Column(String(200), nullable=False)
    affiliate_url = Column(Text)
    price = Column(Integer)
    created_at = Column(DateTime, default=datetime.utcnow)

    product = relationship("Product", back_populates="sources")

    __table_args__ = (
        UniqueConstraint("asp_name", "original_product_id", name="uq_product_sources_asp_original"),
        Index("ix_product_sources_product", "product_id"),
        Index("ix_product_sources_asp", "asp_name"),
    )


# ─────────────────────────────────────────────
# 3. 출연자
# ─────────────────────────────────────────────
class Performer(Base):
    __tablename__ = "performers"

    id = Column(Integer, primary_key=True)
    name = Column(String(200), nullable=False, unique=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    products = relationship("ProductPerformer", back_populates="performer")


class ProductPerformer(Base):
    __tablename__ = "product_performers"

    product_id = Column(Integer, ForeignKey("products.id"), primary_key=True)
    performer_id = Column(Integer, ForeignKey("performers.id"), primary_key=True)

    product = relationship("Product", back_populates="performers")
    performer = relationship("Performer", back_populates="products")

    __table_args__ = (
        Index("ix_product_performers_performer", "performer_id"),
    )
