"""SQLAlchemy models for the categories/links tables."""
from __future__ import annotations

from sqlalchemy import Column, String, Text

from .session import Base


class CategoryRow(Base):
    __tablename__ = "categories"

    id = Column(String(64), primary_key=True)
    name = Column(Text, nullable=False)
    description = Column(Text, nullable=True)
    icon = Column(String(128), nullable=True)


class LinkRow(Base):
    __tablename__ = "links"

    id = Column(String(64), primary_key=True)
    title = Column(Text, nullable=False)
    url = Column(Text, nullable=False)
    description = Column(Text, nullable=True)
    # soft reference: no FK constraint, the cascade is done by the repository
    category_id = Column("categoryId", String(64), nullable=False, index=True)
    icon = Column(String(128), nullable=True)
    icon_source = Column("iconSource", String(32), nullable=True)
