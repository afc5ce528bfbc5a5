"""Request bodies accepted by the admin endpoints."""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from linkhub.domain.entities import Category, CategoryDraft, LinkDraft, LinkItem


class CategoryIn(BaseModel):
    name: str = Field(min_length=1)
    description: Optional[str] = None
    icon: Optional[str] = None

    def to_draft(self) -> CategoryDraft:
        return CategoryDraft.from_dict(self.model_dump())

    def to_entity(self, category_id: str) -> Category:
        return self.to_draft().with_id(category_id)


class LinkIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(min_length=1)
    url: str = Field(min_length=1)
    category_id: str = Field(min_length=1, alias="categoryId")
    description: Optional[str] = None
    icon: Optional[str] = None
    icon_source: Optional[str] = Field(default=None, alias="iconSource")

    def to_draft(self) -> LinkDraft:
        return LinkDraft.from_dict(self.model_dump(by_alias=True))

    def to_entity(self, link_id: str) -> LinkItem:
        return self.to_draft().with_id(link_id)
