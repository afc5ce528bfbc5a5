"""Category and LinkItem records.

Entities are plain value objects passed by copy between repositories and
callers. The external (JSON/document) form uses camelCase keys, matching what
the local store and the document databases persist.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional


def _clean(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value)
    return text if text.strip() else None


class _Optionals:
    """Blank optional fields are stored and returned as None."""

    _optional: tuple[str, ...] = ("description", "icon")

    def __post_init__(self) -> None:
        for name in self._optional:
            object.__setattr__(self, name, _clean(getattr(self, name)))


@dataclass(frozen=True)
class CategoryDraft(_Optionals):
    """Category payload before an id has been assigned."""

    name: str
    description: Optional[str] = None
    icon: Optional[str] = None

    def with_id(self, category_id: str) -> "Category":
        return Category(id=category_id, name=self.name, description=self.description, icon=self.icon)

    def to_document(self) -> dict:
        return {"name": self.name, "description": self.description, "icon": self.icon}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CategoryDraft":
        return cls(
            name=str(data.get("name") or ""),
            description=_clean(data.get("description")),
            icon=_clean(data.get("icon")),
        )


@dataclass(frozen=True)
class Category(_Optionals):
    id: str
    name: str
    description: Optional[str] = None
    icon: Optional[str] = None

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name, "description": self.description, "icon": self.icon}

    def to_document(self) -> dict:
        """Stored fields, without the id."""
        return {"name": self.name, "description": self.description, "icon": self.icon}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], *, id: Optional[str] = None) -> "Category":
        return cls(
            id=str(id if id is not None else data.get("id") or ""),
            name=str(data.get("name") or ""),
            description=_clean(data.get("description")),
            icon=_clean(data.get("icon")),
        )


@dataclass(frozen=True)
class LinkDraft(_Optionals):
    """LinkItem payload before an id has been assigned."""

    _optional = ("description", "icon", "icon_source")

    title: str
    url: str
    category_id: str
    description: Optional[str] = None
    icon: Optional[str] = None
    icon_source: Optional[str] = None

    def with_id(self, link_id: str) -> "LinkItem":
        return LinkItem(
            id=link_id,
            title=self.title,
            url=self.url,
            category_id=self.category_id,
            description=self.description,
            icon=self.icon,
            icon_source=self.icon_source,
        )

    def to_document(self) -> dict:
        return {
            "title": self.title,
            "url": self.url,
            "description": self.description,
            "categoryId": self.category_id,
            "icon": self.icon,
            "iconSource": self.icon_source,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "LinkDraft":
        return cls(
            title=str(data.get("title") or ""),
            url=str(data.get("url") or ""),
            category_id=str(data.get("categoryId") or ""),
            description=_clean(data.get("description")),
            icon=_clean(data.get("icon")),
            icon_source=_clean(data.get("iconSource")),
        )


@dataclass(frozen=True)
class LinkItem(_Optionals):
    _optional = ("description", "icon", "icon_source")

    id: str
    title: str
    url: str
    category_id: str
    description: Optional[str] = None
    icon: Optional[str] = None
    icon_source: Optional[str] = None

    def to_dict(self) -> dict:
        return {"id": self.id, **self.to_document()}

    def to_document(self) -> dict:
        """Stored fields, without the id."""
        return {
            "title": self.title,
            "url": self.url,
            "description": self.description,
            "categoryId": self.category_id,
            "icon": self.icon,
            "iconSource": self.icon_source,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], *, id: Optional[str] = None) -> "LinkItem":
        return cls(
            id=str(id if id is not None else data.get("id") or ""),
            title=str(data.get("title") or ""),
            url=str(data.get("url") or ""),
            category_id=str(data.get("categoryId") or ""),
            description=_clean(data.get("description")),
            icon=_clean(data.get("icon")),
            icon_source=_clean(data.get("iconSource")),
        )


DEFAULT_CATEGORIES: tuple[Category, ...] = (
    Category(id="1", name="General", description="Useful general links", icon="Globe"),
    Category(id="2", name="Work", description="Work-related tools and resources", icon="Briefcase"),
    Category(id="3", name="Development", description="Coding and development links", icon="Code"),
    Category(id="4", name="Learning", description="Educational resources", icon="BookOpen"),
)

DEFAULT_LINKS: tuple[LinkItem, ...] = (
    LinkItem(id="1", title="Google", url="https://google.com", description="Search engine", category_id="1", icon="Zap"),
    LinkItem(
        id="2",
        title="Next.js Docs",
        url="https://nextjs.org/docs",
        description="The React Framework for Production",
        category_id="3",
        icon="FileText",
    ),
    LinkItem(
        id="3",
        title="Tailwind CSS",
        url="https://tailwindcss.com",
        description="A utility-first CSS framework",
        category_id="3",
        icon="Palette",
    ),
    LinkItem(id="4", title="GitHub", url="https://github.com", description="Code hosting platform", category_id="2", icon="Github"),
    LinkItem(
        id="5",
        title="MDN Web Docs",
        url="https://developer.mozilla.org",
        description="Resources for developers, by developers",
        category_id="4",
        icon="BookOpen",
    ),
)
