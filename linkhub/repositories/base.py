"""Repository interface shared by every storage backend."""
from __future__ import annotations

from typing import Optional, Protocol, runtime_checkable

from linkhub.domain.entities import Category, CategoryDraft, LinkDraft, LinkItem


@runtime_checkable
class DataRepository(Protocol):
    """CRUD over categories and links for one physical store."""

    def list_categories(self) -> list[Category]:
        ...

    def get_category(self, category_id: str) -> Optional[Category]:
        ...

    def add_category(self, draft: CategoryDraft) -> Category:
        ...

    def update_category(self, category: Category) -> Optional[Category]:
        """Overwrite every stored field; None when the id does not exist."""
        ...

    def delete_category(self, category_id: str) -> bool:
        """Delete the category and every link pointing at it."""
        ...

    def list_links(self) -> list[LinkItem]:
        ...

    def list_links_by_category(self, category_id: str) -> list[LinkItem]:
        ...

    def get_link(self, link_id: str) -> Optional[LinkItem]:
        ...

    def add_link(self, draft: LinkDraft) -> LinkItem:
        ...

    def update_link(self, link: LinkItem) -> Optional[LinkItem]:
        ...

    def delete_link(self, link_id: str) -> bool:
        ...

    def close(self) -> None:
        ...


@runtime_checkable
class HealthCheckable(Protocol):
    """Networked repositories expose a cheap liveness probe."""

    def health_check(self) -> None:
        ...
