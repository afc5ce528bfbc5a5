"""
CRUD facade used by routers and scripts.

Every function fetches the active repository from the selector and delegates a
single call; errors are not caught here.
"""
from __future__ import annotations

from typing import Optional

from linkhub.domain.entities import Category, CategoryDraft, LinkDraft, LinkItem
from linkhub.services.selector import get_data_service


# -------------------------- categories --------------------------
def get_categories() -> list[Category]:
    return get_data_service().list_categories()


def get_category(category_id: str) -> Optional[Category]:
    return get_data_service().get_category(category_id)


def add_category(draft: CategoryDraft) -> Category:
    return get_data_service().add_category(draft)


def update_category(category: Category) -> Optional[Category]:
    return get_data_service().update_category(category)


def delete_category(category_id: str) -> bool:
    """Removes the category and all of its links."""
    return get_data_service().delete_category(category_id)


# -------------------------- links --------------------------
def get_links() -> list[LinkItem]:
    return get_data_service().list_links()


def get_links_by_category_id(category_id: str) -> list[LinkItem]:
    return get_data_service().list_links_by_category(category_id)


def get_link(link_id: str) -> Optional[LinkItem]:
    return get_data_service().get_link(link_id)


def add_link(draft: LinkDraft) -> LinkItem:
    return get_data_service().add_link(draft)


def update_link(link: LinkItem) -> Optional[LinkItem]:
    return get_data_service().update_link(link)


def delete_link(link_id: str) -> bool:
    return get_data_service().delete_link(link_id)
