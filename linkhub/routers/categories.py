"""Admin actions for categories."""
from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException

from linkhub.core.errors import LinkHubError
from linkhub.core.revalidation import revalidate_path
from linkhub.routers.schemas import CategoryIn
from linkhub.services import data_service

logger = logging.getLogger(__name__)

ADMIN_PATH = "/admin/categories"

router = APIRouter(prefix=ADMIN_PATH, tags=["categories"])


def _revalidate() -> None:
    revalidate_path(ADMIN_PATH)
    revalidate_path("/")


@router.get("")
def list_categories():
    try:
        categories = data_service.get_categories()
    except LinkHubError:
        logger.exception("list categories failed")
        raise
    logger.info("fetched %d categories", len(categories))
    return [c.to_dict() for c in categories]


@router.get("/{category_id}")
def get_category(category_id: str):
    category = data_service.get_category(category_id)
    if not category:
        raise HTTPException(404, "Category not found")
    return category.to_dict()


@router.post("", status_code=201)
def add_category(payload: CategoryIn):
    logger.info("adding category %r", payload.name)
    try:
        category = data_service.add_category(payload.to_draft())
    except LinkHubError:
        logger.exception("add category %r failed", payload.name)
        raise
    logger.info("added category %s", category.id)
    _revalidate()
    return category.to_dict()


@router.put("/{category_id}")
def update_category(category_id: str, payload: CategoryIn):
    logger.info("updating category %s", category_id)
    try:
        category = data_service.update_category(payload.to_entity(category_id))
    except LinkHubError:
        logger.exception("update category %s failed", category_id)
        raise
    if category is None:
        logger.warning("category %s not found for update", category_id)
        raise HTTPException(404, "Category not found")
    _revalidate()
    return category.to_dict()


@router.delete("/{category_id}")
def delete_category(category_id: str):
    logger.info("deleting category %s", category_id)
    try:
        deleted = data_service.delete_category(category_id)
    except LinkHubError:
        logger.exception("delete category %s failed", category_id)
        raise
    logger.info("delete category %s result: %s", category_id, deleted)
    if not deleted:
        raise HTTPException(404, "Category not found")
    _revalidate()
    revalidate_path("/admin/links")
    return {"deleted": True, "id": category_id}
