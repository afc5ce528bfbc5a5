"""Public directory: categories with their links.

Every request reads through the data service; nothing is memoised here, so
writes from other workers, scripts or direct database edits show up on the
next request.
"""
from __future__ import annotations

import logging

from fastapi import APIRouter

from linkhub.core.errors import LinkHubError
from linkhub.services import data_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["public"])


def _build_directory() -> list[dict]:
    directory = []
    for category in data_service.get_categories():
        links = data_service.get_links_by_category_id(category.id)
        directory.append({**category.to_dict(), "links": [link.to_dict() for link in links]})
    return directory


@router.get("/")
def directory():
    try:
        value = _build_directory()
    except LinkHubError:
        logger.exception("building the public directory failed")
        raise
    logger.info("public directory built with %d categories", len(value))
    return value


@router.get("/api/categories")
def public_categories():
    try:
        categories = data_service.get_categories()
    except LinkHubError:
        logger.exception("fetching public categories failed")
        raise
    logger.info("fetched %d categories for the public page", len(categories))
    return [c.to_dict() for c in categories]


@router.get("/api/categories/{category_id}/links")
def public_links(category_id: str):
    try:
        links = data_service.get_links_by_category_id(category_id)
    except LinkHubError:
        logger.exception("fetching public links for category %s failed", category_id)
        raise
    logger.info("fetched %d links for category %s", len(links), category_id)
    return [link.to_dict() for link in links]
