"""Admin actions for links."""
from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException

from linkhub.core.errors import LinkHubError
from linkhub.core.revalidation import revalidate_path
from linkhub.routers.schemas import LinkIn
from linkhub.services import data_service

logger = logging.getLogger(__name__)

ADMIN_PATH = "/admin/links"

router = APIRouter(prefix=ADMIN_PATH, tags=["links"])


def _revalidate() -> None:
    revalidate_path(ADMIN_PATH)
    revalidate_path("/")


@router.get("")
def list_links(category_id: Optional[str] = None):
    try:
        if category_id:
            links = data_service.get_links_by_category_id(category_id)
        else:
            links = data_service.get_links()
    except LinkHubError:
        logger.exception("list links failed (category=%s)", category_id)
        raise
    logger.info("fetched %d links", len(links))
    return [link.to_dict() for link in links]


@router.get("/{link_id}")
def get_link(link_id: str):
    link = data_service.get_link(link_id)
    if not link:
        raise HTTPException(404, "Link not found")
    return link.to_dict()


@router.post("", status_code=201)
def add_link(payload: LinkIn):
    logger.info("adding link %r to category %s", payload.title, payload.category_id)
    try:
        link = data_service.add_link(payload.to_draft())
    except LinkHubError:
        logger.exception("add link %r failed", payload.title)
        raise
    logger.info("added link %s", link.id)
    _revalidate()
    return link.to_dict()


@router.put("/{link_id}")
def update_link(link_id: str, payload: LinkIn):
    logger.info("updating link %s", link_id)
    try:
        link = data_service.update_link(payload.to_entity(link_id))
    except LinkHubError:
        logger.exception("update link %s failed", link_id)
        raise
    if link is None:
        logger.warning("link %s not found for update", link_id)
        raise HTTPException(404, "Link not found")
    _revalidate()
    return link.to_dict()


@router.delete("/{link_id}")
def delete_link(link_id: str):
    logger.info("deleting link %s", link_id)
    try:
        deleted = data_service.delete_link(link_id)
    except LinkHubError:
        logger.exception("delete link %s failed", link_id)
        raise
    logger.info("delete link %s result: %s", link_id, deleted)
    if not deleted:
        raise HTTPException(404, "Link not found")
    _revalidate()
    return {"deleted": True, "id": link_id}
