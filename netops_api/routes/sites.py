"""
Site Routes

CRUD operations for sites. Reads require authentication; writes require the
admin role.
"""

import logging
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from netops_core.auth.middleware import admin_only, authenticate
from netops_core.db.builders import PageRequest
from netops_core.exceptions import NotFoundError
from netops_core.stores import SiteStore
from netops_core.utils.responses import success_response

from netops_api.dependencies import get_page_request, get_site_store
from netops_api.schemas import SiteCreate, SiteUpdate
from netops_api.schemas.common import SiteStatus

log = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(authenticate)])


@router.get("")
async def list_sites(
    search: Optional[str] = Query(None, description="Match name or location"),
    status: Optional[SiteStatus] = Query(None, description="Filter by status"),
    page: PageRequest = Depends(get_page_request),
    store: SiteStore = Depends(get_site_store),
):
    """List sites, newest first."""
    result = await store.find_all(search=search, status=status, page=page)
    return success_response(data=result.items, pagination=result.pagination())


@router.get("/{site_id}")
async def get_site(
    site_id: UUID,
    store: SiteStore = Depends(get_site_store),
):
    """Get a site with its containers."""
    site = await store.find_by_id_with_containers(str(site_id))
    if not site:
        raise NotFoundError('Site not found', 'site', str(site_id))
    return success_response(data=site)


@router.post("", status_code=status.HTTP_201_CREATED, dependencies=[Depends(admin_only)])
async def create_site(
    request: SiteCreate,
    store: SiteStore = Depends(get_site_store),
):
    """Create a site."""
    site = await store.create(request.create_fields())
    return success_response(data=site)


@router.put("/{site_id}", dependencies=[Depends(admin_only)])
async def update_site(
    site_id: UUID,
    request: SiteUpdate,
    store: SiteStore = Depends(get_site_store),
):
    """Update only the fields present in the body."""
    site = await store.update(str(site_id), request.update_fields())
    if not site:
        raise NotFoundError('Site not found', 'site', str(site_id))
    return success_response(data=site)


@router.delete("/{site_id}", dependencies=[Depends(admin_only)])
async def delete_site(
    site_id: UUID,
    store: SiteStore = Depends(get_site_store),
):
    """Delete a site. Fails while containers still reference it."""
    if not await store.delete(str(site_id)):
        raise NotFoundError('Site not found', 'site', str(site_id))
    return success_response(data={"message": "Site deleted successfully"})
