"""
Container Routes

CRUD operations for containers (racks, cabinets, closets and rooms).
"""

import logging
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from netops_core.auth.middleware import admin_only, authenticate
from netops_core.db.builders import PageRequest
from netops_core.exceptions import NotFoundError
from netops_core.stores import ContainerStore
from netops_core.utils.responses import success_response

from netops_api.dependencies import get_container_store, get_page_request
from netops_api.schemas import ContainerCreate, ContainerUpdate
from netops_api.schemas.common import ContainerStatus, ContainerType

log = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(authenticate)])


@router.get("")
async def list_containers(
    site_id: Optional[UUID] = Query(None, alias="siteId", description="Filter by site"),
    type: Optional[ContainerType] = Query(None, description="Filter by type"),
    status: Optional[ContainerStatus] = Query(None, description="Filter by status"),
    page: PageRequest = Depends(get_page_request),
    store: ContainerStore = Depends(get_container_store),
):
    """List containers, newest first, each with its site."""
    result = await store.find_all(
        site_id=str(site_id) if site_id else None,
        type=type,
        status=status,
        page=page,
    )
    return success_response(data=result.items, pagination=result.pagination())


@router.get("/{container_id}")
async def get_container(
    container_id: UUID,
    store: ContainerStore = Depends(get_container_store),
):
    """Get a container with its site and devices."""
    container = await store.find_by_id_with_relations(str(container_id))
    if not container:
        raise NotFoundError('Container not found', 'container', str(container_id))
    return success_response(data=container)


@router.post("", status_code=status.HTTP_201_CREATED, dependencies=[Depends(admin_only)])
async def create_container(
    request: ContainerCreate,
    store: ContainerStore = Depends(get_container_store),
):
    """Create a container at an existing site."""
    container = await store.create_with_site(request.create_fields())
    return success_response(data=container)


@router.put("/{container_id}", dependencies=[Depends(admin_only)])
async def update_container(
    container_id: UUID,
    request: ContainerUpdate,
    store: ContainerStore = Depends(get_container_store),
):
    """Update only the fields present in the body."""
    container = await store.update_with_site(str(container_id), request.update_fields())
    if not container:
        raise NotFoundError('Container not found', 'container', str(container_id))
    return success_response(data=container)


@router.delete("/{container_id}", dependencies=[Depends(admin_only)])
async def delete_container(
    container_id: UUID,
    store: ContainerStore = Depends(get_container_store),
):
    """Delete a container. Fails while devices still reference it."""
    if not await store.delete(str(container_id)):
        raise NotFoundError('Container not found', 'container', str(container_id))
    return success_response(data={"message": "Container deleted successfully"})
