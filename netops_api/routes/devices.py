"""
Device Routes

CRUD operations for devices plus lookups by serial number and IP address.
"""

import logging
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Path, Query, status

from netops_core.auth.middleware import admin_only, authenticate
from netops_core.db.builders import PageRequest
from netops_core.exceptions import NotFoundError, ValidationError
from netops_core.stores import DeviceStore
from netops_core.utils.responses import success_response
from netops_core.validation import validate_ipv4

from netops_api.dependencies import get_device_store, get_page_request
from netops_api.schemas import DeviceCreate, DeviceUpdate
from netops_api.schemas.common import DeviceStatus, DeviceType

log = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(authenticate)])


@router.get("")
async def list_devices(
    container_id: Optional[UUID] = Query(None, alias="containerId", description="Filter by container"),
    type: Optional[DeviceType] = Query(None, description="Filter by device type"),
    status: Optional[DeviceStatus] = Query(None, description="Filter by status"),
    page: PageRequest = Depends(get_page_request),
    store: DeviceStore = Depends(get_device_store),
):
    """List devices, newest first, each with its container."""
    result = await store.find_all(
        container_id=str(container_id) if container_id else None,
        type=type,
        status=status,
        page=page,
    )
    return success_response(data=result.items, pagination=result.pagination())


@router.get("/serial/{serial_number}")
async def get_device_by_serial(
    serial_number: str = Path(..., max_length=100),
    store: DeviceStore = Depends(get_device_store),
):
    """Find a device by serial number."""
    device = await store.find_by_serial_number(serial_number)
    if not device:
        raise NotFoundError('Device not found', 'device', serial_number)
    return success_response(data=device)


@router.get("/ip/{ip_address}")
async def get_devices_by_ip(
    ip_address: str = Path(...),
    store: DeviceStore = Depends(get_device_store),
):
    """List every device assigned an IPv4 address."""
    try:
        ip_address = validate_ipv4(ip_address)
    except ValueError as e:
        raise ValidationError(field_errors=[{'field': 'ipAddress', 'message': str(e)}])

    devices = await store.find_by_ip_address(ip_address)
    return success_response(data=devices)


@router.get("/{device_id}")
async def get_device(
    device_id: UUID,
    store: DeviceStore = Depends(get_device_store),
):
    """Get a device with its container and the container's site."""
    device = await store.find_by_id_with_relations(str(device_id))
    if not device:
        raise NotFoundError('Device not found', 'device', str(device_id))
    return success_response(data=device)


@router.post("", status_code=status.HTTP_201_CREATED, dependencies=[Depends(admin_only)])
async def create_device(
    request: DeviceCreate,
    store: DeviceStore = Depends(get_device_store),
):
    """Create a device in an existing container."""
    device = await store.create_with_container(request.create_fields())
    return success_response(data=device)


@router.put("/{device_id}", dependencies=[Depends(admin_only)])
async def update_device(
    device_id: UUID,
    request: DeviceUpdate,
    store: DeviceStore = Depends(get_device_store),
):
    """Update only the fields present in the body."""
    device = await store.update_with_container(str(device_id), request.update_fields())
    if not device:
        raise NotFoundError('Device not found', 'device', str(device_id))
    return success_response(data=device)


@router.delete("/{device_id}", dependencies=[Depends(admin_only)])
async def delete_device(
    device_id: UUID,
    store: DeviceStore = Depends(get_device_store),
):
    """Delete a device."""
    if not await store.delete(str(device_id)):
        raise NotFoundError('Device not found', 'device', str(device_id))
    return success_response(data={"message": "Device deleted successfully"})
