"""
Shared route dependencies: the persistence handle, entity stores and paging.
"""

from typing import Optional

from fastapi import Depends, Query, Request

from netops_core.config import get_settings
from netops_core.db.builders import PageRequest
from netops_core.db.session import Database
from netops_core.exceptions import ValidationError
from netops_core.stores import ContainerStore, DeviceStore, SiteStore, UserStore


def get_database(request: Request) -> Database:
    """The Database opened by the application lifespan."""
    return request.app.state.db


def get_user_store(db: Database = Depends(get_database)) -> UserStore:
    return UserStore(db)


def get_site_store(db: Database = Depends(get_database)) -> SiteStore:
    return SiteStore(db)


def get_container_store(db: Database = Depends(get_database)) -> ContainerStore:
    return ContainerStore(db)


def get_device_store(db: Database = Depends(get_database)) -> DeviceStore:
    return DeviceStore(db)


def get_page_request(
    page: int = Query(1, description="Page number (1-indexed)"),
    limit: Optional[int] = Query(None, description="Items per page"),
) -> PageRequest:
    """
    Read page/limit query parameters.

    Raises:
        ValidationError: if page < 1 or limit is outside 1..MAX_PAGE_SIZE
    """
    settings = get_settings()
    if limit is None:
        limit = settings.DEFAULT_PAGE_SIZE

    errors = []
    if page < 1:
        errors.append({'field': 'page', 'message': 'Page must be at least 1'})
    if not 1 <= limit <= settings.MAX_PAGE_SIZE:
        errors.append({
            'field': 'limit',
            'message': f'Limit must be between 1 and {settings.MAX_PAGE_SIZE}',
        })
    if errors:
        raise ValidationError(field_errors=errors)

    return PageRequest(page=page, limit=limit)
