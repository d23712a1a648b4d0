"""
User Management Routes

Admin-only listing and maintenance of user accounts. Accounts are created
through /api/auth/register.
"""

import logging
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from netops_core.auth.middleware import CurrentUser, admin_only, authenticate
from netops_core.db.builders import PageRequest
from netops_core.db.models import Role
from netops_core.exceptions import NotFoundError, ValidationError
from netops_core.stores import UserStore
from netops_core.utils.responses import success_response

from netops_api.dependencies import get_page_request, get_user_store
from netops_api.schemas import UserUpdate

log = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(authenticate), Depends(admin_only)])


@router.get("")
async def list_users(
    role: Optional[Role] = Query(None, description="Filter by role"),
    page: PageRequest = Depends(get_page_request),
    store: UserStore = Depends(get_user_store),
):
    """List users, newest first."""
    result = await store.find_all(role=role, page=page)
    return success_response(data=result.items, pagination=result.pagination())


@router.get("/{user_id}")
async def get_user(
    user_id: UUID,
    store: UserStore = Depends(get_user_store),
):
    """Get a user by id."""
    user = await store.find_by_id(str(user_id))
    if not user:
        raise NotFoundError('User not found', 'user', str(user_id))
    return success_response(data=user)


@router.put("/{user_id}")
async def update_user(
    user_id: UUID,
    request: UserUpdate,
    store: UserStore = Depends(get_user_store),
):
    """Update a user's username, email, password or role."""
    user = await store.update(str(user_id), request.update_fields())
    if not user:
        raise NotFoundError('User not found', 'user', str(user_id))
    return success_response(data=user)


@router.delete("/{user_id}")
async def delete_user(
    user_id: UUID,
    current_user: CurrentUser = Depends(admin_only),
    store: UserStore = Depends(get_user_store),
):
    """Delete a user. Admins cannot delete their own account."""
    if str(user_id) == current_user.id:
        raise ValidationError('You cannot delete your own account')

    if not await store.delete(str(user_id)):
        raise NotFoundError('User not found', 'user', str(user_id))
    return success_response(data={"message": "User deleted successfully"})
