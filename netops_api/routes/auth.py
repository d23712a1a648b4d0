"""
Authentication Routes

Handles registration, login and the current-user lookup.
"""

import logging

from fastapi import APIRouter, Depends, status

from netops_core.auth.jwt import create_access_token
from netops_core.auth.middleware import CurrentUser, authenticate
from netops_core.exceptions import AuthenticationError, ConflictError
from netops_core.stores import UserStore
from netops_core.utils.responses import success_response

from netops_api.dependencies import get_user_store
from netops_api.schemas import LoginRequest, RegisterRequest

log = logging.getLogger(__name__)

router = APIRouter()


def _token_payload(user: dict) -> dict:
    return {
        "token": create_access_token(user['id']),
        "user": {
            "id": user['id'],
            "username": user['username'],
            "email": user['email'],
            "role": user['role'],
        },
    }


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(
    request: RegisterRequest,
    store: UserStore = Depends(get_user_store),
):
    """Create a user account and return a token for it."""
    existing = await store.find_by_email_or_username(request.email, request.username)
    if existing:
        raise ConflictError('User already exists with this email or username')

    user = await store.create(request.create_fields())
    log.info(f"User registered: {user['username']}")
    return success_response(data=_token_payload(user))


@router.post("/login")
async def login(
    request: LoginRequest,
    store: UserStore = Depends(get_user_store),
):
    """Authenticate with email and password."""
    user = await store.find_by_email(request.email, include_password=True)
    if not user or not await store.verify_password(user, request.password):
        log.warning(f"Failed login for {request.email}")
        raise AuthenticationError('Invalid credentials')

    log.info(f"User logged in: {user['username']}")
    return success_response(data=_token_payload(user))


@router.get("/me")
async def me(current_user: CurrentUser = Depends(authenticate)):
    """Get the authenticated user's profile."""
    return success_response(data={
        "id": current_user.id,
        "username": current_user.username,
        "email": current_user.email,
        "role": current_user.role.value,
        "createdAt": current_user.created_at,
    })
