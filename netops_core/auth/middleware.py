"""
FastAPI Authentication Middleware for NetOps

Provides the dependencies that gate protected routes:

- authenticate: verifies the bearer token, loads the user from the database and
  attaches it to ``request.state.user``
- RoleChecker: admits only users whose stored role is in an allowed set

Routes declare them in that order:

    @router.post("", dependencies=[Depends(authenticate), Depends(RoleChecker([Role.ADMIN]))])
"""

import logging
from typing import Iterable, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel

from netops_core.db.models import Role
from netops_core.exceptions import AuthenticationError, AuthorizationError
from netops_core.stores.users import UserStore

from .jwt import TokenType, decode_token, is_token_expired

log = logging.getLogger(__name__)

# HTTP Bearer token scheme; missing credentials are reported by authenticate()
bearer_scheme = HTTPBearer(auto_error=False)

TOKEN_REQUIRED = 'Authentication required. Please provide a valid token.'
TOKEN_INVALID = 'Invalid or expired token. Please login again.'
USER_NOT_FOUND = 'User not found. Token is invalid.'


class CurrentUser(BaseModel):
    """The authenticated user attached to the request"""
    id: str
    username: str
    email: str
    role: Role
    created_at: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN


async def authenticate(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> CurrentUser:
    """
    Authenticate the request from its bearer token.

    The user row is re-read on every request, so a deleted account is rejected
    immediately and role changes apply to the next request.

    Raises:
        AuthenticationError: 401 if the token is missing, invalid, expired or
            names a user that no longer exists
    """
    if credentials is None or not credentials.credentials.strip():
        log.warning(f"No authorization credentials provided for {request.url.path}")
        raise AuthenticationError(TOKEN_REQUIRED)

    token_data = decode_token(credentials.credentials)
    if token_data is None:
        raise AuthenticationError(TOKEN_INVALID)

    if is_token_expired(token_data):
        log.warning(f"Expired token for user: {token_data.sub}")
        raise AuthenticationError(TOKEN_INVALID)

    if token_data.type != TokenType.ACCESS:
        log.warning(f"Non-access token used for authentication: {token_data.type}")
        raise AuthenticationError(TOKEN_INVALID)

    user = await UserStore(request.app.state.db).find_by_id(token_data.sub)
    if user is None:
        log.warning(f"Token presented for unknown user: {token_data.sub}")
        raise AuthenticationError(USER_NOT_FOUND)

    current_user = CurrentUser(
        id=user['id'],
        username=user['username'],
        email=user['email'],
        role=user['role'],
        created_at=user['createdAt'],
    )
    request.state.user = current_user
    return current_user


def get_current_user(request: Request) -> CurrentUser:
    """
    Return the user attached by authenticate().

    Raises:
        AuthenticationError: if the request was not authenticated first
    """
    user = getattr(request.state, 'user', None)
    if user is None:
        raise AuthenticationError(TOKEN_REQUIRED)
    return user


class RoleChecker:
    """
    Dependency class for checking user roles.

    Usage:
        admin_only = RoleChecker([Role.ADMIN])

        @router.delete("/{id}", dependencies=[Depends(authenticate), Depends(admin_only)])
        async def delete_site(...): ...
    """

    def __init__(self, required_roles: Iterable[Role]):
        """
        Initialize the role checker.

        Args:
            required_roles: Roles that are allowed access
        """
        self.required_roles = frozenset(Role(role) for role in required_roles)

    def allows(self, role: Role) -> bool:
        return role in self.required_roles

    async def __call__(self, request: Request) -> CurrentUser:
        """
        Check that the authenticated user holds one of the required roles.

        Raises:
            AuthenticationError: 401 if no user is attached to the request
            AuthorizationError: 403 if the user's role is not allowed
        """
        user = get_current_user(request)

        if not self.allows(user.role):
            needed = ' or '.join(sorted(role.value for role in self.required_roles))
            log.warning(
                f"User {user.username} lacks required roles. "
                f"Has: {user.role.value}, Needs: {needed}"
            )
            raise AuthorizationError(f"Insufficient permissions. {needed} access required.")

        return user


admin_only = RoleChecker([Role.ADMIN])
