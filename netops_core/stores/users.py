"""
User data access.

Passwords are hashed on every write and never returned by reads unless the
caller asks for the hash explicitly (login only).
"""

import logging
from typing import Any, Dict, Optional

from sqlalchemy import or_, select

from netops_core.auth.password import hash_password_async, verify_password_async
from netops_core.db.builders import FilterBuilder, Page, PageRequest
from netops_core.db.models import Role, User
from netops_core.stores.base import BaseStore
from netops_core.stores.records import USER_COLUMNS, user_to_dict

log = logging.getLogger(__name__)


class UserStore(BaseStore):
    model = User
    entity_name = 'User'
    columns = USER_COLUMNS
    writable = ('username', 'email', 'password', 'role')

    def _prepare(self, payload: Dict[str, Any], creating: bool) -> Dict[str, Any]:
        values = super()._prepare(payload, creating)
        if values.get('email'):
            values['email'] = values['email'].lower()
        if isinstance(values.get('role'), Role):
            values['role'] = values['role'].value
        if creating and values.get('role') is None:
            values['role'] = Role.USER.value
        return values

    def _to_dict(self, row: Dict[str, Any]) -> Dict[str, Any]:
        return user_to_dict(row)

    def _select_user(self, include_password: bool = False):
        names = self.columns + ('password',) if include_password else self.columns
        return select(*self._columns(names))

    async def _find_one(self, condition, include_password: bool = False) -> Optional[Dict]:
        row = await self.db.fetch_one(self._select_user(include_password).where(condition))
        return self._to_dict(row) if row else None

    async def find_by_id(self, user_id: str, include_password: bool = False) -> Optional[Dict]:
        return await self._find_one(self.table.c.id == user_id, include_password)

    async def find_by_email(self, email: str, include_password: bool = False) -> Optional[Dict]:
        return await self._find_one(self.table.c.email == email.lower(), include_password)

    async def find_by_username(self, username: str) -> Optional[Dict]:
        return await self._find_one(self.table.c.username == username)

    async def find_by_email_or_username(self, email: str, username: str) -> Optional[Dict]:
        """Get any user that already holds this email or this username."""
        return await self._find_one(
            or_(self.table.c.email == email.lower(), self.table.c.username == username)
        )

    async def find_all(
        self,
        role: Optional[str] = None,
        page: Optional[PageRequest] = None,
    ) -> Page:
        role = role.value if isinstance(role, Role) else role
        filters = FilterBuilder(self.table).equals('role', role)
        return await self._paginate(self._select(), filters, page or PageRequest())

    async def create(self, payload: Dict[str, Any]) -> Dict:
        """Create a user, hashing the plain text password first."""
        values = dict(payload)
        values['password'] = await hash_password_async(values['password'])
        return await super().create(values)

    async def update(self, user_id: str, payload: Dict[str, Any]) -> Optional[Dict]:
        values = dict(payload)
        if values.get('password'):
            values['password'] = await hash_password_async(values['password'])
        return await super().update(user_id, values)

    async def verify_password(self, user: Dict[str, Any], password: str) -> bool:
        """Check a plain text password against a user loaded with its hash."""
        return await verify_password_async(password, user.get('password', ''))
