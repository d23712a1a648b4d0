"""Container data access."""

import logging
from typing import Any, Dict, Optional

from sqlalchemy import select

from netops_core.db.builders import Page, PageRequest
from netops_core.db.models import Container, Device, Site
from netops_core.stores.base import BaseStore
from netops_core.stores.records import (
    CONTAINER_COLUMNS,
    DEVICE_COLUMNS,
    container_to_dict,
    device_to_dict,
    site_summary,
)

log = logging.getLogger(__name__)


def _with_site(row: Dict[str, Any]) -> Dict[str, Any]:
    record = container_to_dict(row)
    record['site'] = site_summary(row, prefix='site__')
    return record


class ContainerStore(BaseStore):
    model = Container
    entity_name = 'Container'
    columns = CONTAINER_COLUMNS
    writable = ('name', 'type', 'site_id', 'location', 'capacity', 'status')

    def _prepare(self, payload: Dict[str, Any], creating: bool) -> Dict[str, Any]:
        values = super()._prepare(payload, creating)
        if creating:
            if values.get('capacity') is None:
                values['capacity'] = 0
            if values.get('status') is None:
                values['status'] = 'active'
        return values

    def _to_dict(self, row: Dict[str, Any]) -> Dict[str, Any]:
        return container_to_dict(row)

    def _select_with_site(self):
        sites = Site.__table__
        return (
            select(
                *self._columns(),
                sites.c.id.label('site__id'),
                sites.c.name.label('site__name'),
                sites.c.location.label('site__location'),
            )
            .select_from(self.table.outerjoin(sites, self.table.c.site_id == sites.c.id))
        )

    async def find_all(
        self,
        site_id: Optional[str] = None,
        type: Optional[str] = None,
        status: Optional[str] = None,
        page: Optional[PageRequest] = None,
    ) -> Page:
        """List containers newest first, each with a summary of its site."""
        filters = self.filters(site_id=site_id, type=type, status=status)
        return await self._paginate(
            self._select_with_site(),
            filters,
            page or PageRequest(),
            convert=_with_site,
        )

    async def find_by_id_with_site(self, container_id: str) -> Optional[Dict]:
        row = await self.db.fetch_one(
            self._select_with_site().where(self.table.c.id == container_id)
        )
        return _with_site(row) if row else None

    async def find_by_id_with_relations(self, container_id: str) -> Optional[Dict]:
        """Get a container with its site summary and every device it holds."""
        container = await self.find_by_id_with_site(container_id)
        if container is None:
            return None

        devices = Device.__table__
        rows = await self.db.fetch_all(
            select(*(devices.c[name] for name in DEVICE_COLUMNS))
            .where(devices.c.container_id == container_id)
            .order_by(devices.c.created_at.desc(), devices.c.id)
        )
        container['devices'] = [device_to_dict(row) for row in rows]
        return container

    async def create_with_site(self, payload: Dict[str, Any]) -> Dict:
        created = await self.create(payload)
        return await self.find_by_id_with_site(created['id'])

    async def update_with_site(self, container_id: str, payload: Dict[str, Any]) -> Optional[Dict]:
        updated = await self.update(container_id, payload)
        if updated is None:
            return None
        return await self.find_by_id_with_site(container_id)
