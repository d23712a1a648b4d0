"""Device data access."""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import select

from netops_core.db.builders import Page, PageRequest
from netops_core.db.models import Container, Device, Site
from netops_core.stores.base import BaseStore
from netops_core.stores.records import (
    DEVICE_COLUMNS,
    container_summary,
    device_to_dict,
    site_summary,
)

log = logging.getLogger(__name__)


def _with_container(row: Dict[str, Any]) -> Dict[str, Any]:
    record = device_to_dict(row)
    record['container'] = container_summary(row, prefix='container__')
    return record


def _with_relations(row: Dict[str, Any]) -> Dict[str, Any]:
    record = _with_container(row)
    if record['container'] is not None:
        record['container']['siteId'] = row['container__site_id']
        record['container']['site'] = site_summary(row, prefix='site__')
    return record


class DeviceStore(BaseStore):
    model = Device
    entity_name = 'Device'
    columns = DEVICE_COLUMNS
    writable = (
        'name', 'type', 'manufacturer', 'model', 'serial_number', 'ip_address',
        'mac_address', 'container_id', 'status', 'notes',
    )

    def _prepare(self, payload: Dict[str, Any], creating: bool) -> Dict[str, Any]:
        values = super()._prepare(payload, creating)
        # MAC addresses are stored upper-case on every write
        if values.get('mac_address'):
            values['mac_address'] = values['mac_address'].upper()
        if creating and values.get('status') is None:
            values['status'] = 'active'
        return values

    def _to_dict(self, row: Dict[str, Any]) -> Dict[str, Any]:
        return device_to_dict(row)

    def _select_with_container(self, with_site: bool = False):
        containers = Container.__table__
        columns = [
            *self._columns(),
            containers.c.id.label('container__id'),
            containers.c.name.label('container__name'),
            containers.c.type.label('container__type'),
            containers.c.location.label('container__location'),
        ]
        joined = self.table.outerjoin(containers, self.table.c.container_id == containers.c.id)

        if with_site:
            sites = Site.__table__
            columns += [
                containers.c.site_id.label('container__site_id'),
                sites.c.id.label('site__id'),
                sites.c.name.label('site__name'),
                sites.c.location.label('site__location'),
            ]
            joined = joined.outerjoin(sites, containers.c.site_id == sites.c.id)

        return select(*columns).select_from(joined)

    async def find_all(
        self,
        container_id: Optional[str] = None,
        type: Optional[str] = None,
        status: Optional[str] = None,
        page: Optional[PageRequest] = None,
    ) -> Page:
        """List devices newest first, each with a summary of its container."""
        filters = self.filters(container_id=container_id, type=type, status=status)
        return await self._paginate(
            self._select_with_container(),
            filters,
            page or PageRequest(),
            convert=_with_container,
        )

    async def find_by_id_with_container(self, device_id: str) -> Optional[Dict]:
        row = await self.db.fetch_one(
            self._select_with_container().where(self.table.c.id == device_id)
        )
        return _with_container(row) if row else None

    async def find_by_id_with_relations(self, device_id: str) -> Optional[Dict]:
        """Get a device with its container and the container's site."""
        row = await self.db.fetch_one(
            self._select_with_container(with_site=True).where(self.table.c.id == device_id)
        )
        return _with_relations(row) if row else None

    async def find_by_serial_number(self, serial_number: str) -> Optional[Dict]:
        """Get the first device with this serial number, with its container."""
        row = await self.db.fetch_one(
            self._select_with_container()
            .where(self.table.c.serial_number == serial_number)
            .order_by(self.table.c.created_at.desc(), self.table.c.id)
            .limit(1)
        )
        return _with_container(row) if row else None

    async def find_by_ip_address(self, ip_address: str) -> List[Dict]:
        """Get every device assigned this IPv4 address, newest first."""
        rows = await self.db.fetch_all(
            self._select_with_container()
            .where(self.table.c.ip_address == ip_address)
            .order_by(self.table.c.created_at.desc(), self.table.c.id)
        )
        return [_with_container(row) for row in rows]

    async def create_with_container(self, payload: Dict[str, Any]) -> Dict:
        created = await self.create(payload)
        return await self.find_by_id_with_container(created['id'])

    async def update_with_container(self, device_id: str, payload: Dict[str, Any]) -> Optional[Dict]:
        updated = await self.update(device_id, payload)
        if updated is None:
            return None
        return await self.find_by_id_with_container(device_id)
