"""Site data access."""

import logging
from typing import Any, Dict, Optional

from sqlalchemy import select

from netops_core.db.builders import FilterBuilder, Page, PageRequest
from netops_core.db.models import Container, Site
from netops_core.stores.base import BaseStore
from netops_core.stores.records import (
    CONTAINER_COLUMNS,
    SITE_COLUMNS,
    container_to_dict,
    site_to_dict,
)

log = logging.getLogger(__name__)


class SiteStore(BaseStore):
    model = Site
    entity_name = 'Site'
    columns = SITE_COLUMNS
    writable = ('name', 'location', 'address', 'description', 'status')

    def _prepare(self, payload: Dict[str, Any], creating: bool) -> Dict[str, Any]:
        values = super()._prepare(payload, creating)
        if creating and values.get('status') is None:
            values['status'] = 'active'
        return values

    def _to_dict(self, row: Dict[str, Any]) -> Dict[str, Any]:
        return site_to_dict(row)

    async def find_all(
        self,
        search: Optional[str] = None,
        status: Optional[str] = None,
        page: Optional[PageRequest] = None,
    ) -> Page:
        """
        List sites newest first.

        Args:
            search: Case-insensitive substring matched against name or location
            status: Exact status match
            page: Page and limit
        """
        filters = FilterBuilder(self.table).search(search, 'name', 'location').equals('status', status)
        return await self._paginate(self._select(), filters, page or PageRequest())

    async def find_by_id_with_containers(self, site_id: str) -> Optional[Dict]:
        """Get a site with every container located at it (newest first)."""
        site = await self.find_by_id(site_id)
        if site is None:
            return None

        containers = Container.__table__
        rows = await self.db.fetch_all(
            select(*(containers.c[name] for name in CONTAINER_COLUMNS))
            .where(containers.c.site_id == site_id)
            .order_by(containers.c.created_at.desc(), containers.c.id)
        )
        site['containers'] = [container_to_dict(row) for row in rows]
        return site
