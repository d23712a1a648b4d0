"""
Base Entity Store

Shared data-access logic for every entity: read by id, filtered/paginated list,
create, partial update and delete. Subclasses declare their model, the columns
they expose and the columns callers may write, and convert rows to API dicts.

Stores never catch persistence errors; the caller classifies them.
"""

import asyncio
import logging
from typing import Any, Dict, Iterable, List, Optional, Tuple

from sqlalchemy import Table, delete, insert, select
from sqlalchemy.sql import Select

from netops_core.db.builders import FilterBuilder, Page, PageRequest, build_update
from netops_core.db.session import Database

log = logging.getLogger(__name__)


class BaseStore:
    """Data-access object for one entity type."""

    model = None
    entity_name = 'Resource'
    # Columns returned by reads, in output order
    columns: Tuple[str, ...] = ()
    # Columns accepted on create and update
    writable: Tuple[str, ...] = ()

    def __init__(self, db: Database):
        self.db = db

    @property
    def table(self) -> Table:
        return self.model.__table__

    def _columns(self, names: Optional[Iterable[str]] = None) -> List:
        return [self.table.c[name] for name in (names or self.columns)]

    def _select(self) -> Select:
        return select(*self._columns())

    def _prepare(self, payload: Dict[str, Any], creating: bool) -> Dict[str, Any]:
        """Normalize a payload before it is written. Subclasses extend this."""
        unknown = [name for name in payload if name not in self.writable]
        if unknown:
            raise ValueError(f"Unknown field(s) for {self.entity_name}: {', '.join(unknown)}")
        return dict(payload)

    def _to_dict(self, row: Dict[str, Any]) -> Dict[str, Any]:
        raise NotImplementedError

    def _to_dicts(self, rows: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
        return [self._to_dict(row) for row in rows]

    async def find_by_id(self, record_id: str) -> Optional[Dict]:
        """Get a single record by id."""
        row = await self.db.fetch_one(self._select().where(self.table.c.id == record_id))
        return self._to_dict(row) if row else None

    def filters(self, **criteria: Any) -> FilterBuilder:
        """Equality filters over this store's table; empty values are ignored."""
        builder = FilterBuilder(self.table)
        for column_name, value in criteria.items():
            builder.equals(column_name, value)
        return builder

    async def _paginate(
        self,
        statement: Select,
        filters: FilterBuilder,
        page: PageRequest,
        convert=None,
    ) -> Page:
        # Page and count share one predicate and are independent reads
        rows, total = await asyncio.gather(
            self.db.fetch_all(filters.page_statement(statement, page)),
            self.db.scalar(filters.count_statement()),
        )
        convert = convert or self._to_dict
        return Page(
            items=[convert(row) for row in rows],
            total=int(total or 0),
            page=page.page,
            limit=page.limit,
        )

    async def find_all(
        self,
        filters: Optional[FilterBuilder] = None,
        page: Optional[PageRequest] = None,
    ) -> Page:
        """Get one page of records plus the total under the same filters."""
        return await self._paginate(
            self._select(),
            filters or FilterBuilder(self.table),
            page or PageRequest(),
        )

    async def create(self, payload: Dict[str, Any]) -> Dict:
        """Insert a record and return it."""
        values = self._prepare(payload, creating=True)
        statement = insert(self.table).values(**values).returning(*self._columns())
        result = await self.db.execute(statement)
        record = self._to_dict(result.first())
        log.info(f"{self.entity_name} {record['id']} created")
        return record

    async def update(self, record_id: str, payload: Dict[str, Any]) -> Optional[Dict]:
        """
        Apply a partial update.

        Only the keys present in ``payload`` are written. An empty payload issues
        no write and returns the current record.

        Returns:
            The updated record, or None if no record has this id
        """
        values = self._prepare(payload, creating=False)
        statement = build_update(
            self.table,
            record_id,
            values,
            writable=self.writable,
            returning=self._columns(),
        )
        if statement is None:
            return await self.find_by_id(record_id)

        result = await self.db.execute(statement)
        row = result.first()
        if row is None:
            return None

        log.info(f"{self.entity_name} {record_id} updated ({', '.join(values)})")
        return self._to_dict(row)

    async def delete(self, record_id: str) -> bool:
        """Delete a record. Returns False if no record has this id."""
        result = await self.db.execute(delete(self.table).where(self.table.c.id == record_id))
        deleted = result.rowcount > 0
        if deleted:
            log.info(f"{self.entity_name} {record_id} deleted")
        return deleted
