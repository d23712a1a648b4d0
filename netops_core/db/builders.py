"""
Query Builders for NetOps

Shared statement construction used by every entity store:

- build_update: partial updates that touch only the supplied fields
- FilterBuilder: equality/search filters shared by a page query and its count query
- PageRequest / Page: page and limit handling plus the pagination block
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional

from sqlalchemy import Table, func, or_, select, update
from sqlalchemy.sql import Select, Update
from sqlalchemy.sql.elements import ColumnElement

from netops_core.utils.datetime import utc_now
from netops_core.utils.responses import calculate_pagination

IMMUTABLE_COLUMNS = frozenset({'id', 'created_at', 'updated_at'})
LIKE_ESCAPE = '\\'


def build_update(
    table: Table,
    record_id: str,
    fields: Mapping[str, Any],
    writable: Optional[Iterable[str]] = None,
    returning: Optional[Iterable[ColumnElement]] = None,
) -> Optional[Update]:
    """
    Build an UPDATE touching exactly the supplied fields.

    A key that is absent from ``fields`` is left untouched; a key mapped to None
    clears the column. ``updated_at`` is refreshed on every write.

    Args:
        table: Target table
        record_id: Primary key of the row to update
        fields: Ordered mapping of column name to new value
        writable: Column names callers may set (defaults to every mutable column)
        returning: Columns to return from the updated row (defaults to all)

    Returns:
        The UPDATE statement, or None when no field is supplied. Callers treat
        None as "read the current row" and issue no write.

    Raises:
        ValueError: If a field is unknown or immutable
    """
    if not fields:
        return None

    allowed = set(writable) if writable is not None else set(table.c.keys())
    allowed -= IMMUTABLE_COLUMNS

    rejected = [name for name in fields if name not in allowed or name not in table.c]
    if rejected:
        raise ValueError(f"Cannot update column(s): {', '.join(rejected)}")

    values = dict(fields)
    values['updated_at'] = utc_now()

    columns = list(returning) if returning is not None else list(table.c)
    return (
        update(table)
        .where(table.c.id == record_id)
        .values(**values)
        .returning(*columns)
    )


@dataclass
class PageRequest:
    """Requested page (1-indexed) and page size"""
    page: int = 1
    limit: int = 10

    def __post_init__(self):
        if self.page < 1:
            raise ValueError("page must be >= 1")
        if self.limit < 1:
            raise ValueError("limit must be >= 1")

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass
class Page:
    """One page of rows plus the total row count under the same filters"""
    items: List[Dict[str, Any]]
    total: int
    page: int
    limit: int

    @property
    def pages(self) -> int:
        return self.pagination()['pages']

    def pagination(self) -> Dict[str, int]:
        return calculate_pagination(self.page, self.limit, self.total)


@dataclass
class FilterBuilder:
    """
    Collects WHERE conditions for a list query.

    The same conditions are applied to the page query and to the count query so
    that ``total`` always describes the filtered set the page was drawn from.

    Usage:
        filters = FilterBuilder(devices).equals('status', 'active')
        page_stmt = filters.apply(select(devices))
        count_stmt = filters.count_statement()
    """
    table: Table
    conditions: List[ColumnElement] = field(default_factory=list)

    def equals(self, column_name: str, value: Any) -> "FilterBuilder":
        """Exact match; skipped when value is None or an empty string."""
        if value is None or value == '':
            return self
        self.conditions.append(self.table.c[column_name] == value)
        return self

    def search(self, term: Optional[str], *column_names: str) -> "FilterBuilder":
        """Case-insensitive substring match across any of the given columns."""
        if not term:
            return self
        # % and _ in the term match literally
        escaped = (
            term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
            .replace('%', LIKE_ESCAPE + '%')
            .replace('_', LIKE_ESCAPE + '_')
        )
        pattern = f"%{escaped}%"
        self.conditions.append(
            or_(*(self.table.c[name].ilike(pattern, escape=LIKE_ESCAPE) for name in column_names))
        )
        return self

    def apply(self, statement: Select) -> Select:
        if self.conditions:
            return statement.where(*self.conditions)
        return statement

    def page_statement(self, statement: Select, page: PageRequest) -> Select:
        """Filtered, newest-first, bounded by limit/offset."""
        return (
            self.apply(statement)
            .order_by(self.table.c.created_at.desc(), self.table.c.id)
            .limit(page.limit)
            .offset(page.offset)
        )

    def count_statement(self) -> Select:
        return self.apply(select(func.count()).select_from(self.table))
