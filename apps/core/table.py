"""
Generic table transform used by every list page (leads, employees,
attendance, tasks, documents, call logs).

Pipeline: search -> column filters -> sort -> paginate

Rows are plain dicts (see each model's ``as_row()``) or objects; a column
reads its value through ``accessor`` (a key/attribute name or a callable).

Usage:
    table = Table('leads', [
        Column('name', searchable=True),
        Column('stage', filterable=True),
        Column('deal_amount', kind='number'),
    ])
    state = TableState.from_query(request.GET, table)
    page = table.apply(rows, state)
    return JsonResponse(page.as_dict())
"""

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date, datetime, timezone as dt_timezone
from typing import Callable, Dict, List, Optional, Union

from django.conf import settings
from django.core.paginator import Paginator
from django.utils.dateparse import parse_date, parse_datetime


SORT_DIRECTIONS = ('asc', 'desc')
COLUMN_KINDS = ('text', 'number', 'date')


def _timestamp(value):
    """Any date-ish value to a POSIX timestamp; unparseable → 0"""
    if value in (None, ''):
        return 0.0
    if isinstance(value, str):
        parsed = parse_datetime(value) or parse_date(value)
        if parsed is None:
            return 0.0
        value = parsed
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=dt_timezone.utc)
        return value.timestamp()
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=dt_timezone.utc).timestamp()
    return 0.0


def _number(value):
    if value in (None, ''):
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


@dataclass
class Column:
    id: str
    accessor: Union[str, Callable, None] = None
    kind: str = 'text'
    searchable: bool = False
    filterable: bool = False
    label: Optional[str] = None
    visible: bool = True

    def __post_init__(self):
        if self.kind not in COLUMN_KINDS:
            raise ValueError(f"Unknown column kind '{self.kind}'")
        if self.label is None:
            self.label = self.id.replace('_', ' ').title()

    def value(self, row):
        if callable(self.accessor):
            return self.accessor(row)
        name = self.accessor or self.id
        if isinstance(row, Mapping):
            return row.get(name)
        return getattr(row, name, None)

    def text(self, row):
        value = self.value(row)
        if value is None:
            return ''
        if isinstance(value, (date, datetime)):
            return value.isoformat()
        return str(value)

    def sort_key(self, row):
        if self.kind == 'number':
            return _number(self.value(row))
        if self.kind == 'date':
            return _timestamp(self.value(row))
        return self.text(row).casefold()

    def as_dict(self):
        return {
            'id': self.id,
            'label': self.label,
            'kind': self.kind,
            'searchable': self.searchable,
            'filterable': self.filterable,
            'visible': self.visible,
        }


@dataclass
class TableState:
    search: str = ''
    filters: Dict[str, List[str]] = field(default_factory=dict)
    sort: Optional[str] = None
    direction: Optional[str] = None
    page: int = 1
    page_size: int = 10

    @classmethod
    def from_query(cls, query, table):
        """
        Build state from GET params:
            ?search=raj&stage=New&stage=Hot&sort=name&direction=asc&page=2&page_size=20

        Unknown sort columns, bad directions and page sizes outside
        TABLE_PAGE_SIZES fall back to defaults instead of raising.
        """

        def getlist(key):
            if hasattr(query, 'getlist'):
                return query.getlist(key)
            value = query.get(key)
            if value is None:
                return []
            return list(value) if isinstance(value, (list, tuple)) else [value]

        filters = {}
        for column in table.columns.values():
            if column.filterable:
                values = [v for v in getlist(column.id) if v not in (None, '')]
                if values:
                    filters[column.id] = values

        sort = query.get('sort') or None
        direction = query.get('direction') or None
        if sort not in table.columns or direction not in SORT_DIRECTIONS:
            sort, direction = None, None

        try:
            page = int(query.get('page', 1))
        except (TypeError, ValueError):
            page = 1
        page = max(1, page)

        try:
            page_size = int(query.get('page_size', settings.TABLE_DEFAULT_PAGE_SIZE))
        except (TypeError, ValueError):
            page_size = settings.TABLE_DEFAULT_PAGE_SIZE
        if page_size not in settings.TABLE_PAGE_SIZES:
            page_size = settings.TABLE_DEFAULT_PAGE_SIZE

        return cls(
            search=(query.get('search') or '').strip(),
            filters=filters,
            sort=sort,
            direction=direction,
            page=page,
            page_size=page_size,
        )

    def as_dict(self):
        return {
            'search': self.search,
            'filters': self.filters,
            'sort': self.sort,
            'direction': self.direction,
            'page': self.page,
            'page_size': self.page_size,
        }


@dataclass
class TablePage:
    rows: list
    total: int
    total_pages: int
    page: int
    page_size: int
    has_previous: bool
    has_next: bool
    can_first: bool
    can_last: bool
    start_index: int
    end_index: int

    def as_dict(self):
        return {
            'rows': self.rows,
            'total': self.total,
            'total_pages': self.total_pages,
            'page': self.page,
            'page_size': self.page_size,
            'has_previous': self.has_previous,
            'has_next': self.has_next,
            'can_first': self.can_first,
            'can_last': self.can_last,
            'start_index': self.start_index,
            'end_index': self.end_index,
        }


def next_sort(state, column_id):
    """
    Header click: unsorted → asc → desc → unsorted.
    Clicking a different column starts that column at asc.
    """
    if state.sort != column_id:
        return column_id, 'asc'
    if state.direction == 'asc':
        return column_id, 'desc'
    return None, None


class Table:

    def __init__(self, key, columns):
        self.key = key
        self.columns = {column.id: column for column in columns}

    def __getitem__(self, column_id):
        return self.columns[column_id]

    def search(self, rows, term):
        term = (term or '').strip().casefold()
        if not term:
            return list(rows)
        searchable = [c for c in self.columns.values() if c.searchable]
        return [
            row for row in rows
            if any(term in column.text(row).casefold() for column in searchable)
        ]

    def filter(self, rows, filters):
        # OR within a column, AND across columns
        active = [
            (self.columns[column_id], {str(v) for v in values})
            for column_id, values in (filters or {}).items()
            if column_id in self.columns and values
        ]
        if not active:
            return list(rows)
        return [
            row for row in rows
            if all(column.text(row) in allowed for column, allowed in active)
        ]

    def sort(self, rows, column_id, direction):
        if column_id not in self.columns or direction not in SORT_DIRECTIONS:
            return list(rows)
        column = self.columns[column_id]
        # sorted() is stable in both directions
        return sorted(rows, key=column.sort_key, reverse=(direction == 'desc'))

    def paginate(self, rows, page=1, page_size=None):
        page_size = page_size or settings.TABLE_DEFAULT_PAGE_SIZE
        paginator = Paginator(rows, page_size)
        # get_page() sends pages below 1 to the last page, so clamp those first
        if isinstance(page, int):
            page = max(1, page)
        page_obj = paginator.get_page(page)
        total = paginator.count

        return TablePage(
            rows=list(page_obj.object_list),
            total=total,
            total_pages=max(1, math.ceil(total / page_size)),
            page=page_obj.number,
            page_size=page_size,
            has_previous=page_obj.has_previous(),
            has_next=page_obj.has_next(),
            can_first=page_obj.number > 1,
            can_last=page_obj.number < paginator.num_pages,
            start_index=page_obj.start_index(),
            end_index=page_obj.end_index(),
        )

    def process(self, rows, state):
        """Searched, filtered and sorted rows (all pages) - what exports use"""
        rows = self.search(rows, state.search)
        rows = self.filter(rows, state.filters)
        return self.sort(rows, state.sort, state.direction)

    def apply(self, rows, state):
        return self.paginate(self.process(rows, state), state.page, state.page_size)

    def distinct_values(self, rows, column_id):
        column = self.columns[column_id]
        return sorted({column.text(row) for row in rows} - {''})

    def filter_options(self, rows):
        return {
            column.id: self.distinct_values(rows, column.id)
            for column in self.columns.values() if column.filterable
        }

    def sort_links(self, state):
        links = {}
        for column_id in self.columns:
            sort, direction = next_sort(state, column_id)
            links[column_id] = {'sort': sort, 'direction': direction}
        return links

    def column_meta(self):
        return [column.as_dict() for column in self.columns.values()]


# Tables by key, for endpoints that address a table by name (column visibility)
TABLES = {}


def register_table(table):
    TABLES[table.key] = table
    return table
