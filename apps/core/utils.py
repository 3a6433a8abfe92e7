"""
Helpers shared by the list views
"""
import json
import logging

from django.db import DatabaseError

from .columns import ColumnVisibility
from .table import TableState

logger = logging.getLogger(__name__)


def fetch_rows(queryset, label):
    """
    Evaluate a queryset into row dicts (via each object's as_row()).

    A database failure does not propagate: the page shows an empty table
    plus the error text.

    Returns:
        (rows, error) - error is None on success
    """
    try:
        return [obj.as_row() for obj in queryset], None
    except DatabaseError as e:
        logger.error(f"Failed to fetch {label}: {e}", exc_info=True)
        return [], f'Failed to fetch {label}'


def parse_json_body(request):
    """
    JSON body as dict, falling back to form data.

    Returns None when the body is not valid JSON.
    """
    if request.content_type == 'application/json':
        try:
            data = json.loads(request.body or b'{}')
        except ValueError:
            return None
        return data if isinstance(data, dict) else None
    return request.POST


def table_payload(request, table, rows, error=None):
    """
    Standard JSON body for a table page:
    current page + state echo + header sort links + filter options + visible columns
    """
    state = TableState.from_query(request.GET, table)
    page = table.apply(rows, state)

    payload = page.as_dict()
    payload.update({
        'state': state.as_dict(),
        'columns': table.column_meta(),
        'visible_columns': ColumnVisibility(request.session, table).visible_columns(),
        'sort_links': table.sort_links(state),
        'filter_options': table.filter_options(rows),
        'error': error,
    })
    return payload


def merge_form_data(form_class, instance, data):
    """
    Bound data for a partial update: fields missing from ``data`` keep the
    instance's current value (the form's initial).
    """
    merged = {
        key: value for key, value in form_class(instance=instance).initial.items()
        if value is not None
    }
    merged.update(data.items())
    return merged
