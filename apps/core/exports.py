"""
CSV / Excel export of the currently filtered + sorted table rows.

Filenames: <prefix>_<YYYY-MM-DD>.csv / .xlsx
"""

import csv
import io
import logging
from datetime import date, datetime

import openpyxl
from openpyxl.styles import Font, PatternFill
from django.http import HttpResponse
from django.utils import timezone
from django.utils.dateparse import parse_date, parse_datetime

from .columns import ColumnVisibility
from .table import TableState

logger = logging.getLogger(__name__)

XLSX_CONTENT_TYPE = 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'


def export_filename(prefix, extension):
    return f'{prefix}_{timezone.localdate().strftime("%Y-%m-%d")}.{extension}'


def _columns(table, columns):
    if columns is None:
        return list(table.columns.values())
    return [table.columns[column_id] for column_id in columns if column_id in table.columns]


def cell_value(column, row):
    """Export text for one cell (dates as YYYY-MM-DD, nulls as '')"""
    value = column.value(row)
    if value is None:
        return ''
    if isinstance(value, (date, datetime)):
        return value.strftime('%Y-%m-%d')
    if column.kind == 'date' and isinstance(value, str):
        parsed = parse_datetime(value) or parse_date(value)
        return parsed.strftime('%Y-%m-%d') if parsed else value
    return str(value)


def export_csv(table, rows, columns=None):
    """
    Header of column labels, then one line per row.
    Every field is quoted and embedded quotes are doubled:  O"Brien → "O""Brien"
    """
    columns = _columns(table, columns)
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator='\n')

    writer.writerow([column.label for column in columns])
    for row in rows:
        writer.writerow([cell_value(column, row) for column in columns])

    return buffer.getvalue()


def csv_response(table, rows, prefix, columns=None):
    response = HttpResponse(content_type='text/csv; charset=utf-8')
    response['Content-Disposition'] = f'attachment; filename="{export_filename(prefix, "csv")}"'

    # Write BOM for Excel UTF-8 compatibility
    response.write('\ufeff')
    response.write(export_csv(table, rows, columns))

    logger.info(f"Exported {len(rows)} {table.key} rows to CSV")
    return response


def build_workbook(table, rows, columns=None, title=None):
    columns = _columns(table, columns)
    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = (title or table.key.title())[:31]

    # Write headers with styling
    for col, column in enumerate(columns, start=1):
        cell = ws.cell(row=1, column=col, value=column.label)
        cell.font = Font(bold=True, color="FFFFFF")
        cell.fill = PatternFill(start_color="667eea", end_color="667eea", fill_type="solid")

    for row_number, row in enumerate(rows, start=2):
        for col, column in enumerate(columns, start=1):
            value = cell_value(column, row)
            if column.kind == 'number' and value != '':
                try:
                    value = float(value)
                except ValueError:
                    pass
            ws.cell(row=row_number, column=col, value=value)

    # Adjust column widths
    for col in ws.columns:
        max_length = max((len(str(cell.value)) for cell in col if cell.value is not None), default=0)
        ws.column_dimensions[col[0].column_letter].width = min(max_length + 2, 50)

    return wb


def xlsx_response(table, rows, prefix, columns=None):
    wb = build_workbook(table, rows, columns)

    response = HttpResponse(content_type=XLSX_CONTENT_TYPE)
    response['Content-Disposition'] = f'attachment; filename="{export_filename(prefix, "xlsx")}"'
    wb.save(response)

    logger.info(f"Exported {len(rows)} {table.key} rows to Excel")
    return response


def export_response(request, table, rows, prefix):
    """
    ?format=csv (default) | excel, applied to the filtered + sorted rows
    (every page) and the user's visible columns.
    """
    state = TableState.from_query(request.GET, table)
    rows = table.process(rows, state)
    columns = ColumnVisibility(request.session, table).visible_columns()

    if request.GET.get('format', 'csv') in ('excel', 'xlsx'):
        return xlsx_response(table, rows, prefix, columns)
    return csv_response(table, rows, prefix, columns)
