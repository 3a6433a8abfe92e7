import logging

from django.contrib.auth.decorators import login_required
from django.db import DatabaseError
from django.http import JsonResponse
from django.shortcuts import get_object_or_404

from apps.accounts.decorators import employee_required, permission_required, post_required
from apps.core.exports import export_response
from apps.core.links import contact_links
from apps.core.table import TableState
from apps.core.utils import fetch_rows, merge_form_data, table_payload
from .forms import EmployeeForm
from .models import Employee
from .tables import EMPLOYEE_TABLE

logger = logging.getLogger(__name__)


def employee_detail_payload(employee):
    row = employee.as_row()
    row['links'] = contact_links(employee.official_contact_number)
    row['is_tech_team'] = employee.is_tech_team
    return row


@login_required
@permission_required('users.view')
def employee_list_view(request):
    rows, error = fetch_rows(Employee.objects.all(), 'employees')
    return JsonResponse(table_payload(request, EMPLOYEE_TABLE, rows, error))


@login_required
@permission_required('users.view')
def employee_kanban_view(request):
    """Searched + filtered employees grouped into Active / Onboarding / Resigned columns"""
    rows, error = fetch_rows(Employee.objects.all(), 'employees')
    state = TableState.from_query(request.GET, EMPLOYEE_TABLE)
    rows = EMPLOYEE_TABLE.process(rows, state)

    columns = {status: [] for status, _ in Employee.STATUS_CHOICES}
    for row in rows:
        columns[row['status']].append(row)

    return JsonResponse({
        'columns': columns,
        'counts': {status: len(items) for status, items in columns.items()},
        'error': error,
    })


@login_required
@permission_required('users.view')
def employee_detail_view(request, pk):
    employee = get_object_or_404(Employee, pk=pk)
    return JsonResponse({'employee': employee_detail_payload(employee)})


@login_required
@employee_required
def my_profile_view(request):
    return JsonResponse({'employee': employee_detail_payload(request.employee)})


@login_required
@permission_required('users.create')
@post_required
def employee_create_view(request):
    form = EmployeeForm(request.POST)
    if not form.is_valid():
        return JsonResponse({'success': False, 'errors': form.errors}, status=400)

    try:
        employee = form.save()
    except DatabaseError as e:
        logger.error(f"Failed to create employee: {e}", exc_info=True)
        return JsonResponse({'success': False, 'error': 'Failed to create employee'}, status=500)

    logger.info(f"Employee created: {employee.full_name} by {request.user.email}")
    return JsonResponse({'success': True, 'employee': employee.as_row()}, status=201)


@login_required
@permission_required('users.edit')
@post_required
def employee_update_view(request, pk):
    employee = get_object_or_404(Employee, pk=pk)
    form = EmployeeForm(merge_form_data(EmployeeForm, employee, request.POST), instance=employee)
    if not form.is_valid():
        return JsonResponse({'success': False, 'errors': form.errors}, status=400)

    try:
        employee = form.save()
    except DatabaseError as e:
        logger.error(f"Failed to update employee {pk}: {e}", exc_info=True)
        return JsonResponse({'success': False, 'error': 'Failed to update employee'}, status=500)

    return JsonResponse({'success': True, 'employee': employee.as_row()})


@login_required
@permission_required('users.delete')
@post_required
def employee_delete_view(request, pk):
    employee = get_object_or_404(Employee, pk=pk)
    name = employee.full_name

    try:
        employee.delete()
    except DatabaseError as e:
        logger.error(f"Failed to delete employee {pk}: {e}", exc_info=True)
        return JsonResponse({'success': False, 'error': 'Failed to delete employee'}, status=500)

    logger.info(f"Employee deleted: {name} by {request.user.email}")
    return JsonResponse({'success': True})


@login_required
@permission_required('reports.generate')
def employee_export_view(request):
    rows, _ = fetch_rows(Employee.objects.all(), 'employees')
    return export_response(request, EMPLOYEE_TABLE, rows, 'employees')
