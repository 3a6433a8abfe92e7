import logging

from django.contrib.auth.decorators import login_required
from django.http import JsonResponse
from django.utils.dateparse import parse_date

from apps.accounts.decorators import employee_required, permission_required, post_required
from apps.core.exports import export_response
from apps.core.utils import fetch_rows, table_payload
from .models import AttendanceRecord
from .policy import end_time, start_time
from .services import AttendanceError, check_in, check_out, history, today_record
from .tables import ATTENDANCE_TABLE

logger = logging.getLogger(__name__)


def attendance_queryset(request):
    """?from=YYYY-MM-DD&to=YYYY-MM-DD narrows the admin table to a date range"""
    queryset = AttendanceRecord.objects.all()
    date_from = parse_date(request.GET.get('from', '') or '')
    date_to = parse_date(request.GET.get('to', '') or '')
    if date_from:
        queryset = queryset.filter(date__gte=date_from)
    if date_to:
        queryset = queryset.filter(date__lte=date_to)
    return queryset


# EMPLOYEE SIDE
@login_required
@employee_required
def today_view(request):
    employee = request.employee
    is_tech = employee.is_tech_team

    return JsonResponse({
        'record': today_record(employee),
        'employee': {
            'id': str(employee.pk),
            'full_name': employee.full_name,
            'is_tech_team': is_tech,
        },
        'office_hours': {
            'start': start_time(is_tech).strftime('%H:%M'),
            'end': end_time(is_tech).strftime('%H:%M'),
        },
    })


@login_required
@employee_required
@post_required
def check_in_view(request):
    try:
        record = check_in(request.employee)
    except AttendanceError as e:
        return JsonResponse({'success': False, 'error': str(e)}, status=400)

    return JsonResponse({
        'success': True,
        'message': f"Check-in successful! Status: {record['status']}",
        'record': record,
    })


@login_required
@employee_required
@post_required
def check_out_view(request):
    try:
        record = check_out(request.employee)
    except AttendanceError as e:
        return JsonResponse({'success': False, 'error': str(e)}, status=400)

    return JsonResponse({
        'success': True,
        'message': f"Check-out successful! Working hours: {record['working_hours']}h",
        'record': record,
    })


@login_required
@employee_required
def history_view(request):
    records, error = history(request.employee)
    return JsonResponse({'records': records, 'error': error})


# ADMIN SIDE
@login_required
@permission_required('attendance.manage')
def attendance_list_view(request):
    rows, error = fetch_rows(attendance_queryset(request), 'attendance')
    payload = table_payload(request, ATTENDANCE_TABLE, rows, error)

    summary = {'Present': 0, 'Late': 0, 'Half Day': 0, 'Overtime': 0}
    for row in rows:
        status = row['status']
        for name in ('Present', 'Late', 'Half Day'):
            if status.startswith(name):
                summary[name] += 1
        if status.endswith('(Overtime)'):
            summary['Overtime'] += 1
    payload['summary'] = summary
    return JsonResponse(payload)


@login_required
@permission_required('attendance.manage')
def attendance_export_view(request):
    rows, _ = fetch_rows(attendance_queryset(request), 'attendance')
    return export_response(request, ATTENDANCE_TABLE, rows, 'attendance')
