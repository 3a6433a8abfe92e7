"""
Check-in / check-out.

Writes go to the local tier first (apps.attendance.offline) and the
database copy is queued through Celery once the request's transaction
commits. Reads of today's record prefer the local tier.
"""

import logging

from django.db import DatabaseError, transaction
from django.utils import timezone
from kombu.exceptions import OperationalError

from apps.core.utils import fetch_rows
from . import offline
from .models import AttendanceRecord
from .policy import (
    calculate_status, float_to_time, format_time, overtime_status, time_to_float, working_hours,
)
from .tasks import sync_attendance_record

logger = logging.getLogger(__name__)

HISTORY_LIMIT = 30


class AttendanceError(Exception):
    pass


def _now(now=None):
    # minute resolution, as shown on the check-in card
    now = timezone.localtime(now) if now else timezone.localtime()
    return now.replace(second=0, microsecond=0)


def _enqueue_sync(employee_id, payload):
    try:
        sync_attendance_record.delay(employee_id, payload)
    except OperationalError as e:
        # record stays unsynced in the local tier; resync_pending_attendance picks it up
        logger.warning(f"Could not queue attendance sync for {employee_id}: {e}")


def _store(employee, record):
    record['synced'] = False
    record['check_in'] = format_time(record['time_in'])
    record['check_out'] = format_time(record['time_out'])
    offline.save(str(employee.pk), record)

    employee_id, payload = str(employee.pk), dict(record)
    transaction.on_commit(lambda: _enqueue_sync(employee_id, payload))
    return record


def today_record(employee, now=None):
    """
    Today's record for the employee, or None.

    The cached copy wins; otherwise today's database row (if any) is loaded
    into the cache. A database failure here reads as "no record yet".
    """
    today = _now(now).date().isoformat()

    record = offline.load(str(employee.pk))
    if record and record.get('date') == today:
        return record

    try:
        row = AttendanceRecord.objects.filter(employee=employee, date=today).first()
    except DatabaseError as e:
        logger.error(f"Failed to load today's attendance for {employee.pk}: {e}", exc_info=True)
        return None

    if row is None:
        return None
    return offline.save(str(employee.pk), row.as_row())


def check_in(employee, now=None):
    now = _now(now)
    record = today_record(employee, now)
    if record and record.get('time_in') is not None:
        raise AttendanceError('You have already checked in today!')

    status = calculate_status(now.time(), employee.is_tech_team)
    record = _store(employee, {
        'id': '',
        'employee': str(employee.pk),
        'full_name_from_employee': employee.full_name or 'Employee',
        'employee_id_from_employee': employee.employee_id or str(employee.pk),
        'date': now.date().isoformat(),
        'time_in': time_to_float(now.time()),
        'time_out': None,
        'status': status,
        'working_hours': 0,
    })

    logger.info(f"{employee.full_name} checked in at {record['check_in']} ({status})")
    return record


def check_out(employee, now=None):
    now = _now(now)
    record = today_record(employee, now)
    if not record or record.get('time_in') is None:
        raise AttendanceError('Please check in first before checking out!')
    if record.get('time_out') is not None:
        raise AttendanceError('You have already checked out today!')

    check_out_time = now.time()
    record = dict(record)
    record.update({
        'time_out': time_to_float(check_out_time),
        'working_hours': working_hours(float_to_time(record['time_in']), check_out_time),
        'status': overtime_status(record['status'], check_out_time, employee.is_tech_team),
    })
    record = _store(employee, record)

    logger.info(f"{employee.full_name} checked out at {record['check_out']} ({record['working_hours']}h)")
    return record


def history(employee, now=None, limit=HISTORY_LIMIT):
    """
    Latest records (newest first) with today's cached record in place of
    the database row for today.

    Returns:
        (records, error) - error is None on success
    """
    queryset = AttendanceRecord.objects.filter(employee=employee).order_by('-date')[:limit]
    rows, error = fetch_rows(queryset, 'attendance history')

    today = today_record(employee, now)
    if today:
        rows = [today] + [row for row in rows if row['date'] != today['date']]
    return rows[:limit], error
