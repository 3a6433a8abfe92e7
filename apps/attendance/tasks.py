from celery import shared_task
from django.conf import settings
from django.db import DatabaseError
from django.utils.dateparse import parse_date
import logging

from apps.employees.models import Employee
from . import offline
from .models import AttendanceRecord

logger = logging.getLogger(__name__)


@shared_task(bind=True, max_retries=settings.ATTENDANCE_SYNC_MAX_RETRIES)
def sync_attendance_record(self, employee_id, record):
    """
    Mirror one cached attendance record into the Attendance table.

    Upserts on (employee, date), so a check-in and its later check-out land
    on the same row whatever order the workers finish in. Database errors
    are retried with exponential backoff; the cached copy stays unsynced
    until a write succeeds (resync_pending_attendance picks it up again).
    """
    try:
        row, created = AttendanceRecord.objects.update_or_create(
            employee_id=employee_id,
            date=parse_date(record['date']),
            defaults={
                'full_name_from_employee': record.get('full_name_from_employee') or '',
                'employee_id_from_employee': record.get('employee_id_from_employee') or '',
                'time_in': record.get('time_in'),
                'time_out': record.get('time_out'),
                'status': record.get('status') or '',
                'working_hours': record.get('working_hours') or 0,
            },
        )
    except DatabaseError as e:
        logger.warning(
            f"Attendance sync failed for {employee_id} on {record.get('date')} "
            f"(attempt {self.request.retries + 1}): {e}"
        )
        raise self.retry(exc=e, countdown=2 ** self.request.retries * 30)

    offline.mark_synced(employee_id, record, str(row.pk))
    logger.info(f"Attendance {'created' if created else 'updated'} for {employee_id} on {record['date']}")
    return str(row.pk)


@shared_task
def resync_pending_attendance():
    """
    Periodic task: re-queue cached records the database never acknowledged.
    Scheduled in config/celery.py
    """
    employee_ids = [str(pk) for pk in Employee.objects.exclude(status='Resigned').values_list('pk', flat=True)]
    waiting = offline.pending(employee_ids)

    for employee_id, record in waiting.items():
        sync_attendance_record.delay(employee_id, record)

    if waiting:
        logger.info(f"Re-queued {len(waiting)} unsynced attendance record(s)")
    return len(waiting)
