import uuid

from django.db import models

from apps.employees.models import Employee
from .policy import OVERTIME_SUFFIX, format_time


class AttendanceRecord(models.Model):

    whalesync_postgres_id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    employee = models.ForeignKey(Employee, on_delete=models.CASCADE, related_name='attendance_records',
                                 db_column='employee')
    full_name_from_employee = models.CharField(max_length=200, blank=True)
    employee_id_from_employee = models.CharField(max_length=50, blank=True)

    date = models.DateField(db_index=True)
    time_in = models.FloatField(null=True, blank=True, help_text='HH.MM, e.g. 9.35 for 09:35')
    time_out = models.FloatField(null=True, blank=True, help_text='HH.MM, e.g. 18.3 for 18:30')
    status = models.CharField(max_length=50, blank=True, db_index=True,
                              help_text='Present / Late / Half Day, optionally with " (Overtime)"')
    working_hours = models.FloatField(default=0)

    class Meta:
        db_table = 'Attendance'
        verbose_name = 'Attendance Record'
        verbose_name_plural = 'Attendance'
        ordering = ['-date', 'full_name_from_employee']
        constraints = [
            models.UniqueConstraint(fields=['employee', 'date'], name='attendance_one_per_employee_per_day'),
        ]

    def __str__(self):
        return f"{self.full_name_from_employee} - {self.date} ({self.status or 'No status'})"

    @property
    def base_status(self):
        return (self.status or '').removesuffix(OVERTIME_SUFFIX)

    @property
    def is_overtime(self):
        return (self.status or '').endswith(OVERTIME_SUFFIX)

    def as_row(self):
        return {
            'id': str(self.pk),
            'employee': str(self.employee_id),
            'full_name_from_employee': self.full_name_from_employee or '',
            'employee_id_from_employee': self.employee_id_from_employee or '',
            'date': self.date.isoformat() if self.date else '',
            'time_in': self.time_in,
            'time_out': self.time_out,
            'check_in': format_time(self.time_in),
            'check_out': format_time(self.time_out),
            'status': self.status or '',
            'working_hours': self.working_hours or 0,
            'synced': True,
        }
