import uuid
from datetime import timedelta

from django.db import models
from django.utils import timezone

from apps.employees.models import Employee


# Time windows for ?time= on the task lists
TIME_WINDOWS = ('today', 'week', 'month', 'overdue')
CLOSED_STATUSES = ('completed', 'cancelled')


class TaskQuerySet(models.QuerySet):

    def open(self):
        return self.exclude(status__in=CLOSED_STATUSES)

    def overdue(self, now=None):
        return self.open().filter(due_date__lt=now or timezone.now())


class Task(models.Model):

    STATUS_CHOICES = [
        ('pending', 'Pending'),
        ('in_progress', 'In Progress'),
        ('completed', 'Completed'),
        ('cancelled', 'Cancelled'),
    ]

    PRIORITY_CHOICES = [
        ('low', 'Low'),
        ('medium', 'Medium'),
        ('high', 'High'),
        ('urgent', 'Urgent'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    title = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='pending', db_index=True)
    priority = models.CharField(max_length=20, choices=PRIORITY_CHOICES, default='medium', db_index=True)
    due_date = models.DateTimeField(null=True, blank=True, db_index=True)
    assignee = models.ForeignKey(Employee, on_delete=models.SET_NULL, null=True, blank=True,
                                 related_name='tasks', db_column='assignee')

    # Bookkeeping
    completed_on = models.DateTimeField(null=True, blank=True)
    update_count = models.PositiveIntegerField(default=0, help_text='Number of status changes')

    # Sharing creates a copy for another employee
    shared_from = models.ForeignKey('self', on_delete=models.SET_NULL, null=True, blank=True,
                                    related_name='shares', db_column='shared_from')
    share_message = models.TextField(blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = TaskQuerySet.as_manager()

    class Meta:
        db_table = 'tasks'
        verbose_name = 'Task'
        verbose_name_plural = 'Tasks'
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.title} ({self.get_status_display()})"

    @property
    def is_overdue(self):
        return bool(self.due_date) and self.status not in CLOSED_STATUSES and self.due_date < timezone.now()

    @property
    def days_overdue(self):
        if not self.is_overdue:
            return 0
        return (timezone.localdate() - timezone.localtime(self.due_date).date()).days

    def in_window(self, window, now=None):
        """today / week (Sunday to Saturday) / month / overdue, by due date"""
        if window == 'overdue':
            return self.is_overdue
        if not self.due_date:
            return False

        now = timezone.localtime(now) if now else timezone.localtime()
        due = timezone.localtime(self.due_date).date()
        today = now.date()

        if window == 'today':
            return due == today
        if window == 'week':
            week_start = today - timedelta(days=(today.weekday() + 1) % 7)
            return week_start <= due <= week_start + timedelta(days=6)
        if window == 'month':
            return (due.year, due.month) == (today.year, today.month)
        return False

    def record_status_change(self, previous_status, now=None):
        """Bump update_count and keep completed_on in step with a status change (unsaved)"""
        if self.status == previous_status:
            return
        self.update_count += 1
        if self.status == 'completed':
            self.completed_on = now or timezone.now()
        elif previous_status == 'completed':
            self.completed_on = None

    def change_status(self, new_status):
        previous_status = self.status
        self.status = new_status
        self.record_status_change(previous_status)
        self.save(update_fields=['status', 'update_count', 'completed_on', 'updated_at'])

    def share_with(self, employee, message=''):
        return Task.objects.create(
            title=self.title,
            description=self.description,
            priority=self.priority,
            due_date=self.due_date,
            assignee=employee,
            status='pending',
            shared_from=self,
            share_message=message,
        )

    def as_row(self):
        return {
            'id': str(self.pk),
            'title': self.title or '',
            'description': self.description or '',
            'status': self.status or '',
            'priority': self.priority or '',
            'due_date': self.due_date.isoformat() if self.due_date else '',
            'assignee': str(self.assignee_id) if self.assignee_id else '',
            'assignee_name': self.assignee.full_name if self.assignee_id else '',
            'completed_on': self.completed_on.isoformat() if self.completed_on else '',
            'update_count': self.update_count,
            'is_overdue': self.is_overdue,
            'days_overdue': self.days_overdue,
            'shared_from': str(self.shared_from_id) if self.shared_from_id else '',
            'share_message': self.share_message or '',
            'created_at': self.created_at.isoformat() if self.created_at else '',
            'updated_at': self.updated_at.isoformat() if self.updated_at else '',
        }
