"""
Task Model Tests
================

Run tests:
    python manage.py test apps.taskboard.tests.test_models
"""

from datetime import datetime, timedelta

from django.test import TestCase
from django.utils import timezone

from apps.employees.models import Employee
from apps.taskboard.models import Task
from apps.taskboard.tasks import flag_overdue_tasks


class TaskStatusTest(TestCase):

    def setUp(self):
        self.task = Task.objects.create(title='Prepare onboarding kit')

    def test_defaults(self):
        self.assertEqual(self.task.status, 'pending')
        self.assertEqual(self.task.priority, 'medium')
        self.assertEqual(self.task.update_count, 0)

    def test_completing_stamps_completed_on(self):
        self.task.change_status('completed')
        self.task.refresh_from_db()

        self.assertIsNotNone(self.task.completed_on)
        self.assertEqual(self.task.update_count, 1)

    def test_reopening_clears_completed_on(self):
        self.task.change_status('completed')
        self.task.change_status('in_progress')
        self.task.refresh_from_db()

        self.assertIsNone(self.task.completed_on)
        self.assertEqual(self.task.update_count, 2)

    def test_same_status_is_not_counted(self):
        self.task.change_status('pending')
        self.assertEqual(self.task.update_count, 0)


class TaskOverdueTest(TestCase):

    def test_open_task_past_due(self):
        task = Task.objects.create(title='Late', due_date=timezone.now() - timedelta(days=3))
        self.assertTrue(task.is_overdue)
        self.assertEqual(task.days_overdue, 3)

    def test_completed_task_is_never_overdue(self):
        task = Task.objects.create(title='Done', status='completed', due_date=timezone.now() - timedelta(days=3))
        self.assertFalse(task.is_overdue)
        self.assertEqual(task.days_overdue, 0)

    def test_no_due_date(self):
        self.assertFalse(Task.objects.create(title='Someday').is_overdue)

    def test_flag_overdue_tasks_counts_open_tasks(self):
        employee = Employee.objects.create(full_name='Priya Shah', official_email='priya@test.com')
        Task.objects.create(title='A', assignee=employee, due_date=timezone.now() - timedelta(days=1))
        Task.objects.create(title='B', due_date=timezone.now() - timedelta(days=1))
        Task.objects.create(title='C', status='cancelled', due_date=timezone.now() - timedelta(days=1))
        Task.objects.create(title='D', due_date=timezone.now() + timedelta(days=1))

        self.assertEqual(flag_overdue_tasks(), 2)


class TaskTimeWindowTest(TestCase):

    def setUp(self):
        # Wednesday
        self.now = timezone.make_aware(datetime(2026, 10, 21, 11, 0))

    def make(self, **fields):
        return Task(title='Window', **fields)

    def test_today(self):
        task = self.make(due_date=timezone.make_aware(datetime(2026, 10, 21, 17, 0)))
        self.assertTrue(task.in_window('today', now=self.now))
        self.assertFalse(self.make(due_date=timezone.make_aware(datetime(2026, 10, 22, 9, 0))).in_window('today', now=self.now))

    def test_week_runs_sunday_to_saturday(self):
        sunday = self.make(due_date=timezone.make_aware(datetime(2026, 10, 18, 9, 0)))
        saturday = self.make(due_date=timezone.make_aware(datetime(2026, 10, 24, 9, 0)))
        next_sunday = self.make(due_date=timezone.make_aware(datetime(2026, 10, 25, 9, 0)))

        self.assertTrue(sunday.in_window('week', now=self.now))
        self.assertTrue(saturday.in_window('week', now=self.now))
        self.assertFalse(next_sunday.in_window('week', now=self.now))

    def test_month(self):
        self.assertTrue(self.make(due_date=timezone.make_aware(datetime(2026, 10, 1, 9, 0))).in_window('month', now=self.now))
        self.assertFalse(self.make(due_date=timezone.make_aware(datetime(2026, 11, 1, 9, 0))).in_window('month', now=self.now))

    def test_no_due_date_matches_no_window(self):
        self.assertFalse(self.make().in_window('today', now=self.now))


class TaskShareTest(TestCase):

    def test_share_creates_pending_copy(self):
        priya = Employee.objects.create(full_name='Priya Shah', official_email='priya@test.com')
        dev = Employee.objects.create(full_name='Dev Kumar', official_email='dev@test.com')
        task = Task.objects.create(title='Client deck', priority='high', assignee=priya, status='in_progress')

        shared = task.share_with(dev, 'Please review')

        self.assertEqual(shared.assignee, dev)
        self.assertEqual(shared.status, 'pending')
        self.assertEqual(shared.priority, 'high')
        self.assertEqual(shared.shared_from, task)
        self.assertEqual(shared.share_message, 'Please review')
