"""
Task Views Tests
================

Run tests:
    python manage.py test apps.taskboard.tests.test_views
"""

from datetime import timedelta

from django.contrib.auth import get_user_model
from django.test import TestCase
from django.urls import reverse
from django.utils import timezone

from apps.employees.models import Employee
from apps.taskboard.models import Task

User = get_user_model()


class TaskViewTestCase(TestCase):

    def setUp(self):
        self.manager = User.objects.create_user(email='manager@test.com', password='testpass123', role='manager')
        self.rep = User.objects.create_user(email='rep@test.com', password='testpass123', role='employee')
        self.viewer = User.objects.create_user(email='viewer@test.com', password='testpass123', role='viewer')

        self.employee = Employee.objects.create(full_name='Sales Rep', official_email='rep@test.com')
        self.other = Employee.objects.create(full_name='Dev Kumar', official_email='dev@test.com')

        self.mine = Task.objects.create(title='Call back Raj', assignee=self.employee, priority='high',
                                        due_date=timezone.now() - timedelta(days=1))
        self.theirs = Task.objects.create(title='Fix login bug', assignee=self.other, status='in_progress')
        self.done = Task.objects.create(title='Send invoice', assignee=self.employee, status='completed')


class TaskListViewTest(TaskViewTestCase):

    def test_list_and_counts(self):
        self.client.force_login(self.viewer)
        data = self.client.get(reverse('taskboard:task_list')).json()

        self.assertEqual(data['total'], 3)
        self.assertEqual(data['counts']['pending'], 1)
        self.assertEqual(data['counts']['in_progress'], 1)
        self.assertEqual(data['counts']['completed'], 1)
        self.assertEqual(data['counts']['overdue'], 1)

    def test_filters(self):
        self.client.force_login(self.viewer)

        data = self.client.get(reverse('taskboard:task_list'), {'priority': 'high'}).json()
        self.assertEqual([row['title'] for row in data['rows']], ['Call back Raj'])

        data = self.client.get(reverse('taskboard:task_list'), {'assignee_name': 'Dev Kumar'}).json()
        self.assertEqual([row['title'] for row in data['rows']], ['Fix login bug'])

        data = self.client.get(reverse('taskboard:task_list'), {'time': 'overdue'}).json()
        self.assertEqual([row['title'] for row in data['rows']], ['Call back Raj'])

    def test_kanban(self):
        self.client.force_login(self.viewer)
        data = self.client.get(reverse('taskboard:task_kanban')).json()
        self.assertEqual(data['counts'], {'pending': 1, 'in_progress': 1, 'completed': 1, 'cancelled': 0})

    def test_my_tasks(self):
        self.client.force_login(self.rep)
        data = self.client.get(reverse('taskboard:my_tasks')).json()
        self.assertEqual(sorted(row['title'] for row in data['rows']), ['Call back Raj', 'Send invoice'])


class TaskWriteViewTest(TaskViewTestCase):

    def test_create_with_defaults(self):
        self.client.force_login(self.rep)
        response = self.client.post(reverse('taskboard:task_create'), {'title': '  Update CRM notes  '})

        self.assertEqual(response.status_code, 201)
        task = Task.objects.get(title='Update CRM notes')
        self.assertEqual(task.status, 'pending')
        self.assertEqual(task.priority, 'medium')

    def test_create_requires_title(self):
        self.client.force_login(self.rep)
        response = self.client.post(reverse('taskboard:task_create'), {'title': '   '})

        self.assertEqual(response.status_code, 400)
        self.assertIn('title', response.json()['errors'])

    def test_viewer_cannot_create(self):
        self.client.force_login(self.viewer)
        response = self.client.post(reverse('taskboard:task_create'), {'title': 'Nope'})
        self.assertEqual(response.status_code, 403)

    def test_change_status(self):
        self.client.force_login(self.rep)
        response = self.client.post(reverse('taskboard:task_change_status', args=[self.mine.pk]), {'status': 'completed'})

        row = response.json()['task']
        self.assertEqual(row['status'], 'completed')
        self.assertTrue(row['completed_on'])
        self.assertEqual(row['update_count'], 1)
        self.assertFalse(row['is_overdue'])

    def test_change_status_rejects_unknown(self):
        self.client.force_login(self.rep)
        response = self.client.post(reverse('taskboard:task_change_status', args=[self.mine.pk]), {'status': 'archived'})
        self.assertEqual(response.status_code, 400)

    def test_partial_update_counts_status_change(self):
        self.client.force_login(self.rep)
        response = self.client.post(reverse('taskboard:task_update', args=[self.theirs.pk]),
                                    {'status': 'completed', 'description': 'Patched'})

        self.assertEqual(response.status_code, 200)
        self.theirs.refresh_from_db()
        self.assertEqual(self.theirs.title, 'Fix login bug')
        self.assertEqual(self.theirs.update_count, 1)
        self.assertIsNotNone(self.theirs.completed_on)

    def test_share(self):
        self.client.force_login(self.rep)
        response = self.client.post(reverse('taskboard:task_share', args=[self.mine.pk]),
                                    {'assignee': self.other.pk, 'message': 'Can you take this?'})

        self.assertEqual(response.status_code, 201)
        self.assertEqual(Task.objects.filter(shared_from=self.mine, assignee=self.other).count(), 1)

    def test_share_needs_employee(self):
        self.client.force_login(self.rep)
        response = self.client.post(reverse('taskboard:task_share', args=[self.mine.pk]), {})
        self.assertEqual(response.json()['errors']['assignee'], ['Please select an employee to share with'])

    def test_delete_is_for_admins_and_managers(self):
        self.client.force_login(self.rep)
        self.assertEqual(self.client.post(reverse('taskboard:task_delete', args=[self.done.pk])).status_code, 403)

        self.client.force_login(self.manager)
        self.assertEqual(self.client.post(reverse('taskboard:task_delete', args=[self.done.pk])).status_code, 200)
        self.assertFalse(Task.objects.filter(pk=self.done.pk).exists())
