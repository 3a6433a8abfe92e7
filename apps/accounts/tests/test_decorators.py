"""
Tests for Custom Decorators
============================

Every decorator answers JSON, so denials are checked on status code and body.

Test Cases:
1. admin_required decorator
2. role_required decorator
3. permission_required decorator
4. employee_required decorator
5. post_required decorator

Run tests:
    python manage.py test apps.accounts.tests.test_decorators
"""

import json

from django.contrib.auth import get_user_model
from django.contrib.auth.models import AnonymousUser
from django.http import HttpResponse
from django.test import RequestFactory, TestCase

from apps.accounts.decorators import (
    admin_required,
    employee_required,
    permission_required,
    post_required,
    role_required,
)
from apps.employees.models import Employee

User = get_user_model()


def ok_view(request):
    return HttpResponse('OK')


class DecoratorTestCase(TestCase):

    def setUp(self):
        self.factory = RequestFactory()

        self.admin = User.objects.create_user(email='admin@test.com', password='testpass123', role='admin')
        self.manager = User.objects.create_user(email='manager@test.com', password='testpass123', role='manager')
        self.employee_user = User.objects.create_user(email='Neha@Test.com', password='testpass123', role='employee')
        self.viewer = User.objects.create_user(email='viewer@test.com', password='testpass123', role='viewer')
        self.superuser = User.objects.create_superuser(email='root@test.com', password='testpass123', role='viewer')

    def call(self, view, user, method='get'):
        request = getattr(self.factory, method)('/test/')
        request.user = user
        return view(request)

    def assertDenied(self, response, status):
        self.assertEqual(response.status_code, status)
        self.assertFalse(json.loads(response.content)['success'])


class AdminRequiredDecoratorTest(DecoratorTestCase):

    def test_admin_passes(self):
        self.assertEqual(self.call(admin_required(ok_view), self.admin).content, b'OK')

    def test_superuser_passes_whatever_the_role(self):
        self.assertEqual(self.call(admin_required(ok_view), self.superuser).status_code, 200)

    def test_manager_is_denied(self):
        self.assertDenied(self.call(admin_required(ok_view), self.manager), 403)

    def test_anonymous_is_denied_without_login_redirect(self):
        # on its own the decorator only denies; login_required does the redirect
        self.assertDenied(self.call(admin_required(ok_view), AnonymousUser()), 403)


class RoleRequiredDecoratorTest(DecoratorTestCase):

    def setUp(self):
        super().setUp()
        self.view = role_required('admin', 'manager')(ok_view)

    def test_listed_roles_pass(self):
        self.assertEqual(self.call(self.view, self.admin).status_code, 200)
        self.assertEqual(self.call(self.view, self.manager).status_code, 200)

    def test_other_roles_are_denied(self):
        self.assertDenied(self.call(self.view, self.employee_user), 403)
        self.assertDenied(self.call(self.view, self.viewer), 403)


class PermissionRequiredDecoratorTest(DecoratorTestCase):

    def test_single_permission(self):
        view = permission_required('leads.create')(ok_view)

        self.assertEqual(self.call(view, self.employee_user).status_code, 200)
        self.assertDenied(self.call(view, self.viewer), 403)

    def test_all_permissions_must_be_granted(self):
        view = permission_required('leads.view', 'leads.delete')(ok_view)

        self.assertEqual(self.call(view, self.admin).status_code, 200)
        # managers cannot delete leads
        self.assertDenied(self.call(view, self.manager), 403)

    def test_unknown_role_has_no_permissions(self):
        ghost = User.objects.create_user(email='ghost@test.com', password='testpass123', role='contractor')
        self.assertDenied(self.call(permission_required('dashboard.view')(ok_view), ghost), 403)

    def test_anonymous_is_denied(self):
        self.assertDenied(self.call(permission_required('leads.view')(ok_view), AnonymousUser()), 403)
        self.assertDenied(self.call(role_required('viewer')(ok_view), AnonymousUser()), 403)
        self.assertDenied(self.call(employee_required(ok_view), AnonymousUser()), 403)


class EmployeeRequiredDecoratorTest(DecoratorTestCase):

    def test_matches_official_email_case_insensitively(self):
        employee = Employee.objects.create(full_name='Neha Verma', official_email='neha@test.com')

        seen = {}

        def view(request):
            seen['employee'] = request.employee
            return HttpResponse('OK')

        response = self.call(employee_required(view), self.employee_user)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(seen['employee'], employee)

    def test_no_directory_row(self):
        self.assertDenied(self.call(employee_required(ok_view), self.viewer), 403)


class PostRequiredDecoratorTest(DecoratorTestCase):

    def test_post_passes(self):
        self.assertEqual(self.call(post_required(ok_view), self.viewer, 'post').status_code, 200)

    def test_get_is_rejected(self):
        self.assertDenied(self.call(post_required(ok_view), self.viewer), 405)


class LoginRequiredStackTest(TestCase):
    """login_required runs first, so anonymous callers are redirected, never answered with JSON"""

    def test_anonymous_json_views_redirect_to_login(self):
        for url in ('/accounts/me/', '/accounts/roles/', '/leads/', '/attendance/'):
            with self.subTest(url=url):
                response = self.client.get(url)
                self.assertEqual(response.status_code, 302)
                self.assertTrue(response['Location'].startswith('/accounts/login/'))
