"""
Role Catalog Tests
==================

Test Coverage:
1. Default bundles and permission lookup
2. Adding / updating / removing roles, unknown permission ids dropped
3. User.get_permissions for regular users and superusers

Run tests:
    python manage.py test apps.accounts.tests.test_roles
"""

from django.contrib.auth import get_user_model
from django.test import SimpleTestCase, TestCase

from apps.accounts.roles import PERMISSIONS, RoleCatalog

User = get_user_model()


class RoleCatalogTest(SimpleTestCase):

    def setUp(self):
        self.catalog = RoleCatalog()

    def test_default_roles(self):
        self.assertEqual(list(self.catalog.roles), ['admin', 'manager', 'employee', 'viewer'])
        self.assertEqual(len(self.catalog.permissions_for('admin')), len(PERMISSIONS))
        self.assertNotIn('leads.delete', self.catalog.permissions_for('manager'))
        self.assertEqual(self.catalog.permissions_for('nobody'), [])

    def test_grouped_keeps_catalog_order(self):
        groups = self.catalog.grouped()
        self.assertEqual(list(groups)[:3], ['Dashboard', 'Leads', 'Sales'])
        self.assertEqual(groups['Documents'][0]['id'], 'documents.view')

    def test_add_role_drops_unknown_permissions(self):
        role = self.catalog.add_role('hr', 'HR', 'People team', ['users.view', 'payroll.run', 'users.view'])
        self.assertEqual(role.permissions, ['users.view'])

        with self.assertRaises(ValueError):
            self.catalog.add_role('hr', 'HR again')

    def test_update_role(self):
        role = self.catalog.update_role('viewer', permissions=['leads.view'])
        self.assertEqual(role.permissions, ['leads.view'])
        self.assertEqual(role.name, 'Viewer')

        with self.assertRaises(KeyError):
            self.catalog.update_role('missing', name='x')

    def test_remove_role(self):
        self.assertEqual(self.catalog.remove_role('viewer').id, 'viewer')
        self.assertIsNone(self.catalog.remove_role('viewer'))
        with self.assertRaises(ValueError):
            self.catalog.remove_role('admin')

    def test_catalogs_do_not_share_state(self):
        self.catalog.update_role('viewer', permissions=[])
        self.assertIn('leads.view', RoleCatalog().permissions_for('viewer'))

    def test_as_list_with_counts(self):
        roles = {item['id']: item for item in self.catalog.as_list(user_counts={'admin': 2})}
        self.assertEqual(roles['admin']['user_count'], 2)
        self.assertEqual(roles['viewer']['user_count'], 0)


class UserPermissionTest(TestCase):

    def test_role_bundle(self):
        user = User.objects.create_user(email='viewer@test.com', password='testpass123', role='viewer')
        self.assertTrue(user.has_dashboard_permission('leads.view'))
        self.assertFalse(user.has_dashboard_permission('leads.create'))
        self.assertFalse(user.is_admin())

    def test_superuser_gets_everything(self):
        user = User.objects.create_superuser(email='root@test.com', password='testpass123')
        self.assertEqual(len(user.get_permissions()), len(PERMISSIONS))
        self.assertEqual(user.role, 'admin')

    def test_names_and_initials(self):
        user = User(email='neha@test.com', first_name='Neha', last_name='Verma')
        self.assertEqual(user.get_full_name(), 'Neha Verma')
        self.assertEqual(user.get_initials(), 'NV')
        self.assertEqual(User(email='zed@test.com').get_initials(), 'Z')

    def test_email_is_required(self):
        with self.assertRaises(ValueError):
            User.objects.create_user(email='', password='x')
