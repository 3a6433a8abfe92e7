"""
Document Access Tests
=====================

Run tests:
    python manage.py test apps.documents.tests.test_services
"""

from django.test import SimpleTestCase, TestCase

from apps.documents.models import Document, DocumentAssignment, format_file_size
from apps.documents.services import DocumentAccessError, assign, download_url, visible_documents
from apps.employees.models import Employee


class FormatFileSizeTest(SimpleTestCase):

    def test_units(self):
        self.assertEqual(format_file_size(500), '500 Bytes')
        self.assertEqual(format_file_size(1024), '1 KB')
        self.assertEqual(format_file_size(1536), '1.5 KB')
        self.assertEqual(format_file_size(5 * 1024 * 1024), '5 MB')

    def test_unknown(self):
        self.assertEqual(format_file_size(None), 'Unknown')
        self.assertEqual(format_file_size(0), 'Unknown')


class AssignTest(TestCase):

    def setUp(self):
        self.priya = Employee.objects.create(full_name='Priya Shah', official_email='priya@test.com')
        self.dev = Employee.objects.create(full_name='Dev Kumar', official_email='dev@test.com')
        self.document = Document.objects.create(title='Leave Policy', file_url='https://files.example.com/leave.pdf')

    def test_replaces_existing_set(self):
        assign(self.document, [{'employee': self.priya}, {'employee': self.dev}])
        assign(self.document, [{'employee': self.dev, 'can_download': False}])

        assignments = DocumentAssignment.objects.filter(document=self.document)
        self.assertEqual([a.employee for a in assignments], [self.dev])
        self.assertFalse(assignments[0].can_download)
        self.assertTrue(assignments[0].can_view)

    def test_empty_set_revokes_everyone(self):
        assign(self.document, [{'employee': self.priya}])
        assign(self.document, [])
        self.assertFalse(self.document.assignments.exists())

    def test_duplicate_entries_keep_last(self):
        created = assign(self.document, [
            {'employee': self.priya, 'can_download': True},
            {'employee': self.priya, 'can_download': False},
        ])
        self.assertEqual(len(created), 1)
        self.assertFalse(created[0].can_download)


class EmployeeAccessTest(TestCase):

    def setUp(self):
        self.priya = Employee.objects.create(full_name='Priya Shah', official_email='priya@test.com')
        self.dev = Employee.objects.create(full_name='Dev Kumar', official_email='dev@test.com')

        self.policy = Document.objects.create(title='Leave Policy', file_url='https://files.example.com/leave.pdf')
        self.payslip = Document.objects.create(title='Payslip', file_url='https://files.example.com/payslip.pdf')
        self.archived = Document.objects.create(title='Old Handbook', status='Archived', file_url='https://files.example.com/old.pdf')

        assign(self.policy, [{'employee': self.priya}, {'employee': self.dev}])
        assign(self.payslip, [{'employee': self.priya, 'can_download': False}])
        assign(self.archived, [{'employee': self.priya}])

    def test_visible_documents(self):
        titles = sorted(document.title for document in visible_documents(self.priya))
        self.assertEqual(titles, ['Leave Policy', 'Payslip'])
        self.assertEqual([document.title for document in visible_documents(self.dev)], ['Leave Policy'])

    def test_download_allowed(self):
        self.assertEqual(download_url(self.policy, self.priya), 'https://files.example.com/leave.pdf')

    def test_download_not_allowed(self):
        with self.assertRaisesMessage(DocumentAccessError, 'You do not have permission to download this document'):
            download_url(self.payslip, self.priya)

    def test_not_assigned(self):
        with self.assertRaisesMessage(DocumentAccessError, 'You do not have access to this document'):
            download_url(self.payslip, self.dev)

    def test_archived_document(self):
        with self.assertRaises(DocumentAccessError):
            download_url(self.archived, self.priya)
