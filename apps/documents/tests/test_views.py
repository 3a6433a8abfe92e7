"""
Document Views Tests
====================

Run tests:
    python manage.py test apps.documents.tests.test_views
"""

import shutil
import tempfile

from django.contrib.auth import get_user_model
from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import TestCase, override_settings
from django.urls import reverse

from apps.documents.models import Document
from apps.documents.services import assign
from apps.employees.models import Employee

User = get_user_model()

MEDIA_ROOT = tempfile.mkdtemp()


@override_settings(MEDIA_ROOT=MEDIA_ROOT)
class DocumentAdminViewTest(TestCase):

    @classmethod
    def tearDownClass(cls):
        shutil.rmtree(MEDIA_ROOT, ignore_errors=True)
        super().tearDownClass()

    def setUp(self):
        self.manager = User.objects.create_user(email='manager@test.com', password='testpass123', role='manager')
        self.rep = User.objects.create_user(email='rep@test.com', password='testpass123', role='employee')
        self.uploader = Employee.objects.create(full_name='HR Manager', official_email='manager@test.com')
        self.priya = Employee.objects.create(full_name='Priya Shah', official_email='rep@test.com')
        self.dev = Employee.objects.create(full_name='Dev Kumar', official_email='dev@test.com')

    def test_employee_cannot_manage(self):
        self.client.force_login(self.rep)
        self.assertEqual(self.client.get(reverse('documents:document_list')).status_code, 403)

    def test_upload_with_assignments(self):
        self.client.force_login(self.manager)
        upload = SimpleUploadedFile('offer-letter.pdf', b'%PDF-1.4 test', content_type='application/pdf')

        response = self.client.post(reverse('documents:document_create'), {
            'title': 'Offer Letter',
            'category': 'HR',
            'file': upload,
            'employees': [self.priya.pk, self.dev.pk],
            'view_only': [self.dev.pk],
        })

        self.assertEqual(response.status_code, 201)
        row = response.json()['document']
        self.assertEqual(row['file_name'], 'offer-letter.pdf')
        self.assertEqual(row['file_type'], 'application/pdf')
        self.assertEqual(row['file_size'], 13)
        self.assertEqual(row['created_by_name'], 'HR Manager')
        self.assertEqual(row['assignment_count'], 2)

        flags = {item['employee_name']: item['can_download'] for item in row['assignments']}
        self.assertEqual(flags, {'Priya Shah': True, 'Dev Kumar': False})

    def test_create_needs_a_file(self):
        self.client.force_login(self.manager)
        response = self.client.post(reverse('documents:document_create'), {'title': 'Empty'})

        self.assertEqual(response.status_code, 400)
        self.assertIn('Please select a file to upload', response.json()['errors']['__all__'])

    def test_create_from_url(self):
        self.client.force_login(self.manager)
        response = self.client.post(reverse('documents:document_create'), {
            'title': 'Brand Guide',
            'file_url': 'https://files.example.com/brand/guide.pdf',
        })

        self.assertEqual(response.status_code, 201)
        document = Document.objects.get(title='Brand Guide')
        self.assertEqual(document.file_name, 'guide.pdf')
        self.assertEqual(document.category, 'General')
        self.assertEqual(document.status, 'Active')

    def test_update_and_filter(self):
        document = Document.objects.create(title='Handbook', file_url='https://files.example.com/h.pdf')
        self.client.force_login(self.manager)

        response = self.client.post(reverse('documents:document_update', args=[document.pk]), {'status': 'Archived'})
        self.assertEqual(response.status_code, 200)

        data = self.client.get(reverse('documents:document_list'), {'status': 'Archived'}).json()
        self.assertEqual([row['title'] for row in data['rows']], ['Handbook'])

    def test_assign_replaces_access(self):
        document = Document.objects.create(title='Handbook', file_url='https://files.example.com/h.pdf')
        assign(document, [{'employee': self.priya}])
        self.client.force_login(self.manager)

        response = self.client.post(reverse('documents:document_assign', args=[document.pk]), {'employees': [self.dev.pk]})

        self.assertEqual(response.status_code, 200)
        self.assertEqual([a.employee for a in document.assignments.all()], [self.dev])

    def test_delete(self):
        document = Document.objects.create(title='Handbook', file_url='https://files.example.com/h.pdf')
        assign(document, [{'employee': self.priya}])
        self.client.force_login(self.manager)

        response = self.client.post(reverse('documents:document_delete', args=[document.pk]))

        self.assertEqual(response.status_code, 200)
        self.assertFalse(Document.objects.exists())


class EmployeeDocumentViewTest(TestCase):

    def setUp(self):
        self.user = User.objects.create_user(email='priya@test.com', password='testpass123', role='employee')
        self.priya = Employee.objects.create(full_name='Priya Shah', official_email='priya@test.com')

        self.policy = Document.objects.create(title='Leave Policy', file_url='https://files.example.com/leave.pdf')
        self.payslip = Document.objects.create(title='Payslip', file_url='https://files.example.com/payslip.pdf')
        self.other = Document.objects.create(title='Board Minutes', file_url='https://files.example.com/board.pdf')
        assign(self.policy, [{'employee': self.priya}])
        assign(self.payslip, [{'employee': self.priya, 'can_download': False}])

        self.client.force_login(self.user)

    def test_my_documents(self):
        data = self.client.get(reverse('documents:my_documents')).json()

        rows = {row['title']: row for row in data['rows']}
        self.assertEqual(sorted(rows), ['Leave Policy', 'Payslip'])
        self.assertTrue(rows['Leave Policy']['can_download'])
        self.assertFalse(rows['Payslip']['can_download'])
        self.assertEqual(rows['Payslip']['file_url'], '')

    def test_download(self):
        response = self.client.get(reverse('documents:document_download', args=[self.policy.pk]))
        self.assertEqual(response.json()['url'], 'https://files.example.com/leave.pdf')

    def test_download_gate(self):
        response = self.client.get(reverse('documents:document_download', args=[self.payslip.pk]))
        self.assertEqual(response.status_code, 403)

        response = self.client.get(reverse('documents:document_download', args=[self.other.pk]))
        self.assertEqual(response.status_code, 403)
