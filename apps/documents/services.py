"""
Document access.

Assignments are the only source of access for employees: a document shows
up in an employee's list when it is Active and assigned with can_view, and
its file URL is handed out only with can_download.
"""

import logging

from django.db import transaction

from .models import Document, DocumentAssignment

logger = logging.getLogger(__name__)


class DocumentAccessError(Exception):
    pass


def assign(document, assignments):
    """
    Replace the document's assignment set.

    ``assignments`` is an iterable of dicts:
        {'employee': Employee, 'can_view': bool, 'can_download': bool}
    (flags default to True). A later entry for the same employee wins.
    """
    by_employee = {}
    for item in assignments:
        by_employee[item['employee'].pk] = DocumentAssignment(
            document=document,
            employee=item['employee'],
            can_view=item.get('can_view', True),
            can_download=item.get('can_download', True),
        )

    with transaction.atomic():
        document.assignments.all().delete()
        created = DocumentAssignment.objects.bulk_create(by_employee.values())

    logger.info(f"Document {document.pk} assigned to {len(created)} employee(s)")
    return created


def visible_documents(employee):
    """Active documents the employee may view, each with its assignment attached"""
    assignments = (
        DocumentAssignment.objects
        .filter(employee=employee, can_view=True, document__status='Active')
        .select_related('document', 'document__created_by')
        .order_by('-document__created_at')
    )
    documents = []
    for assignment in assignments:
        document = assignment.document
        document.access = assignment
        documents.append(document)
    return documents


def access_for(document, employee):
    return DocumentAssignment.objects.filter(document=document, employee=employee).first()


def download_url(document, employee):
    """
    File URL for an employee download.

    Raises:
        DocumentAccessError: not assigned, view revoked, or download not allowed
    """
    access = access_for(document, employee)
    if access is None or not access.can_view or document.status != 'Active':
        raise DocumentAccessError('You do not have access to this document')
    if not access.can_download:
        raise DocumentAccessError('You do not have permission to download this document')

    logger.info(f"{employee.full_name} downloaded document {document.pk}")
    return document.url
