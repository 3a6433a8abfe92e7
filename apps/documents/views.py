import logging

from django.contrib.auth.decorators import login_required
from django.db import DatabaseError
from django.http import JsonResponse
from django.shortcuts import get_object_or_404

from apps.accounts.decorators import employee_required, permission_required, post_required
from apps.core.exports import export_response
from apps.core.utils import fetch_rows, merge_form_data, table_payload
from apps.employees.models import Employee
from .forms import DocumentAssignForm, DocumentForm
from .models import Document
from .services import DocumentAccessError, assign, download_url, visible_documents
from .tables import DOCUMENT_TABLE, MY_DOCUMENT_TABLE

logger = logging.getLogger(__name__)


def document_queryset():
    return Document.objects.select_related('created_by').prefetch_related('assignments__employee')


def save_failed(action, error):
    logger.error(f"Failed to {action}: {error}", exc_info=True)
    return JsonResponse({'success': False, 'error': f'Failed to {action}'}, status=500)


# ADMIN SIDE
@login_required
@permission_required('documents.manage')
def document_list_view(request):
    rows, error = fetch_rows(document_queryset(), 'documents')
    return JsonResponse(table_payload(request, DOCUMENT_TABLE, rows, error))


@login_required
@permission_required('documents.manage')
@post_required
def document_create_view(request):
    form = DocumentForm(request.POST, request.FILES)
    assign_form = DocumentAssignForm(request.POST)
    if not form.is_valid() or not assign_form.is_valid():
        errors = {**form.errors, **assign_form.errors}
        return JsonResponse({'success': False, 'errors': errors}, status=400)

    try:
        document = form.save(commit=False)
        document.created_by = Employee.objects.for_user(request.user)
        document.save()
        assign(document, assign_form.assignments())
    except DatabaseError as e:
        return save_failed('create document', e)

    logger.info(f"Document '{document.title}' uploaded by {request.user.email}")
    return JsonResponse({'success': True, 'document': document_queryset().get(pk=document.pk).as_row()}, status=201)


@login_required
@permission_required('documents.manage')
@post_required
def document_update_view(request, pk):
    document = get_object_or_404(Document, pk=pk)
    form = DocumentForm(merge_form_data(DocumentForm, document, request.POST), request.FILES, instance=document)
    if not form.is_valid():
        return JsonResponse({'success': False, 'errors': form.errors}, status=400)

    try:
        document = form.save()
    except DatabaseError as e:
        return save_failed('update document', e)

    return JsonResponse({'success': True, 'document': document_queryset().get(pk=document.pk).as_row()})


@login_required
@permission_required('documents.manage')
@post_required
def document_assign_view(request, pk):
    document = get_object_or_404(Document, pk=pk)
    form = DocumentAssignForm(request.POST)
    if not form.is_valid():
        return JsonResponse({'success': False, 'errors': form.errors}, status=400)

    try:
        assign(document, form.assignments())
    except DatabaseError as e:
        return save_failed('update document access', e)

    return JsonResponse({'success': True, 'document': document_queryset().get(pk=document.pk).as_row()})


@login_required
@permission_required('documents.manage')
@post_required
def document_delete_view(request, pk):
    document = get_object_or_404(Document, pk=pk)

    try:
        if document.file:
            document.file.delete(save=False)
        document.delete()
    except DatabaseError as e:
        return save_failed('delete document', e)

    logger.info(f"Document {pk} deleted by {request.user.email}")
    return JsonResponse({'success': True})


@login_required
@permission_required('documents.manage')
def document_export_view(request):
    rows, _ = fetch_rows(document_queryset(), 'documents')
    return export_response(request, DOCUMENT_TABLE, rows, 'documents')


# EMPLOYEE SIDE
def my_document_row(document):
    row = document.as_row()
    row.pop('assignments')
    row['can_view'] = document.access.can_view
    row['can_download'] = document.access.can_download
    if not document.access.can_download:
        row['file_url'] = ''
    return row


@login_required
@permission_required('documents.view')
@employee_required
def my_documents_view(request):
    try:
        rows = [my_document_row(document) for document in visible_documents(request.employee)]
        error = None
    except DatabaseError as e:
        logger.error(f"Failed to fetch documents: {e}", exc_info=True)
        rows, error = [], 'Failed to fetch documents'
    return JsonResponse(table_payload(request, MY_DOCUMENT_TABLE, rows, error))


@login_required
@permission_required('documents.view')
@employee_required
def document_download_view(request, pk):
    document = get_object_or_404(Document, pk=pk)

    try:
        url = download_url(document, request.employee)
    except DocumentAccessError as e:
        return JsonResponse({'success': False, 'error': str(e)}, status=403)

    return JsonResponse({'success': True, 'url': url, 'file_name': document.file_name})
