import logging

from django.contrib.auth.decorators import login_required
from django.db import DatabaseError
from django.http import JsonResponse
from django.shortcuts import get_object_or_404

from apps.accounts.decorators import employee_required, permission_required, post_required, role_required
from apps.core.exports import export_response
from apps.core.table import TableState
from apps.core.utils import fetch_rows, merge_form_data, table_payload
from .forms import TaskForm, TaskShareForm, TaskStatusForm
from .models import TIME_WINDOWS, Task
from .tables import TASK_TABLE

logger = logging.getLogger(__name__)


def task_queryset():
    return Task.objects.select_related('assignee')


def filter_by_time(tasks, request):
    """
    ?time=today|week|month|overdue (repeatable) keeps tasks matching any window.
    Works on Task objects before they become rows.
    """
    windows = [w for w in request.GET.getlist('time') if w in TIME_WINDOWS]
    if not windows:
        return tasks
    return [task for task in tasks if any(task.in_window(window) for window in windows)]


def task_rows(request, queryset):
    try:
        tasks = filter_by_time(list(queryset), request)
    except DatabaseError as e:
        logger.error(f"Failed to fetch tasks: {e}", exc_info=True)
        return [], 'Failed to fetch tasks'
    return fetch_rows(tasks, 'tasks')


def status_counts(rows):
    counts = {status: 0 for status, _ in Task.STATUS_CHOICES}
    for row in rows:
        if row['status'] in counts:
            counts[row['status']] += 1
    counts['total'] = len(rows)
    counts['overdue'] = sum(1 for row in rows if row['is_overdue'])
    return counts


def save_failed(action, error):
    logger.error(f"Failed to {action}: {error}", exc_info=True)
    return JsonResponse({'success': False, 'error': f'Failed to {action}'}, status=500)


# LIST VIEWS
@login_required
@permission_required('tasks.view')
def task_list_view(request):
    rows, error = task_rows(request, task_queryset())
    payload = table_payload(request, TASK_TABLE, rows, error)
    payload['counts'] = status_counts(rows)
    return JsonResponse(payload)


@login_required
@permission_required('tasks.view')
def task_kanban_view(request):
    rows, error = task_rows(request, task_queryset())
    state = TableState.from_query(request.GET, TASK_TABLE)
    rows = TASK_TABLE.process(rows, state)

    columns = {status: [] for status, _ in Task.STATUS_CHOICES}
    for row in rows:
        columns.setdefault(row['status'], []).append(row)

    return JsonResponse({
        'columns': columns,
        'counts': {status: len(items) for status, items in columns.items()},
        'error': error,
    })


@login_required
@employee_required
def my_tasks_view(request):
    rows, error = task_rows(request, task_queryset().filter(assignee=request.employee))
    payload = table_payload(request, TASK_TABLE, rows, error)
    payload['counts'] = status_counts(rows)
    return JsonResponse(payload)


# CREATE / UPDATE / DELETE
@login_required
@permission_required('tasks.create')
@post_required
def task_create_view(request):
    form = TaskForm(request.POST)
    if not form.is_valid():
        return JsonResponse({'success': False, 'errors': form.errors}, status=400)

    try:
        task = form.save()
    except DatabaseError as e:
        return save_failed('create task', e)

    logger.info(f"Task '{task.title}' created by {request.user.email}")
    return JsonResponse({'success': True, 'task': task.as_row()}, status=201)


@login_required
@permission_required('tasks.edit')
@post_required
def task_update_view(request, pk):
    task = get_object_or_404(Task, pk=pk)
    previous_status = task.status

    form = TaskForm(merge_form_data(TaskForm, task, request.POST), instance=task)
    if not form.is_valid():
        return JsonResponse({'success': False, 'errors': form.errors}, status=400)

    task = form.save(commit=False)
    task.record_status_change(previous_status)
    try:
        task.save()
    except DatabaseError as e:
        return save_failed('update task', e)

    return JsonResponse({'success': True, 'task': task.as_row()})


@login_required
@permission_required('tasks.edit')
@post_required
def task_change_status_view(request, pk):
    task = get_object_or_404(Task, pk=pk)
    form = TaskStatusForm(request.POST)
    if not form.is_valid():
        return JsonResponse({'success': False, 'errors': form.errors}, status=400)

    try:
        task.change_status(form.cleaned_data['status'])
    except DatabaseError as e:
        return save_failed('update task', e)

    return JsonResponse({'success': True, 'task': task.as_row()})


@login_required
@permission_required('tasks.create')
@post_required
def task_share_view(request, pk):
    task = get_object_or_404(Task, pk=pk)
    form = TaskShareForm(request.POST)
    if not form.is_valid():
        return JsonResponse({'success': False, 'errors': form.errors}, status=400)

    try:
        shared = task.share_with(form.cleaned_data['assignee'], form.cleaned_data['message'])
    except DatabaseError as e:
        return save_failed('share task', e)

    logger.info(f"Task {task.pk} shared with {shared.assignee} by {request.user.email}")
    return JsonResponse({'success': True, 'task': shared.as_row()}, status=201)


@login_required
@role_required('admin', 'manager')
@post_required
def task_delete_view(request, pk):
    task = get_object_or_404(Task, pk=pk)

    try:
        task.delete()
    except DatabaseError as e:
        return save_failed('delete task', e)

    logger.info(f"Task {pk} deleted by {request.user.email}")
    return JsonResponse({'success': True})


@login_required
@permission_required('tasks.view')
def task_export_view(request):
    rows, _ = task_rows(request, task_queryset())
    return export_response(request, TASK_TABLE, rows, 'tasks')
