import logging

from django.contrib.auth.decorators import login_required
from django.db import DatabaseError
from django.db.models import Count, Q
from django.http import JsonResponse
from django.utils import timezone

from apps.accounts.decorators import admin_required, post_required
from apps.attendance.models import AttendanceRecord
from apps.employees.models import Employee
from apps.leads.models import Lead
from apps.taskboard.models import Task
from .columns import ColumnVisibility
from .links import payment_system_url
from .notes import NoteStoreError, note_store
from .settings_store import SettingsError, load_settings, reset_settings, save_settings
from .table import TABLES
from .utils import parse_json_body

logger = logging.getLogger(__name__)


@login_required
def dashboard_view(request):
    """
    Main dashboard KPIs
    - Lead totals, new today, distribution by stage / source, conversion rate
    - Active employees, today's attendance, pending tasks
    """
    today = timezone.localdate()

    try:
        leads_qs = Lead.objects.all()
        total_leads = leads_qs.count()
        new_today = leads_qs.filter(date_and_time__date=today).count()

        # Stage is free text; 'Won' / 'Converted' / 'Deal Won' all count
        won_leads = leads_qs.filter(Q(stage__icontains='won') | Q(stage__icontains='converted')).count()
        conversion_rate = round(won_leads / total_leads * 100, 2) if total_leads > 0 else 0

        leads_by_stage = [
            {'name': item['stage'] or 'Unknown', 'count': item['count'],
             'percentage': round(item['count'] / total_leads * 100, 2) if total_leads else 0}
            for item in leads_qs.values('stage').annotate(count=Count('pk')).order_by('-count')
        ]
        leads_by_source = [
            {'name': item['source'] or 'Unknown', 'count': item['count']}
            for item in leads_qs.values('source').annotate(count=Count('pk')).order_by('-count')
        ]

        active_employees = Employee.objects.filter(status='Active').count()
        present_today = AttendanceRecord.objects.filter(date=today).count()
        pending_tasks = Task.objects.open().count()
    except DatabaseError as e:
        logger.error(f"Dashboard query failed: {e}", exc_info=True)
        return JsonResponse({'success': False, 'error': 'Failed to load dashboard'}, status=500)

    return JsonResponse({
        'total_leads': total_leads,
        'new_today': new_today,
        'won_leads': won_leads,
        'conversion_rate': conversion_rate,
        'leads_by_stage': leads_by_stage,
        'leads_by_source': leads_by_source,
        'active_employees': active_employees,
        'attendance_today': present_today,
        'pending_tasks': pending_tasks,
        'payment_system_url': payment_system_url(),
    })


# NOTES PANEL
@login_required
def notes_view(request, page_key):
    """GET - notes for the page, newest first / POST - create a note"""
    try:
        if request.method == 'POST':
            note = note_store.save(page_key, request.POST.get('title'), request.POST.get('content', ''))
            return JsonResponse({'success': True, 'note': note}, status=201)

        return JsonResponse({'notes': note_store.list(page_key)})
    except NoteStoreError as e:
        return JsonResponse({'success': False, 'error': str(e)}, status=400 if request.method == 'POST' else 500)


@login_required
@post_required
def note_update_view(request, page_key, pk):
    try:
        note = note_store.save(page_key, request.POST.get('title'), request.POST.get('content', ''), note_id=pk)
    except NoteStoreError as e:
        return JsonResponse({'success': False, 'error': str(e)}, status=400)
    return JsonResponse({'success': True, 'note': note})


@login_required
@post_required
def note_delete_view(request, page_key, pk):
    try:
        note_store.delete(page_key, pk)
    except NoteStoreError as e:
        return JsonResponse({'success': False, 'error': str(e)}, status=400)
    return JsonResponse({'success': True})


# SYSTEM SETTINGS (Admin Only)
@login_required
@admin_required
def settings_view(request):
    if request.method == 'POST':
        data = parse_json_body(request)
        if data is None:
            return JsonResponse({'success': False, 'error': 'Invalid JSON body'}, status=400)

        if data.get('reset'):
            return JsonResponse({'success': True, 'settings': reset_settings()})

        try:
            settings = save_settings(dict(data))
        except SettingsError as e:
            return JsonResponse({'success': False, 'error': str(e)}, status=400)
        return JsonResponse({'success': True, 'settings': settings})

    return JsonResponse({'settings': load_settings()})


# COLUMN VISIBILITY
@login_required
def columns_view(request, table_key):
    """
    GET  - {column id: visible}
    POST - JSON {column id: bool, ...} merged into the stored state,
           or {'reset': true} to go back to the defaults
    """
    table = TABLES.get(table_key)
    if table is None:
        return JsonResponse({'success': False, 'error': 'Unknown table'}, status=404)

    visibility = ColumnVisibility(request.session, table)

    if request.method == 'POST':
        data = parse_json_body(request)
        if data is None:
            return JsonResponse({'success': False, 'error': 'Invalid JSON body'}, status=400)

        if data.get('reset'):
            return JsonResponse({'success': True, 'columns': visibility.reset()})

        mapping = {key: value in (True, 'true', '1', 'on', 1) for key, value in data.items()}
        return JsonResponse({'success': True, 'columns': visibility.update(mapping)})

    return JsonResponse({'columns': visibility.load()})
