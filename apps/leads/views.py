import logging

from django.conf import settings
from django.contrib.auth.decorators import login_required
from django.db import DatabaseError
from django.http import JsonResponse
from django.shortcuts import get_object_or_404
from django.utils import timezone
from django.utils.dateparse import parse_date

from apps.accounts.decorators import employee_required, permission_required, post_required
from apps.core.exports import export_response
from apps.core.table import TableState
from apps.core.utils import fetch_rows, merge_form_data, parse_json_body, table_payload
from apps.employees.models import Employee
from .assignment import AssignmentError, clear_config, load_config, run_assignment, save_config
from .duplicates import find_duplicates, merge_group
from .forms import LeadAssignForm, LeadBulkAssignForm, LeadForm, LeadMergeForm, LeadStageChangeForm
from .models import FOLLOW_UP_STAGE, NEW_STAGES, NOT_CONNECTED_STAGE, CallLog, Lead
from .sales import sale_stage_q, sales_summary
from .scoring import rules_for_request, score_lead, score_leads
from .tables import CALL_TABLE, LEAD_TABLE

logger = logging.getLogger(__name__)

MY_LEAD_BUCKETS = {
    'new': {'stage__in': NEW_STAGES},
    'follow_up': {'stage': FOLLOW_UP_STAGE},
    'not_connected': {'stage': NOT_CONNECTED_STAGE},
}


def lead_queryset():
    return Lead.objects.select_related('assigned_to').prefetch_related('tags')


def filter_by_date(queryset, request):
    """?date=YYYY-MM-DD keeps leads that came in on that (local) day"""
    day = parse_date(request.GET.get('date', '') or '')
    if day:
        queryset = queryset.filter(date_and_time__date=day)
    return queryset


def save_failed(action, error):
    logger.error(f"Failed to {action}: {error}", exc_info=True)
    return JsonResponse({'success': False, 'error': f'Failed to {action}'}, status=500)


# LIST VIEWS
@login_required
@permission_required('leads.view')
def lead_list_view(request):
    queryset = filter_by_date(lead_queryset(), request)
    rows, error = fetch_rows(queryset, 'leads')
    return JsonResponse(table_payload(request, LEAD_TABLE, rows, error))


@login_required
@employee_required
def my_leads_view(request):
    """
    Leads assigned to the signed-in employee.

    ?bucket=new            stage New / Assigned
    ?bucket=follow_up      stage 'Follow Up Required', soonest follow-up first
    ?bucket=not_connected  stage 'Not Connected'
    (no bucket)            everything assigned
    """
    bucket = request.GET.get('bucket', '')
    if bucket and bucket not in MY_LEAD_BUCKETS:
        return JsonResponse({'success': False, 'error': 'Unknown bucket'}, status=400)

    queryset = lead_queryset().filter(assigned_to=request.employee)
    if bucket:
        queryset = queryset.filter(**MY_LEAD_BUCKETS[bucket])
    if bucket == 'follow_up':
        queryset = queryset.order_by('follow_up_date')

    rows, error = fetch_rows(filter_by_date(queryset, request), 'leads')
    payload = table_payload(request, LEAD_TABLE, rows, error)
    payload['bucket'] = bucket or 'all'
    payload['due_today'] = sum(1 for row in rows if row['due_today'])
    return JsonResponse(payload)


@login_required
@permission_required('leads.view')
def lead_kanban_view(request):
    """Searched + filtered leads grouped by stage (stages in first-seen order)"""
    rows, error = fetch_rows(filter_by_date(lead_queryset(), request), 'leads')
    state = TableState.from_query(request.GET, LEAD_TABLE)
    rows = LEAD_TABLE.process(rows, state)

    columns = {}
    for row in rows:
        columns.setdefault(row['stage'] or 'No Stage', []).append(row)

    return JsonResponse({
        'columns': columns,
        'counts': {stage: len(items) for stage, items in columns.items()},
        'error': error,
    })


@login_required
@permission_required('leads.view')
def lead_detail_view(request, pk):
    lead = get_object_or_404(lead_queryset(), pk=pk)
    row = lead.as_row()

    return JsonResponse({
        'lead': row,
        'calls': [call.as_row() for call in lead.calls.all()],
        'score': score_lead(row),
    })


# CREATE / UPDATE / DELETE
@login_required
@permission_required('leads.create')
@post_required
def lead_create_view(request):
    form = LeadForm(request.POST)
    if not form.is_valid():
        return JsonResponse({'success': False, 'errors': form.errors}, status=400)

    try:
        lead = form.save()
    except DatabaseError as e:
        return save_failed('create lead', e)

    return JsonResponse({'success': True, 'lead': lead.as_row()}, status=201)


@login_required
@permission_required('leads.edit')
@post_required
def lead_update_view(request, pk):
    lead = get_object_or_404(Lead, pk=pk)
    form = LeadForm(merge_form_data(LeadForm, lead, request.POST), instance=lead)
    if not form.is_valid():
        return JsonResponse({'success': False, 'errors': form.errors}, status=400)

    try:
        lead = form.save()
    except DatabaseError as e:
        return save_failed('update lead', e)

    return JsonResponse({'success': True, 'lead': lead.as_row()})


@login_required
@permission_required('leads.edit')
@post_required
def lead_change_stage_view(request, pk):
    lead = get_object_or_404(Lead, pk=pk)
    form = LeadStageChangeForm(request.POST)
    if not form.is_valid():
        return JsonResponse({'success': False, 'errors': form.errors}, status=400)

    try:
        lead.change_stage(form.cleaned_data['stage'])
    except DatabaseError as e:
        return save_failed('update lead stage', e)

    return JsonResponse({'success': True, 'stage': lead.stage})


@login_required
@permission_required('leads.assign')
@post_required
def lead_assign_view(request, pk):
    lead = get_object_or_404(Lead, pk=pk)
    form = LeadAssignForm(request.POST)
    if not form.is_valid():
        return JsonResponse({'success': False, 'errors': form.errors}, status=400)

    try:
        lead.assign_to(form.cleaned_data['assigned_to'])
    except DatabaseError as e:
        return save_failed('assign lead', e)

    return JsonResponse({'success': True, 'lead': lead.as_row()})


@login_required
@permission_required('leads.assign')
@post_required
def lead_bulk_assign_view(request):
    form = LeadBulkAssignForm(request.POST)
    if not form.is_valid():
        return JsonResponse({'success': False, 'errors': form.errors}, status=400)

    employee = form.cleaned_data['assigned_to']
    try:
        for lead in form.cleaned_data['leads']:
            lead.assign_to(employee)
    except DatabaseError as e:
        return save_failed('assign leads', e)

    count = len(form.cleaned_data['leads'])
    logger.info(f"{request.user.email} assigned {count} leads to {employee or 'nobody'}")
    return JsonResponse({'success': True, 'assigned': count})


@login_required
@permission_required('leads.delete')
@post_required
def lead_delete_view(request, pk):
    lead = get_object_or_404(Lead, pk=pk)

    try:
        lead.delete()
    except DatabaseError as e:
        return save_failed('delete lead', e)

    logger.info(f"Lead {pk} deleted by {request.user.email}")
    return JsonResponse({'success': True})


@login_required
@permission_required('leads.view')
def lead_export_view(request):
    rows, _ = fetch_rows(filter_by_date(lead_queryset(), request), 'leads')
    return export_response(request, LEAD_TABLE, rows, 'leads')



# AUTO-ASSIGNMENT
@login_required
@permission_required('leads.assign')
def auto_assign_config_view(request):
    """
    GET  - today's round-robin configuration plus the pickers' options
    POST - JSON {service: [employee id, ...]} replaces today's configuration,
           or {'reset': true} to clear it
    """
    if request.method == 'POST':
        data = parse_json_body(request)
        if data is None:
            return JsonResponse({'success': False, 'error': 'Invalid JSON body'}, status=400)
        if hasattr(data, 'lists'):
            data = dict(data.lists())

        try:
            if data.pop('reset', None):
                clear_config()
                return JsonResponse({'success': True, 'config': None})
            config = save_config(data)
        except AssignmentError as e:
            return JsonResponse({'success': False, 'error': str(e)}, status=400)
        except DatabaseError as e:
            return save_failed('save assignment configuration', e)

        return JsonResponse({'success': True, 'config': config})

    employees, error = fetch_rows(Employee.objects.filter(status='Active'), 'employees')
    services = (
        Lead.objects.exclude(services='').order_by('services')
        .values_list('services', flat=True).distinct()
    )
    return JsonResponse({
        'config': load_config(),
        'services': list(services),
        'employees': [{'id': row['id'], 'full_name': row['full_name']} for row in employees],
        'unassigned': Lead.objects.filter(assigned_to__isnull=True).count(),
        'error': error,
    })


@login_required
@permission_required('leads.assign')
@post_required
def auto_assign_run_view(request):
    try:
        result = run_assignment()
    except AssignmentError as e:
        return JsonResponse({'success': False, 'error': str(e)}, status=400)
    except DatabaseError as e:
        return save_failed('auto-assign leads', e)

    logger.info(f"{request.user.email} ran auto-assignment: {result['assigned']} leads assigned")
    return JsonResponse({'success': True, **result})


# SCORING & DUPLICATES
@login_required
@permission_required('analytics.view')
def lead_scores_view(request):
    """
    Scores for the latest leads, highest first.
    ?disabled=<rule id> (repeatable) switches rules off for this request only.
    """
    rules = rules_for_request(request.GET.getlist('disabled'))
    queryset = lead_queryset().order_by('-date_and_time')[:settings.LEAD_SCORING_BATCH]
    rows, error = fetch_rows(queryset, 'leads')

    scored = score_leads(rows, rules)
    summary = {priority: 0 for priority in ('High', 'Medium', 'Low')}
    for item in scored:
        summary[item['priority']] += 1

    return JsonResponse({
        'rules': [rule.as_dict() for rule in rules],
        'leads': scored,
        'summary': summary,
        'average_score': round(sum(item['score'] for item in scored) / len(scored), 2) if scored else 0,
        'error': error,
    })


@login_required
@permission_required('leads.edit')
def lead_duplicates_view(request):
    queryset = lead_queryset().order_by('-date_and_time')[:settings.LEAD_DUPLICATE_BATCH]
    rows, error = fetch_rows(queryset, 'leads')
    groups = find_duplicates(rows)

    return JsonResponse({
        'groups': groups,
        'total_groups': len(groups),
        'scanned': len(rows),
        'error': error,
    })


@login_required
@permission_required('leads.delete')
@post_required
def lead_merge_view(request):
    form = LeadMergeForm(request.POST)
    if not form.is_valid():
        return JsonResponse({'success': False, 'errors': form.errors}, status=400)

    try:
        lead = merge_group(form.cleaned_data['leads'])
    except DatabaseError as e:
        return save_failed('merge leads', e)

    lead = lead_queryset().get(pk=lead.pk)
    return JsonResponse({'success': True, 'lead': lead.as_row()})


# CALL LOGS
@login_required
@permission_required('sales.view')
def call_log_list_view(request):
    rows, error = fetch_rows(CallLog.objects.all(), 'call logs')
    return JsonResponse(table_payload(request, CALL_TABLE, rows, error))


@login_required
@employee_required
def my_calls_view(request):
    rows, error = fetch_rows(CallLog.objects.filter(employee=request.employee), 'call logs')

    today = timezone.localdate()
    payload = table_payload(request, CALL_TABLE, rows, error)
    payload['counts'] = {
        call_type: sum(1 for row in rows if row['call_type'] == call_type)
        for call_type, _ in CallLog.CALL_TYPE_CHOICES
    }
    payload['counts']['today'] = CallLog.objects.filter(employee=request.employee, call_date__date=today).count()
    return JsonResponse(payload)


# SALES
@login_required
@permission_required('sales.view')
def sales_overview_view(request):
    """
    Closed deals per sales employee.

    ?range=today|week|month|last15  ranking period (default month)
    ?search=<name>                  narrows the employee list only
    """
    rows, error = fetch_rows(lead_queryset().filter(sale_stage_q()), 'leads')
    staff = Employee.objects.filter(job_title__icontains='sales').exclude(status='Resigned')
    staff_rows, staff_error = fetch_rows(staff, 'employees')

    summary = sales_summary(rows, staff_rows, rank_by=request.GET.get('range', 'month'))

    search = (request.GET.get('search') or '').strip().lower()
    if search:
        summary['employees'] = [item for item in summary['employees'] if search in item['name'].lower()]

    summary['error'] = error or staff_error
    return JsonResponse(summary)
