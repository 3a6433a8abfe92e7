"""
Round-robin auto-assignment of unassigned leads.

Each day has its own configuration, {service: [employee id, ...]}, kept as a
SystemSetting row under 'auto_assignment:<YYYY-MM-DD>'. A run walks the
unassigned leads oldest first. A lead whose ``services`` text equals a
configured service goes to the next employee in that service's rotation;
every other lead is left alone.

Example:
    {'USA LLC Formation': [neha, raj]} with three matching leads
    → neha, raj, neha
"""

import logging
import uuid

from django.db import transaction
from django.utils import timezone

from apps.core.models import SystemSetting
from apps.employees.models import Employee
from .models import Lead

logger = logging.getLogger(__name__)


class AssignmentError(ValueError):
    pass


def config_key(day=None):
    day = day or timezone.localdate()
    return f'auto_assignment:{day.isoformat()}'


def load_config(day=None):
    """Saved configuration for the day, or None"""
    row = SystemSetting.objects.filter(key=config_key(day)).first()
    return row.value if row else None


def _employee_id(value):
    try:
        return str(uuid.UUID(str(value)))
    except ValueError:
        raise AssignmentError(f"'{value}' is not an employee id")


def clean_config(data):
    """
    Validate {service: [employee id, ...]}.

    Services are stripped; services with no employees are dropped.

    Raises:
        AssignmentError: not an object, employees not given as a list, or an
        id that is not an Active employee
    """
    if not isinstance(data, dict):
        raise AssignmentError('Configuration must be an object')

    config = {}
    for service, employee_ids in data.items():
        service = str(service).strip()
        if not service:
            continue
        if not isinstance(employee_ids, list):
            raise AssignmentError(f"Employees for '{service}' must be a list")
        if employee_ids:
            config[service] = [_employee_id(employee_id) for employee_id in employee_ids]

    wanted = {employee_id for ids in config.values() for employee_id in ids}
    active = {
        str(pk) for pk in
        Employee.objects.filter(pk__in=wanted, status='Active').values_list('pk', flat=True)
    }
    unknown = sorted(wanted - active)
    if unknown:
        raise AssignmentError(f"Not an active employee: {', '.join(unknown)}")

    return config


def save_config(data, day=None):
    config = clean_config(data)
    SystemSetting.objects.update_or_create(key=config_key(day), defaults={'value': config})
    logger.info(f"Auto-assignment configuration saved for {config_key(day)} ({len(config)} services)")
    return config


def clear_config(day=None):
    SystemSetting.objects.filter(key=config_key(day)).delete()


def plan_assignments(leads, config):
    """
    [(lead, employee id)] in round-robin order per service.

    Each service keeps its own counter, advanced as (counter + 1) % len(employees).
    """
    counters = {service: 0 for service in config}
    plan = []

    for lead in leads:
        service = (lead.services or '').strip()
        employee_ids = config.get(service)
        if not employee_ids:
            continue

        counter = counters[service]
        plan.append((lead, employee_ids[counter]))
        counters[service] = (counter + 1) % len(employee_ids)

    return plan


def run_assignment(config=None, day=None):
    """
    Assign today's unassigned leads using the saved (or given) configuration.

    Returns:
        {'assigned': n, 'skipped': n, 'by_employee': {employee id: n}}

    Raises:
        AssignmentError: no configuration saved, an employee in it is no longer
        active, or none of its services has employees
    """
    if config is None:
        config = load_config(day)
        if config is None:
            raise AssignmentError("Today's assignment configuration has not been saved yet.")
    config = clean_config(config)
    if not config:
        raise AssignmentError('No valid assignment rules found. Configure at least one service with employees.')

    leads = list(Lead.objects.filter(assigned_to__isnull=True).order_by('date_and_time'))
    plan = plan_assignments(leads, config)
    employees = Employee.objects.in_bulk({employee_id for _, employee_id in plan})

    by_employee = {}
    with transaction.atomic():
        for lead, employee_id in plan:
            lead.assign_to(employees[uuid.UUID(employee_id)])
            by_employee[employee_id] = by_employee.get(employee_id, 0) + 1

    logger.info(f"Auto-assigned {len(plan)} of {len(leads)} unassigned leads")
    return {
        'assigned': len(plan),
        'skipped': len(leads) - len(plan),
        'by_employee': by_employee,
    }
