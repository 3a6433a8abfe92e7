"""
Sales overview: closed deals per employee for today, this week (from
Monday), this month and the last 15 days, plus a top performers list.

A lead counts as a sale when its free-text stage contains 'won' or 'sale'
(any case), e.g. 'Won', 'Closed Won', 'Sale Done'. Its value is
``deal_amount``; blank or unparseable amounts count as 0.
"""

import re
from datetime import timedelta

from django.db.models import Q
from django.utils import timezone
from django.utils.dateparse import parse_datetime

SALE_WORDS = ('won', 'sale')
PERIODS = ('today', 'week', 'month', 'last15')
TOP_PERFORMERS = 5


def is_sale_stage(stage):
    stage = (stage or '').lower()
    return any(word in stage for word in SALE_WORDS)


def sale_stage_q():
    """Database-side version of is_sale_stage()"""
    q = Q()
    for word in SALE_WORDS:
        q |= Q(stage__icontains=word)
    return q


def parse_amount(value):
    """'₹ 1,20,000' → 120000.0; anything unparseable → 0"""
    if isinstance(value, (int, float)):
        return float(value)
    cleaned = re.sub(r'[^0-9.-]+', '', str(value or ''))
    try:
        return float(cleaned)
    except ValueError:
        return 0.0


def period_bounds(now=None):
    """{period: (start, end)} as aware local datetimes, end exclusive"""
    now = timezone.localtime(now) if now else timezone.localtime()
    start_of_day = now.replace(hour=0, minute=0, second=0, microsecond=0)
    end_of_day = start_of_day + timedelta(days=1)

    start_of_week = start_of_day - timedelta(days=start_of_day.weekday())
    start_of_month = start_of_day.replace(day=1)
    end_of_month = (start_of_month + timedelta(days=32)).replace(day=1)

    return {
        'today': (start_of_day, end_of_day),
        'week': (start_of_week, start_of_week + timedelta(days=7)),
        'month': (start_of_month, end_of_month),
        'last15': (start_of_day - timedelta(days=14), end_of_day),
    }


def _when(value):
    if not value:
        return None
    when = parse_datetime(value) if isinstance(value, str) else value
    if when is not None and timezone.is_naive(when):
        when = timezone.make_aware(when)
    return when


def _empty_stats(employee_id, name, photo='', job_title=''):
    stats = {'id': employee_id, 'name': name or 'Unnamed', 'photo': photo, 'job_title': job_title}
    for period in PERIODS + ('total',):
        stats[period] = {'count': 0, 'amount': 0.0}
    return stats


def sales_summary(lead_rows, employee_rows=(), now=None, rank_by='month'):
    """
    Per-employee sales figures from lead and employee row dicts.

    Every employee in ``employee_rows`` is listed, even with no sales; an
    employee outside that list shows up once they close a deal. Employees
    are ranked by ``rank_by`` amount, highest first.
    """
    if rank_by not in PERIODS:
        rank_by = 'month'
    bounds = period_bounds(now)

    by_employee = {
        row['id']: _empty_stats(row['id'], row.get('full_name'), row.get('profile_photo', ''), row.get('job_title', ''))
        for row in employee_rows
    }
    totals = {period: {'count': 0, 'amount': 0.0} for period in PERIODS}
    count, revenue = 0, 0.0

    for row in lead_rows:
        if not is_sale_stage(row.get('stage')):
            continue

        amount = parse_amount(row.get('deal_amount'))
        when = _when(row.get('date_and_time'))
        count += 1
        revenue += amount

        periods = [
            period for period, (start, end) in bounds.items()
            if when is not None and start <= when < end
        ]
        for period in periods:
            totals[period]['count'] += 1
            totals[period]['amount'] += amount

        employee_id = row.get('assigned_to')
        if not employee_id:
            continue
        if employee_id not in by_employee:
            by_employee[employee_id] = _empty_stats(employee_id, row.get('assigned_to_name'))

        stats = by_employee[employee_id]
        for period in periods + ['total']:
            stats[period]['count'] += 1
            stats[period]['amount'] += amount

    employees = sorted(by_employee.values(), key=lambda s: (-s[rank_by]['amount'], s['name'].lower()))
    performers = sorted(
        (s for s in by_employee.values() if s['total']['amount'] > 0),
        key=lambda s: -s['total']['amount'],
    )[:TOP_PERFORMERS]

    return {
        'totals': {
            'count': count,
            'revenue': round(revenue, 2),
            'average_deal': round(revenue / count, 2) if count else 0,
        },
        'periods': totals,
        'employees': employees,
        'top_performers': [
            {'id': s['id'], 'name': s['name'], 'amount': s['total']['amount'], 'count': s['total']['count']}
            for s in performers
        ],
        'rank_by': rank_by,
    }
