"""
Attendance timing policy.

Office staff start at 09:30 and finish at 18:30, the tech team starts at
10:00 and finishes at 18:00 (see settings.ATTENDANCE_POLICY).

    check-in >= 12:00                     -> Half Day
    check-in <= start + 15 minutes        -> Present
    otherwise                             -> Late
    check-out strictly after end of day   -> status + ' (Overtime)'

Times are stored in the Attendance table as HH.MM floats: 09:05 -> 9.05,
18:30 -> 18.3.
"""

from datetime import datetime, time

from django.conf import settings

PRESENT = 'Present'
LATE = 'Late'
HALF_DAY = 'Half Day'
OVERTIME_SUFFIX = ' (Overtime)'


def _policy(name):
    return settings.ATTENDANCE_POLICY[name]


def parse_time(value):
    """time, datetime, 'HH:MM[:SS]' or an HH.MM float → time"""
    if isinstance(value, datetime):
        return value.time()
    if isinstance(value, time):
        return value
    if isinstance(value, (int, float)):
        return float_to_time(value)
    return datetime.strptime(value.strip()[:8], '%H:%M:%S' if value.count(':') == 2 else '%H:%M').time()


def time_to_float(value):
    value = parse_time(value)
    return round(value.hour + value.minute / 100, 2)


def float_to_time(value):
    hours = int(value)
    minutes = int(round((value - hours) * 100))
    return time(hours, minutes)


def format_time(value):
    """HH.MM float (or None) → 'HH:MM' for display"""
    if value is None:
        return ''
    return float_to_time(value).strftime('%H:%M')


def _minutes(value):
    return value.hour * 60 + value.minute + value.second / 60


def start_time(is_tech=False):
    return _policy('tech_start') if is_tech else _policy('office_start')


def end_time(is_tech=False):
    return _policy('tech_end') if is_tech else _policy('office_end')


def calculate_status(check_in, is_tech=False):
    check_in = parse_time(check_in)

    if check_in >= _policy('half_day_cutoff'):
        return HALF_DAY

    late_by = _minutes(check_in) - _minutes(start_time(is_tech))
    if late_by <= _policy('grace_minutes'):
        return PRESENT
    return LATE


def overtime_status(status, check_out, is_tech=False):
    if status.endswith(OVERTIME_SUFFIX):
        return status
    if parse_time(check_out) > end_time(is_tech):
        return status + OVERTIME_SUFFIX
    return status


def working_hours(check_in, check_out):
    """Hours between check-in and check-out, 2 decimals (never negative)"""
    minutes = _minutes(parse_time(check_out)) - _minutes(parse_time(check_in))
    return round(max(minutes, 0) / 60, 2)
