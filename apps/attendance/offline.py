"""
Local tier for today's attendance record.

Each employee's record for the current day lives in the Django cache under
'offline-attendance:<employee id>' and is the authoritative copy until the
day rolls over. A record carries ``synced`` (has the database acknowledged
this exact version?) and ``id`` (database primary key once known).
"""

from django.core.cache import cache

CACHE_PREFIX = 'offline-attendance'
# Two days so yesterday's record can still be resynced after midnight
CACHE_TIMEOUT = 60 * 60 * 48

# Fields mirrored to the Attendance table
SYNC_FIELDS = (
    'employee', 'full_name_from_employee', 'employee_id_from_employee',
    'date', 'time_in', 'time_out', 'status', 'working_hours',
)


def cache_key(employee_id):
    return f'{CACHE_PREFIX}:{employee_id}'


def load(employee_id):
    return cache.get(cache_key(employee_id))


def save(employee_id, record):
    cache.set(cache_key(employee_id), record, CACHE_TIMEOUT)
    return record


def same_version(a, b):
    return all(a.get(name) == b.get(name) for name in SYNC_FIELDS)


def mark_synced(employee_id, record, remote_id):
    """
    Flag the cached record as acknowledged, unless it changed after
    ``record`` was sent (a newer sync is already queued for it).
    """
    cached = load(employee_id)
    if not cached or not same_version(cached, record):
        return False
    cached['synced'] = True
    cached['id'] = remote_id
    save(employee_id, cached)
    return True


def pending(employee_ids):
    """{employee id: record} for cached records still waiting for the database"""
    keys = {cache_key(employee_id): employee_id for employee_id in employee_ids}
    found = cache.get_many(list(keys))
    return {
        keys[key]: record for key, record in found.items()
        if record and not record.get('synced')
    }
