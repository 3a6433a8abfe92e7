# Celery runs the background side of the dashboard:
# - Mirror attendance check-ins/check-outs from the local tier to the database
# - Re-send attendance records whose sync never got acknowledged
# - Report overdue tasks
#
# Start worker: celery -A config worker -l info
# Start beat: celery -A config beat -l info
# ==============================================================================

import os
from celery import Celery
from celery.schedules import crontab

# Set the default Django settings module for Celery
os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings')

# 'officedesk' is the app name (appears in logs and monitoring)
app = Celery('officedesk')

# All settings prefixed with 'CELERY_' will be used
# Example: CELERY_BROKER_URL, CELERY_RESULT_BACKEND
app.config_from_object('django.conf:settings', namespace='CELERY')

# Looks for tasks.py file in each installed app
app.autodiscover_tasks()


# CELERY BEAT SCHEDULE (Periodic Tasks)

app.conf.beat_schedule = {
    'resync-pending-attendance': {
        'task': 'apps.attendance.tasks.resync_pending_attendance',
        'schedule': crontab(minute='*/15'),  # Every 15 minutes
    },

    'flag-overdue-tasks': {
        'task': 'apps.taskboard.tasks.flag_overdue_tasks',
        'schedule': crontab(minute=0),  # Every hour at minute 0
    },
}


# CELERY TASK ANNOTATIONS

app.conf.task_annotations = {
    # Attendance sync hits the database once per check-in/out
    'apps.attendance.tasks.sync_attendance_record': {
        'rate_limit': '60/m',
    },
}
