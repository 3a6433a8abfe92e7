#!/usr/bin/env python
# OFFICEDESK - DJANGO MANAGEMENT SCRIPT
#
# Common commands:
# - python manage.py migrate            # Create the dashboard tables
# - python manage.py createsuperuser    # First admin account (role 'admin')
# - python manage.py runserver          # JSON API on :8000
# - python manage.py test               # Run the app test suites
#
# Background work runs in Celery (see config/celery.py)
# ==============================================================================

import os
import sys


def main():
    """Run administrative tasks"""

    # Points to config/settings.py
    os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings')

    try:
        from django.core.management import execute_from_command_line
    except ImportError as exc:
        raise ImportError(
            "Couldn't import Django. Are you sure it's installed and "
            "available on your PYTHONPATH environment variable? Did you "
            "forget to activate a virtual environment?"
        ) from exc

    execute_from_command_line(sys.argv)


if __name__ == '__main__':
    main()
