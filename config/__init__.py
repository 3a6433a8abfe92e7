# ==============================================================================
# OFFICEDESK - CONFIG PACKAGE INITIALIZER
# ==============================================================================

# Import Celery app to ensure it's loaded when Django starts
# so @shared_task functions bind to it and .delay() uses our broker settings
from .celery import app as celery_app

__all__ = ('celery_app',)
