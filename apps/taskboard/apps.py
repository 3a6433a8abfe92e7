from django.apps import AppConfig


class TaskboardConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.taskboard'
    verbose_name = 'Tasks'
