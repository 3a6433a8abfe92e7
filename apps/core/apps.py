from django.apps import AppConfig


class CoreConfig(AppConfig):
    """
    Configuration for Core application

    This app contains:
        - Table engine (search / filter / sort / paginate) shared by all list pages
        - Column visibility, CSV / Excel export
        - Notes panel and system settings
        - Dashboard KPIs
    """
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.core'
    verbose_name = 'Core'
