from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class AccountsConfig(AppConfig):
    """
    Configuration class for accounts app

    Signals registered:
    - user_logged_in / user_login_failed → audit log lines
    """

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.accounts'

    # Human-readable app name (shown in admin panel)
    verbose_name = _('Accounts')

    def ready(self):
        # Import signals module to register signal handlers
        import apps.accounts.signals  # noqa: F401
