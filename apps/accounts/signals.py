import logging

from django.contrib.auth.signals import user_logged_in, user_login_failed
from django.db.models.signals import pre_delete
from django.dispatch import receiver
from django.contrib.auth import get_user_model


User = get_user_model()
logger = logging.getLogger(__name__)


@receiver(user_logged_in)
def log_user_login(sender, request, user, **kwargs):
    logger.info(f"Login: {user.email} (role={user.role})")


@receiver(user_login_failed)
def log_login_failure(sender, credentials, request=None, **kwargs):
    # credentials are already scrubbed of the password by Django
    logger.warning(f"Login failed for {credentials.get('username', '')}")


# CLEANUP ON USER DELETION
@receiver(pre_delete, sender=User)
def delete_user_audit(sender, instance, **kwargs):
    logger.info(f"User deleted: {instance.email} ({instance.get_full_name()})")
