import logging

from django.db.models.signals import post_save, pre_save
from django.dispatch import receiver

from .models import Lead

logger = logging.getLogger(__name__)


@receiver(pre_save, sender=Lead)
def track_lead_changes(sender, instance, **kwargs):
    # Remember the stored stage / assignee so post_save can log the change
    old = Lead.objects.filter(pk=instance.pk).values('stage', 'assigned_to').first()
    if old:
        instance._old_stage = old['stage']
        instance._old_assigned_to = old['assigned_to']


@receiver(post_save, sender=Lead)
def log_lead_changes(sender, instance, created, **kwargs):
    if created:
        logger.info(f"Lead created: {instance.name or instance.mobile} ({instance.source or 'no source'})")
        return

    old_stage = getattr(instance, '_old_stage', None)
    if old_stage is not None and old_stage != instance.stage:
        logger.info(f"Lead {instance.pk} stage changed from '{old_stage}' to '{instance.stage}'")

    if hasattr(instance, '_old_assigned_to') and instance._old_assigned_to != instance.assigned_to_id:
        logger.info(f"Lead {instance.pk} reassigned to {instance.assigned_to_id}")
