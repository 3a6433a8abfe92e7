from celery import shared_task
from django.db.models import Count
import logging

from .models import Task

logger = logging.getLogger(__name__)


@shared_task
def flag_overdue_tasks():
    """
    Periodic task: report open tasks past their due date, per assignee.
    Scheduled in config/celery.py
    """
    by_assignee = (
        Task.objects.overdue()
        .values('assignee__full_name')
        .annotate(count=Count('pk'))
        .order_by('-count')
    )

    total = 0
    for item in by_assignee:
        total += item['count']
        logger.warning(f"{item['count']} overdue task(s) for {item['assignee__full_name'] or 'Unassigned'}")

    logger.info(f"Overdue task check finished: {total} overdue")
    return total
