# tracker/signals.py

import logging

from django.db.models.signals import post_save, pre_delete
from django.dispatch import receiver

from .models import Interview

logger = logging.getLogger(__name__)


@receiver(post_save, sender=Interview)
def handle_interview_saved(sender, instance, created, **kwargs):
    if created:
        logger.info(f"New interview created: {instance.pk} for user {instance.user_id}")
    else:
        logger.debug(f"Interview updated: {instance.pk} (status={instance.status})")


@receiver(pre_delete, sender=Interview)
def handle_interview_deletion(sender, instance, **kwargs):
    logger.info(f"Interview being deleted: {instance.pk}")
