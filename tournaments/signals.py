import logging

from django.db.models.signals import post_save
from django.dispatch import receiver

from .models import Tournament

logger = logging.getLogger(__name__)


@receiver(post_save, sender=Tournament)
def log_tournament_created(sender, instance, created, **kwargs):
    if created:
        logger.info(
            f"Tournament {instance.pk} '{instance.title}' created by organizer {instance.organizer_id}."
        )
