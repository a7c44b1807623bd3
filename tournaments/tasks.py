import logging

from celery import shared_task

from .services import recalculate_due_prize_pools, start_due_tournaments

logger = logging.getLogger(__name__)


@shared_task(soft_time_limit=50, time_limit=55)
def recalculate_upcoming_prize_pools():
    """
    Runs every minute from celery beat and settles the prize pool of every
    tournament that is about to start.
    """
    result = recalculate_due_prize_pools()
    if result["processed"]:
        logger.info(f"Prize pool recalculation processed {result['processed']} tournament(s).")
    return result


@shared_task
def start_due_tournaments_task():
    return start_due_tournaments()
