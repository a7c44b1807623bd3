import logging

import requests
from celery import shared_task
from django.conf import settings
from pybreaker import CircuitBreakerError

from common.services import HttpClient

logger = logging.getLogger(__name__)


@shared_task(
    bind=True,
    autoretry_for=(requests.RequestException, CircuitBreakerError),
    retry_backoff=True,
    retry_backoff_max=300,
    retry_jitter=True,
    retry_kwargs={"max_retries": 5},
    ignore_result=True,
)
def send_push_notification(self, user_id, content, data=None):
    """
    Sends a push notification to one user through OneSignal, addressed by the
    user's external id.
    """
    if not settings.ONESIGNAL_APP_ID or not settings.ONESIGNAL_REST_API_KEY:
        logger.info(
            f"OneSignal not configured; skipping push '{content['title']}' for user {user_id}."
        )
        return None

    payload = {
        "app_id": settings.ONESIGNAL_APP_ID,
        "include_aliases": {"external_id": [str(user_id)]},
        "target_channel": "push",
        "headings": {"en": content["title"]},
        "contents": {"en": content["message"]},
        "url": content["url"],
        "data": {"user_id": str(user_id), **(data or {})},
    }
    response = HttpClient("onesignal").post(
        settings.ONESIGNAL_API_URL,
        json=payload,
        headers={"Authorization": f"Basic {settings.ONESIGNAL_REST_API_KEY}"},
    )
    result = response.json()
    logger.info(f"Push '{content['title']}' sent to user {user_id}: {result.get('id')}")
    return result
