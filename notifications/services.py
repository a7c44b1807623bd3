import logging
from dataclasses import dataclass

from django.db import transaction

from common.exceptions import ApplicationError

from .models import Notification

logger = logging.getLogger(__name__)


class UnknownEventType(ApplicationError):
    pass


@dataclass(frozen=True)
class PushTemplate:
    title: str
    body: str
    url: str


# Event type -> push content. Body placeholders are filled from the event
# data, falling back to DEFAULT_DATA.
PUSH_TEMPLATES = {
    "deposit_approved": PushTemplate(
        "Deposit Successful",
        "Rs. {amount} has been added to your wallet. Start playing now.",
        "/wallet",
    ),
    "withdrawal_approved": PushTemplate(
        "Withdrawal Processed",
        "Rs. {amount} has been transferred to your account.",
        "/wallet",
    ),
    "withdrawal_rejected": PushTemplate(
        "Withdrawal Update",
        "Your withdrawal request was not approved. Check details in wallet.",
        "/wallet",
    ),
    "tournament_joined": PushTemplate(
        "Registration Confirmed",
        "You have joined {tournament_name}. Check match details.",
        "/my-match",
    ),
    "tournament_won": PushTemplate(
        "Congratulations",
        "You secured rank {rank} and won Rs. {prize}. Prize added to wallet.",
        "/wallet",
    ),
    "ban_lifted": PushTemplate(
        "Account Restored",
        "Your account has been restored. You can now access all features.",
        "/",
    ),
    "profile_updated": PushTemplate(
        "Profile Updated",
        "Your profile changes have been saved successfully.",
        "/profile",
    ),
    "dhana_earned": PushTemplate(
        "Dhana Earned",
        "You earned {amount} Dhana. Available after cooldown period.",
        "/wallet",
    ),
    "match_starting": PushTemplate(
        "Match Starting Soon",
        "{tournament_name} starts in {time}. Get ready.",
        "/my-match",
    ),
    "tournament_cancelled": PushTemplate(
        "Tournament Cancelled",
        "Tournament has been cancelled. Entry fee refunded to wallet.",
        "/wallet",
    ),
    "bonus_received": PushTemplate(
        "Bonus Received",
        "Rs. {amount} bonus added to your wallet.",
        "/wallet",
    ),
}

DEFAULT_DATA = {
    "amount": 0,
    "prize": 0,
    "rank": 1,
    "tournament_name": "the tournament",
    "time": "15 minutes",
}


def build_push_message(event_type, data=None):
    """
    Returns ``{"title", "message", "url"}`` for an event.

    Missing or empty values in ``data`` fall back to ``DEFAULT_DATA``; unknown
    event types raise ``UnknownEventType``.
    """
    template = PUSH_TEMPLATES.get(event_type)
    if template is None:
        raise UnknownEventType(f"Unknown event type: {event_type}")

    values = dict(DEFAULT_DATA)
    values.update({key: value for key, value in (data or {}).items() if value not in (None, "")})
    return {
        "title": template.title,
        "message": template.body.format(**values),
        "url": template.url,
    }


def notify(event_type, user, data=None):
    """
    Stores an in-app notification and queues the push once the surrounding
    database transaction commits.
    """
    from .tasks import send_push_notification

    content = build_push_message(event_type, data)
    notification = Notification.objects.create(
        user=user,
        notification_type=event_type,
        title=content["title"],
        message=content["message"],
        url=content["url"],
    )
    payload = {"event_type": event_type, **{k: str(v) for k, v in (data or {}).items()}}
    transaction.on_commit(
        lambda: send_push_notification.delay(user.pk, content, payload)
    )
    logger.debug(f"Queued {event_type} notification {notification.pk} for user {user.pk}.")
    return notification
