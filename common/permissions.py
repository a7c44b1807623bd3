import hmac

from django.conf import settings
from rest_framework import permissions


class HasSchedulerKey(permissions.BasePermission):
    """
    Grants access to callers presenting the shared scheduler key in the
    ``X-Scheduler-Key`` header. Used by the cron trigger, which has no user.
    """

    message = "Invalid or missing scheduler key."

    def has_permission(self, request, view):
        expected = getattr(settings, "SCHEDULER_API_KEY", None)
        provided = request.headers.get("X-Scheduler-Key")
        if not expected or not provided:
            return False
        return hmac.compare_digest(expected, provided)
