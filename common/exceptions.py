import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class ApplicationError(Exception):
    """
    Base class for business-rule violations raised by the service layer.
    Raised before any write happens, so the caller may simply retry.
    """

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message, status_code=None):
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


def custom_exception_handler(exc, context):
    if isinstance(exc, ApplicationError):
        return Response(
            {"detail": exc.message, "status_code": exc.status_code},
            status=exc.status_code,
        )

    response = exception_handler(exc, context)

    if response is not None:
        if isinstance(response.data, dict):
            response.data["status_code"] = response.status_code
        return response

    view = context.get("view")
    logger.error(
        f"Unhandled exception in {view.__class__.__name__ if view else 'unknown view'}: {exc}",
        exc_info=exc,
    )
    return Response(
        {"detail": "An unexpected error occurred."},
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
