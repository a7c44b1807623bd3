import logging

from .middleware import get_current_request_id


class RequestIDFilter(logging.Filter):
    """
    Adds ``request_id`` to every record; ``-`` outside of a request or task.
    """

    def filter(self, record):
        record.request_id = get_current_request_id() or "-"
        return True
