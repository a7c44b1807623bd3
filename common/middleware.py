import uuid
from threading import local

_thread_locals = local()

REQUEST_ID_HEADER = "HTTP_X_REQUEST_ID"


def get_current_request_id():
    """Returns the request_id bound to the current thread, if any."""
    return getattr(_thread_locals, "request_id", None)


def set_current_request_id(request_id):
    _thread_locals.request_id = request_id


class RequestIDMiddleware:
    """
    Binds a request_id to every request so log lines and queued tasks can be
    correlated. An incoming X-Request-ID header (e.g. from the scheduler or a
    proxy) is reused instead of generating a fresh one.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        request_id = request.META.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        set_current_request_id(request_id)
        try:
            response = self.get_response(request)
        finally:
            set_current_request_id(None)
        response["X-Request-ID"] = request_id
        return response
