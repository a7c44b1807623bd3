from celery.signals import before_task_publish, task_postrun, task_prerun

from .middleware import get_current_request_id, set_current_request_id


@before_task_publish.connect
def propagate_request_id(sender=None, headers=None, **kwargs):
    """
    Copies the producer's request_id into the task headers so the worker's
    log lines can be matched to the HTTP request that queued the task.
    """
    request_id = get_current_request_id()
    if request_id and headers is not None:
        headers["request_id"] = request_id


@task_prerun.connect
def load_request_id(sender=None, task_id=None, task=None, **kwargs):
    request_id = task.request.get("request_id") if task else None
    set_current_request_id(request_id or task_id)


@task_postrun.connect
def clear_request_id(**kwargs):
    set_current_request_id(None)


def setup_celery_signals():
    """Importing this module registers the handlers above."""
    return None
