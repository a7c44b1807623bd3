import os

from celery import Celery
from celery.schedules import crontab

# Set the default Django settings module for the 'celery' program.
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "vyuha_project.settings")

app = Celery("vyuha_project")

# namespace='CELERY' means all celery-related configuration keys
# should have a `CELERY_` prefix.
app.config_from_object("django.conf:settings", namespace="CELERY")

# Load task modules from all registered Django app configs.
app.autodiscover_tasks()

# Periodic jobs. The prize pool window is one minute wide, so the
# recalculation must run every minute or tournaments are skipped.
app.conf.beat_schedule = {
    "recalculate-upcoming-prize-pools": {
        "task": "tournaments.tasks.recalculate_upcoming_prize_pools",
        "schedule": crontab(),
    },
    "start-due-tournaments": {
        "task": "tournaments.tasks.start_due_tournaments_task",
        "schedule": crontab(),
    },
    "audit-wallet-balances": {
        "task": "reporting.tasks.audit_wallet_balances",
        "schedule": crontab(minute=15, hour="*/6"),
    },
}

# --- Setup request_id propagation for Celery ---
from common.celery import setup_celery_signals  # noqa: E402

setup_celery_signals()
