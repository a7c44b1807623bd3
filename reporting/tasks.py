import logging

from celery import shared_task

from .services import find_wallet_drift

logger = logging.getLogger(__name__)


@shared_task(ignore_result=True)
def audit_wallet_balances():
    drift = find_wallet_drift()
    for entry in drift:
        logger.warning(
            f"Wallet {entry['wallet_id']} ({entry['username']}) balance {entry['balance']} "
            f"differs from ledger {entry['ledger_balance']} by {entry['difference']}."
        )
    if not drift:
        logger.info("Wallet audit found no drift.")
    return len(drift)
