import logging
from datetime import timedelta
from decimal import Decimal

from django.db.models import Count, DecimalField, Q, Sum, Value
from django.db.models.functions import Coalesce
from django.utils import timezone

from tournaments.models import Tournament
from wallet.models import Transaction, Wallet

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")
ZERO = Decimal("0.00")

MONEY_FIELDS = ("platform_earnings", "organizer_earnings", "total_fees_collected")


def _money_sum(field):
    return Coalesce(
        Sum(field),
        Value(ZERO),
        output_field=DecimalField(max_digits=14, decimal_places=2),
    )


def revenue_summary(days=30, now=None):
    """
    Platform and organizer earnings per tournament type for tournaments
    starting in the last ``days`` days (or later), with the size of the
    deposit and withdrawal review queues.
    """
    now = now or timezone.now()
    since = now - timedelta(days=days)

    rows = (
        Tournament.objects.filter(start_date__gte=since)
        .exclude(status=Tournament.Status.CANCELLED)
        .values("tournament_type")
        .annotate(
            tournament_count=Count("id"),
            **{field: _money_sum(field) for field in MONEY_FIELDS},
        )
        .order_by("tournament_type")
    )

    by_type = []
    totals = {field: ZERO for field in MONEY_FIELDS}
    totals["tournament_count"] = 0
    for row in rows:
        entry = {"tournament_type": row["tournament_type"], "tournament_count": row["tournament_count"]}
        for field in MONEY_FIELDS:
            entry[field] = Decimal(row[field]).quantize(CENT)
            totals[field] += entry[field]
        totals["tournament_count"] += row["tournament_count"]
        by_type.append(entry)

    pending = Transaction.objects.filter(status=Transaction.Status.PENDING)
    return {
        "days": days,
        "since": since,
        "by_type": by_type,
        "totals": totals,
        "pending_deposits": pending.filter(
            transaction_type=Transaction.TransactionType.DEPOSIT
        ).count(),
        "pending_withdrawals": pending.filter(
            transaction_type=Transaction.TransactionType.WITHDRAWAL
        ).count(),
    }


def find_wallet_drift():
    """
    Wallets whose stored balance differs from the signed sum of their
    completed ledger rows.
    """
    wallets = Wallet.objects.select_related("user").annotate(
        ledger_total=Coalesce(
            Sum("transactions__amount", filter=Q(transactions__status=Transaction.Status.COMPLETED)),
            Value(ZERO),
            output_field=DecimalField(max_digits=14, decimal_places=2),
        )
    )

    drift = []
    for wallet in wallets:
        balance = Decimal(wallet.balance).quantize(CENT)
        ledger = Decimal(wallet.ledger_total).quantize(CENT)
        if balance != ledger:
            drift.append(
                {
                    "wallet_id": wallet.pk,
                    "username": wallet.user.username,
                    "balance": balance,
                    "ledger_balance": ledger,
                    "difference": balance - ledger,
                }
            )
    return drift
