"""
Withdrawable-earnings calculations over wallet ledger rows.

Only prize and commission money is withdrawable; deposits and bonuses can be
spent on entry fees but never cashed out. Every function here is pure and
accepts either ``Transaction`` instances or plain mappings using the
ledger's field names (``transaction_type`` or ``type``, ``amount``,
``status``, ``description``, ``created_at``).
"""
import re
from collections.abc import Mapping
from decimal import Decimal

EARNING_TYPES = frozenset({"winning", "prize", "prize_won"})
COMPLETED = "completed"
WITHDRAWAL = "withdrawal"

EARNING_DESCRIPTION_RE = re.compile(
    r"(?:Prize|Won|Winning|Commission).*?(?:for|from|in)\s+(.+?)(?:\s*-\s*Rank\s*(\d+))?$",
    re.IGNORECASE,
)


def _field(row, *names, default=None):
    for name in names:
        if isinstance(row, Mapping):
            if name in row:
                return row[name]
        elif hasattr(row, name):
            return getattr(row, name)
    return default


def _normalize(value):
    return (value or "").lower().strip()


def _row_type(row):
    return _field(row, "transaction_type", "type")


def _abs_amount(row):
    amount = _field(row, "amount")
    if not amount:
        return Decimal("0")
    return abs(Decimal(str(amount)))


def _is_completed(row):
    return _normalize(_field(row, "status")) == COMPLETED


def is_withdrawable_earning_type(transaction_type):
    t = _normalize(transaction_type)
    return t in EARNING_TYPES or "commission" in t


def get_withdrawable_earning_transactions(transactions):
    return [
        t for t in transactions
        if _is_completed(t) and is_withdrawable_earning_type(_row_type(t))
    ]


def compute_withdrawn_total(transactions):
    return sum(
        (
            _abs_amount(t)
            for t in transactions
            if _is_completed(t) and _normalize(_row_type(t)) == WITHDRAWAL
        ),
        Decimal("0"),
    )


def compute_withdrawable_from_transactions(transactions):
    """
    Returns ``max(0, earnings - completed withdrawals)`` as a Decimal.
    """
    transactions = list(transactions)
    earning_total = sum(
        (_abs_amount(t) for t in get_withdrawable_earning_transactions(transactions)),
        Decimal("0"),
    )
    return max(Decimal("0"), earning_total - compute_withdrawn_total(transactions))


def _label_from_description(description):
    match = EARNING_DESCRIPTION_RE.search(description)
    if not match:
        return description, ""
    position = f"Rank {match.group(2)}" if match.group(2) else ""
    return match.group(1) or description, position


def build_withdrawable_breakdown(earning_transactions):
    """
    One display item per earning row. Rows that reference their tournament
    directly use that reference; older rows fall back to parsing the
    free-text description.
    """
    breakdown = []
    for t in earning_transactions:
        row_type = _row_type(t) or ""
        tournament_name = (
            "Commission" if "commission" in _normalize(row_type) else "Tournament Prize"
        )
        position = ""

        referenced_name = _field(t, "tournament_name")
        rank = _field(t, "rank")
        description = _field(t, "description")

        if referenced_name:
            tournament_name = referenced_name
            position = f"Rank {rank}" if rank else ""
        elif description:
            tournament_name, position = _label_from_description(description)

        breakdown.append(
            {
                "tournament_name": tournament_name,
                "amount": _abs_amount(t),
                "date": _field(t, "created_at"),
                "type": row_type,
                "position": position,
            }
        )
    return breakdown
