"""
Tests for the withdrawable-earnings calculator in wallet/earnings.py.
"""
from datetime import datetime, timezone
from decimal import Decimal
from types import SimpleNamespace

import pytest

from wallet.earnings import (
    build_withdrawable_breakdown,
    compute_withdrawable_from_transactions,
    compute_withdrawn_total,
    get_withdrawable_earning_transactions,
    is_withdrawable_earning_type,
)


def row(type_, amount, status="completed", description="", **extra):
    return {"type": type_, "amount": amount, "status": status, "description": description, **extra}


@pytest.mark.parametrize(
    "value,expected",
    [
        ("prize", True),
        ("  PRIZE ", True),
        ("winning", True),
        ("prize_won", True),
        ("commission", True),
        ("organizer_commission", True),
        ("bonus", False),
        ("deposit", False),
        ("entry_fee", False),
        ("refund", False),
        ("", False),
        (None, False),
    ],
)
def test_is_withdrawable_earning_type(value, expected):
    assert is_withdrawable_earning_type(value) is expected


def test_prize_minus_completed_withdrawal():
    ledger = [row("prize", 500), row("withdrawal", -200)]
    assert compute_withdrawable_from_transactions(ledger) == Decimal("300")


def test_bonus_is_not_withdrawable():
    assert compute_withdrawable_from_transactions([row("bonus", 50)]) == Decimal("0")


def test_pending_and_failed_rows_are_ignored():
    ledger = [
        row("prize", 500),
        row("prize", 1000, status="pending"),
        row("withdrawal", -300, status="pending"),
        row("withdrawal", -400, status="failed"),
    ]
    assert compute_withdrawable_from_transactions(ledger) == Decimal("500")


def test_never_negative():
    ledger = [row("commission", 100), row("withdrawal", -250)]
    assert compute_withdrawable_from_transactions(ledger) == Decimal("0")


def test_empty_ledger():
    assert compute_withdrawable_from_transactions([]) == Decimal("0")


def test_withdrawal_type_must_match_exactly():
    ledger = [row("prize", 500), row("withdrawal_fee", -100)]
    assert compute_withdrawn_total(ledger) == Decimal("0")
    assert compute_withdrawable_from_transactions(ledger) == Decimal("500")


def test_amount_sign_is_ignored_for_earnings():
    assert compute_withdrawable_from_transactions([row("prize", -75)]) == Decimal("75")


def test_calculator_is_pure():
    ledger = [row("prize", 500), row("withdrawal", -200)]
    snapshot = [dict(r) for r in ledger]
    first = compute_withdrawable_from_transactions(ledger)
    second = compute_withdrawable_from_transactions(iter(ledger))
    assert first == second == Decimal("300")
    assert ledger == snapshot


def test_accepts_model_like_objects():
    ledger = [
        SimpleNamespace(transaction_type="prize", amount=Decimal("120.50"), status="completed"),
        SimpleNamespace(transaction_type="withdrawal", amount=Decimal("-20.50"), status="completed"),
    ]
    assert compute_withdrawable_from_transactions(ledger) == Decimal("100.00")


def test_get_withdrawable_earning_transactions_filters_type_and_status():
    prize = row("prize", 10)
    commission = row("commission", 5)
    ledger = [prize, commission, row("prize", 10, status="pending"), row("deposit", 100)]
    assert get_withdrawable_earning_transactions(ledger) == [prize, commission]


class TestBuildWithdrawableBreakdown:
    def test_parses_description_with_rank(self):
        [item] = build_withdrawable_breakdown(
            [row("prize", 250, description="Prize won for Summer Clash - Rank 2")]
        )
        assert item["tournament_name"] == "Summer Clash"
        assert item["position"] == "Rank 2"
        assert item["amount"] == Decimal("250")
        assert item["type"] == "prize"

    def test_parses_commission_description_without_rank(self):
        [item] = build_withdrawable_breakdown(
            [row("commission", 40, description="Commission from Weekend Cup")]
        )
        assert item["tournament_name"] == "Weekend Cup"
        assert item["position"] == ""

    def test_unmatched_description_is_used_verbatim(self):
        [item] = build_withdrawable_breakdown([row("prize", 10, description="Manual payout")])
        assert item["tournament_name"] == "Manual payout"
        assert item["position"] == ""

    def test_default_labels_without_description(self):
        prize, commission = build_withdrawable_breakdown(
            [row("prize", 10), row("commission", 5)]
        )
        assert prize["tournament_name"] == "Tournament Prize"
        assert commission["tournament_name"] == "Commission"

    def test_structured_reference_wins_over_description(self):
        [item] = build_withdrawable_breakdown(
            [
                row(
                    "prize",
                    100,
                    description="Prize for winning Something Else - Rank 9",
                    tournament_name="Diwali Clash",
                    rank=1,
                )
            ]
        )
        assert item["tournament_name"] == "Diwali Clash"
        assert item["position"] == "Rank 1"

    def test_amount_is_absolute_and_date_is_passed_through(self):
        created = datetime(2024, 5, 1, tzinfo=timezone.utc)
        [item] = build_withdrawable_breakdown([row("prize", -60, created_at=created)])
        assert item["amount"] == Decimal("60")
        assert item["date"] == created
