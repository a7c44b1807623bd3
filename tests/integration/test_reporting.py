from datetime import timedelta
from decimal import Decimal

import pytest
from django.utils import timezone
from rest_framework import status

from reporting.services import find_wallet_drift, revenue_summary
from reporting.tasks import audit_wallet_balances
from tournaments.models import Tournament
from wallet.models import Transaction, Wallet
from wallet.services import WalletService


@pytest.fixture
def settled_tournaments(tournament_factory):
    now = timezone.now()
    earnings = {
        "platform_earnings": Decimal("10"),
        "organizer_earnings": Decimal("10"),
        "total_fees_collected": Decimal("100"),
    }
    tournament_factory(title="Org Cup", start_date=now - timedelta(days=2), **earnings)
    tournament_factory(title="Org Cup 2", start_date=now - timedelta(days=1), **earnings)
    tournament_factory(
        title="Creator Cup",
        tournament_type=Tournament.TournamentType.CREATOR,
        start_date=now - timedelta(days=3),
        platform_earnings=Decimal("5.50"),
        organizer_earnings=Decimal("0"),
        total_fees_collected=Decimal("55"),
    )
    tournament_factory(title="Ancient", start_date=now - timedelta(days=90), **earnings)
    tournament_factory(
        title="Called off",
        start_date=now - timedelta(days=1),
        status=Tournament.Status.CANCELLED,
        **earnings,
    )


@pytest.mark.django_db
class TestRevenueSummary:
    def test_groups_by_tournament_type(self, settled_tournaments, default_user, fund_wallet):
        WalletService(default_user).submit_deposit(Decimal("100"), "UTR-1")
        fund_wallet(default_user, 500, Transaction.TransactionType.PRIZE)
        WalletService(default_user).request_withdrawal(Decimal("100"), "p@upi")

        summary = revenue_summary(days=30)

        by_type = {row["tournament_type"]: row for row in summary["by_type"]}
        assert by_type["organizer"]["tournament_count"] == 2
        assert by_type["organizer"]["platform_earnings"] == Decimal("20.00")
        assert by_type["organizer"]["total_fees_collected"] == Decimal("200.00")
        assert by_type["creator"]["platform_earnings"] == Decimal("5.50")
        assert summary["totals"]["platform_earnings"] == Decimal("25.50")
        assert summary["totals"]["tournament_count"] == 3
        assert summary["pending_deposits"] == 1
        assert summary["pending_withdrawals"] == 1

    def test_window_is_configurable(self, settled_tournaments):
        summary = revenue_summary(days=365)
        assert summary["totals"]["tournament_count"] == 4

    def test_api_is_admin_only(self, authenticated_client):
        response = authenticated_client.get("/api/reporting/revenue/")
        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_api_json_and_csv(self, authenticated_admin_client, settled_tournaments):
        response = authenticated_admin_client.get("/api/reporting/revenue/?days=7")
        assert response.status_code == status.HTTP_200_OK
        assert response.data["days"] == 7

        response = authenticated_admin_client.get("/api/reporting/revenue/?format=csv")
        assert response.status_code == status.HTTP_200_OK
        assert response["Content-Type"].startswith("text/csv")
        body = response.content.decode()
        assert "Tournament Type,Tournaments,Platform Earnings" in body
        assert "Pending Deposits,0" in body


@pytest.mark.django_db
class TestWalletDrift:
    def test_consistent_wallets_report_no_drift(self, default_user, fund_wallet):
        fund_wallet(default_user, 100)
        WalletService.debit(default_user, Decimal("30"), Transaction.TransactionType.ENTRY_FEE)
        WalletService(default_user).submit_deposit(Decimal("999"), "UTR-P")
        assert find_wallet_drift() == []

    def test_detects_tampered_balance(self, default_user, fund_wallet):
        fund_wallet(default_user, 100)
        Wallet.objects.filter(user=default_user).update(balance=Decimal("150"))

        [entry] = find_wallet_drift()

        assert entry["username"] == "testuser"
        assert entry["balance"] == Decimal("150.00")
        assert entry["ledger_balance"] == Decimal("100.00")
        assert entry["difference"] == Decimal("50.00")

    def test_audit_task_counts_drift(self, default_user, user_factory):
        Wallet.objects.filter(user=default_user).update(balance=Decimal("5"))
        user_factory()
        assert audit_wallet_balances() == 1

    def test_api(self, authenticated_admin_client, default_user):
        Wallet.objects.filter(user=default_user).update(balance=Decimal("5"))
        response = authenticated_admin_client.get("/api/reporting/wallet-drift/")
        assert response.status_code == status.HTTP_200_OK
        assert response.data["count"] == 1
