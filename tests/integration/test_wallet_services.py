"""
Tests for the wallet services in wallet/services.py: deposits, withdrawals,
balance primitives and milestone bonuses.
"""
from decimal import Decimal
from unittest.mock import patch

import pytest

from common.exceptions import ApplicationError
from notifications.models import Notification
from wallet.exceptions import (
    BonusNotAvailable,
    DuplicateReference,
    InsufficientFunds,
    InvalidTransactionState,
)
from wallet.models import Transaction, Wallet
from wallet.services import WalletService


def balance_of(user):
    return Wallet.objects.get(user=user).balance


def assert_ledger_consistent(user):
    wallet = Wallet.objects.get(user=user)
    assert wallet.balance == wallet.ledger_balance()


@pytest.mark.django_db
class TestWalletCreation:
    def test_wallet_created_with_user(self, user_factory):
        user = user_factory()
        wallet = Wallet.objects.get(user=user)
        assert wallet.balance == Decimal("0.00")


@pytest.mark.django_db
class TestBalancePrimitives:
    def test_credit_writes_completed_row(self, default_user):
        tx = WalletService.credit(default_user, Decimal("75"), Transaction.TransactionType.BONUS, "Welcome")
        assert tx.status == Transaction.Status.COMPLETED
        assert tx.amount == Decimal("75")
        assert balance_of(default_user) == Decimal("75.00")
        assert_ledger_consistent(default_user)

    def test_debit_writes_negative_row(self, default_user, fund_wallet):
        fund_wallet(default_user, 100)
        tx = WalletService.debit(default_user, Decimal("40"), Transaction.TransactionType.ENTRY_FEE)
        assert tx.amount == Decimal("-40")
        assert balance_of(default_user) == Decimal("60.00")
        assert_ledger_consistent(default_user)

    def test_debit_rejects_insufficient_balance(self, default_user, fund_wallet):
        fund_wallet(default_user, 30)
        with pytest.raises(InsufficientFunds):
            WalletService.debit(default_user, Decimal("40"), Transaction.TransactionType.ENTRY_FEE)
        assert balance_of(default_user) == Decimal("30.00")
        assert Transaction.objects.filter(wallet__user=default_user).count() == 1

    def test_non_positive_amounts_are_rejected(self, default_user):
        with pytest.raises(ApplicationError):
            WalletService.credit(default_user, Decimal("0"), Transaction.TransactionType.BONUS)


@pytest.mark.django_db
class TestDeposits:
    def test_submit_creates_pending_row(self, default_user):
        tx = WalletService(default_user).submit_deposit(Decimal("500"), " UTR001 ")
        assert tx.status == Transaction.Status.PENDING
        assert tx.transaction_type == Transaction.TransactionType.DEPOSIT
        assert tx.utr_number == "UTR001"
        assert tx.description == "Deposit via UPI"
        assert balance_of(default_user) == Decimal("0.00")

    def test_submit_requires_utr(self, default_user):
        with pytest.raises(ApplicationError):
            WalletService(default_user).submit_deposit(Decimal("500"), "  ")

    def test_utr_cannot_be_reused(self, default_user, user_factory):
        WalletService(default_user).submit_deposit(Decimal("500"), "UTR001")
        with pytest.raises(DuplicateReference):
            WalletService(user_factory()).submit_deposit(Decimal("100"), "UTR001")

    def test_utr_of_rejected_deposit_can_be_reused(self, default_user, admin_user):
        tx = WalletService(default_user).submit_deposit(Decimal("500"), "UTR001")
        WalletService.reject_deposit(tx, admin_user, "Screenshot unreadable")
        again = WalletService(default_user).submit_deposit(Decimal("500"), "UTR001")
        assert again.status == Transaction.Status.PENDING

    def test_approve_credits_balance_once(self, default_user, admin_user):
        tx = WalletService(default_user).submit_deposit(Decimal("500"), "UTR001")
        approved = WalletService.approve_deposit(tx, admin_user)

        assert approved.status == Transaction.Status.COMPLETED
        assert approved.processed_by == admin_user
        assert approved.processed_at is not None
        assert balance_of(default_user) == Decimal("500.00")
        assert Notification.objects.filter(
            user=default_user, notification_type="deposit_approved"
        ).exists()

        with pytest.raises(InvalidTransactionState):
            WalletService.approve_deposit(tx, admin_user)
        assert balance_of(default_user) == Decimal("500.00")
        assert_ledger_consistent(default_user)

    def test_reject_leaves_balance_untouched(self, default_user, admin_user):
        tx = WalletService(default_user).submit_deposit(Decimal("500"), "UTR001")
        rejected = WalletService.reject_deposit(tx, admin_user, "")
        assert rejected.status == Transaction.Status.FAILED
        assert rejected.reason == "Rejected by admin"
        assert balance_of(default_user) == Decimal("0.00")

        with pytest.raises(InvalidTransactionState):
            WalletService.approve_deposit(tx, admin_user)

    def test_withdrawal_cannot_be_approved_as_deposit(self, default_user, admin_user, fund_wallet):
        fund_wallet(default_user, 500, Transaction.TransactionType.PRIZE)
        tx = WalletService(default_user).request_withdrawal(Decimal("200"), "player@upi")
        with pytest.raises(InvalidTransactionState):
            WalletService.approve_deposit(tx, admin_user)

    def test_push_is_queued_after_commit(self, default_user, admin_user, django_capture_on_commit_callbacks):
        tx = WalletService(default_user).submit_deposit(Decimal("250"), "UTR002")
        with patch("notifications.tasks.send_push_notification.delay") as mock_delay:
            with django_capture_on_commit_callbacks(execute=True):
                WalletService.approve_deposit(tx, admin_user)

        mock_delay.assert_called_once()
        user_id, content, payload = mock_delay.call_args.args
        assert user_id == default_user.pk
        assert content["title"] == "Deposit Successful"
        assert payload["event_type"] == "deposit_approved"


@pytest.mark.django_db
class TestWithdrawals:
    def test_below_minimum_is_rejected(self, default_user, fund_wallet):
        fund_wallet(default_user, 500, Transaction.TransactionType.PRIZE)
        with pytest.raises(ApplicationError, match="Minimum withdrawal"):
            WalletService(default_user).request_withdrawal(Decimal("50"), "player@upi")

    def test_deposits_are_not_withdrawable(self, default_user, fund_wallet):
        fund_wallet(default_user, 1000)
        with pytest.raises(InsufficientFunds):
            WalletService(default_user).request_withdrawal(Decimal("100"), "player@upi")

    def test_request_creates_pending_negative_row(self, default_user, fund_wallet):
        fund_wallet(default_user, 500, Transaction.TransactionType.PRIZE)
        tx = WalletService(default_user).request_withdrawal(Decimal("300"), "player@upi")

        assert tx.status == Transaction.Status.PENDING
        assert tx.amount == Decimal("-300")
        assert balance_of(default_user) == Decimal("500.00")
        assert Wallet.objects.get(user=default_user).upi_id == "player@upi"

    def test_pending_requests_reserve_earnings(self, default_user, fund_wallet):
        fund_wallet(default_user, 500, Transaction.TransactionType.PRIZE)
        service = WalletService(default_user)
        service.request_withdrawal(Decimal("300"), "player@upi")
        with pytest.raises(InsufficientFunds):
            service.request_withdrawal(Decimal("300"), "player@upi")
        service.request_withdrawal(Decimal("200"), "player@upi")

    def test_spent_earnings_cap_the_request(self, default_user, fund_wallet):
        fund_wallet(default_user, 500, Transaction.TransactionType.PRIZE)
        WalletService.debit(default_user, Decimal("350"), Transaction.TransactionType.ENTRY_FEE)
        with pytest.raises(InsufficientFunds):
            WalletService(default_user).request_withdrawal(Decimal("200"), "player@upi")

    def test_approve_debits_balance(self, default_user, admin_user, fund_wallet):
        fund_wallet(default_user, 500, Transaction.TransactionType.PRIZE)
        tx = WalletService(default_user).request_withdrawal(Decimal("300"), "player@upi")
        approved = WalletService.approve_withdrawal(tx, admin_user)

        assert approved.status == Transaction.Status.COMPLETED
        assert balance_of(default_user) == Decimal("200.00")
        assert_ledger_consistent(default_user)
        summary = WalletService(default_user).get_summary()
        assert summary["withdrawable"] == Decimal("200")
        assert Notification.objects.filter(
            user=default_user, notification_type="withdrawal_approved"
        ).exists()

    def test_approve_rechecks_balance(self, default_user, admin_user, fund_wallet):
        fund_wallet(default_user, 500, Transaction.TransactionType.PRIZE)
        tx = WalletService(default_user).request_withdrawal(Decimal("400"), "player@upi")
        WalletService.debit(default_user, Decimal("300"), Transaction.TransactionType.ENTRY_FEE)

        with pytest.raises(InsufficientFunds):
            WalletService.approve_withdrawal(tx, admin_user)
        tx.refresh_from_db()
        assert tx.status == Transaction.Status.PENDING
        assert balance_of(default_user) == Decimal("200.00")

    def test_reject_marks_failed_and_notifies(self, default_user, admin_user, fund_wallet):
        fund_wallet(default_user, 500, Transaction.TransactionType.PRIZE)
        tx = WalletService(default_user).request_withdrawal(Decimal("300"), "player@upi")
        rejected = WalletService.reject_withdrawal(tx, admin_user, "UPI ID invalid")

        assert rejected.status == Transaction.Status.FAILED
        assert rejected.reason == "UPI ID invalid"
        assert balance_of(default_user) == Decimal("500.00")
        notification = Notification.objects.get(
            user=default_user, notification_type="withdrawal_rejected"
        )
        assert notification.url == "/wallet"


@pytest.mark.django_db
class TestMilestoneBonus:
    def test_claim_credits_bonus(self, user_factory):
        user = user_factory(stats_points=120)
        tx = WalletService(user).claim_milestone_bonus(100)

        assert tx.transaction_type == Transaction.TransactionType.BONUS
        assert tx.amount == Decimal("25")
        assert tx.description == "Stats milestone bonus - 100 points"
        assert balance_of(user) == Decimal("25.00")
        assert Notification.objects.filter(user=user, notification_type="bonus_received").exists()

    def test_each_milestone_claims_once(self, user_factory):
        user = user_factory(stats_points=120)
        service = WalletService(user)
        service.claim_milestone_bonus(50)
        with pytest.raises(BonusNotAvailable):
            service.claim_milestone_bonus(50)
        assert balance_of(user) == Decimal("10.00")

    def test_requires_enough_points(self, user_factory):
        user = user_factory(stats_points=499)
        with pytest.raises(BonusNotAvailable):
            WalletService(user).claim_milestone_bonus(500)

    def test_unknown_milestone(self, user_factory):
        user = user_factory(stats_points=5000)
        with pytest.raises(BonusNotAvailable):
            WalletService(user).claim_milestone_bonus(75)

    def test_milestone_listing(self, user_factory):
        user = user_factory(stats_points=150)
        WalletService(user).claim_milestone_bonus(50)
        milestones = {m["points"]: m for m in WalletService(user).get_bonus_milestones()}

        assert milestones[50]["claimed"] is True
        assert milestones[100]["claimed"] is False
        assert milestones[100]["eligible"] is True
        assert milestones[1000]["eligible"] is False
        assert milestones[1000]["bonus"] == Decimal("500")

    def test_bonus_is_not_withdrawable(self, user_factory):
        user = user_factory(stats_points=1000)
        WalletService(user).claim_milestone_bonus(1000)
        with pytest.raises(InsufficientFunds):
            WalletService(user).request_withdrawal(Decimal("100"), "player@upi")
