import logging
from decimal import Decimal

from django.conf import settings
from django.db import IntegrityError, transaction
from django.utils import timezone

from common.exceptions import ApplicationError
from notifications.services import notify

from .earnings import (
    build_withdrawable_breakdown,
    compute_withdrawable_from_transactions,
    get_withdrawable_earning_transactions,
)
from .exceptions import (
    BonusNotAvailable,
    DuplicateReference,
    InsufficientFunds,
    InvalidTransactionState,
    WalletNotFound,
)
from .models import Transaction, Wallet

logger = logging.getLogger(__name__)

# (required stats points, bonus amount, name)
BONUS_MILESTONES = (
    (50, Decimal("10"), "Starter Bonus"),
    (100, Decimal("25"), "Rising Star"),
    (500, Decimal("100"), "Pro Player"),
    (1000, Decimal("500"), "Legend Reward"),
)


def milestone_bonus_description(points):
    return f"Stats milestone bonus - {points} points"


def _positive(amount):
    amount = Decimal(amount)
    if amount <= 0:
        raise ApplicationError("Amount must be positive.")
    return amount


def _lock_wallet(**lookup):
    try:
        return Wallet.objects.select_for_update().get(**lookup)
    except Wallet.DoesNotExist:
        raise WalletNotFound("Wallet not found for this user.")


def _lock_pending(tx, transaction_type):
    locked = Transaction.objects.select_for_update().get(pk=tx.pk)
    if locked.transaction_type != transaction_type:
        raise InvalidTransactionState(f"Transaction {locked.pk} is not a {transaction_type}.")
    if locked.status != Transaction.Status.PENDING:
        raise InvalidTransactionState(
            f"Transaction {locked.pk} was already {locked.get_status_display().lower()}."
        )
    return locked


class WalletService:
    def __init__(self, user):
        self.user = user

    def get_wallet(self):
        try:
            return Wallet.objects.get(user=self.user)
        except Wallet.DoesNotExist:
            raise WalletNotFound("Wallet not found for this user.")

    # --- Balance primitives -------------------------------------------------
    # Both lock the wallet row and write the completed ledger row in the same
    # database transaction, so the balance always equals the signed sum of
    # completed rows.

    @staticmethod
    def credit(user, amount, transaction_type, description="", tournament=None, rank=None):
        amount = _positive(amount)
        with transaction.atomic():
            wallet = _lock_wallet(user=user)
            wallet.balance += amount
            wallet.save(update_fields=["balance", "updated_at"])
            tx = Transaction.objects.create(
                wallet=wallet,
                transaction_type=transaction_type,
                amount=amount,
                status=Transaction.Status.COMPLETED,
                description=description,
                tournament=tournament,
                rank=rank,
            )
        logger.info(f"Credited {amount} ({transaction_type}) to wallet {wallet.pk}.")
        return tx

    @staticmethod
    def debit(user, amount, transaction_type, description="", tournament=None):
        amount = _positive(amount)
        with transaction.atomic():
            wallet = _lock_wallet(user=user)
            if wallet.balance < amount:
                raise InsufficientFunds(
                    f"Insufficient balance. You need ₹{amount}, your balance is ₹{wallet.balance}."
                )
            wallet.balance -= amount
            wallet.save(update_fields=["balance", "updated_at"])
            tx = Transaction.objects.create(
                wallet=wallet,
                transaction_type=transaction_type,
                amount=-amount,
                status=Transaction.Status.COMPLETED,
                description=description,
                tournament=tournament,
            )
        logger.info(f"Debited {amount} ({transaction_type}) from wallet {wallet.pk}.")
        return tx

    # --- Read side ------------------------------------------------------------

    @staticmethod
    def pending_withdrawal_total(transactions):
        return sum(
            (
                abs(t.amount)
                for t in transactions
                if t.transaction_type == Transaction.TransactionType.WITHDRAWAL
                and t.status == Transaction.Status.PENDING
            ),
            Decimal("0"),
        )

    @classmethod
    def available_to_withdraw(cls, wallet, transactions):
        """
        Withdrawable earnings minus requests still awaiting review, capped by
        the spendable balance.
        """
        earned = compute_withdrawable_from_transactions(transactions)
        available = earned - cls.pending_withdrawal_total(transactions)
        return max(Decimal("0"), min(available, wallet.balance))

    def get_summary(self):
        wallet = self.get_wallet()
        transactions = list(wallet.transactions.select_related("tournament"))
        earning_rows = get_withdrawable_earning_transactions(transactions)
        return {
            "balance": wallet.balance,
            "withdrawable": compute_withdrawable_from_transactions(transactions),
            "pending_withdrawals": self.pending_withdrawal_total(transactions),
            "available_to_withdraw": self.available_to_withdraw(wallet, transactions),
            "breakdown": build_withdrawable_breakdown(earning_rows),
        }

    # --- Deposits ---------------------------------------------------------------

    def submit_deposit(self, amount, utr_number, screenshot_url=None):
        amount = _positive(amount)
        utr_number = (utr_number or "").strip()
        if not utr_number:
            raise ApplicationError("Please enter the UTR/Reference number.")

        if Transaction.objects.filter(
            transaction_type=Transaction.TransactionType.DEPOSIT,
            utr_number=utr_number,
        ).exclude(status=Transaction.Status.FAILED).exists():
            raise DuplicateReference("This UTR number has already been submitted.")

        wallet = self.get_wallet()
        try:
            with transaction.atomic():
                tx = Transaction.objects.create(
                    wallet=wallet,
                    transaction_type=Transaction.TransactionType.DEPOSIT,
                    amount=amount,
                    status=Transaction.Status.PENDING,
                    description="Deposit via UPI",
                    utr_number=utr_number,
                    screenshot_url=screenshot_url or None,
                )
        except IntegrityError:
            raise DuplicateReference("This UTR number has already been submitted.")
        logger.info(f"Deposit request {tx.pk} of {amount} submitted by {self.user.username}.")
        return tx

    @staticmethod
    def approve_deposit(deposit, admin):
        with transaction.atomic():
            tx = _lock_pending(deposit, Transaction.TransactionType.DEPOSIT)
            wallet = _lock_wallet(pk=tx.wallet_id)
            wallet.balance += tx.amount
            wallet.save(update_fields=["balance", "updated_at"])

            tx.status = Transaction.Status.COMPLETED
            tx.processed_by = admin
            tx.processed_at = timezone.now()
            tx.save(update_fields=["status", "processed_by", "processed_at"])

        logger.info(f"Deposit {tx.pk} approved by {admin.username}; credited {tx.amount}.")
        notify("deposit_approved", wallet.user, {"amount": str(tx.amount)})
        return tx

    @staticmethod
    def reject_deposit(deposit, admin, reason="Rejected by admin"):
        with transaction.atomic():
            tx = _lock_pending(deposit, Transaction.TransactionType.DEPOSIT)
            tx.status = Transaction.Status.FAILED
            tx.processed_by = admin
            tx.processed_at = timezone.now()
            tx.reason = reason or "Rejected by admin"
            tx.save(update_fields=["status", "processed_by", "processed_at", "reason"])
        logger.info(f"Deposit {tx.pk} rejected by {admin.username}: {tx.reason}")
        return tx

    # --- Withdrawals --------------------------------------------------------------

    def request_withdrawal(self, amount, upi_id):
        amount = _positive(amount)
        if amount < settings.MINIMUM_WITHDRAWAL_AMOUNT:
            raise ApplicationError(
                f"Minimum withdrawal amount is ₹{settings.MINIMUM_WITHDRAWAL_AMOUNT:,.0f}."
            )

        with transaction.atomic():
            wallet = _lock_wallet(user=self.user)
            available = self.available_to_withdraw(wallet, list(wallet.transactions.all()))
            if amount > available:
                raise InsufficientFunds(
                    f"Only ₹{available} of your winnings can be withdrawn right now."
                )

            if upi_id and wallet.upi_id != upi_id:
                wallet.upi_id = upi_id
                wallet.save(update_fields=["upi_id", "updated_at"])

            tx = Transaction.objects.create(
                wallet=wallet,
                transaction_type=Transaction.TransactionType.WITHDRAWAL,
                amount=-amount,
                status=Transaction.Status.PENDING,
                description=f"Withdrawal to UPI {wallet.upi_id}",
            )
        logger.info(f"Withdrawal request {tx.pk} of {amount} by {self.user.username}.")
        return tx

    @staticmethod
    def approve_withdrawal(withdrawal, admin):
        with transaction.atomic():
            tx = _lock_pending(withdrawal, Transaction.TransactionType.WITHDRAWAL)
            wallet = _lock_wallet(pk=tx.wallet_id)
            if wallet.balance < abs(tx.amount):
                raise InsufficientFunds(
                    "Wallet balance is lower than the requested withdrawal."
                )
            wallet.balance += tx.amount
            wallet.save(update_fields=["balance", "updated_at"])

            tx.status = Transaction.Status.COMPLETED
            tx.processed_by = admin
            tx.processed_at = timezone.now()
            tx.save(update_fields=["status", "processed_by", "processed_at"])

        logger.info(f"Withdrawal {tx.pk} approved by {admin.username}.")
        notify("withdrawal_approved", wallet.user, {"amount": str(abs(tx.amount))})
        return tx

    @staticmethod
    def reject_withdrawal(withdrawal, admin, reason="Rejected by admin"):
        with transaction.atomic():
            tx = _lock_pending(withdrawal, Transaction.TransactionType.WITHDRAWAL)
            tx.status = Transaction.Status.FAILED
            tx.processed_by = admin
            tx.processed_at = timezone.now()
            tx.reason = reason or "Rejected by admin"
            tx.save(update_fields=["status", "processed_by", "processed_at", "reason"])

        logger.info(f"Withdrawal {tx.pk} rejected by {admin.username}: {tx.reason}")
        notify("withdrawal_rejected", tx.wallet.user, {"amount": str(abs(tx.amount))})
        return tx

    # --- Bonuses ------------------------------------------------------------------

    def get_bonus_milestones(self):
        claimed = set(
            Transaction.objects.filter(
                wallet__user=self.user,
                transaction_type=Transaction.TransactionType.BONUS,
                description__startswith="Stats milestone bonus",
            ).values_list("description", flat=True)
        )
        return [
            {
                "points": points,
                "bonus": bonus,
                "name": name,
                "claimed": milestone_bonus_description(points) in claimed,
                "eligible": self.user.stats_points >= points,
            }
            for points, bonus, name in BONUS_MILESTONES
        ]

    def claim_milestone_bonus(self, points):
        milestone = next((m for m in BONUS_MILESTONES if m[0] == points), None)
        if milestone is None:
            raise BonusNotAvailable("Unknown bonus milestone.")
        points, bonus, name = milestone

        if self.user.stats_points < points:
            raise BonusNotAvailable(f"You need {points} stats points to claim this bonus.")

        description = milestone_bonus_description(points)
        with transaction.atomic():
            wallet = _lock_wallet(user=self.user)
            if wallet.transactions.filter(
                transaction_type=Transaction.TransactionType.BONUS,
                description=description,
            ).exists():
                raise BonusNotAvailable("You have already claimed this bonus.")
            tx = self.credit(
                self.user,
                bonus,
                Transaction.TransactionType.BONUS,
                description=description,
            )

        notify("bonus_received", self.user, {"amount": str(bonus)})
        return tx
