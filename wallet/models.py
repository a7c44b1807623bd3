from decimal import Decimal

from django.db import models
from django.db.models import Q, Sum
from simple_history.models import HistoricalRecords

from users.models import User


class Wallet(models.Model):
    user = models.OneToOneField(User, on_delete=models.CASCADE, related_name="wallet")
    balance = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal("0.00"),
        help_text="Denormalized sum of this wallet's completed transactions.",
    )
    upi_id = models.CharField(max_length=100, blank=True, help_text="Payout UPI ID")
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        app_label = "wallet"

    def __str__(self):
        return f"Wallet({self.user.username})"

    @property
    def latest_transactions(self):
        return self.transactions.order_by("-created_at", "-id")[:10]

    def ledger_balance(self):
        """Signed sum of completed ledger rows, recomputed from the database."""
        total = self.transactions.filter(
            status=Transaction.Status.COMPLETED
        ).aggregate(total=Sum("amount"))["total"]
        return total or Decimal("0.00")


class Transaction(models.Model):
    class TransactionType(models.TextChoices):
        DEPOSIT = "deposit", "Deposit"
        WITHDRAWAL = "withdrawal", "Withdrawal"
        ENTRY_FEE = "entry_fee", "Entry Fee"
        PRIZE = "prize", "Prize"
        BONUS = "bonus", "Bonus"
        COMMISSION = "commission", "Commission"
        REFUND = "refund", "Refund"

    class Status(models.TextChoices):
        PENDING = "pending", "Pending"
        COMPLETED = "completed", "Completed"
        FAILED = "failed", "Failed"

    wallet = models.ForeignKey(
        Wallet, on_delete=models.CASCADE, related_name="transactions"
    )
    # Free-form at the data layer; TransactionType lists the values the
    # services write.
    transaction_type = models.CharField(max_length=32, db_index=True)
    amount = models.DecimalField(
        max_digits=12, decimal_places=2, help_text="Signed: debits are negative."
    )
    status = models.CharField(
        max_length=10,
        choices=Status.choices,
        default=Status.PENDING,
        db_index=True,
    )
    description = models.CharField(max_length=255, blank=True)
    utr_number = models.CharField(
        max_length=64, blank=True, null=True, help_text="UPI Unique Transaction Reference"
    )
    screenshot_url = models.URLField(max_length=500, blank=True, null=True)
    tournament = models.ForeignKey(
        "tournaments.Tournament",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="wallet_transactions",
    )
    rank = models.PositiveSmallIntegerField(null=True, blank=True)
    processed_by = models.ForeignKey(
        User,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="processed_transactions",
    )
    processed_at = models.DateTimeField(null=True, blank=True)
    reason = models.CharField(max_length=255, blank=True)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    history = HistoricalRecords()

    class Meta:
        app_label = "wallet"
        ordering = ["-created_at", "-id"]
        constraints = [
            models.UniqueConstraint(
                fields=["utr_number"],
                condition=Q(transaction_type="deposit") & ~Q(status="failed"),
                name="unique_active_deposit_utr",
            ),
        ]

    def __str__(self):
        return f"{self.wallet.user.username} - {self.transaction_type} - {self.amount}"

    @property
    def tournament_name(self):
        return self.tournament.title if self.tournament_id else None
