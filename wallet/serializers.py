from drf_spectacular.utils import extend_schema_field
from rest_framework import serializers

from users.serializers import UserReadOnlySerializer

from .models import Transaction, Wallet


class TransactionSerializer(serializers.ModelSerializer):
    tournament_name = serializers.CharField(read_only=True)

    class Meta:
        model = Transaction
        fields = (
            "id",
            "transaction_type",
            "amount",
            "status",
            "description",
            "utr_number",
            "tournament",
            "tournament_name",
            "rank",
            "reason",
            "created_at",
            "processed_at",
        )
        read_only_fields = fields


class AdminTransactionSerializer(TransactionSerializer):
    user = serializers.SerializerMethodField()
    upi_id = serializers.CharField(source="wallet.upi_id", read_only=True)

    class Meta(TransactionSerializer.Meta):
        fields = TransactionSerializer.Meta.fields + (
            "user",
            "upi_id",
            "screenshot_url",
            "processed_by",
        )
        read_only_fields = fields

    @extend_schema_field(UserReadOnlySerializer)
    def get_user(self, obj):
        return UserReadOnlySerializer(obj.wallet.user).data


class WalletSerializer(serializers.ModelSerializer):
    transactions = TransactionSerializer(many=True, read_only=True, source="latest_transactions")

    class Meta:
        model = Wallet
        fields = ("id", "balance", "upi_id", "updated_at", "transactions")
        read_only_fields = fields


class WithdrawableBreakdownSerializer(serializers.Serializer):
    tournament_name = serializers.CharField()
    amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    date = serializers.DateTimeField(allow_null=True)
    type = serializers.CharField()
    position = serializers.CharField(allow_blank=True)


class WalletSummarySerializer(serializers.Serializer):
    balance = serializers.DecimalField(max_digits=12, decimal_places=2)
    withdrawable = serializers.DecimalField(max_digits=12, decimal_places=2)
    pending_withdrawals = serializers.DecimalField(max_digits=12, decimal_places=2)
    available_to_withdraw = serializers.DecimalField(max_digits=12, decimal_places=2)
    breakdown = WithdrawableBreakdownSerializer(many=True)


class DepositRequestSerializer(serializers.Serializer):
    amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    utr_number = serializers.CharField(max_length=64)
    screenshot_url = serializers.URLField(max_length=500, required=False, allow_blank=True)

    def validate_amount(self, value):
        if value <= 0:
            raise serializers.ValidationError("Amount must be positive.")
        return value


class WithdrawalRequestSerializer(serializers.Serializer):
    amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    upi_id = serializers.CharField(max_length=100)

    def validate_amount(self, value):
        if value <= 0:
            raise serializers.ValidationError("Amount must be positive.")
        return value

    def validate_upi_id(self, value):
        value = value.strip()
        if "@" not in value:
            raise serializers.ValidationError("Enter a valid UPI ID (e.g. name@bank).")
        return value


class RejectTransactionSerializer(serializers.Serializer):
    reason = serializers.CharField(max_length=255, required=False, allow_blank=True)


class BonusMilestoneSerializer(serializers.Serializer):
    points = serializers.IntegerField()
    bonus = serializers.DecimalField(max_digits=12, decimal_places=2)
    name = serializers.CharField()
    claimed = serializers.BooleanField()
    eligible = serializers.BooleanField()


class ClaimBonusSerializer(serializers.Serializer):
    points = serializers.IntegerField(min_value=1)
