from decimal import Decimal

from rest_framework import serializers


class CommissionSettingsSerializer(serializers.Serializer):
    organizer_percent = serializers.DecimalField(
        max_digits=5, decimal_places=2, min_value=Decimal("0"), max_value=Decimal("100")
    )
    platform_percent = serializers.DecimalField(
        max_digits=5, decimal_places=2, min_value=Decimal("0"), max_value=Decimal("100")
    )
    prize_pool_percent = serializers.DecimalField(
        max_digits=5, decimal_places=2, min_value=Decimal("0"), max_value=Decimal("100")
    )

    def validate(self, attrs):
        total = (
            attrs["organizer_percent"]
            + attrs["platform_percent"]
            + attrs["prize_pool_percent"]
        )
        if total != 100:
            raise serializers.ValidationError("All percentages must add up to 100%.")
        return attrs


class PaymentDetailsSerializer(serializers.Serializer):
    upi_id = serializers.CharField()
    qr_code_url = serializers.CharField(allow_null=True)
