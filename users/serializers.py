from rest_framework import serializers

from .models import User


class UserReadOnlySerializer(serializers.ModelSerializer):
    """Serializer for public User profiles (read-only)."""

    class Meta:
        model = User
        fields = (
            "id",
            "username",
            "in_game_name",
            "is_organizer",
        )
        read_only_fields = fields


class UserSerializer(serializers.ModelSerializer):
    """Serializer for the authenticated user's own profile."""

    wallet_balance = serializers.DecimalField(
        source="wallet.balance", max_digits=12, decimal_places=2, read_only=True
    )

    class Meta:
        model = User
        fields = (
            "id",
            "username",
            "email",
            "phone_number",
            "in_game_name",
            "is_organizer",
            "stats_points",
            "wallet_balance",
        )
        read_only_fields = ("id", "username", "is_organizer", "stats_points", "wallet_balance")
