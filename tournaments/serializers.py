from django.utils import timezone
from rest_framework import serializers

from users.models import User
from users.serializers import UserReadOnlySerializer

from .models import Participant, Tournament


class ParticipantSerializer(serializers.ModelSerializer):
    user = UserReadOnlySerializer(read_only=True)

    class Meta:
        model = Participant
        fields = ("id", "user", "tournament", "joined_at")
        read_only_fields = fields


class TournamentCreateUpdateSerializer(serializers.ModelSerializer):
    """Serializer for creating and updating tournaments."""

    class Meta:
        model = Tournament
        fields = (
            "title",
            "game",
            "description",
            "tournament_type",
            "entry_fee",
            "max_participants",
            "start_date",
            "prize_pool",
        )

    def validate_entry_fee(self, value):
        if value < 0:
            raise serializers.ValidationError("Entry fee cannot be negative.")
        return value

    def validate_max_participants(self, value):
        if value < 1:
            raise serializers.ValidationError("A tournament needs at least one slot.")
        return value

    def validate_start_date(self, value):
        if self.instance is None and value <= timezone.now():
            raise serializers.ValidationError("Start date must be in the future.")
        return value

    def validate(self, data):
        instance = self.instance
        if instance is not None and instance.participant_entries.exists():
            if "entry_fee" in data and data["entry_fee"] != instance.entry_fee:
                raise serializers.ValidationError(
                    {"entry_fee": "Entry fee cannot change once players have joined."}
                )
            joined = instance.participant_entries.count()
            if "max_participants" in data and data["max_participants"] < joined:
                raise serializers.ValidationError(
                    {"max_participants": f"{joined} players have already joined this tournament."}
                )
        return data


class TournamentReadOnlySerializer(serializers.ModelSerializer):
    """Serializer for reading tournament data."""

    organizer = UserReadOnlySerializer(read_only=True)
    winner = UserReadOnlySerializer(read_only=True)
    participant_count = serializers.IntegerField(read_only=True)
    spots_left = serializers.IntegerField(read_only=True)
    is_joined = serializers.BooleanField(read_only=True)

    class Meta:
        model = Tournament
        fields = (
            "id",
            "title",
            "game",
            "description",
            "tournament_type",
            "organizer",
            "entry_fee",
            "max_participants",
            "participant_count",
            "spots_left",
            "is_joined",
            "start_date",
            "status",
            "prize_pool",
            "current_prize_pool",
            "organizer_earnings",
            "platform_earnings",
            "total_fees_collected",
            "prize_pool_recalculated_at",
            "winner",
            "winner_declared_at",
            "created_at",
        )
        read_only_fields = fields


class DeclareWinnerSerializer(serializers.Serializer):
    winner_id = serializers.PrimaryKeyRelatedField(
        queryset=User.objects.all(), source="winner"
    )
