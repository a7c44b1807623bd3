from rest_framework import serializers

from .models import Notification


class NotificationSerializer(serializers.ModelSerializer):
    class Meta:
        model = Notification
        fields = (
            "id",
            "notification_type",
            "title",
            "message",
            "url",
            "is_read",
            "timestamp",
        )
        read_only_fields = (
            "id",
            "notification_type",
            "title",
            "message",
            "url",
            "timestamp",
        )
