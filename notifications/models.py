from django.db import models

from users.models import User


class Notification(models.Model):
    NOTIFICATION_TYPE_CHOICES = (
        ("deposit_approved", "Deposit approved"),
        ("withdrawal_approved", "Withdrawal approved"),
        ("withdrawal_rejected", "Withdrawal rejected"),
        ("tournament_joined", "Tournament joined"),
        ("tournament_won", "Tournament won"),
        ("ban_lifted", "Ban lifted"),
        ("profile_updated", "Profile updated"),
        ("dhana_earned", "Dhana earned"),
        ("match_starting", "Match starting"),
        ("tournament_cancelled", "Tournament cancelled"),
        ("bonus_received", "Bonus received"),
    )
    user = models.ForeignKey(
        User, on_delete=models.CASCADE, related_name="notifications"
    )
    notification_type = models.CharField(max_length=50, choices=NOTIFICATION_TYPE_CHOICES)
    title = models.CharField(max_length=100)
    message = models.CharField(max_length=255)
    url = models.CharField(max_length=200, default="/")
    is_read = models.BooleanField(default=False)
    timestamp = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return self.message

    class Meta:
        app_label = "notifications"
        ordering = ["-timestamp", "-id"]
