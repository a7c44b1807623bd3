from django.conf import settings
from django.db import models


class PlatformSetting(models.Model):
    ORGANIZER_COMMISSION_PERCENT = "organizer_commission_percent"
    PLATFORM_COMMISSION_PERCENT = "platform_commission_percent"
    PRIZE_POOL_PERCENT = "prize_pool_percent"
    ADMIN_UPI_ID = "admin_upi_id"
    PAYMENT_QR_URL = "payment_qr_url"

    KEY_CHOICES = (
        (ORGANIZER_COMMISSION_PERCENT, "Organizer commission %"),
        (PLATFORM_COMMISSION_PERCENT, "Platform commission %"),
        (PRIZE_POOL_PERCENT, "Prize pool %"),
        (ADMIN_UPI_ID, "Admin UPI ID"),
        (PAYMENT_QR_URL, "Payment QR code URL"),
    )

    key = models.CharField(max_length=64, unique=True, choices=KEY_CHOICES)
    value = models.CharField(max_length=255, blank=True)
    updated_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="+",
    )
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["key"]

    def __str__(self):
        return f"{self.key} = {self.value}"
