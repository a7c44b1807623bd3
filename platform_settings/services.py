import logging
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from django.conf import settings
from django.db import transaction

from common.exceptions import ApplicationError

from .models import PlatformSetting

logger = logging.getLogger(__name__)

HUNDRED = Decimal("100")

DEFAULT_COMMISSION = {
    PlatformSetting.ORGANIZER_COMMISSION_PERCENT: Decimal("10"),
    PlatformSetting.PLATFORM_COMMISSION_PERCENT: Decimal("10"),
    PlatformSetting.PRIZE_POOL_PERCENT: Decimal("80"),
}


class InvalidCommissionSettings(ApplicationError):
    pass


@dataclass(frozen=True)
class CommissionSettings:
    """Snapshot of the entry-fee split, passed explicitly into settlement code."""

    organizer_percent: Decimal
    platform_percent: Decimal
    prize_pool_percent: Decimal

    @property
    def total(self):
        return self.organizer_percent + self.platform_percent + self.prize_pool_percent

    def as_dict(self):
        return {
            PlatformSetting.ORGANIZER_COMMISSION_PERCENT: self.organizer_percent,
            PlatformSetting.PLATFORM_COMMISSION_PERCENT: self.platform_percent,
            PlatformSetting.PRIZE_POOL_PERCENT: self.prize_pool_percent,
        }


def _parse_percent(key, raw):
    try:
        return Decimal(str(raw).strip())
    except (InvalidOperation, ValueError):
        logger.warning(f"Unparseable value {raw!r} for setting {key}, using default.")
        return DEFAULT_COMMISSION[key]


def get_commission_settings() -> CommissionSettings:
    """
    Reads the three split percentages. Missing or malformed rows fall back
    to 10/10/80.
    """
    stored = dict(
        PlatformSetting.objects.filter(key__in=DEFAULT_COMMISSION.keys()).values_list(
            "key", "value"
        )
    )
    values = {
        key: _parse_percent(key, stored[key]) if key in stored else default
        for key, default in DEFAULT_COMMISSION.items()
    }
    return CommissionSettings(
        organizer_percent=values[PlatformSetting.ORGANIZER_COMMISSION_PERCENT],
        platform_percent=values[PlatformSetting.PLATFORM_COMMISSION_PERCENT],
        prize_pool_percent=values[PlatformSetting.PRIZE_POOL_PERCENT],
    )


def validate_commission_settings(commission: CommissionSettings):
    for key, value in commission.as_dict().items():
        if value < 0 or value > HUNDRED:
            raise InvalidCommissionSettings(f"{key} must be between 0 and 100.")
    if commission.total != HUNDRED:
        raise InvalidCommissionSettings(
            f"All percentages must add up to 100% (got {commission.total}%)."
        )


@transaction.atomic
def update_commission_settings(
    organizer_percent, platform_percent, prize_pool_percent, user=None
) -> CommissionSettings:
    commission = CommissionSettings(
        organizer_percent=Decimal(organizer_percent),
        platform_percent=Decimal(platform_percent),
        prize_pool_percent=Decimal(prize_pool_percent),
    )
    validate_commission_settings(commission)

    for key, value in commission.as_dict().items():
        PlatformSetting.objects.update_or_create(
            key=key, defaults={"value": str(value), "updated_by": user}
        )
    logger.info(
        f"Commission settings updated by {getattr(user, 'username', 'system')}: "
        f"organizer={commission.organizer_percent} platform={commission.platform_percent} "
        f"prize_pool={commission.prize_pool_percent}"
    )
    return commission


def get_payment_details():
    stored = dict(
        PlatformSetting.objects.filter(
            key__in=[PlatformSetting.ADMIN_UPI_ID, PlatformSetting.PAYMENT_QR_URL]
        ).values_list("key", "value")
    )
    return {
        "upi_id": stored.get(PlatformSetting.ADMIN_UPI_ID) or settings.DEFAULT_ADMIN_UPI_ID,
        "qr_code_url": stored.get(PlatformSetting.PAYMENT_QR_URL) or None,
    }
