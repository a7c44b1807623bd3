from decimal import Decimal

import pytest

from platform_settings.services import (
    CommissionSettings,
    InvalidCommissionSettings,
    validate_commission_settings,
)
from tournaments.services import compute_entry_fee_split


def settings_of(organizer, platform, prize):
    return CommissionSettings(Decimal(organizer), Decimal(platform), Decimal(prize))


def test_default_split(commission):
    split = compute_entry_fee_split(Decimal("100"), commission)
    assert split.organizer == Decimal("10.00")
    assert split.platform == Decimal("10.00")
    assert split.prize == Decimal("80.00")


def test_split_of_total_fees(commission):
    split = compute_entry_fee_split(Decimal("50") * 10, commission)
    assert split.prize == Decimal("400.00")


def test_split_is_quantized_to_paise():
    split = compute_entry_fee_split(Decimal("25"), settings_of("12.5", "7.5", "80"))
    assert split.organizer == Decimal("3.13")
    assert split.platform == Decimal("1.88")
    assert split.prize == Decimal("19.99")


@pytest.mark.parametrize("fee", ["1.00", "3.00", "25", "99.99", "0.01"])
def test_shares_never_exceed_the_fee(fee):
    commission = settings_of("12.5", "12.5", "75")
    validate_commission_settings(commission)

    split = compute_entry_fee_split(Decimal(fee), commission)

    assert split.organizer + split.platform + split.prize == Decimal(fee)
    assert split.prize >= 0


def test_half_paise_shares_round_up_and_prize_absorbs_the_difference():
    split = compute_entry_fee_split(Decimal("1.00"), settings_of("12.5", "12.5", "75"))
    assert split.organizer == Decimal("0.13")
    assert split.platform == Decimal("0.13")
    assert split.prize == Decimal("0.74")


def test_free_entry_splits_to_zero(commission):
    split = compute_entry_fee_split(Decimal("0"), commission)
    assert split.organizer == split.platform == split.prize == Decimal("0.00")


def test_validate_accepts_sum_of_hundred():
    validate_commission_settings(settings_of("0", "20", "80"))


@pytest.mark.parametrize(
    "values",
    [
        ("10", "10", "70"),
        ("50", "50", "50"),
        ("-10", "30", "80"),
        ("120", "-20", "0"),
    ],
)
def test_validate_rejects_bad_settings(values):
    with pytest.raises(InvalidCommissionSettings):
        validate_commission_settings(settings_of(*values))


def test_commission_only_split_of_smallest_fee_keeps_prize_non_negative():
    split = compute_entry_fee_split(Decimal("0.01"), settings_of("50", "50", "0"))
    assert split.organizer == Decimal("0.01")
    assert split.platform == Decimal("0.00")
    assert split.prize == Decimal("0.00")
