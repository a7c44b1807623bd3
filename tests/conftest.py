"""
This file contains shared fixtures for the test suite.
Fixtures defined here are available to all tests in the project.
"""

from datetime import timedelta
from decimal import Decimal
from itertools import count

import pytest
from django.contrib.auth import get_user_model
from django.core.cache import cache
from django.utils import timezone
from rest_framework.test import APIClient

from platform_settings.services import CommissionSettings
from tournaments.models import Tournament
from wallet.models import Transaction, Wallet

User = get_user_model()


@pytest.fixture(autouse=True)
def override_settings(settings):
    """
    Override Django settings for the test environment.
    This fixture runs for every test and ensures that settings are
    optimized for testing.
    """
    settings.PASSWORD_HASHERS = [
        'django.contrib.auth.hashers.MD5PasswordHasher',
    ]
    settings.CELERY_TASK_ALWAYS_EAGER = True
    settings.ONESIGNAL_APP_ID = None
    settings.ONESIGNAL_REST_API_KEY = None
    settings.SCHEDULER_API_KEY = "test-scheduler-key"
    settings.MINIMUM_WITHDRAWAL_AMOUNT = Decimal("100")


@pytest.fixture(autouse=True)
def clear_cache():
    """Throttle counters live in the cache; start every test with a clean slate."""
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def api_client():
    """A pytest fixture that provides an instance of DRF's APIClient."""
    return APIClient()


@pytest.fixture
def user_factory(db):
    """A pytest fixture (factory) to create a user. Wallets come from the post_save signal."""
    sequence = count(1)

    def _create_user(**kwargs):
        defaults = {
            "username": None,
            "password": "password",
        }
        defaults.update(kwargs)
        if defaults['username'] is None:
            defaults['username'] = f"user_{next(sequence)}"

        return User.objects.create_user(**defaults)

    return _create_user


@pytest.fixture
def default_user(user_factory):
    """A fixture to get a standard user instance."""
    return user_factory(username="testuser")


@pytest.fixture
def admin_user(user_factory):
    """A fixture to create an admin user."""
    return user_factory(
        username="adminuser",
        is_staff=True,
        is_superuser=True,
    )


@pytest.fixture
def organizer(user_factory):
    return user_factory(username="organizer", is_organizer=True)


@pytest.fixture
def authenticated_client(api_client, default_user):
    """A pytest fixture for an authenticated client with a standard user."""
    api_client.force_authenticate(user=default_user)
    return api_client


@pytest.fixture
def authenticated_admin_client(api_client, admin_user):
    """A pytest fixture for an authenticated client with an admin user."""
    api_client.force_authenticate(user=admin_user)
    return api_client


@pytest.fixture
def commission():
    return CommissionSettings(
        organizer_percent=Decimal("10"),
        platform_percent=Decimal("10"),
        prize_pool_percent=Decimal("80"),
    )


@pytest.fixture
def fund_wallet(db):
    """
    Credits a wallet together with the completed ledger row that explains
    the money, so balance and ledger stay in agreement.
    """

    def _fund(user, amount, transaction_type=Transaction.TransactionType.DEPOSIT, **extra):
        amount = Decimal(amount)
        wallet, _ = Wallet.objects.get_or_create(user=user)
        wallet.balance += amount
        wallet.save(update_fields=["balance", "updated_at"])
        return Transaction.objects.create(
            wallet=wallet,
            transaction_type=transaction_type,
            amount=amount,
            status=Transaction.Status.COMPLETED,
            **extra,
        )

    return _fund


@pytest.fixture
def tournament_factory(db, organizer):
    def _create_tournament(**kwargs):
        defaults = {
            "title": "Friday Scrims",
            "game": "BGMI",
            "organizer": organizer,
            "entry_fee": Decimal("10"),
            "max_participants": 100,
            "start_date": timezone.now() + timedelta(hours=2),
        }
        defaults.update(kwargs)
        return Tournament.objects.create(**defaults)

    return _create_tournament
