from django.urls import include, path
from rest_framework.routers import DefaultRouter

from .views import (
    AdminDepositViewSet,
    AdminWithdrawalViewSet,
    BonusMilestoneAPIView,
    DepositAPIView,
    TransactionViewSet,
    WalletAPIView,
    WalletSummaryAPIView,
    WithdrawalRequestAPIView,
)

router = DefaultRouter()
router.register(r"transactions", TransactionViewSet, basename="transaction")
router.register(r"admin/deposits", AdminDepositViewSet, basename="admin-deposit")
router.register(r"admin/withdrawals", AdminWithdrawalViewSet, basename="admin-withdrawal")

urlpatterns = [
    path("", WalletAPIView.as_view(), name="wallet"),
    path("summary/", WalletSummaryAPIView.as_view(), name="wallet-summary"),
    path("deposit/", DepositAPIView.as_view(), name="deposit"),
    path("withdrawal/", WithdrawalRequestAPIView.as_view(), name="withdrawal"),
    path("bonus/", BonusMilestoneAPIView.as_view(), name="bonus"),
    path("", include(router.urls)),
]
