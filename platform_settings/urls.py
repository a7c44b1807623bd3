from django.urls import path

from .views import CommissionSettingsView, PaymentDetailsView

urlpatterns = [
    path("commission/", CommissionSettingsView.as_view(), name="commission-settings"),
    path("payment-details/", PaymentDetailsView.as_view(), name="payment-details"),
]
