from django.urls import path

from .views import RevenueSummaryAPIView, WalletDriftAPIView

urlpatterns = [
    path('revenue/', RevenueSummaryAPIView.as_view(), name='revenue-summary'),
    path('wallet-drift/', WalletDriftAPIView.as_view(), name='wallet-drift'),
]
