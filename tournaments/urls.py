from django.urls import include, path
from rest_framework.routers import DefaultRouter

from .views import RecalculatePrizePoolsTriggerView, TournamentViewSet

router = DefaultRouter()
router.register(r"", TournamentViewSet, basename="tournament")

urlpatterns = [
    path(
        "jobs/recalculate-prize-pools/",
        RecalculatePrizePoolsTriggerView.as_view(),
        name="recalculate-prize-pools",
    ),
    path("", include(router.urls)),
]
