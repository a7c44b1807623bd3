from django.contrib import admin
from django.urls import include, path
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

from common.throttles import VeryStrictThrottle


class ThrottledTokenObtainPairView(TokenObtainPairView):
    throttle_classes = [VeryStrictThrottle]


urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/auth/token/", ThrottledTokenObtainPairView.as_view(), name="token_obtain_pair"),
    path("api/auth/token/refresh/", TokenRefreshView.as_view(), name="token_refresh"),
    path("api/users/", include("users.urls")),
    path("api/settings/", include("platform_settings.urls")),
    path("api/wallet/", include("wallet.urls")),
    path("api/tournaments/", include("tournaments.urls")),
    path("api/notifications/", include("notifications.urls")),
    path("api/reporting/", include("reporting.urls")),
    path("api/schema/", SpectacularAPIView.as_view(), name="schema"),
    path("api/schema/swagger-ui/", SpectacularSwaggerView.as_view(url_name="schema"), name="swagger-ui"),
]
