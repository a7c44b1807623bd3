from rest_framework import generics
from rest_framework.permissions import IsAuthenticated

from common.throttles import MediumThrottle
from notifications.services import notify

from .serializers import UserSerializer


class MeAPIView(generics.RetrieveUpdateAPIView):
    """
    Return or update the authenticated user's profile.
    """

    serializer_class = UserSerializer
    permission_classes = [IsAuthenticated]
    throttle_classes = [MediumThrottle]
    http_method_names = ["get", "patch", "head", "options"]

    def get_object(self):
        return self.request.user

    def perform_update(self, serializer):
        user = serializer.save()
        notify("profile_updated", user)
