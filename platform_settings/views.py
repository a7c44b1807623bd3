from drf_spectacular.utils import extend_schema
from rest_framework.permissions import IsAdminUser, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from common.throttles import MediumThrottle

from .serializers import CommissionSettingsSerializer, PaymentDetailsSerializer
from .services import (
    get_commission_settings,
    get_payment_details,
    update_commission_settings,
)


class CommissionSettingsView(APIView):
    """
    GET: current entry-fee split. PUT (admin): replace all three percentages.
    """

    throttle_classes = [MediumThrottle]

    def get_permissions(self):
        if self.request.method == "PUT":
            return [IsAdminUser()]
        return [IsAuthenticated()]

    @extend_schema(responses=CommissionSettingsSerializer)
    def get(self, request):
        commission = get_commission_settings()
        return Response(CommissionSettingsSerializer(commission).data)

    @extend_schema(request=CommissionSettingsSerializer, responses=CommissionSettingsSerializer)
    def put(self, request):
        serializer = CommissionSettingsSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        commission = update_commission_settings(user=request.user, **serializer.validated_data)
        return Response(CommissionSettingsSerializer(commission).data)


class PaymentDetailsView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(responses=PaymentDetailsSerializer)
    def get(self, request):
        return Response(PaymentDetailsSerializer(get_payment_details()).data)
