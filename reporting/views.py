from rest_framework import serializers
from rest_framework.permissions import IsAdminUser
from rest_framework.renderers import JSONRenderer
from rest_framework.response import Response
from rest_framework.views import APIView

from .renderers import CSVRenderer
from .services import find_wallet_drift, revenue_summary


class RevenueQuerySerializer(serializers.Serializer):
    days = serializers.IntegerField(min_value=1, max_value=3650, default=30)


class RevenueSummaryAPIView(APIView):
    """
    Platform and organizer earnings by tournament type. Supports
    ``?format=csv``.
    """

    permission_classes = [IsAdminUser]
    renderer_classes = [JSONRenderer, CSVRenderer]

    def get(self, request, *args, **kwargs):
        params = RevenueQuerySerializer(data=request.query_params)
        params.is_valid(raise_exception=True)
        return Response(revenue_summary(days=params.validated_data["days"]))


class WalletDriftAPIView(APIView):
    permission_classes = [IsAdminUser]

    def get(self, request, *args, **kwargs):
        drift = find_wallet_drift()
        return Response({"count": len(drift), "results": drift})
