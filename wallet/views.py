import logging

from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import extend_schema
from rest_framework import generics, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAdminUser, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from common.throttles import MediumThrottle, StrictThrottle, VeryStrictThrottle

from .models import Transaction
from .serializers import (
    AdminTransactionSerializer,
    BonusMilestoneSerializer,
    ClaimBonusSerializer,
    DepositRequestSerializer,
    RejectTransactionSerializer,
    TransactionSerializer,
    WalletSerializer,
    WalletSummarySerializer,
    WithdrawalRequestSerializer,
)
from .services import WalletService

logger = logging.getLogger(__name__)


class WalletAPIView(generics.GenericAPIView):
    serializer_class = WalletSerializer
    permission_classes = [IsAuthenticated]
    throttle_classes = [MediumThrottle]

    def get(self, request, *args, **kwargs):
        wallet = WalletService(request.user).get_wallet()
        return Response(self.get_serializer(wallet).data)


class WalletSummaryAPIView(APIView):
    permission_classes = [IsAuthenticated]
    throttle_classes = [MediumThrottle]

    @extend_schema(responses=WalletSummarySerializer)
    def get(self, request, *args, **kwargs):
        summary = WalletService(request.user).get_summary()
        return Response(WalletSummarySerializer(summary).data)


class TransactionViewSet(viewsets.ReadOnlyModelViewSet):
    serializer_class = TransactionSerializer
    permission_classes = [IsAuthenticated]
    throttle_classes = [MediumThrottle]
    filter_backends = [DjangoFilterBackend]
    filterset_fields = ["transaction_type", "status"]

    def get_queryset(self):
        return Transaction.objects.filter(
            wallet__user=self.request.user
        ).select_related("tournament")


class DepositAPIView(generics.GenericAPIView):
    serializer_class = DepositRequestSerializer
    permission_classes = [IsAuthenticated]
    throttle_classes = [VeryStrictThrottle]

    @extend_schema(responses={201: TransactionSerializer})
    def post(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        tx = WalletService(request.user).submit_deposit(**serializer.validated_data)
        return Response(TransactionSerializer(tx).data, status=status.HTTP_201_CREATED)


class WithdrawalRequestAPIView(generics.GenericAPIView):
    serializer_class = WithdrawalRequestSerializer
    permission_classes = [IsAuthenticated]
    throttle_classes = [VeryStrictThrottle]

    @extend_schema(responses={201: TransactionSerializer})
    def post(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        tx = WalletService(request.user).request_withdrawal(**serializer.validated_data)
        return Response(TransactionSerializer(tx).data, status=status.HTTP_201_CREATED)


class BonusMilestoneAPIView(generics.GenericAPIView):
    serializer_class = ClaimBonusSerializer
    permission_classes = [IsAuthenticated]
    throttle_classes = [StrictThrottle]

    @extend_schema(responses=BonusMilestoneSerializer(many=True))
    def get(self, request, *args, **kwargs):
        milestones = WalletService(request.user).get_bonus_milestones()
        return Response(BonusMilestoneSerializer(milestones, many=True).data)

    @extend_schema(responses={201: TransactionSerializer})
    def post(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        tx = WalletService(request.user).claim_milestone_bonus(
            serializer.validated_data["points"]
        )
        return Response(TransactionSerializer(tx).data, status=status.HTTP_201_CREATED)


class _AdminReviewViewSet(viewsets.ReadOnlyModelViewSet):
    """
    Admin queue for one reviewable transaction type. Pending rows are listed
    by default; pass ``?status=`` to see processed ones.
    """

    transaction_type = None
    approve_method = None
    reject_method = None

    serializer_class = AdminTransactionSerializer
    permission_classes = [IsAdminUser]
    throttle_classes = [StrictThrottle]

    def get_queryset(self):
        qs = Transaction.objects.filter(
            transaction_type=self.transaction_type
        ).select_related("wallet__user", "processed_by")
        if self.action == "list":
            qs = qs.filter(status=self.request.query_params.get("status", Transaction.Status.PENDING))
        return qs

    @extend_schema(request=None, responses=AdminTransactionSerializer)
    @action(detail=True, methods=["post"])
    def approve(self, request, pk=None):
        tx = getattr(WalletService, self.approve_method)(self.get_object(), request.user)
        return Response(self.get_serializer(tx).data)

    @extend_schema(request=RejectTransactionSerializer, responses=AdminTransactionSerializer)
    @action(detail=True, methods=["post"])
    def reject(self, request, pk=None):
        serializer = RejectTransactionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        tx = getattr(WalletService, self.reject_method)(
            self.get_object(), request.user, serializer.validated_data.get("reason")
        )
        return Response(self.get_serializer(tx).data)


class AdminDepositViewSet(_AdminReviewViewSet):
    transaction_type = Transaction.TransactionType.DEPOSIT
    approve_method = "approve_deposit"
    reject_method = "reject_deposit"


class AdminWithdrawalViewSet(_AdminReviewViewSet):
    transaction_type = Transaction.TransactionType.WITHDRAWAL
    approve_method = "approve_withdrawal"
    reject_method = "reject_withdrawal"
