import logging

from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAdminUser
from rest_framework.response import Response
from rest_framework.views import APIView

from common.exceptions import ApplicationError
from common.permissions import HasSchedulerKey
from common.throttles import MediumThrottle, SchedulerThrottle, StrictThrottle

from .exceptions import InvalidStateTransition
from .filters import TournamentFilter
from .models import Tournament
from .permissions import IsTournamentOrganizerOrAdmin
from .serializers import (
    DeclareWinnerSerializer,
    ParticipantSerializer,
    TournamentCreateUpdateSerializer,
    TournamentReadOnlySerializer,
)
from .services import (
    cancel_tournament,
    declare_winner,
    join_tournament,
    recalculate_due_prize_pools,
    recalculate_prize_pool,
)

logger = logging.getLogger(__name__)


class TournamentViewSet(viewsets.ModelViewSet):
    """
    ViewSet for managing tournaments.
    """

    permission_classes = [IsTournamentOrganizerOrAdmin]
    filter_backends = [DjangoFilterBackend]
    filterset_class = TournamentFilter

    def get_queryset(self):
        return Tournament.objects.with_details(user=self.request.user).select_related(
            "organizer", "winner"
        )

    def get_serializer_class(self):
        if self.action in ["create", "update", "partial_update"]:
            return TournamentCreateUpdateSerializer
        return TournamentReadOnlySerializer

    def get_throttles(self):
        if self.action in ["join", "declare_winner", "cancel", "recalculate"]:
            self.throttle_classes = [StrictThrottle]
        else:
            self.throttle_classes = [MediumThrottle]
        return super().get_throttles()

    def _read(self, tournament):
        tournament = self.get_queryset().get(pk=tournament.pk)
        return TournamentReadOnlySerializer(tournament, context=self.get_serializer_context()).data

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        tournament = serializer.save(organizer=request.user)
        return Response(self._read(tournament), status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        instance = self.get_object()
        if instance.status != Tournament.Status.UPCOMING:
            raise InvalidStateTransition("Only upcoming tournaments can be edited.")
        serializer = self.get_serializer(
            instance, data=request.data, partial=kwargs.pop("partial", False)
        )
        serializer.is_valid(raise_exception=True)
        tournament = serializer.save()
        return Response(self._read(tournament))

    def perform_destroy(self, instance):
        if instance.participant_entries.exists():
            raise ApplicationError("Tournaments with participants must be cancelled instead.")
        instance.delete()

    @extend_schema(request=None, responses={201: ParticipantSerializer})
    @action(detail=True, methods=["post"])
    def join(self, request, pk=None):
        """
        Join a tournament, paying the entry fee from the wallet.
        """
        participant = join_tournament(tournament=self.get_object(), user=request.user)
        return Response(ParticipantSerializer(participant).data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=["get"])
    def participants(self, request, pk=None):
        tournament = self.get_object()
        entries = tournament.participant_entries.select_related("user")
        return Response(ParticipantSerializer(entries, many=True).data)

    @extend_schema(request=DeclareWinnerSerializer, responses=TournamentReadOnlySerializer)
    @action(detail=True, methods=["post"])
    def declare_winner(self, request, pk=None):
        tournament = self.get_object()
        serializer = DeclareWinnerSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        tournament = declare_winner(
            tournament, serializer.validated_data["winner"], declared_by=request.user
        )
        return Response(self._read(tournament))

    @extend_schema(request=None, responses=TournamentReadOnlySerializer)
    @action(detail=True, methods=["post"])
    def cancel(self, request, pk=None):
        tournament = cancel_tournament(self.get_object(), cancelled_by=request.user)
        return Response(self._read(tournament))

    @extend_schema(request=None)
    @action(detail=True, methods=["post"], permission_classes=[IsAdminUser])
    def recalculate(self, request, pk=None):
        """
        Recalculate the prize pool from the current participant count.
        """
        return Response(recalculate_prize_pool(self.get_object()))


class RecalculatePrizePoolsTriggerView(APIView):
    """
    Entry point for an external cron. Authenticated with the shared
    ``X-Scheduler-Key`` header instead of a user token.
    """

    authentication_classes = []
    permission_classes = [HasSchedulerKey]
    throttle_classes = [SchedulerThrottle]

    @extend_schema(request=None)
    def post(self, request, *args, **kwargs):
        result = recalculate_due_prize_pools()
        logger.info(f"Scheduler trigger processed {result['processed']} tournament(s).")
        return Response(result)
