from django.db import models


class TournamentQuerySet(models.QuerySet):
    def with_details(self, user=None):
        """
        Annotates the queryset with the participant count, spots left and,
        for an authenticated user, whether they have joined.
        """
        queryset = self.annotate(
            participant_count=models.Count("participant_entries", distinct=True)
        ).annotate(
            spots_left=models.ExpressionWrapper(
                models.F("max_participants") - models.F("participant_count"),
                output_field=models.IntegerField(),
            )
        )

        if user and user.is_authenticated:
            from .models import Participant  # Avoid circular import
            queryset = queryset.annotate(
                is_joined=models.Exists(
                    Participant.objects.filter(tournament=models.OuterRef("pk"), user=user)
                )
            )
        else:
            queryset = queryset.annotate(
                is_joined=models.Value(False, output_field=models.BooleanField())
            )
        return queryset

    def upcoming(self):
        return self.filter(status=self.model.Status.UPCOMING)

    def due_for_recalculation(self, window_start, window_end):
        return self.upcoming().filter(
            start_date__gte=window_start,
            start_date__lt=window_end,
            prize_pool_recalculated_at__isnull=True,
        )


class TournamentManager(models.Manager):
    def get_queryset(self):
        return TournamentQuerySet(self.model, using=self._db)

    def with_details(self, user=None):
        return self.get_queryset().with_details(user=user)

    def upcoming(self):
        return self.get_queryset().upcoming()

    def due_for_recalculation(self, window_start, window_end):
        return self.get_queryset().due_for_recalculation(window_start, window_end)
