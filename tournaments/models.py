from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import models

from .managers import TournamentManager


def _money(**kwargs):
    return models.DecimalField(
        max_digits=12, decimal_places=2, default=Decimal("0.00"), **kwargs
    )


class Tournament(models.Model):
    class Status(models.TextChoices):
        UPCOMING = "upcoming", "Upcoming"
        ONGOING = "ongoing", "Ongoing"
        COMPLETED = "completed", "Completed"
        CANCELLED = "cancelled", "Cancelled"

    class TournamentType(models.TextChoices):
        ORGANIZER = "organizer", "Organizer"
        CREATOR = "creator", "Creator"

    # One-way lifecycle; completed and cancelled are terminal.
    TRANSITIONS = {
        Status.UPCOMING: (Status.ONGOING, Status.CANCELLED),
        Status.ONGOING: (Status.COMPLETED, Status.CANCELLED),
        Status.COMPLETED: (),
        Status.CANCELLED: (),
    }

    title = models.CharField(max_length=200)
    game = models.CharField(max_length=100, db_index=True)
    description = models.TextField(blank=True)
    tournament_type = models.CharField(
        max_length=20,
        choices=TournamentType.choices,
        default=TournamentType.ORGANIZER,
        db_index=True,
    )
    organizer = models.ForeignKey(
        "users.User", on_delete=models.CASCADE, related_name="organized_tournaments"
    )
    entry_fee = _money()
    max_participants = models.PositiveIntegerField(default=100)
    start_date = models.DateTimeField(db_index=True)
    status = models.CharField(
        max_length=20, choices=Status.choices, default=Status.UPCOMING, db_index=True
    )
    prize_pool = models.CharField(
        max_length=100,
        blank=True,
        help_text="Optional display text shown instead of the computed prize pool.",
    )

    current_prize_pool = _money()
    organizer_earnings = _money()
    platform_earnings = _money()
    total_fees_collected = _money()
    prize_pool_recalculated_at = models.DateTimeField(null=True, blank=True)

    winner = models.ForeignKey(
        "users.User",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="won_tournaments",
    )
    winner_declared_at = models.DateTimeField(null=True, blank=True)

    participants = models.ManyToManyField(
        "users.User", through="Participant", related_name="tournaments", blank=True
    )
    created_at = models.DateTimeField(auto_now_add=True)

    objects = TournamentManager()

    class Meta:
        ordering = ["start_date", "id"]

    def __str__(self):
        return self.title

    def clean(self):
        super().clean()
        if self.entry_fee is not None and self.entry_fee < 0:
            raise ValidationError("Entry fee cannot be negative.")
        if self.max_participants == 0:
            raise ValidationError("A tournament needs at least one slot.")

    @property
    def is_free(self):
        return not self.entry_fee

    def can_transition_to(self, status):
        return status in self.TRANSITIONS.get(self.status, ())


class Participant(models.Model):
    user = models.ForeignKey(
        "users.User", on_delete=models.CASCADE, related_name="tournament_entries"
    )
    tournament = models.ForeignKey(
        Tournament, on_delete=models.CASCADE, related_name="participant_entries"
    )
    joined_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        unique_together = ("user", "tournament")
        ordering = ["joined_at", "id"]

    def __str__(self):
        return f"{self.user.username} in {self.tournament.title}"
