from django.core.management.base import BaseCommand, CommandError

from common.exceptions import ApplicationError
from tournaments.models import Tournament
from tournaments.services import recalculate_due_prize_pools, recalculate_prize_pool


class Command(BaseCommand):
    help = (
        "Recalculates prize pools of tournaments about to start, or of a single "
        "tournament when --tournament is given."
    )

    def add_arguments(self, parser):
        parser.add_argument("--tournament", type=int, help="Recalculate only this tournament id.")

    def handle(self, *args, **options):
        tournament_id = options.get("tournament")
        if tournament_id:
            try:
                tournament = Tournament.objects.get(pk=tournament_id)
            except Tournament.DoesNotExist:
                raise CommandError(f"Tournament {tournament_id} does not exist.")
            try:
                figures = recalculate_prize_pool(tournament)
            except ApplicationError as e:
                raise CommandError(e.message)
            self.stdout.write(
                self.style.SUCCESS(
                    f"{figures['title']}: {figures['participant_count']} participants, "
                    f"prize pool {figures['prize_pool']}"
                )
            )
            return

        result = recalculate_due_prize_pools()
        for entry in result["results"]:
            if entry["success"]:
                self.stdout.write(
                    self.style.SUCCESS(f"{entry['title']}: prize pool {entry['prize_pool']}")
                )
            else:
                self.stdout.write(
                    self.style.ERROR(f"Tournament {entry['tournament_id']}: {entry['error']}")
                )
        self.stdout.write(f"Processed {result['processed']} tournament(s).")
