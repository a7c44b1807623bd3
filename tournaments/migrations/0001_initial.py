import django.db.models.deletion
from decimal import Decimal

from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Tournament",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("title", models.CharField(max_length=200)),
                ("game", models.CharField(db_index=True, max_length=100)),
                ("description", models.TextField(blank=True)),
                ("tournament_type", models.CharField(choices=[("organizer", "Organizer"), ("creator", "Creator")], db_index=True, default="organizer", max_length=20)),
                ("entry_fee", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=12)),
                ("max_participants", models.PositiveIntegerField(default=100)),
                ("start_date", models.DateTimeField(db_index=True)),
                ("status", models.CharField(choices=[("upcoming", "Upcoming"), ("ongoing", "Ongoing"), ("completed", "Completed"), ("cancelled", "Cancelled")], db_index=True, default="upcoming", max_length=20)),
                ("prize_pool", models.CharField(blank=True, help_text="Optional display text shown instead of the computed prize pool.", max_length=100)),
                ("current_prize_pool", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=12)),
                ("organizer_earnings", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=12)),
                ("platform_earnings", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=12)),
                ("total_fees_collected", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=12)),
                ("prize_pool_recalculated_at", models.DateTimeField(blank=True, null=True)),
                ("winner_declared_at", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("organizer", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="organized_tournaments", to=settings.AUTH_USER_MODEL)),
                ("winner", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="won_tournaments", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "ordering": ["start_date", "id"],
            },
        ),
        migrations.CreateModel(
            name="Participant",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("joined_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("tournament", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="participant_entries", to="tournaments.tournament")),
                ("user", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="tournament_entries", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "ordering": ["joined_at", "id"],
                "unique_together": {("user", "tournament")},
            },
        ),
        migrations.AddField(
            model_name="tournament",
            name="participants",
            field=models.ManyToManyField(blank=True, related_name="tournaments", through="tournaments.Participant", to=settings.AUTH_USER_MODEL),
        ),
    ]
