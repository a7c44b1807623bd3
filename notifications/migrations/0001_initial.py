import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Notification",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("notification_type", models.CharField(choices=[("deposit_approved", "Deposit approved"), ("withdrawal_approved", "Withdrawal approved"), ("withdrawal_rejected", "Withdrawal rejected"), ("tournament_joined", "Tournament joined"), ("tournament_won", "Tournament won"), ("ban_lifted", "Ban lifted"), ("profile_updated", "Profile updated"), ("dhana_earned", "Dhana earned"), ("match_starting", "Match starting"), ("tournament_cancelled", "Tournament cancelled"), ("bonus_received", "Bonus received")], max_length=50)),
                ("title", models.CharField(max_length=100)),
                ("message", models.CharField(max_length=255)),
                ("url", models.CharField(default="/", max_length=200)),
                ("is_read", models.BooleanField(default=False)),
                ("timestamp", models.DateTimeField(auto_now_add=True)),
                ("user", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="notifications", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "ordering": ["-timestamp", "-id"],
            },
        ),
    ]
