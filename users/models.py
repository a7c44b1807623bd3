from django.contrib.auth.models import AbstractUser
from django.db import models
from phonenumber_field.modelfields import PhoneNumberField


class User(AbstractUser):
    phone_number = PhoneNumberField(unique=True, null=True, blank=True)
    in_game_name = models.CharField(max_length=100, blank=True)
    is_organizer = models.BooleanField(
        default=False, help_text="Can create and run organizer tournaments."
    )
    stats_points = models.PositiveIntegerField(
        default=0, help_text="Player stats points used for milestone bonuses."
    )

    def __str__(self):
        return self.username

    @property
    def display_name(self):
        return self.username or self.in_game_name or self.get_full_name() or "Player"
