# Django Imports
from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

# 3rd-party Imports
from unfold.admin import ModelAdmin

# Local Imports
from .models import User


@admin.register(User)
class UserAdmin(BaseUserAdmin, ModelAdmin):
    list_display = ("username", "email", "phone_number", "is_organizer", "stats_points", "is_staff")
    search_fields = ("username", "first_name", "last_name", "email", "phone_number")
    list_filter = ("is_staff", "is_superuser", "is_active", "is_organizer")
    readonly_fields = ("last_login", "date_joined")

    fieldsets = (
        (None, {"fields": ("username", "password")}),
        ("Personal info", {"fields": ("first_name", "last_name", "email", "phone_number"), "classes": ("tab",)}),
        ("Game Profile", {"fields": ("in_game_name", "stats_points"), "classes": ("tab",)}),
        ("Permissions", {"fields": ("is_active", "is_staff", "is_superuser", "is_organizer", "groups", "user_permissions"), "classes": ("tab",)}),
        ("Important dates", {"fields": ("last_login", "date_joined"), "classes": ("tab",)}),
    )

    actions = ["reset_stats_points"]

    def reset_stats_points(self, request, queryset):
        updated_count = queryset.update(stats_points=0)
        self.message_user(request, f"{updated_count} users had their stats points reset.", "success")
    reset_stats_points.short_description = "Reset stats points of selected users"
