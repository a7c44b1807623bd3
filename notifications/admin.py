from django.contrib import admin

from import_export import resources
from import_export.admin import ImportExportModelAdmin
from unfold.admin import ModelAdmin

from .models import Notification


class NotificationResource(resources.ModelResource):
    class Meta:
        model = Notification
        fields = ("id", "user__username", "notification_type", "title", "message", "is_read", "timestamp")


@admin.register(Notification)
class NotificationAdmin(ImportExportModelAdmin, ModelAdmin):
    resource_class = NotificationResource
    list_display = ("user", "notification_type", "title", "is_read", "timestamp")
    list_filter = ("notification_type", "is_read", "timestamp")
    search_fields = ("user__username", "message")
    readonly_fields = ("user", "notification_type", "title", "message", "url", "timestamp")

    fieldsets = (
        (None, {"fields": ("user", "notification_type", "is_read")}),
        ("Content", {"fields": ("title", "message", "url", "timestamp")}),
    )
