from django.contrib import admin
from unfold.admin import ModelAdmin

from .models import PlatformSetting


@admin.register(PlatformSetting)
class PlatformSettingAdmin(ModelAdmin):
    list_display = ("key", "value", "updated_by", "updated_at")
    search_fields = ("key",)
    readonly_fields = ("updated_by", "updated_at")

    def save_model(self, request, obj, form, change):
        obj.updated_by = request.user
        super().save_model(request, obj, form, change)
