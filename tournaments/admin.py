from django.contrib import admin, messages

from import_export import resources
from import_export.admin import ImportExportModelAdmin
from unfold.admin import ModelAdmin, TabularInline

from common.exceptions import ApplicationError

from .models import Participant, Tournament
from .services import recalculate_prize_pool


class TournamentResource(resources.ModelResource):
    class Meta:
        model = Tournament
        fields = (
            "id",
            "title",
            "game",
            "tournament_type",
            "organizer__username",
            "status",
            "start_date",
            "entry_fee",
            "current_prize_pool",
            "organizer_earnings",
            "platform_earnings",
            "total_fees_collected",
        )
        export_order = fields


class ParticipantInline(TabularInline):
    model = Participant
    extra = 0
    fields = ("user", "joined_at")
    readonly_fields = ("user", "joined_at")
    can_delete = False
    classes = ["collapse"]


@admin.register(Tournament)
class TournamentAdmin(ImportExportModelAdmin, ModelAdmin):
    resource_class = TournamentResource
    list_display = (
        "title",
        "game",
        "tournament_type",
        "status",
        "start_date",
        "entry_fee",
        "current_prize_pool",
    )
    list_display_links = ("title",)
    list_filter = ("status", "tournament_type", "game")
    search_fields = ("title", "game", "organizer__username")
    autocomplete_fields = ("organizer",)
    readonly_fields = (
        "current_prize_pool",
        "organizer_earnings",
        "platform_earnings",
        "total_fees_collected",
        "prize_pool_recalculated_at",
        "winner",
        "winner_declared_at",
    )
    actions = ["recalculate_prize_pools"]

    fieldsets = (
        ("Tournament Info", {"fields": ("title", "game", "description", "organizer", "tournament_type"), "classes": ("tab",)}),
        ("Configuration", {"fields": ("entry_fee", "max_participants", "start_date", "status", "prize_pool"), "classes": ("tab",)}),
        ("Settlement", {"fields": ("current_prize_pool", "organizer_earnings", "platform_earnings", "total_fees_collected", "prize_pool_recalculated_at", "winner", "winner_declared_at"), "classes": ("tab",)}),
    )
    inlines = [ParticipantInline]

    def get_queryset(self, request):
        return super().get_queryset(request).select_related("organizer", "winner")

    @admin.action(description="Recalculate prize pool")
    def recalculate_prize_pools(self, request, queryset):
        for tournament in queryset:
            try:
                figures = recalculate_prize_pool(tournament)
            except ApplicationError as e:
                self.message_user(request, f"{tournament.title}: {e.message}", messages.ERROR)
                continue
            self.message_user(
                request, f"{tournament.title}: prize pool set to {figures['prize_pool']}."
            )


@admin.register(Participant)
class ParticipantAdmin(ModelAdmin):
    list_display = ("user", "tournament", "joined_at")
    list_filter = ("tournament",)
    search_fields = ("user__username", "tournament__title")
    readonly_fields = ("user", "tournament", "joined_at")
