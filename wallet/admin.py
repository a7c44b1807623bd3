from django.contrib import admin, messages

from import_export import resources
from import_export.admin import ImportExportModelAdmin
from simple_history.admin import SimpleHistoryAdmin
from unfold.admin import ModelAdmin, TabularInline

from common.exceptions import ApplicationError

from .models import Transaction, Wallet
from .services import WalletService


class WalletResource(resources.ModelResource):
    class Meta:
        model = Wallet
        fields = ("id", "user__username", "balance", "upi_id", "updated_at")


class TransactionResource(resources.ModelResource):
    class Meta:
        model = Transaction
        fields = (
            "id",
            "wallet__user__username",
            "transaction_type",
            "amount",
            "status",
            "description",
            "utr_number",
            "tournament__title",
            "rank",
            "created_at",
        )


class TransactionInline(TabularInline):
    model = Transaction
    extra = 0
    show_change_link = True
    can_delete = False
    fields = ("transaction_type", "amount", "status", "description", "created_at")
    readonly_fields = fields


@admin.register(Wallet)
class WalletAdmin(ImportExportModelAdmin, ModelAdmin):
    resource_class = WalletResource
    list_display = ("user", "balance", "upi_id", "updated_at")
    search_fields = ("user__username", "upi_id")
    readonly_fields = ("user", "balance", "updated_at")
    inlines = [TransactionInline]


@admin.register(Transaction)
class TransactionAdmin(ImportExportModelAdmin, SimpleHistoryAdmin, ModelAdmin):
    resource_class = TransactionResource
    list_display = ("wallet", "transaction_type", "amount", "status", "utr_number", "created_at")
    list_filter = ("transaction_type", "status", "created_at")
    search_fields = ("wallet__user__username", "description", "utr_number")
    readonly_fields = (
        "wallet",
        "transaction_type",
        "amount",
        "status",
        "tournament",
        "rank",
        "processed_by",
        "processed_at",
        "created_at",
    )
    actions = ["approve_selected", "reject_selected"]

    def _review(self, request, queryset, method_name):
        done = 0
        for tx in queryset.filter(status=Transaction.Status.PENDING):
            method = {
                Transaction.TransactionType.DEPOSIT: f"{method_name}_deposit",
                Transaction.TransactionType.WITHDRAWAL: f"{method_name}_withdrawal",
            }.get(tx.transaction_type)
            if method is None:
                continue
            try:
                getattr(WalletService, method)(tx, request.user)
                done += 1
            except ApplicationError as e:
                self.message_user(request, f"#{tx.pk}: {e.message}", messages.ERROR)
        self.message_user(request, f"{done} transaction(s) processed.")

    @admin.action(description="Approve selected deposits/withdrawals")
    def approve_selected(self, request, queryset):
        self._review(request, queryset, "approve")

    @admin.action(description="Reject selected deposits/withdrawals")
    def reject_selected(self, request, queryset):
        self._review(request, queryset, "reject")
