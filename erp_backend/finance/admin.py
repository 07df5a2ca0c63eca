# finance/admin.py

from django.contrib import admin

from finance.models import Account, Invoice, Payment


class PaymentInline(admin.TabularInline):
    model = Payment
    extra = 0
    can_delete = False
    readonly_fields = ("payment_number", "amount", "payment_method", "payment_reference", "status", "payment_date")

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Invoice)
class InvoiceAdmin(admin.ModelAdmin):
    list_display = ("invoice_number", "customer", "invoice_date", "due_date", "total_amount", "paid_amount", "status")
    list_filter = ("status",)
    search_fields = ("invoice_number", "customer__name")
    readonly_fields = ("invoice_number", "paid_amount", "status", "payment_date")
    inlines = [PaymentInline]


@admin.register(Payment)
class PaymentAdmin(admin.ModelAdmin):
    list_display = ("payment_number", "invoice", "amount", "payment_method", "status", "payment_date")
    list_filter = ("payment_method", "status")
    search_fields = ("payment_number", "payment_reference", "invoice__invoice_number")

    # Payments are append-only.
    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(Account)
class AccountAdmin(admin.ModelAdmin):
    list_display = ("account_code", "account_name", "account_type", "parent_account", "balance", "is_active")
    list_filter = ("account_type", "is_active")
    search_fields = ("account_code", "account_name")
