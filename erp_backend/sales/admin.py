# sales/admin.py

from django.contrib import admin

from sales.models import Customer, SalesOrder, SalesOrderItem


@admin.register(Customer)
class CustomerAdmin(admin.ModelAdmin):
    list_display = ("customer_code", "name", "customer_type", "credit_limit", "is_active")
    list_filter = ("customer_type", "is_active")
    search_fields = ("customer_code", "name", "email")
    readonly_fields = ("customer_code",)


class SalesOrderItemInline(admin.TabularInline):
    model = SalesOrderItem
    extra = 0
    readonly_fields = ("line_total", "quantity_shipped")


@admin.register(SalesOrder)
class SalesOrderAdmin(admin.ModelAdmin):
    list_display = ("order_number", "customer", "order_date", "status", "priority", "total_amount")
    list_filter = ("status", "priority")
    search_fields = ("order_number", "customer__name")
    readonly_fields = ("order_number", "status", "subtotal", "total_amount", "confirmed_at", "shipped_at", "delivered_at")
    inlines = [SalesOrderItemInline]
