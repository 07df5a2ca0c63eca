# production/admin.py

from django.contrib import admin

from production.models import ProductionOrder


@admin.register(ProductionOrder)
class ProductionOrderAdmin(admin.ModelAdmin):
    list_display = (
        "order_number",
        "product",
        "quantity_planned",
        "quantity_produced",
        "status",
        "priority",
        "start_date",
        "due_date",
    )
    list_filter = ("status", "priority")
    search_fields = ("order_number", "product__name", "product__sku")
    readonly_fields = ("order_number", "actual_start_date", "actual_end_date", "cancelled_at", "cancelled_by")
