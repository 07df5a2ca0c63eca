# procurement/admin.py

from django.contrib import admin

from procurement.models import PurchaseOrder, PurchaseOrderItem, PurchaseRequest, Supplier


@admin.register(Supplier)
class SupplierAdmin(admin.ModelAdmin):
    list_display = ("supplier_code", "name", "contact_person", "email", "is_active")
    list_filter = ("is_active",)
    search_fields = ("supplier_code", "name", "email")
    readonly_fields = ("supplier_code",)


@admin.register(PurchaseRequest)
class PurchaseRequestAdmin(admin.ModelAdmin):
    list_display = ("request_number", "title", "priority", "status", "requested_by", "created_at")
    list_filter = ("status", "priority")
    search_fields = ("request_number", "title", "department")
    readonly_fields = ("request_number", "status", "approved_by", "approved_at", "rejected_by", "rejected_at")


class PurchaseOrderItemInline(admin.TabularInline):
    model = PurchaseOrderItem
    extra = 0
    readonly_fields = ("received_quantity", "received_date", "total_price")


@admin.register(PurchaseOrder)
class PurchaseOrderAdmin(admin.ModelAdmin):
    list_display = ("order_number", "supplier", "order_date", "status", "total_amount")
    list_filter = ("status",)
    search_fields = ("order_number", "supplier__name")
    readonly_fields = ("order_number", "status", "total_amount", "received_date")
    inlines = [PurchaseOrderItemInline]
