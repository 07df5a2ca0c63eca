# inventory/admin.py

from django.contrib import admin

from inventory.models import InventoryItem, InventoryTransaction, Product


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ("sku", "name", "product_type", "selling_price", "is_active")
    list_filter = ("product_type", "is_active")
    search_fields = ("sku", "name")


@admin.register(InventoryItem)
class InventoryItemAdmin(admin.ModelAdmin):
    list_display = ("product", "quantity_on_hand", "minimum_stock_level", "reorder_point", "location")
    search_fields = ("product__sku", "product__name", "location")
    readonly_fields = ("quantity_on_hand", "last_received_at")


@admin.register(InventoryTransaction)
class InventoryTransactionAdmin(admin.ModelAdmin):
    list_display = ("created_at", "item", "transaction_type", "direction", "quantity", "quantity_after", "reference")
    list_filter = ("transaction_type", "direction")
    search_fields = ("reference", "item__product__sku")

    # Ledger is append-only.
    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
