# maintenance/admin.py

from django.contrib import admin

from maintenance.models import Equipment, MaintenanceHistory, MaintenanceOrder, MaintenanceSchedule


@admin.register(Equipment)
class EquipmentAdmin(admin.ModelAdmin):
    list_display = ("code", "name", "location", "status")
    list_filter = ("status",)
    search_fields = ("code", "name", "serial_number")


@admin.register(MaintenanceOrder)
class MaintenanceOrderAdmin(admin.ModelAdmin):
    list_display = ("order_number", "equipment", "title", "maintenance_type", "priority", "status", "scheduled_date")
    list_filter = ("status", "maintenance_type", "priority")
    search_fields = ("order_number", "title", "equipment__code")
    readonly_fields = ("order_number", "started_at", "completed_at", "cancelled_at", "cancelled_by")


@admin.register(MaintenanceHistory)
class MaintenanceHistoryAdmin(admin.ModelAdmin):
    list_display = ("equipment", "maintenance_type", "performed_at", "result", "labor_hours", "cost")
    list_filter = ("result", "maintenance_type")

    # History rows are append-only.
    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(MaintenanceSchedule)
class MaintenanceScheduleAdmin(admin.ModelAdmin):
    list_display = ("equipment", "title", "maintenance_type", "frequency_days", "next_due", "status", "is_active")
    list_filter = ("status", "maintenance_type", "is_active")
    search_fields = ("title", "equipment__code")
