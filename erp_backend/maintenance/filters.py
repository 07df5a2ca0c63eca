# maintenance/filters.py

import django_filters

from maintenance.models import Equipment, MaintenanceHistory, MaintenanceOrder, MaintenanceSchedule


class EquipmentFilter(django_filters.FilterSet):
    class Meta:
        model = Equipment
        fields = ["status", "location"]


class MaintenanceOrderFilter(django_filters.FilterSet):
    scheduled_from = django_filters.DateFilter(field_name="scheduled_date", lookup_expr="gte")
    scheduled_to = django_filters.DateFilter(field_name="scheduled_date", lookup_expr="lte")

    class Meta:
        model = MaintenanceOrder
        fields = ["status", "priority", "maintenance_type", "equipment", "assigned_to"]


class MaintenanceHistoryFilter(django_filters.FilterSet):
    class Meta:
        model = MaintenanceHistory
        fields = ["equipment", "result", "maintenance_type"]


class MaintenanceScheduleFilter(django_filters.FilterSet):
    due_from = django_filters.DateFilter(field_name="next_due", lookup_expr="gte")
    due_to = django_filters.DateFilter(field_name="next_due", lookup_expr="lte")

    class Meta:
        model = MaintenanceSchedule
        fields = ["equipment", "status", "maintenance_type", "assigned_to", "is_active"]
