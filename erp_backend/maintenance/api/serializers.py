# maintenance/api/serializers.py

from datetime import timedelta

from rest_framework import serializers

from maintenance.models import Equipment, MaintenanceHistory, MaintenanceOrder, MaintenanceSchedule


class EquipmentSerializer(serializers.ModelSerializer):
    class Meta:
        model = Equipment
        fields = [
            "id",
            "code",
            "name",
            "description",
            "manufacturer",
            "model",
            "serial_number",
            "location",
            "status",
            "purchase_date",
            "purchase_cost",
            "notes",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ("id", "created_at", "updated_at")

    def validate_code(self, value):
        return value.strip().upper()

    def validate_purchase_cost(self, value):
        if value < 0:
            raise serializers.ValidationError("purchase_cost cannot be negative")
        return value


class MaintenanceOrderSerializer(serializers.ModelSerializer):
    equipment_code = serializers.CharField(source="equipment.code", read_only=True)
    equipment_name = serializers.CharField(source="equipment.name", read_only=True)
    assigned_to_email = serializers.EmailField(source="assigned_to.email", read_only=True, default=None)

    class Meta:
        model = MaintenanceOrder
        fields = [
            "id",
            "order_number",
            "equipment",
            "equipment_code",
            "equipment_name",
            "title",
            "description",
            "maintenance_type",
            "priority",
            "status",
            "scheduled_date",
            "assigned_to",
            "assigned_to_email",
            "started_at",
            "completed_at",
            "cancelled_at",
            "completion_notes",
            "labor_hours",
            "cost",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class MaintenanceOrderCreateSerializer(serializers.Serializer):
    equipment_id = serializers.UUIDField()
    title = serializers.CharField(max_length=200)
    description = serializers.CharField(required=False, allow_blank=True, default="")
    maintenance_type = serializers.ChoiceField(choices=MaintenanceOrder.MaintenanceType.choices)
    priority = serializers.ChoiceField(
        choices=MaintenanceOrder.Priority.choices, default=MaintenanceOrder.Priority.MEDIUM
    )
    scheduled_date = serializers.DateField(required=False, allow_null=True)
    assigned_to = serializers.UUIDField(required=False, allow_null=True)


class MaintenanceOrderUpdateSerializer(serializers.Serializer):
    title = serializers.CharField(max_length=200, required=False)
    description = serializers.CharField(required=False, allow_blank=True)
    maintenance_type = serializers.ChoiceField(choices=MaintenanceOrder.MaintenanceType.choices, required=False)
    priority = serializers.ChoiceField(choices=MaintenanceOrder.Priority.choices, required=False)
    scheduled_date = serializers.DateField(required=False, allow_null=True)


class AssignMaintenanceOrderSerializer(serializers.Serializer):
    assigned_to = serializers.UUIDField()


class CompleteMaintenanceOrderSerializer(serializers.Serializer):
    completion_notes = serializers.CharField(required=False, allow_blank=True, default="")
    parts_used = serializers.CharField(required=False, allow_blank=True, default="")
    labor_hours = serializers.DecimalField(max_digits=8, decimal_places=2, min_value=0, required=False)
    cost = serializers.DecimalField(max_digits=15, decimal_places=2, min_value=0, required=False)
    result = serializers.ChoiceField(
        choices=MaintenanceHistory.Result.choices, default=MaintenanceHistory.Result.SUCCESSFUL
    )
    next_maintenance_date = serializers.DateField(required=False, allow_null=True)


class MaintenanceHistorySerializer(serializers.ModelSerializer):
    equipment_code = serializers.CharField(source="equipment.code", read_only=True)
    order_number = serializers.CharField(source="maintenance_order.order_number", read_only=True)

    class Meta:
        model = MaintenanceHistory
        fields = [
            "id",
            "maintenance_order",
            "order_number",
            "equipment",
            "equipment_code",
            "maintenance_type",
            "performed_at",
            "performed_by",
            "work_performed",
            "parts_used",
            "labor_hours",
            "cost",
            "result",
            "next_maintenance_date",
        ]
        read_only_fields = fields


class MaintenanceScheduleSerializer(serializers.ModelSerializer):
    equipment_code = serializers.CharField(source="equipment.code", read_only=True)
    equipment_name = serializers.CharField(source="equipment.name", read_only=True)
    assigned_to_email = serializers.EmailField(source="assigned_to.email", read_only=True, default=None)
    is_overdue = serializers.BooleanField(read_only=True)
    next_due = serializers.DateField(required=False)

    class Meta:
        model = MaintenanceSchedule
        fields = [
            "id",
            "equipment",
            "equipment_code",
            "equipment_name",
            "title",
            "description",
            "maintenance_type",
            "frequency_days",
            "estimated_duration",
            "last_performed",
            "next_due",
            "is_overdue",
            "assigned_to",
            "assigned_to_email",
            "status",
            "is_active",
            "notes",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ("id", "created_at", "updated_at")

    def validate_frequency_days(self, value):
        if value is not None and value <= 0:
            raise serializers.ValidationError("frequency_days must be greater than zero")
        return value

    def validate_equipment(self, value):
        if value.status == Equipment.STATUS_RETIRED:
            raise serializers.ValidationError("Retired equipment cannot be scheduled")
        return value

    def validate(self, attrs):
        instance = self.instance
        last_performed = attrs.get("last_performed", getattr(instance, "last_performed", None))
        frequency_days = attrs.get("frequency_days", getattr(instance, "frequency_days", None))

        if "next_due" not in attrs:
            recalculate = "last_performed" in attrs or "frequency_days" in attrs
            if (instance is None or recalculate) and last_performed and frequency_days:
                attrs["next_due"] = last_performed + timedelta(days=frequency_days)
            elif instance is None:
                raise serializers.ValidationError(
                    {"next_due": "next_due is required unless last_performed and frequency_days are given"}
                )

        next_due = attrs.get("next_due", getattr(instance, "next_due", None))
        if last_performed and next_due and next_due < last_performed:
            raise serializers.ValidationError({"next_due": "next_due cannot precede last_performed"})
        return attrs
