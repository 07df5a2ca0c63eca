# quality/api/serializers.py

import copy

from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import serializers

from quality.models import QualityControl, QualityReport, QualityStandard, QualityTest


class QualityControlSerializer(serializers.ModelSerializer):
    product_name = serializers.CharField(source="product.name", read_only=True)
    production_order_number = serializers.CharField(
        source="production_order.order_number", read_only=True, default=None
    )
    inspector_email = serializers.EmailField(source="inspector.email", read_only=True, default=None)

    class Meta:
        model = QualityControl
        fields = [
            "id",
            "inspection_number",
            "product",
            "product_name",
            "production_order",
            "production_order_number",
            "batch_number",
            "inspection_type",
            "quantity_inspected",
            "quantity_passed",
            "quantity_failed",
            "status",
            "defects_found",
            "corrective_actions",
            "notes",
            "inspector",
            "inspector_email",
            "inspected_at",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class QualityControlCreateSerializer(serializers.Serializer):
    product_id = serializers.UUIDField()
    production_order_id = serializers.UUIDField(required=False, allow_null=True)
    inspection_type = serializers.ChoiceField(choices=QualityControl.InspectionType.choices)
    quantity_inspected = serializers.IntegerField(min_value=1)
    batch_number = serializers.CharField(required=False, allow_blank=True, default="", max_length=64)
    notes = serializers.CharField(required=False, allow_blank=True, default="")


class InspectionResultSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=QualityControl.STATUSES)
    quantity_passed = serializers.IntegerField(min_value=0, required=False)
    quantity_failed = serializers.IntegerField(min_value=0, required=False)
    defects_found = serializers.CharField(required=False, allow_blank=True)
    corrective_actions = serializers.CharField(required=False, allow_blank=True)
    notes = serializers.CharField(required=False, allow_blank=True)


class QualityStandardSerializer(serializers.ModelSerializer):
    product_name = serializers.CharField(source="product.name", read_only=True, default=None)

    class Meta:
        model = QualityStandard
        fields = [
            "id",
            "name",
            "description",
            "product",
            "product_name",
            "standard_type",
            "parameter_name",
            "unit_of_measure",
            "min_value",
            "max_value",
            "target_value",
            "tolerance",
            "test_method",
            "frequency",
            "is_critical",
            "is_active",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ("id", "created_at", "updated_at")

    def validate(self, attrs):
        candidate = copy.copy(self.instance) if self.instance is not None else QualityStandard()
        for field, value in attrs.items():
            setattr(candidate, field, value)
        try:
            candidate.clean()
        except DjangoValidationError as exc:
            raise serializers.ValidationError(exc.message_dict) from exc
        return attrs


class QualityTestSerializer(serializers.ModelSerializer):
    inspection_number = serializers.CharField(source="quality_control.inspection_number", read_only=True)
    parameter_name = serializers.CharField(source="standard.parameter_name", read_only=True)
    tested_by_email = serializers.EmailField(source="tested_by.email", read_only=True, default=None)

    class Meta:
        model = QualityTest
        fields = [
            "id",
            "quality_control",
            "inspection_number",
            "standard",
            "parameter_name",
            "test_name",
            "test_type",
            "test_method",
            "measured_value",
            "expected_value",
            "tolerance",
            "unit_of_measure",
            "result_text",
            "status",
            "test_date",
            "tested_by",
            "tested_by_email",
            "equipment_used",
            "notes",
            "created_at",
        ]
        read_only_fields = fields


class QualityTestCreateSerializer(serializers.Serializer):
    inspection_id = serializers.UUIDField()
    standard_id = serializers.UUIDField()
    test_name = serializers.CharField(max_length=200)
    test_type = serializers.ChoiceField(choices=QualityTest.TestType.choices)
    measured_value = serializers.DecimalField(max_digits=15, decimal_places=4, required=False, allow_null=True)
    status = serializers.ChoiceField(choices=QualityTest.STATUSES, required=False)
    test_method = serializers.CharField(required=False, allow_blank=True, default="", max_length=200)
    result_text = serializers.CharField(required=False, allow_blank=True, default="")
    equipment_used = serializers.CharField(required=False, allow_blank=True, default="", max_length=200)
    notes = serializers.CharField(required=False, allow_blank=True, default="")


class QualityReportSerializer(serializers.ModelSerializer):
    inspection_number = serializers.CharField(source="quality_control.inspection_number", read_only=True)
    product_name = serializers.CharField(source="quality_control.product.name", read_only=True)
    generated_by_email = serializers.EmailField(source="generated_by.email", read_only=True, default=None)
    approved_by_email = serializers.EmailField(source="approved_by.email", read_only=True, default=None)

    class Meta:
        model = QualityReport
        fields = [
            "id",
            "report_number",
            "quality_control",
            "inspection_number",
            "product_name",
            "report_date",
            "summary",
            "findings",
            "recommendations",
            "corrective_actions",
            "status",
            "generated_by",
            "generated_by_email",
            "approved_by",
            "approved_by_email",
            "approved_at",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class QualityReportCreateSerializer(serializers.Serializer):
    inspection_id = serializers.UUIDField()
    report_date = serializers.DateField(required=False)
    summary = serializers.CharField(required=False, allow_blank=True, default="")
    findings = serializers.CharField(required=False, allow_blank=True, default="")
    recommendations = serializers.CharField(required=False, allow_blank=True, default="")
    corrective_actions = serializers.CharField(required=False, allow_blank=True, default="")


class QualityReportUpdateSerializer(serializers.Serializer):
    report_date = serializers.DateField(required=False)
    summary = serializers.CharField(required=False, allow_blank=True)
    findings = serializers.CharField(required=False, allow_blank=True)
    recommendations = serializers.CharField(required=False, allow_blank=True)
    corrective_actions = serializers.CharField(required=False, allow_blank=True)
