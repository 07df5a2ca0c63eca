# quality/admin.py

from django.contrib import admin

from quality.models import QualityControl, QualityReport, QualityStandard, QualityTest


@admin.register(QualityControl)
class QualityControlAdmin(admin.ModelAdmin):
    list_display = (
        "inspection_number",
        "product",
        "inspection_type",
        "quantity_inspected",
        "quantity_passed",
        "quantity_failed",
        "status",
    )
    list_filter = ("status", "inspection_type")
    search_fields = ("inspection_number", "batch_number", "product__name")
    readonly_fields = ("inspection_number", "inspected_at")


@admin.register(QualityStandard)
class QualityStandardAdmin(admin.ModelAdmin):
    list_display = ("name", "parameter_name", "product", "standard_type", "min_value", "max_value", "is_critical", "is_active")
    list_filter = ("standard_type", "is_critical", "is_active")
    search_fields = ("name", "parameter_name", "product__name")


@admin.register(QualityTest)
class QualityTestAdmin(admin.ModelAdmin):
    list_display = ("test_name", "quality_control", "standard", "measured_value", "status", "test_date")
    list_filter = ("status", "test_type")
    search_fields = ("test_name", "quality_control__inspection_number")


@admin.register(QualityReport)
class QualityReportAdmin(admin.ModelAdmin):
    list_display = ("report_number", "quality_control", "report_date", "status", "approved_by")
    list_filter = ("status",)
    search_fields = ("report_number", "quality_control__inspection_number")
    readonly_fields = ("report_number", "approved_by", "approved_at")
