# quality/filters.py

import django_filters

from quality.models import QualityControl, QualityReport, QualityStandard, QualityTest


class QualityControlFilter(django_filters.FilterSet):
    date_from = django_filters.DateFilter(field_name="created_at", lookup_expr="date__gte")
    date_to = django_filters.DateFilter(field_name="created_at", lookup_expr="date__lte")

    class Meta:
        model = QualityControl
        fields = ["status", "inspection_type", "product", "production_order"]


class QualityStandardFilter(django_filters.FilterSet):
    class Meta:
        model = QualityStandard
        fields = ["product", "standard_type", "is_critical", "is_active"]


class QualityTestFilter(django_filters.FilterSet):
    class Meta:
        model = QualityTest
        fields = ["quality_control", "standard", "status", "test_type"]


class QualityReportFilter(django_filters.FilterSet):
    date_from = django_filters.DateFilter(field_name="report_date", lookup_expr="gte")
    date_to = django_filters.DateFilter(field_name="report_date", lookup_expr="lte")

    class Meta:
        model = QualityReport
        fields = ["quality_control", "status"]
