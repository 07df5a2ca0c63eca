# quality/api/urls.py

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from quality.api.views import (
    QualityControlViewSet,
    QualityDashboardView,
    QualityReportViewSet,
    QualityStandardViewSet,
    QualityTestViewSet,
)

router = DefaultRouter()
router.register(r"controls", QualityControlViewSet, basename="quality-controls")
router.register(r"standards", QualityStandardViewSet, basename="quality-standards")
router.register(r"tests", QualityTestViewSet, basename="quality-tests")
router.register(r"reports", QualityReportViewSet, basename="quality-reports")

urlpatterns = [
    path("dashboard/", QualityDashboardView.as_view(), name="quality-dashboard"),
    path("", include(router.urls)),
]
