# production/api/urls.py

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from production.api.views import ProductionMetricsView, ProductionOrderViewSet, ProductionScheduleView

router = DefaultRouter()
router.register(r"orders", ProductionOrderViewSet, basename="production-orders")

urlpatterns = [
    path("schedule/", ProductionScheduleView.as_view(), name="production-schedule"),
    path("metrics/", ProductionMetricsView.as_view(), name="production-metrics"),
    path("", include(router.urls)),
]
