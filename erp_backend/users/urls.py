# users/urls.py

"""
USERS URLS

Mounted twice in backend/urls.py:
- /api/auth/   -> urlpatterns        (register, me)
- /api/users/  -> admin_urlpatterns  (admin-only user management)
"""

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from users.views.auth import RegisterView
from users.views.me import MeView
from users.views.users import UserAdminViewSet

router = DefaultRouter()
router.register(r"", UserAdminViewSet, basename="users")

urlpatterns = [
    # ---------------- PUBLIC AUTH ----------------
    path("register/", RegisterView.as_view(), name="register"),
    # ---------------- AUTHENTICATED ----------------
    path("me/", MeView.as_view(), name="me"),
]

admin_urlpatterns = [
    path("", include(router.urls)),
]
