# permissions/roles.py

from __future__ import annotations

from typing import Optional

from rest_framework.exceptions import MethodNotAllowed
from rest_framework.permissions import BasePermission


# =========================================================
# ROLE CONSTANTS (STAFF JOB ROLES)
# =========================================================
# They describe what the staff member does on the shop floor / back office.
ROLE_ADMIN = "admin"
ROLE_MANAGER = "manager"
ROLE_PRODUCTION_MANAGER = "production_manager"
ROLE_SALES_MANAGER = "sales_manager"
ROLE_WAREHOUSE_MANAGER = "warehouse_manager"
ROLE_ACCOUNTANT = "accountant"
ROLE_HR_MANAGER = "hr_manager"
ROLE_QUALITY_INSPECTOR = "quality_inspector"
ROLE_MAINTENANCE_TECHNICIAN = "maintenance_technician"
ROLE_OPERATOR = "operator"
ROLE_SALES_REP = "sales_rep"
ROLE_USER = "user"

ROLE_CHOICES = [
    (ROLE_ADMIN, "Admin"),
    (ROLE_MANAGER, "Manager"),
    (ROLE_PRODUCTION_MANAGER, "Production Manager"),
    (ROLE_SALES_MANAGER, "Sales Manager"),
    (ROLE_WAREHOUSE_MANAGER, "Warehouse Manager"),
    (ROLE_ACCOUNTANT, "Accountant"),
    (ROLE_HR_MANAGER, "HR Manager"),
    (ROLE_QUALITY_INSPECTOR, "Quality Inspector"),
    (ROLE_MAINTENANCE_TECHNICIAN, "Maintenance Technician"),
    (ROLE_OPERATOR, "Operator"),
    (ROLE_SALES_REP, "Sales Representative"),
    (ROLE_USER, "User"),
]


# =========================================================
# CAPABILITIES (THE REAL PERMISSION LANGUAGE)
# =========================================================
# Views protect capabilities, not raw roles.
CAP_PRODUCTION_VIEW = "production.view"
CAP_PRODUCTION_MANAGE = "production.manage"
CAP_PRODUCTION_OPERATE = "production.operate"   # shop-floor status updates

CAP_INVENTORY_VIEW = "inventory.view"
CAP_INVENTORY_MANAGE = "inventory.manage"
CAP_INVENTORY_ADJUST = "inventory.adjust"       # sensitive manual adjustments

CAP_SALES_VIEW = "sales.view"
CAP_SALES_MANAGE = "sales.manage"

CAP_FINANCE_VIEW = "finance.view"
CAP_FINANCE_MANAGE = "finance.manage"

CAP_HRM_VIEW = "hrm.view"
CAP_HRM_MANAGE = "hrm.manage"
CAP_HRM_ATTENDANCE = "hrm.attendance"           # check-in / check-out

CAP_PROCUREMENT_VIEW = "procurement.view"
CAP_PROCUREMENT_MANAGE = "procurement.manage"
CAP_PROCUREMENT_APPROVE = "procurement.approve"
CAP_PROCUREMENT_RECEIVE = "procurement.receive"

CAP_QUALITY_VIEW = "quality.view"
CAP_QUALITY_MANAGE = "quality.manage"

CAP_MAINTENANCE_VIEW = "maintenance.view"
CAP_MAINTENANCE_MANAGE = "maintenance.manage"

CAP_USERS_MANAGE = "users.manage"

ALL_CAPABILITIES = {
    CAP_PRODUCTION_VIEW,
    CAP_PRODUCTION_MANAGE,
    CAP_PRODUCTION_OPERATE,
    CAP_INVENTORY_VIEW,
    CAP_INVENTORY_MANAGE,
    CAP_INVENTORY_ADJUST,
    CAP_SALES_VIEW,
    CAP_SALES_MANAGE,
    CAP_FINANCE_VIEW,
    CAP_FINANCE_MANAGE,
    CAP_HRM_VIEW,
    CAP_HRM_MANAGE,
    CAP_HRM_ATTENDANCE,
    CAP_PROCUREMENT_VIEW,
    CAP_PROCUREMENT_MANAGE,
    CAP_PROCUREMENT_APPROVE,
    CAP_PROCUREMENT_RECEIVE,
    CAP_QUALITY_VIEW,
    CAP_QUALITY_MANAGE,
    CAP_MAINTENANCE_VIEW,
    CAP_MAINTENANCE_MANAGE,
    CAP_USERS_MANAGE,
}


# =========================================================
# ROLE → CAPABILITY MAP (DEFAULT)
# =========================================================
ROLE_CAPABILITIES: dict[str, set[str]] = {
    ROLE_ADMIN: {
        # admin can do everything
        *ALL_CAPABILITIES,
    },
    ROLE_MANAGER: {
        # plant manager: everything except user administration
        *(ALL_CAPABILITIES - {CAP_USERS_MANAGE}),
    },
    ROLE_PRODUCTION_MANAGER: {
        CAP_PRODUCTION_VIEW,
        CAP_PRODUCTION_MANAGE,
        CAP_PRODUCTION_OPERATE,
        CAP_INVENTORY_VIEW,
        CAP_QUALITY_VIEW,
        CAP_QUALITY_MANAGE,
        CAP_MAINTENANCE_VIEW,
        CAP_SALES_VIEW,
        CAP_HRM_ATTENDANCE,
    },
    ROLE_SALES_MANAGER: {
        CAP_SALES_VIEW,
        CAP_SALES_MANAGE,
        CAP_INVENTORY_VIEW,
        CAP_PRODUCTION_VIEW,
        CAP_FINANCE_VIEW,
        CAP_HRM_ATTENDANCE,
    },
    ROLE_WAREHOUSE_MANAGER: {
        CAP_INVENTORY_VIEW,
        CAP_INVENTORY_MANAGE,
        CAP_INVENTORY_ADJUST,
        CAP_PROCUREMENT_VIEW,
        CAP_PROCUREMENT_MANAGE,
        CAP_PROCUREMENT_RECEIVE,
        CAP_HRM_ATTENDANCE,
    },
    ROLE_ACCOUNTANT: {
        CAP_FINANCE_VIEW,
        CAP_FINANCE_MANAGE,
        CAP_PROCUREMENT_VIEW,
        CAP_SALES_VIEW,
        CAP_HRM_ATTENDANCE,
    },
    ROLE_HR_MANAGER: {
        CAP_HRM_VIEW,
        CAP_HRM_MANAGE,
        CAP_HRM_ATTENDANCE,
    },
    ROLE_QUALITY_INSPECTOR: {
        CAP_QUALITY_VIEW,
        CAP_QUALITY_MANAGE,
        CAP_PRODUCTION_VIEW,
        CAP_INVENTORY_VIEW,
        CAP_HRM_ATTENDANCE,
    },
    ROLE_MAINTENANCE_TECHNICIAN: {
        CAP_MAINTENANCE_VIEW,
        CAP_MAINTENANCE_MANAGE,
        CAP_HRM_ATTENDANCE,
    },
    ROLE_OPERATOR: {
        CAP_PRODUCTION_VIEW,
        CAP_PRODUCTION_OPERATE,
        CAP_INVENTORY_VIEW,
        CAP_QUALITY_VIEW,
        CAP_MAINTENANCE_VIEW,
        CAP_HRM_ATTENDANCE,
    },
    ROLE_SALES_REP: {
        CAP_SALES_VIEW,
        CAP_SALES_MANAGE,
        CAP_INVENTORY_VIEW,
        CAP_HRM_ATTENDANCE,
    },
    ROLE_USER: {
        CAP_HRM_ATTENDANCE,
    },
}


# =========================================================
# Helpers
# =========================================================
def get_user_role(user) -> Optional[str]:
    return getattr(user, "role", None)


def effective_capabilities_for(user) -> set[str]:
    if getattr(user, "is_superuser", False):
        return set(ALL_CAPABILITIES)
    return set(ROLE_CAPABILITIES.get(get_user_role(user), set()))


def user_has_capability(user, capability: str) -> bool:
    if not user or not user.is_authenticated:
        return False
    return capability in effective_capabilities_for(user)


# =========================================================
# Capability Permissions
# =========================================================
class HasCapability(BasePermission):
    """
    Require a specific capability.

    Usage:
        permission_classes = [IsAuthenticated, HasCapability]
        view.required_capability = CAP_FINANCE_MANAGE
    """

    def has_permission(self, request, view):
        required = getattr(view, "required_capability", None)
        if not required:
            # If not set, deny-by-default to avoid accidental open endpoints
            return False

        return user_has_capability(request.user, required)


class HasActionCapability(BasePermission):
    """
    Require a capability per ViewSet action.

    Usage:
        permission_classes = [IsAuthenticated, HasActionCapability]
        action_capabilities = {
            "list": CAP_PROCUREMENT_VIEW,
            "retrieve": CAP_PROCUREMENT_VIEW,
            "create": CAP_PROCUREMENT_MANAGE,
            "receive": CAP_PROCUREMENT_RECEIVE,
        }

    Unmapped actions are denied. HTTP methods the ViewSet does not route
    (e.g. DELETE on documents) answer 405 instead of 403.
    """

    def has_permission(self, request, view):
        mapping = getattr(view, "action_capabilities", None) or {}
        action = getattr(view, "action", None)

        action_map = getattr(view, "action_map", None)
        if action is None and action_map is not None and request.method.lower() not in action_map:
            raise MethodNotAllowed(request.method)

        required = mapping.get(action) if action else None
        if not required:
            required = getattr(view, "required_capability", None)
        if not required:
            return False

        return user_has_capability(request.user, required)
