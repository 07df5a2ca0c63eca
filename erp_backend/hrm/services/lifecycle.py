"""
PAYROLL LIFECYCLE RULES

draft -> approved; an approved payroll is frozen.
"""

from core.services.lifecycle import machine
from hrm.models import Payroll

PayrollLifecycle = machine(
    "Payroll",
    transitions={
        Payroll.STATUS_DRAFT: {Payroll.STATUS_APPROVED},
    },
    terminal={Payroll.STATUS_APPROVED},
)
