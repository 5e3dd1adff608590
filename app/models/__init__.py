# Models package
# Importing modules here ensures they are registered with SQLAlchemy Base
from . import (
    employee, contractor, payroll, budget, leave_settlement,
    pending_approval, period_lock, audit_log, system_setting, reminder
)

# Explicit class exports for cleaner imports
from .employee import Employee
from .contractor import Contractor
from .payroll import EmployeePayroll, ContractorPayroll
from .budget import Expense, Revenue, ExpenseCategory
from .leave_settlement import LeaveSettlement
from .pending_approval import PendingApproval
from .period_lock import PeriodLock
from .audit_log import AuditLog
from .system_setting import SystemSetting
from .reminder import Reminder

__all__ = [
    "Employee",
    "Contractor",
    "EmployeePayroll",
    "ContractorPayroll",
    "Expense",
    "Revenue",
    "ExpenseCategory",
    "LeaveSettlement",
    "PendingApproval",
    "PeriodLock",
    "AuditLog",
    "SystemSetting",
    "Reminder",
]
