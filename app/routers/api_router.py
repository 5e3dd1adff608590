from fastapi import APIRouter
from app.routers import (
    approvals, audit_logs, auth, budget, contractor_payroll, contractors,
    employee_ledger, employees, expense_categories, leave_settlements,
    payroll, period_locks, reminders, settings,
)

# Centralized API router hub
# Routers are aggregated here, and main.py only imports this single hub.
api_router = APIRouter()

api_router.include_router(auth.router, tags=["Authentication"])
api_router.include_router(employees.router, tags=["Employees"])
api_router.include_router(contractors.router, tags=["Contractors"])
api_router.include_router(payroll.router, tags=["Payroll"])
api_router.include_router(contractor_payroll.router, tags=["Contractor Payroll"])
api_router.include_router(budget.expenses_router, tags=["Budget"])
api_router.include_router(budget.revenues_router, tags=["Budget"])
api_router.include_router(budget.router, tags=["Budget"])
api_router.include_router(expense_categories.router, tags=["Budget"])
api_router.include_router(leave_settlements.router, tags=["Leave Settlements"])
api_router.include_router(employee_ledger.router, tags=["Employee Ledger"])
api_router.include_router(reminders.router, tags=["Reminders"])
api_router.include_router(approvals.router, tags=["Maker-Checker"])
api_router.include_router(period_locks.router, tags=["Period Locks"])
api_router.include_router(audit_logs.router, tags=["Audit"])
api_router.include_router(settings.router, tags=["System Settings"])
