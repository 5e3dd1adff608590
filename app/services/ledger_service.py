"""
Employee ledger: a per-employee, newest-first statement built from payroll
rows and leave settlements. Read-only; nothing here is stored.
"""
import csv
import io
from calendar import month_name
from datetime import date
from typing import List, Optional

from app.core.exceptions import NotFoundError
from app.models.employee import Employee
from app.models.leave_settlement import LeaveSettlement
from app.models.payroll import EmployeePayroll
from app.schemas.ledger import (
    EmployeeLedger,
    EmployeeLedgerSummary,
    LedgerEmployee,
    LedgerEntry,
    LedgerEntryType,
    LedgerSummary,
)
from app.services.base import BaseService

ENTRY_LABELS = {
    LedgerEntryType.SALARY: "Salary",
    LedgerEntryType.LEAVE_SETTLEMENT: "Leave settlement",
}


def _in_period(year: int, month: int, filter_year: Optional[int], filter_month: Optional[int]) -> bool:
    if filter_year is not None and year != filter_year:
        return False
    if filter_month is not None and month != filter_month:
        return False
    return True


class LedgerService(BaseService):

    def get_employee_ledger(
        self,
        employee_id: int,
        year: Optional[int] = None,
        month: Optional[int] = None,
    ) -> EmployeeLedger:
        employee = self.db.get(Employee, employee_id)
        if employee is None:
            raise NotFoundError("Employee not found")

        entries: List[LedgerEntry] = []
        total_bonuses = 0.0
        total_deductions = 0.0

        payrolls = self.db.query(EmployeePayroll).filter(EmployeePayroll.employee_id == employee_id).all()
        for payroll in payrolls:
            if not _in_period(payroll.year, payroll.month, year, month):
                continue
            total_bonuses += payroll.bonus
            total_deductions += payroll.deduction
            entries.append(LedgerEntry(
                id=payroll.id,
                date=date(payroll.year, payroll.month, 1),
                type=LedgerEntryType.SALARY,
                description=f"Salary {month_name[payroll.month]} {payroll.year}",
                amount=payroll.net_salary,
                year=payroll.year,
                month=payroll.month,
                details={
                    "base_salary": payroll.base_salary,
                    "allowances": payroll.allowances,
                    "bonus": payroll.bonus,
                    "deduction": payroll.deduction,
                    "social_insurance": payroll.social_insurance,
                    "net_salary": payroll.net_salary,
                },
            ))

        settlements = self.db.query(LeaveSettlement).filter(LeaveSettlement.employee_id == employee_id).all()
        for settlement in settlements:
            start = settlement.leave_start_date
            if not _in_period(start.year, start.month, year, month):
                continue
            entries.append(LedgerEntry(
                id=settlement.id,
                date=start,
                type=LedgerEntryType.LEAVE_SETTLEMENT,
                description=f"Leave settlement - {settlement.current_leave_days:g} days",
                amount=settlement.net_payable,
                year=start.year,
                month=start.month,
                details={
                    "current_leave_days": settlement.current_leave_days,
                    "balance_after_deduction": settlement.balance_after_deduction,
                    "tickets_count": settlement.tickets_count,
                    "deductions_amount": settlement.deductions_amount,
                },
            ))

        entries.sort(key=lambda e: (e.date, e.type.value, e.id), reverse=True)

        summary = LedgerSummary(
            total_salaries=sum(e.amount for e in entries if e.type == LedgerEntryType.SALARY),
            total_leave_settlements=sum(
                e.amount for e in entries if e.type == LedgerEntryType.LEAVE_SETTLEMENT
            ),
            total_bonuses=total_bonuses,
            total_deductions=total_deductions,
            net_total=sum(e.amount for e in entries),
            entry_count=len(entries),
        )

        return EmployeeLedger(
            employee=LedgerEmployee(
                id=employee.id,
                name=employee.name,
                position=employee.position,
                base_salary=employee.base_salary,
                social_insurance=employee.social_insurance,
                leave_balance=employee.leave_balance,
                is_active=employee.is_active,
            ),
            entries=entries,
            summary=summary,
        )

    def get_all_employees_ledger_summary(self, year: Optional[int] = None) -> List[EmployeeLedgerSummary]:
        summaries = []
        for employee in self.db.query(Employee).order_by(Employee.sort_order, Employee.id).all():
            ledger = self.get_employee_ledger(employee.id, year=year)
            summaries.append(EmployeeLedgerSummary(
                employee_id=employee.id,
                employee_name=employee.name,
                position=employee.position,
                **ledger.summary.model_dump(),
            ))
        return summaries


def export_ledger_csv(ledger: EmployeeLedger) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer)
    writer.writerow(["Date", "Type", "Description", "Amount", "Year", "Month"])
    for entry in ledger.entries:
        writer.writerow([
            entry.date.isoformat(),
            ENTRY_LABELS[entry.type],
            entry.description,
            entry.amount,
            entry.year,
            entry.month,
        ])
    writer.writerow([])
    writer.writerow(["Total salaries", ledger.summary.total_salaries])
    writer.writerow(["Total leave settlements", ledger.summary.total_leave_settlements])
    writer.writerow(["Net", ledger.summary.net_total])
    return buffer.getvalue()
