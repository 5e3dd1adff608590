from pydantic import BaseModel
import datetime as dt
from typing import Any, Dict, List, Optional
import enum


class LedgerEntryType(str, enum.Enum):
    SALARY = "salary"
    LEAVE_SETTLEMENT = "leave_settlement"


class LedgerEntry(BaseModel):
    id: int
    date: dt.date
    type: LedgerEntryType
    description: str
    amount: float
    year: int
    month: int
    details: Dict[str, Any] = {}


class LedgerEmployee(BaseModel):
    id: int
    name: str
    position: Optional[str] = None
    base_salary: float
    social_insurance: float
    leave_balance: float
    is_active: bool


class LedgerSummary(BaseModel):
    total_salaries: float = 0.0
    total_leave_settlements: float = 0.0
    total_bonuses: float = 0.0
    total_deductions: float = 0.0
    net_total: float = 0.0
    entry_count: int = 0


class EmployeeLedger(BaseModel):
    employee: LedgerEmployee
    entries: List[LedgerEntry]
    summary: LedgerSummary


class EmployeeLedgerSummary(LedgerSummary):
    employee_id: int
    employee_name: str
    position: Optional[str] = None
