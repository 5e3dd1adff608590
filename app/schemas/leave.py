from pydantic import BaseModel, ConfigDict, Field, model_validator
from datetime import date, datetime
from typing import Optional

from app.models.leave_settlement import TicketsEntitlement


class LeaveCalculationInput(BaseModel):
    join_date: date
    leave_start_date: date
    leave_end_date: Optional[date] = None
    leave_days: Optional[float] = Field(default=None, ge=0)
    previous_balance_days: float = 0.0
    tickets_entitlement: TicketsEntitlement = TicketsEntitlement.EMPLOYEE
    visas_count: int = Field(default=0, ge=0)
    deductions_amount: float = Field(default=0.0, ge=0)


class LeaveCalculationResult(BaseModel):
    service_days: int
    service_years: int
    service_months: int
    service_days_remainder: int
    accrued_days: float
    balance_before_deduction: float
    current_leave_days: float
    balance_after_deduction: float
    tickets_count: int
    visas_count: int
    net_payable: float
    is_balance_sufficient: bool


class LeaveSettlementCreate(LeaveCalculationInput):
    employee_id: int


class LeaveSettlementUpdate(BaseModel):
    employee_id: Optional[int] = None
    join_date: Optional[date] = None
    leave_start_date: Optional[date] = None
    leave_end_date: Optional[date] = None
    leave_days: Optional[float] = Field(default=None, ge=0)
    previous_balance_days: Optional[float] = None
    tickets_entitlement: Optional[TicketsEntitlement] = None
    visas_count: Optional[int] = Field(default=None, ge=0)
    deductions_amount: Optional[float] = Field(default=None, ge=0)

    @model_validator(mode="after")
    def _not_empty(self):
        if not self.model_fields_set:
            raise ValueError("At least one field must be provided")
        return self


class LeaveSettlementResponse(BaseModel):
    id: int
    employee_id: int
    employee_name: Optional[str] = None
    join_date: date
    leave_start_date: date
    leave_end_date: Optional[date] = None
    leave_days: Optional[float] = None
    previous_balance_days: float
    tickets_entitlement: str
    visas_count: int
    deductions_amount: float
    service_days: int
    service_years: int = 0
    service_months: int = 0
    service_days_remainder: int = 0
    accrued_days: float
    balance_before_deduction: float
    current_leave_days: float
    balance_after_deduction: float
    tickets_count: int
    net_payable: float
    is_balance_sufficient: bool
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class LeaveSettlementWithCalculation(BaseModel):
    settlement: LeaveSettlementResponse
    calculation: LeaveCalculationResult
