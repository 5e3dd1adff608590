from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime
from typing import Optional


class EmployeePayrollCreate(BaseModel):
    employee_id: int
    year: int = Field(..., ge=1900, le=9999)
    month: int = Field(..., ge=1, le=12)
    base_salary: float = Field(default=0.0, ge=0)
    social_insurance: float = Field(default=0.0, ge=0)
    allowances: float = Field(default=0.0, ge=0)
    bonus: float = Field(default=0.0, ge=0)
    deduction: float = Field(default=0.0, ge=0)
    notes: Optional[str] = None


class EmployeePayrollUpdate(BaseModel):
    employee_id: Optional[int] = None
    year: Optional[int] = Field(default=None, ge=1900, le=9999)
    month: Optional[int] = Field(default=None, ge=1, le=12)
    base_salary: Optional[float] = Field(default=None, ge=0)
    social_insurance: Optional[float] = Field(default=None, ge=0)
    allowances: Optional[float] = Field(default=None, ge=0)
    bonus: Optional[float] = Field(default=None, ge=0)
    deduction: Optional[float] = Field(default=None, ge=0)
    notes: Optional[str] = None


class EmployeePayrollResponse(BaseModel):
    id: int
    employee_id: int
    employee_name: Optional[str] = None
    year: int
    month: int
    base_salary: float
    social_insurance: float
    allowances: float
    bonus: float
    deduction: float
    net_salary: float
    notes: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class ContractorPayrollCreate(BaseModel):
    contractor_id: int
    year: int = Field(..., ge=1900, le=9999)
    month: int = Field(..., ge=1, le=12)
    salary: float = Field(default=0.0, ge=0)
    bonus: float = Field(default=0.0, ge=0)
    deduction: float = Field(default=0.0, ge=0)
    notes: Optional[str] = None


class ContractorPayrollUpdate(BaseModel):
    contractor_id: Optional[int] = None
    year: Optional[int] = Field(default=None, ge=1900, le=9999)
    month: Optional[int] = Field(default=None, ge=1, le=12)
    salary: Optional[float] = Field(default=None, ge=0)
    bonus: Optional[float] = Field(default=None, ge=0)
    deduction: Optional[float] = Field(default=None, ge=0)
    notes: Optional[str] = None


class ContractorPayrollResponse(BaseModel):
    id: int
    contractor_id: int
    contractor_name: Optional[str] = None
    year: int
    month: int
    salary: float
    bonus: float
    deduction: float
    net_salary: float
    notes: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class PayrollSummary(BaseModel):
    """Plain payload handed to the PDF/Excel renderers."""
    year: Optional[int] = None
    month: Optional[int] = None
    employee_count: int
    contractor_count: int
    total_base_salary: float
    total_allowances: float
    total_bonus: float
    total_social_insurance: float
    total_deductions: float
    total_employee_net: float
    total_contractor_net: float
    grand_total_net: float
