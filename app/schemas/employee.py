from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime
from typing import List, Optional


class EmployeeBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    position: Optional[str] = None
    base_salary: float = Field(default=0.0, ge=0)
    social_insurance: float = Field(default=0.0, ge=0)
    leave_balance: float = 0.0
    sort_order: int = 0


class EmployeeCreate(EmployeeBase):
    pass


class EmployeeUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    position: Optional[str] = None
    base_salary: Optional[float] = Field(default=None, ge=0)
    social_insurance: Optional[float] = Field(default=None, ge=0)
    leave_balance: Optional[float] = None
    sort_order: Optional[int] = None
    is_active: Optional[bool] = None


class EmployeeResponse(EmployeeBase):
    id: int
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class ContractorBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    position: Optional[str] = None
    salary: float = Field(default=0.0, ge=0)
    sort_order: int = 0


class ContractorCreate(ContractorBase):
    pass


class ContractorUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    position: Optional[str] = None
    salary: Optional[float] = Field(default=None, ge=0)
    sort_order: Optional[int] = None
    is_active: Optional[bool] = None


class ContractorResponse(ContractorBase):
    id: int
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class ReorderItem(BaseModel):
    id: int
    sort_order: int


class ReorderRequest(BaseModel):
    items: List[ReorderItem] = Field(..., min_length=1)
