import datetime as dt
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional


class ExpenseCreate(BaseModel):
    year: int = Field(..., ge=1900, le=9999)
    month: int = Field(..., ge=1, le=12)
    # Accepted for client compatibility; always recomputed from month
    quarter: Optional[int] = None
    type: str = Field(..., min_length=1, max_length=64)
    category_id: Optional[int] = None
    description: Optional[str] = None
    amount: float = Field(..., ge=0)
    date: Optional[dt.date] = None
    notes: Optional[str] = None


class ExpenseUpdate(BaseModel):
    year: Optional[int] = Field(default=None, ge=1900, le=9999)
    month: Optional[int] = Field(default=None, ge=1, le=12)
    quarter: Optional[int] = None
    type: Optional[str] = Field(default=None, min_length=1, max_length=64)
    category_id: Optional[int] = None
    description: Optional[str] = None
    amount: Optional[float] = Field(default=None, ge=0)
    date: Optional[dt.date] = None
    notes: Optional[str] = None


class ExpenseResponse(BaseModel):
    id: int
    year: int
    month: int
    quarter: int
    type: str
    category_id: Optional[int] = None
    description: Optional[str] = None
    amount: float
    date: Optional[dt.date] = None
    notes: Optional[str] = None
    created_at: Optional[dt.datetime] = None

    model_config = ConfigDict(from_attributes=True)


class RevenueCreate(BaseModel):
    year: int = Field(..., ge=1900, le=9999)
    month: int = Field(..., ge=1, le=12)
    quarter: Optional[int] = None
    source: str = Field(..., min_length=1, max_length=255)
    amount: float = Field(..., ge=0)
    date: Optional[dt.date] = None
    notes: Optional[str] = None


class RevenueUpdate(BaseModel):
    year: Optional[int] = Field(default=None, ge=1900, le=9999)
    month: Optional[int] = Field(default=None, ge=1, le=12)
    quarter: Optional[int] = None
    source: Optional[str] = Field(default=None, min_length=1, max_length=255)
    amount: Optional[float] = Field(default=None, ge=0)
    date: Optional[dt.date] = None
    notes: Optional[str] = None


class RevenueResponse(BaseModel):
    id: int
    year: int
    month: int
    quarter: int
    source: str
    amount: float
    date: Optional[dt.date] = None
    notes: Optional[str] = None
    created_at: Optional[dt.datetime] = None

    model_config = ConfigDict(from_attributes=True)


class ExpenseCategoryCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    name_en: Optional[str] = None
    description: Optional[str] = None
    color: str = "#6b7280"
    icon: Optional[str] = None
    is_active: bool = True
    display_order: int = 0


class ExpenseCategoryUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    name_en: Optional[str] = None
    description: Optional[str] = None
    color: Optional[str] = None
    icon: Optional[str] = None
    is_active: Optional[bool] = None
    display_order: Optional[int] = None


class ExpenseCategoryResponse(BaseModel):
    id: int
    name: str
    name_en: Optional[str] = None
    description: Optional[str] = None
    color: str
    icon: Optional[str] = None
    is_active: bool
    display_order: int

    model_config = ConfigDict(from_attributes=True)


class CategoryReorderRequest(BaseModel):
    category_ids: List[int] = Field(..., min_length=1)


class QuarterTotals(BaseModel):
    quarter: int
    revenues: float
    expenses: float
    net: float


class BudgetSummary(BaseModel):
    year: int
    quarters: List[QuarterTotals]
    total_revenues: float
    total_expenses: float
    net: float
