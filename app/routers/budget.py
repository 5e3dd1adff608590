"""
Budget Router

Expenses, revenues and the annual/quarterly summary. Writes against a locked
period are rejected by the service layer with ``PERIOD_LOCKED``.
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from app.core.schemas import ActorContext, SuccessResponse
from app.database import get_db
from app.routers.deps import get_actor
from app.schemas.budget import (
    BudgetSummary,
    ExpenseCreate,
    ExpenseResponse,
    ExpenseUpdate,
    RevenueCreate,
    RevenueResponse,
    RevenueUpdate,
)
from app.services.budget_service import BudgetService

expenses_router = APIRouter(prefix="/expenses", tags=["expenses"])
revenues_router = APIRouter(prefix="/revenues", tags=["revenues"])
router = APIRouter(prefix="/budget", tags=["budget"])


# --- Expenses ---

@expenses_router.get("", response_model=List[ExpenseResponse])
def list_expenses(
    year: Optional[int] = None,
    month: Optional[int] = Query(default=None, ge=1, le=12),
    quarter: Optional[int] = Query(default=None, ge=1, le=4),
    db: Session = Depends(get_db),
):
    return BudgetService(db).list_expenses(year=year, month=month, quarter=quarter)


@expenses_router.get("/{expense_id}", response_model=ExpenseResponse)
def get_expense(expense_id: int, db: Session = Depends(get_db)):
    return BudgetService(db).get_expense(expense_id)


@expenses_router.post("", response_model=ExpenseResponse)
def create_expense(
    data: ExpenseCreate,
    db: Session = Depends(get_db),
    actor: ActorContext = Depends(get_actor),
):
    return BudgetService(db, actor).create_expense(data)


@expenses_router.put("/{expense_id}", response_model=ExpenseResponse)
def update_expense(
    expense_id: int,
    data: ExpenseUpdate,
    db: Session = Depends(get_db),
    actor: ActorContext = Depends(get_actor),
):
    return BudgetService(db, actor).update_expense(expense_id, data)


@expenses_router.delete("/{expense_id}", response_model=SuccessResponse)
def delete_expense(
    expense_id: int,
    db: Session = Depends(get_db),
    actor: ActorContext = Depends(get_actor),
):
    BudgetService(db, actor).delete_expense(expense_id)
    return SuccessResponse()


# --- Revenues ---

@revenues_router.get("", response_model=List[RevenueResponse])
def list_revenues(
    year: Optional[int] = None,
    month: Optional[int] = Query(default=None, ge=1, le=12),
    quarter: Optional[int] = Query(default=None, ge=1, le=4),
    db: Session = Depends(get_db),
):
    return BudgetService(db).list_revenues(year=year, month=month, quarter=quarter)


@revenues_router.get("/{revenue_id}", response_model=RevenueResponse)
def get_revenue(revenue_id: int, db: Session = Depends(get_db)):
    return BudgetService(db).get_revenue(revenue_id)


@revenues_router.post("", response_model=RevenueResponse)
def create_revenue(
    data: RevenueCreate,
    db: Session = Depends(get_db),
    actor: ActorContext = Depends(get_actor),
):
    return BudgetService(db, actor).create_revenue(data)


@revenues_router.put("/{revenue_id}", response_model=RevenueResponse)
def update_revenue(
    revenue_id: int,
    data: RevenueUpdate,
    db: Session = Depends(get_db),
    actor: ActorContext = Depends(get_actor),
):
    return BudgetService(db, actor).update_revenue(revenue_id, data)


@revenues_router.delete("/{revenue_id}", response_model=SuccessResponse)
def delete_revenue(
    revenue_id: int,
    db: Session = Depends(get_db),
    actor: ActorContext = Depends(get_actor),
):
    BudgetService(db, actor).delete_revenue(revenue_id)
    return SuccessResponse()


# --- Summary ---

@router.get("/summary", response_model=BudgetSummary)
def get_budget_summary(year: int, db: Session = Depends(get_db)):
    return BudgetService(db).get_budget_summary(year)
