"""
Budget Service

Expenses, revenues and expense categories. Every expense/revenue write is
checked against the period lock registry; on update both the stored period
and the target period must be open.
"""
import math
from typing import List, Optional

from app.core.exceptions import NotFoundError, ValidationError
from app.models.audit_log import AuditAction, AuditEntity
from app.models.budget import Expense, ExpenseCategory, Revenue
from app.schemas.budget import (
    BudgetSummary,
    ExpenseCategoryCreate,
    ExpenseCategoryUpdate,
    ExpenseCreate,
    ExpenseUpdate,
    QuarterTotals,
    RevenueCreate,
    RevenueUpdate,
)
from app.services.audit import snapshot
from app.services.base import BaseService
from app.services.period_lock import PeriodLockService

# Columns that may be cleared explicitly with null
CLEARABLE_FIELDS = ("category_id", "description", "date", "notes")


def quarter_for_month(month: int) -> int:
    return math.ceil(month / 3)


def _changes(data) -> dict:
    changes = {
        k: v for k, v in data.model_dump(exclude_unset=True).items()
        if v is not None or k in CLEARABLE_FIELDS
    }
    # Always derived from month
    changes.pop("quarter", None)
    return changes


class BudgetService(BaseService):

    def _periods(self) -> PeriodLockService:
        return PeriodLockService(self.db, self.actor)

    def _check_category(self, category_id: Optional[int]):
        if category_id is not None and self.db.get(ExpenseCategory, category_id) is None:
            raise ValidationError(f"Expense category {category_id} does not exist")

    # --- Expenses ---

    def list_expenses(
        self,
        year: Optional[int] = None,
        month: Optional[int] = None,
        quarter: Optional[int] = None,
    ) -> List[Expense]:
        query = self.db.query(Expense)
        if year is not None:
            query = query.filter(Expense.year == year)
        if month is not None:
            query = query.filter(Expense.month == month)
        if quarter is not None:
            query = query.filter(Expense.quarter == quarter)
        return query.order_by(Expense.year.desc(), Expense.month.desc(), Expense.id.desc()).all()

    def get_expense(self, expense_id: int) -> Expense:
        expense = self.db.get(Expense, expense_id)
        if expense is None:
            raise NotFoundError("Expense not found")
        return expense

    def create_expense(self, data: ExpenseCreate) -> Expense:
        self._periods().validate_period_not_locked(data.year, data.month)
        self._check_category(data.category_id)

        values = data.model_dump(exclude={"quarter"})
        expense = Expense(**values, quarter=quarter_for_month(data.month))
        self.db.add(expense)
        self.commit()
        self.db.refresh(expense)

        self.audit(AuditEntity.EXPENSE, expense.id, AuditAction.CREATE, new_data=expense)
        return expense

    def update_expense(self, expense_id: int, data: ExpenseUpdate) -> Expense:
        expense = self.get_expense(expense_id)
        changes = _changes(data)
        periods = self._periods()
        periods.validate_period_not_locked(expense.year, expense.month)
        periods.validate_period_not_locked(
            changes.get("year", expense.year), changes.get("month", expense.month),
        )
        if "category_id" in changes:
            self._check_category(changes["category_id"])

        old_data = snapshot(expense)
        for field, value in changes.items():
            setattr(expense, field, value)
        expense.quarter = quarter_for_month(expense.month)
        self.commit()
        self.db.refresh(expense)

        self.audit(AuditEntity.EXPENSE, expense.id, AuditAction.UPDATE, old_data=old_data, new_data=expense)
        return expense

    def delete_expense(self, expense_id: int) -> None:
        expense = self.get_expense(expense_id)
        self._periods().validate_period_not_locked(expense.year, expense.month)

        old_data = snapshot(expense)
        self.db.delete(expense)
        self.commit()

        self.audit(AuditEntity.EXPENSE, expense_id, AuditAction.DELETE, old_data=old_data)

    # --- Revenues ---

    def list_revenues(
        self,
        year: Optional[int] = None,
        month: Optional[int] = None,
        quarter: Optional[int] = None,
    ) -> List[Revenue]:
        query = self.db.query(Revenue)
        if year is not None:
            query = query.filter(Revenue.year == year)
        if month is not None:
            query = query.filter(Revenue.month == month)
        if quarter is not None:
            query = query.filter(Revenue.quarter == quarter)
        return query.order_by(Revenue.year.desc(), Revenue.month.desc(), Revenue.id.desc()).all()

    def get_revenue(self, revenue_id: int) -> Revenue:
        revenue = self.db.get(Revenue, revenue_id)
        if revenue is None:
            raise NotFoundError("Revenue not found")
        return revenue

    def create_revenue(self, data: RevenueCreate) -> Revenue:
        self._periods().validate_period_not_locked(data.year, data.month)

        values = data.model_dump(exclude={"quarter"})
        revenue = Revenue(**values, quarter=quarter_for_month(data.month))
        self.db.add(revenue)
        self.commit()
        self.db.refresh(revenue)

        self.audit(AuditEntity.REVENUE, revenue.id, AuditAction.CREATE, new_data=revenue)
        return revenue

    def update_revenue(self, revenue_id: int, data: RevenueUpdate) -> Revenue:
        revenue = self.get_revenue(revenue_id)
        changes = _changes(data)
        periods = self._periods()
        periods.validate_period_not_locked(revenue.year, revenue.month)
        periods.validate_period_not_locked(
            changes.get("year", revenue.year), changes.get("month", revenue.month),
        )

        old_data = snapshot(revenue)
        for field, value in changes.items():
            setattr(revenue, field, value)
        revenue.quarter = quarter_for_month(revenue.month)
        self.commit()
        self.db.refresh(revenue)

        self.audit(AuditEntity.REVENUE, revenue.id, AuditAction.UPDATE, old_data=old_data, new_data=revenue)
        return revenue

    def delete_revenue(self, revenue_id: int) -> None:
        revenue = self.get_revenue(revenue_id)
        self._periods().validate_period_not_locked(revenue.year, revenue.month)

        old_data = snapshot(revenue)
        self.db.delete(revenue)
        self.commit()

        self.audit(AuditEntity.REVENUE, revenue_id, AuditAction.DELETE, old_data=old_data)

    # --- Summary ---

    def get_budget_summary(self, year: int) -> BudgetSummary:
        revenues = self.list_revenues(year=year)
        expenses = self.list_expenses(year=year)

        quarters = []
        for quarter in range(1, 5):
            revenue_total = sum(r.amount for r in revenues if r.quarter == quarter)
            expense_total = sum(e.amount for e in expenses if e.quarter == quarter)
            quarters.append(QuarterTotals(
                quarter=quarter,
                revenues=revenue_total,
                expenses=expense_total,
                net=revenue_total - expense_total,
            ))

        total_revenues = sum(q.revenues for q in quarters)
        total_expenses = sum(q.expenses for q in quarters)
        return BudgetSummary(
            year=year,
            quarters=quarters,
            total_revenues=total_revenues,
            total_expenses=total_expenses,
            net=total_revenues - total_expenses,
        )


class ExpenseCategoryService(BaseService):

    def _get(self, category_id: int) -> ExpenseCategory:
        category = self.db.get(ExpenseCategory, category_id)
        if category is None:
            raise NotFoundError("Expense category not found")
        return category

    def list_categories(self, active_only: bool = False) -> List[ExpenseCategory]:
        query = self.db.query(ExpenseCategory)
        if active_only:
            query = query.filter(ExpenseCategory.is_active.is_(True))
        return query.order_by(ExpenseCategory.display_order, ExpenseCategory.id).all()

    def create_category(self, data: ExpenseCategoryCreate) -> ExpenseCategory:
        category = ExpenseCategory(**data.model_dump())
        self.db.add(category)
        self.commit()
        self.db.refresh(category)

        self.audit(AuditEntity.EXPENSE_CATEGORY, category.id, AuditAction.CREATE, new_data=category)
        return category

    def update_category(self, category_id: int, data: ExpenseCategoryUpdate) -> ExpenseCategory:
        category = self._get(category_id)
        changes = {
            k: v for k, v in data.model_dump(exclude_unset=True).items()
            if v is not None or k in ("name_en", "description", "icon")
        }

        old_data = snapshot(category)
        for field, value in changes.items():
            setattr(category, field, value)
        self.commit()
        self.db.refresh(category)

        self.audit(AuditEntity.EXPENSE_CATEGORY, category.id, AuditAction.UPDATE,
                   old_data=old_data, new_data=category)
        return category

    def delete_category(self, category_id: int) -> None:
        category = self._get(category_id)
        in_use = self.db.query(Expense.id).filter(Expense.category_id == category_id).first()
        if in_use is not None:
            raise ValidationError("Category is referenced by expenses; deactivate it instead")

        old_data = snapshot(category)
        self.db.delete(category)
        self.commit()

        self.audit(AuditEntity.EXPENSE_CATEGORY, category_id, AuditAction.DELETE, old_data=old_data)

    def reorder_categories(self, category_ids: List[int]) -> List[ExpenseCategory]:
        """display_order becomes each id's position in ``category_ids``."""
        if len(set(category_ids)) != len(category_ids):
            raise ValidationError("category_ids contains duplicates")
        rows = {
            c.id: c for c in
            self.db.query(ExpenseCategory).filter(ExpenseCategory.id.in_(category_ids)).all()
        }
        missing = [cid for cid in category_ids if cid not in rows]
        if missing:
            raise NotFoundError(f"Expense categories not found: {missing}")

        for index, category_id in enumerate(category_ids):
            rows[category_id].display_order = index
        self.commit()
        return self.list_categories()
