import pytest

from app.core.exceptions import PeriodLockedError, ValidationError
from app.schemas.budget import ExpenseCreate, ExpenseUpdate, RevenueCreate, RevenueUpdate
from app.services.budget_service import BudgetService, ExpenseCategoryService, quarter_for_month
from app.services.period_lock import PeriodLockService


@pytest.mark.parametrize("month, quarter", [(1, 1), (3, 1), (4, 2), (6, 2), (7, 3), (10, 4), (12, 4)])
def test_quarter_for_month(month, quarter):
    assert quarter_for_month(month) == quarter


def test_client_quarter_is_ignored(db_session, actor):
    service = BudgetService(db_session, actor)
    expense = service.create_expense(ExpenseCreate(
        year=2024, month=5, quarter=4, type="operational", amount=100,
    ))
    assert expense.quarter == 2

    updated = service.update_expense(expense.id, ExpenseUpdate(month=11, quarter=1))
    assert updated.quarter == 4


def test_locked_period_rejects_writes(db_session, actor):
    service = BudgetService(db_session, actor)
    expense = service.create_expense(ExpenseCreate(year=2024, month=2, type="rent", amount=50))
    PeriodLockService(db_session, actor).lock_period(2024, 2)

    with pytest.raises(PeriodLockedError):
        service.create_expense(ExpenseCreate(year=2024, month=2, type="rent", amount=10))
    with pytest.raises(PeriodLockedError):
        service.update_expense(expense.id, ExpenseUpdate(amount=75))
    with pytest.raises(PeriodLockedError):
        service.delete_expense(expense.id)
    with pytest.raises(PeriodLockedError):
        service.create_revenue(RevenueCreate(year=2024, month=2, source="ads", amount=1))
    assert service.get_expense(expense.id).amount == 50


def test_locked_period_rejects_revenue_writes(db_session, actor):
    service = BudgetService(db_session, actor)
    revenue = service.create_revenue(RevenueCreate(year=2024, month=8, source="ads", amount=500))
    PeriodLockService(db_session, actor).lock_period(2024, 8)

    with pytest.raises(PeriodLockedError):
        service.update_revenue(revenue.id, RevenueUpdate(amount=900))
    with pytest.raises(PeriodLockedError):
        service.delete_revenue(revenue.id)
    assert service.get_revenue(revenue.id).amount == 500


def test_moving_revenue_into_locked_period_rejected(db_session, actor):
    service = BudgetService(db_session, actor)
    revenue = service.create_revenue(RevenueCreate(year=2024, month=9, source="ads", amount=500))
    PeriodLockService(db_session, actor).lock_period(2024, 10)

    with pytest.raises(PeriodLockedError):
        service.update_revenue(revenue.id, RevenueUpdate(month=10))
    assert service.get_revenue(revenue.id).month == 9


def test_moving_into_locked_period_rejected(db_session, actor):
    service = BudgetService(db_session, actor)
    expense = service.create_expense(ExpenseCreate(year=2024, month=1, type="rent", amount=50))
    PeriodLockService(db_session, actor).lock_period(2024, 3)

    with pytest.raises(PeriodLockedError):
        service.update_expense(expense.id, ExpenseUpdate(month=3))
    assert service.get_expense(expense.id).month == 1


def test_filters(db_session, actor):
    service = BudgetService(db_session, actor)
    service.create_revenue(RevenueCreate(year=2024, month=1, source="ads", amount=10))
    service.create_revenue(RevenueCreate(year=2024, month=5, source="subscriptions", amount=20))
    service.create_revenue(RevenueCreate(year=2023, month=5, source="ads", amount=30))

    assert len(service.list_revenues(year=2024)) == 2
    assert [r.amount for r in service.list_revenues(year=2024, quarter=2)] == [20]
    assert [r.amount for r in service.list_revenues(month=5)] == [20, 30]


def test_budget_summary(db_session, actor):
    service = BudgetService(db_session, actor)
    service.create_revenue(RevenueCreate(year=2024, month=1, source="ads", amount=1000))
    service.create_revenue(RevenueCreate(year=2024, month=8, source="ads", amount=500))
    service.create_expense(ExpenseCreate(year=2024, month=2, type="rent", amount=300))

    summary = service.get_budget_summary(2024)
    assert [q.net for q in summary.quarters] == [700, 0, 500, 0]
    assert summary.total_revenues == 1500
    assert summary.total_expenses == 300
    assert summary.net == 1200


def test_unknown_category_rejected(db_session, actor):
    with pytest.raises(ValidationError):
        BudgetService(db_session, actor).create_expense(
            ExpenseCreate(year=2024, month=1, type="rent", amount=1, category_id=999)
        )


def test_category_reorder(db_session, actor):
    from app.schemas.budget import ExpenseCategoryCreate
    service = ExpenseCategoryService(db_session, actor)
    a = service.create_category(ExpenseCategoryCreate(name="Salaries"))
    b = service.create_category(ExpenseCategoryCreate(name="Rent"))
    c = service.create_category(ExpenseCategoryCreate(name="Printing"))

    ordered = service.reorder_categories([c.id, a.id, b.id])
    assert [cat.name for cat in ordered] == ["Printing", "Salaries", "Rent"]
    assert [cat.display_order for cat in ordered] == [0, 1, 2]


def test_category_in_use_cannot_be_deleted(db_session, actor):
    from app.schemas.budget import ExpenseCategoryCreate
    categories = ExpenseCategoryService(db_session, actor)
    category = categories.create_category(ExpenseCategoryCreate(name="Rent"))
    BudgetService(db_session, actor).create_expense(
        ExpenseCreate(year=2024, month=1, type="rent", amount=1, category_id=category.id)
    )
    with pytest.raises(ValidationError):
        categories.delete_category(category.id)


def test_expense_api_locked_period(client):
    created = client.post("/api/expenses", json={
        "year": 2025, "month": 4, "quarter": 1, "type": "printing", "amount": 120.5,
    })
    assert created.status_code == 200
    assert created.json()["quarter"] == 2

    client.post("/api/period-locks", json={"year": 2025, "month": 4, "action": "lock"})
    response = client.put(f"/api/expenses/{created.json()['id']}", json={"amount": 99})
    assert response.status_code == 400
    body = response.json()
    assert body["code"] == "PERIOD_LOCKED"
    assert body["error"] == "Period 4/2025 is locked and cannot be modified"


def test_budget_summary_api(client):
    client.post("/api/revenues", json={"year": 2025, "month": 12, "source": "ads", "amount": 40})
    summary = client.get("/api/budget/summary?year=2025").json()
    assert summary["quarters"][3]["revenues"] == 40
    assert summary["net"] == 40


def test_categories_api(client):
    first = client.post("/api/expense-categories", json={"name": "Utilities"}).json()
    second = client.post("/api/expense-categories", json={"name": "Travel", "is_active": False}).json()

    assert [c["name"] for c in client.get("/api/expense-categories?active=true").json()] == ["Utilities"]

    reordered = client.patch("/api/expense-categories/reorder", json={"category_ids": [second["id"], first["id"]]})
    assert [c["id"] for c in reordered.json()] == [second["id"], first["id"]]
