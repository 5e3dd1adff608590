import pytest
from datetime import date

from app.core.exceptions import NotFoundError
from app.models.leave_settlement import LeaveSettlement
from app.models.payroll import EmployeePayroll
from app.services.ledger_service import LedgerService, export_ledger_csv


@pytest.fixture
def history(db_session, employee):
    db_session.add_all([
        EmployeePayroll(employee_id=employee.id, year=2024, month=1, base_salary=10000,
                        social_insurance=900, bonus=300, deduction=100, net_salary=9300),
        EmployeePayroll(employee_id=employee.id, year=2024, month=2, base_salary=10000,
                        social_insurance=900, net_salary=9100),
        EmployeePayroll(employee_id=employee.id, year=2023, month=12, base_salary=9000,
                        social_insurance=810, net_salary=8190),
        LeaveSettlement(employee_id=employee.id, join_date=date(2023, 1, 1),
                        leave_start_date=date(2024, 1, 20), leave_days=10,
                        current_leave_days=10, net_payable=-150, deductions_amount=150),
    ])
    db_session.commit()
    return employee


def test_ledger_newest_first(db_session, history):
    ledger = LedgerService(db_session).get_employee_ledger(history.id)
    assert [(e.type.value, e.date) for e in ledger.entries] == [
        ("salary", date(2024, 2, 1)),
        ("leave_settlement", date(2024, 1, 20)),
        ("salary", date(2024, 1, 1)),
        ("salary", date(2023, 12, 1)),
    ]
    assert ledger.summary.entry_count == 4
    assert ledger.summary.total_salaries == 26590
    assert ledger.summary.total_leave_settlements == -150
    assert ledger.summary.net_total == 26440
    assert ledger.summary.total_bonuses == 300
    assert ledger.summary.total_deductions == 100


def test_ledger_period_filter(db_session, history):
    ledger = LedgerService(db_session).get_employee_ledger(history.id, year=2024, month=1)
    assert [e.type.value for e in ledger.entries] == ["leave_settlement", "salary"]


def test_unknown_employee(db_session):
    with pytest.raises(NotFoundError):
        LedgerService(db_session).get_employee_ledger(999)


def test_all_employee_summary(db_session, history):
    summaries = LedgerService(db_session).get_all_employees_ledger_summary(year=2023)
    assert len(summaries) == 1
    assert summaries[0].employee_name == "Sara Ahmed"
    assert summaries[0].total_salaries == 8190


def test_csv_export(db_session, history):
    csv_text = export_ledger_csv(LedgerService(db_session).get_employee_ledger(history.id, year=2024))
    lines = csv_text.splitlines()
    assert lines[0] == "Date,Type,Description,Amount,Year,Month"
    assert lines[1].startswith("2024-02-01,Salary,Salary February 2024,9100")
    assert "Net,18250" in lines[-1]


def test_ledger_api(client, history):
    ledger = client.get(f"/api/employee-ledger?employee_id={history.id}&year=2024").json()
    assert ledger["employee"]["name"] == "Sara Ahmed"
    assert ledger["summary"]["entry_count"] == 3

    summaries = client.get("/api/employee-ledger?summary=all").json()
    assert summaries[0]["employee_id"] == history.id

    assert client.get("/api/employee-ledger").status_code == 400

    export = client.get(f"/api/employee-ledger/{history.id}/csv")
    assert export.status_code == 200
    assert export.headers["content-type"].startswith("text/csv")
    assert "attachment" in export.headers["content-disposition"]
