"""
Payroll Service Layer

Monthly payroll rows for employees and contractors. Net salary is always
derived here from the components; any client-supplied figure is ignored.

Architecture:
- Router -> Service (this module) -> Models
- One payroll row per person per (year, month)
"""

from sqlalchemy.orm import Session
from typing import List, Optional
import logging

from app.core.exceptions import NotFoundError, ValidationError
from app.core.schemas import ActorContext
from app.models.audit_log import AuditAction, AuditEntity
from app.models.contractor import Contractor
from app.models.employee import Employee
from app.models.payroll import ContractorPayroll, EmployeePayroll
from app.schemas.payroll import (
    ContractorPayrollCreate,
    ContractorPayrollResponse,
    ContractorPayrollUpdate,
    EmployeePayrollCreate,
    EmployeePayrollResponse,
    EmployeePayrollUpdate,
    PayrollSummary,
)
from app.services.audit import AuditService, snapshot

logger = logging.getLogger(__name__)


def employee_net_salary(
    base_salary: float,
    social_insurance: float,
    allowances: float,
    bonus: float,
    deduction: float,
) -> float:
    return base_salary + allowances + bonus - social_insurance - deduction


def contractor_net_salary(salary: float, bonus: float, deduction: float) -> float:
    return salary + bonus - deduction


def _audit(db: Session, actor: Optional[ActorContext], entity_type, entity_id, action,
           old_data=None, new_data=None):
    actor = actor or ActorContext()
    AuditService(db).log_action(
        entity_type=entity_type,
        entity_id=entity_id,
        action=action,
        user_id=actor.user_id,
        user_name=actor.user_name,
        old_data=old_data,
        new_data=new_data,
        ip_address=actor.ip_address,
        user_agent=actor.user_agent,
    )


def _commit(db: Session):
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise


# ============== Employee payroll ==============

def employee_payroll_response(payroll: EmployeePayroll) -> EmployeePayrollResponse:
    response = EmployeePayrollResponse.model_validate(payroll)
    response.employee_name = payroll.employee.name if payroll.employee else None
    return response


def list_employee_payrolls(
    db: Session,
    year: Optional[int] = None,
    month: Optional[int] = None,
    employee_id: Optional[int] = None,
) -> List[EmployeePayroll]:
    query = db.query(EmployeePayroll).join(Employee, EmployeePayroll.employee_id == Employee.id)
    if year is not None:
        query = query.filter(EmployeePayroll.year == year)
    if month is not None:
        query = query.filter(EmployeePayroll.month == month)
    if employee_id is not None:
        query = query.filter(EmployeePayroll.employee_id == employee_id)
    return query.order_by(
        EmployeePayroll.year.desc(),
        EmployeePayroll.month.desc(),
        Employee.sort_order,
        Employee.id,
    ).all()


def get_employee_payroll(db: Session, payroll_id: int, for_update: bool = False) -> EmployeePayroll:
    query = db.query(EmployeePayroll).filter(EmployeePayroll.id == payroll_id)
    if for_update:
        query = query.with_for_update()
    payroll = query.first()
    if payroll is None:
        raise NotFoundError("Payroll record not found")
    return payroll


def _check_employee_period_free(db: Session, employee_id: int, year: int, month: int,
                                exclude_id: Optional[int] = None):
    query = db.query(EmployeePayroll.id).filter(
        EmployeePayroll.employee_id == employee_id,
        EmployeePayroll.year == year,
        EmployeePayroll.month == month,
    )
    if exclude_id is not None:
        query = query.filter(EmployeePayroll.id != exclude_id)
    if query.first() is not None:
        raise ValidationError(
            f"Payroll for employee {employee_id} already exists for {month}/{year}",
            details={"employee_id": employee_id, "year": year, "month": month},
        )


def create_employee_payroll(
    db: Session,
    data: EmployeePayrollCreate,
    actor: Optional[ActorContext] = None,
) -> EmployeePayroll:
    if db.get(Employee, data.employee_id) is None:
        raise ValidationError(f"Employee {data.employee_id} does not exist")
    _check_employee_period_free(db, data.employee_id, data.year, data.month)

    payroll = EmployeePayroll(**data.model_dump())
    payroll.net_salary = employee_net_salary(
        payroll.base_salary, payroll.social_insurance, payroll.allowances,
        payroll.bonus, payroll.deduction,
    )
    db.add(payroll)
    _commit(db)
    db.refresh(payroll)
    logger.info(
        f"Payroll {payroll.id} created for employee {payroll.employee_id}",
        extra={"payroll_id": payroll.id, "year": payroll.year, "month": payroll.month},
    )

    _audit(db, actor, AuditEntity.PAYROLL, payroll.id, AuditAction.CREATE, new_data=payroll)
    return payroll


def update_employee_payroll(
    db: Session,
    payroll_id: int,
    data: EmployeePayrollUpdate,
    actor: Optional[ActorContext] = None,
) -> EmployeePayroll:
    payroll = get_employee_payroll(db, payroll_id, for_update=True)
    changes = {
        k: v for k, v in data.model_dump(exclude_unset=True).items()
        if v is not None or k == "notes"
    }
    if "employee_id" in changes and db.get(Employee, changes["employee_id"]) is None:
        raise ValidationError(f"Employee {changes['employee_id']} does not exist")

    employee_id = changes.get("employee_id", payroll.employee_id)
    year = changes.get("year", payroll.year)
    month = changes.get("month", payroll.month)
    _check_employee_period_free(db, employee_id, year, month, exclude_id=payroll.id)

    old_data = snapshot(payroll)
    for field, value in changes.items():
        setattr(payroll, field, value)
    payroll.net_salary = employee_net_salary(
        payroll.base_salary, payroll.social_insurance, payroll.allowances,
        payroll.bonus, payroll.deduction,
    )
    _commit(db)
    db.refresh(payroll)

    _audit(db, actor, AuditEntity.PAYROLL, payroll.id, AuditAction.UPDATE,
           old_data=old_data, new_data=payroll)
    return payroll


def delete_employee_payroll(db: Session, payroll_id: int, actor: Optional[ActorContext] = None):
    payroll = get_employee_payroll(db, payroll_id)
    old_data = snapshot(payroll)
    db.delete(payroll)
    _commit(db)

    _audit(db, actor, AuditEntity.PAYROLL, payroll_id, AuditAction.DELETE, old_data=old_data)


# ============== Contractor payroll ==============

def contractor_payroll_response(payroll: ContractorPayroll) -> ContractorPayrollResponse:
    response = ContractorPayrollResponse.model_validate(payroll)
    response.contractor_name = payroll.contractor.name if payroll.contractor else None
    return response


def list_contractor_payrolls(
    db: Session,
    year: Optional[int] = None,
    month: Optional[int] = None,
    contractor_id: Optional[int] = None,
) -> List[ContractorPayroll]:
    query = db.query(ContractorPayroll).join(Contractor, ContractorPayroll.contractor_id == Contractor.id)
    if year is not None:
        query = query.filter(ContractorPayroll.year == year)
    if month is not None:
        query = query.filter(ContractorPayroll.month == month)
    if contractor_id is not None:
        query = query.filter(ContractorPayroll.contractor_id == contractor_id)
    return query.order_by(
        ContractorPayroll.year.desc(),
        ContractorPayroll.month.desc(),
        Contractor.sort_order,
        Contractor.id,
    ).all()


def get_contractor_payroll(db: Session, payroll_id: int, for_update: bool = False) -> ContractorPayroll:
    query = db.query(ContractorPayroll).filter(ContractorPayroll.id == payroll_id)
    if for_update:
        query = query.with_for_update()
    payroll = query.first()
    if payroll is None:
        raise NotFoundError("Contractor payroll record not found")
    return payroll


def _check_contractor_period_free(db: Session, contractor_id: int, year: int, month: int,
                                  exclude_id: Optional[int] = None):
    query = db.query(ContractorPayroll.id).filter(
        ContractorPayroll.contractor_id == contractor_id,
        ContractorPayroll.year == year,
        ContractorPayroll.month == month,
    )
    if exclude_id is not None:
        query = query.filter(ContractorPayroll.id != exclude_id)
    if query.first() is not None:
        raise ValidationError(
            f"Payroll for contractor {contractor_id} already exists for {month}/{year}",
            details={"contractor_id": contractor_id, "year": year, "month": month},
        )


def create_contractor_payroll(
    db: Session,
    data: ContractorPayrollCreate,
    actor: Optional[ActorContext] = None,
) -> ContractorPayroll:
    if db.get(Contractor, data.contractor_id) is None:
        raise ValidationError(f"Contractor {data.contractor_id} does not exist")
    _check_contractor_period_free(db, data.contractor_id, data.year, data.month)

    payroll = ContractorPayroll(**data.model_dump())
    payroll.net_salary = contractor_net_salary(payroll.salary, payroll.bonus, payroll.deduction)
    db.add(payroll)
    _commit(db)
    db.refresh(payroll)

    _audit(db, actor, AuditEntity.CONTRACTOR_PAYROLL, payroll.id, AuditAction.CREATE, new_data=payroll)
    return payroll


def update_contractor_payroll(
    db: Session,
    payroll_id: int,
    data: ContractorPayrollUpdate,
    actor: Optional[ActorContext] = None,
) -> ContractorPayroll:
    payroll = get_contractor_payroll(db, payroll_id, for_update=True)
    changes = {
        k: v for k, v in data.model_dump(exclude_unset=True).items()
        if v is not None or k == "notes"
    }
    if "contractor_id" in changes and db.get(Contractor, changes["contractor_id"]) is None:
        raise ValidationError(f"Contractor {changes['contractor_id']} does not exist")

    contractor_id = changes.get("contractor_id", payroll.contractor_id)
    year = changes.get("year", payroll.year)
    month = changes.get("month", payroll.month)
    _check_contractor_period_free(db, contractor_id, year, month, exclude_id=payroll.id)

    old_data = snapshot(payroll)
    for field, value in changes.items():
        setattr(payroll, field, value)
    payroll.net_salary = contractor_net_salary(payroll.salary, payroll.bonus, payroll.deduction)
    _commit(db)
    db.refresh(payroll)

    _audit(db, actor, AuditEntity.CONTRACTOR_PAYROLL, payroll.id, AuditAction.UPDATE,
           old_data=old_data, new_data=payroll)
    return payroll


def delete_contractor_payroll(db: Session, payroll_id: int, actor: Optional[ActorContext] = None):
    payroll = get_contractor_payroll(db, payroll_id)
    old_data = snapshot(payroll)
    db.delete(payroll)
    _commit(db)

    _audit(db, actor, AuditEntity.CONTRACTOR_PAYROLL, payroll_id, AuditAction.DELETE, old_data=old_data)


# ============== Summary ==============

def get_payroll_summary(
    db: Session,
    year: Optional[int] = None,
    month: Optional[int] = None,
) -> PayrollSummary:
    """
    Totals for one period (or everything when no filter is given). This is
    the payload the PDF/Excel export renderers consume.
    """
    employee_rows = list_employee_payrolls(db, year=year, month=month)
    contractor_rows = list_contractor_payrolls(db, year=year, month=month)

    total_employee_net = sum(p.net_salary for p in employee_rows)
    total_contractor_net = sum(p.net_salary for p in contractor_rows)

    return PayrollSummary(
        year=year,
        month=month,
        employee_count=len({p.employee_id for p in employee_rows}),
        contractor_count=len({p.contractor_id for p in contractor_rows}),
        total_base_salary=sum(p.base_salary for p in employee_rows),
        total_allowances=sum(p.allowances for p in employee_rows),
        total_bonus=sum(p.bonus for p in employee_rows) + sum(p.bonus for p in contractor_rows),
        total_social_insurance=sum(p.social_insurance for p in employee_rows),
        total_deductions=sum(p.deduction for p in employee_rows) + sum(p.deduction for p in contractor_rows),
        total_employee_net=total_employee_net,
        total_contractor_net=total_contractor_net,
        grand_total_net=total_employee_net + total_contractor_net,
    )
