from typing import List, Optional

from app.core.exceptions import NotFoundError, ValidationError
from app.models.audit_log import AuditAction, AuditEntity
from app.models.employee import Employee
from app.models.leave_settlement import LeaveSettlement
from app.schemas.leave import (
    LeaveCalculationInput,
    LeaveCalculationResult,
    LeaveSettlementCreate,
    LeaveSettlementResponse,
    LeaveSettlementUpdate,
)
from app.services.audit import snapshot
from app.services.base import BaseService
from app.services.leave_calculator import calculate_leave_settlement, split_service_days

INPUT_FIELDS = tuple(LeaveCalculationInput.model_fields)
NULLABLE_FIELDS = ("leave_end_date", "leave_days")


def to_response(settlement: LeaveSettlement) -> LeaveSettlementResponse:
    response = LeaveSettlementResponse.model_validate(settlement)
    response.employee_name = settlement.employee.name if settlement.employee else None
    years, months, days = split_service_days(settlement.service_days)
    response.service_years = years
    response.service_months = months
    response.service_days_remainder = days
    return response


def _apply_calculation(settlement: LeaveSettlement, result: LeaveCalculationResult):
    settlement.service_days = result.service_days
    settlement.accrued_days = result.accrued_days
    settlement.balance_before_deduction = result.balance_before_deduction
    settlement.current_leave_days = result.current_leave_days
    settlement.balance_after_deduction = result.balance_after_deduction
    settlement.tickets_count = result.tickets_count
    settlement.net_payable = result.net_payable
    settlement.is_balance_sufficient = result.is_balance_sufficient


class LeaveSettlementService(BaseService):

    def _get(self, settlement_id: int) -> LeaveSettlement:
        settlement = self.db.get(LeaveSettlement, settlement_id)
        if settlement is None:
            raise NotFoundError("Leave settlement not found")
        return settlement

    def _require_employee(self, employee_id: int) -> Employee:
        employee = self.db.get(Employee, employee_id)
        if employee is None:
            raise ValidationError(f"Employee {employee_id} does not exist")
        return employee

    def list_settlements(self, employee_id: Optional[int] = None) -> List[LeaveSettlement]:
        query = self.db.query(LeaveSettlement)
        if employee_id is not None:
            query = query.filter(LeaveSettlement.employee_id == employee_id)
        return query.order_by(LeaveSettlement.created_at.desc(), LeaveSettlement.id.desc()).all()

    def get_settlement(self, settlement_id: int) -> LeaveSettlement:
        return self._get(settlement_id)

    def create_settlement(self, data: LeaveSettlementCreate):
        self._require_employee(data.employee_id)
        calculation = calculate_leave_settlement(data)

        settlement = LeaveSettlement(
            employee_id=data.employee_id,
            join_date=data.join_date,
            leave_start_date=data.leave_start_date,
            leave_end_date=data.leave_end_date,
            leave_days=data.leave_days,
            previous_balance_days=data.previous_balance_days,
            tickets_entitlement=data.tickets_entitlement.value,
            visas_count=data.visas_count,
            deductions_amount=data.deductions_amount,
        )
        _apply_calculation(settlement, calculation)
        self.db.add(settlement)
        self.commit()
        self.db.refresh(settlement)

        self.audit(AuditEntity.LEAVE_SETTLEMENT, settlement.id, AuditAction.CREATE, new_data=settlement)
        return settlement, calculation

    def update_settlement(self, settlement_id: int, data: LeaveSettlementUpdate):
        settlement = self._get(settlement_id)
        changes = {
            k: v for k, v in data.model_dump(exclude_unset=True).items()
            if v is not None or k in NULLABLE_FIELDS
        }
        if changes.get("employee_id") is not None:
            self._require_employee(changes["employee_id"])

        # Merge onto the stored inputs and always recompute
        merged = {field: getattr(settlement, field) for field in INPUT_FIELDS}
        merged.update({k: v for k, v in changes.items() if k in INPUT_FIELDS})
        for required in ("join_date", "leave_start_date"):
            if merged.get(required) is None:
                raise ValidationError(f"{required} cannot be empty")
        calculation = calculate_leave_settlement(LeaveCalculationInput(**merged))

        old_data = snapshot(settlement)
        for field, value in changes.items():
            if field == "tickets_entitlement" and value is not None:
                value = value.value
            setattr(settlement, field, value)
        _apply_calculation(settlement, calculation)
        self.commit()
        self.db.refresh(settlement)

        self.audit(
            AuditEntity.LEAVE_SETTLEMENT, settlement.id, AuditAction.UPDATE,
            old_data=old_data, new_data=settlement,
        )
        return settlement, calculation

    def delete_settlement(self, settlement_id: int) -> None:
        settlement = self._get(settlement_id)
        old_data = snapshot(settlement)
        self.db.delete(settlement)
        self.commit()

        self.audit(AuditEntity.LEAVE_SETTLEMENT, settlement_id, AuditAction.DELETE, old_data=old_data)
