"""
Employees and contractors.

Both are soft-deleted: removing one only clears ``is_active`` so payroll and
settlement history keep their references.
"""
from typing import List, Optional, Type, Union

from app.core.exceptions import NotFoundError, ValidationError
from app.models.audit_log import AuditAction, AuditEntity
from app.models.contractor import Contractor
from app.models.employee import Employee
from app.schemas.employee import (
    ContractorCreate,
    ContractorUpdate,
    EmployeeCreate,
    EmployeeUpdate,
    ReorderItem,
)
from app.services.audit import snapshot
from app.services.base import BaseService

StaffModel = Union[Employee, Contractor]


class _StaffService(BaseService):
    model: Type[StaffModel]
    entity_type: AuditEntity
    label: str

    def _get(self, staff_id: int) -> StaffModel:
        row = self.db.get(self.model, staff_id)
        if row is None:
            raise NotFoundError(f"{self.label} not found")
        return row

    def list(self, active: Optional[bool] = True) -> List[StaffModel]:
        query = self.db.query(self.model)
        if active is not None:
            query = query.filter(self.model.is_active.is_(active))
        return query.order_by(self.model.sort_order, self.model.id).all()

    def get(self, staff_id: int) -> StaffModel:
        return self._get(staff_id)

    def create(self, data) -> StaffModel:
        row = self.model(**data.model_dump(), is_active=True)
        self.db.add(row)
        self.commit()
        self.db.refresh(row)

        self.audit(self.entity_type, row.id, AuditAction.CREATE, new_data=row)
        return row

    def update(self, staff_id: int, data) -> StaffModel:
        row = self._get(staff_id)
        changes = data.model_dump(exclude_unset=True)
        if "name" in changes and changes["name"] is None:
            raise ValidationError("name cannot be empty")

        old_data = snapshot(row)
        for field, value in changes.items():
            if value is None and field != "position":
                continue
            setattr(row, field, value)
        self.commit()
        self.db.refresh(row)

        self.audit(self.entity_type, row.id, AuditAction.UPDATE, old_data=old_data, new_data=row)
        return row

    def deactivate(self, staff_id: int) -> StaffModel:
        row = self._get(staff_id)
        old_data = snapshot(row)
        row.is_active = False
        self.commit()
        self.db.refresh(row)

        self.audit(self.entity_type, row.id, AuditAction.DELETE, old_data=old_data, new_data=row)
        return row

    def reorder(self, items: List[ReorderItem]) -> None:
        ids = [item.id for item in items]
        rows = {row.id: row for row in self.db.query(self.model).filter(self.model.id.in_(ids)).all()}
        missing = sorted(set(ids) - set(rows))
        if missing:
            raise NotFoundError(f"{self.label} not found: {missing}")
        for item in items:
            rows[item.id].sort_order = item.sort_order
        self.commit()


class EmployeeService(_StaffService):
    model = Employee
    entity_type = AuditEntity.EMPLOYEE
    label = "Employee"

    def create(self, data: EmployeeCreate) -> Employee:
        return super().create(data)

    def update(self, staff_id: int, data: EmployeeUpdate) -> Employee:
        return super().update(staff_id, data)


class ContractorService(_StaffService):
    model = Contractor
    entity_type = AuditEntity.CONTRACTOR
    label = "Contractor"

    def create(self, data: ContractorCreate) -> Contractor:
        return super().create(data)

    def update(self, staff_id: int, data: ContractorUpdate) -> Contractor:
        return super().update(staff_id, data)
