"""
Employees Router

Soft delete only: DELETE clears ``is_active``.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List, Optional

from app.core.schemas import ActorContext, SuccessResponse
from app.database import get_db
from app.routers.deps import get_actor
from app.schemas.employee import EmployeeCreate, EmployeeResponse, EmployeeUpdate, ReorderRequest
from app.services.staff_service import EmployeeService

router = APIRouter(
    prefix="/employees",
    tags=["employees"]
)


@router.get("", response_model=List[EmployeeResponse])
def list_employees(
    active: Optional[bool] = True,
    db: Session = Depends(get_db),
):
    """Active employees by default; ``active=false`` lists deactivated ones."""
    return EmployeeService(db).list(active=active)


@router.get("/{employee_id}", response_model=EmployeeResponse)
def get_employee(employee_id: int, db: Session = Depends(get_db)):
    return EmployeeService(db).get(employee_id)


@router.post("", response_model=EmployeeResponse)
def create_employee(
    data: EmployeeCreate,
    db: Session = Depends(get_db),
    actor: ActorContext = Depends(get_actor),
):
    return EmployeeService(db, actor).create(data)


@router.put("/{employee_id}", response_model=EmployeeResponse)
def update_employee(
    employee_id: int,
    data: EmployeeUpdate,
    db: Session = Depends(get_db),
    actor: ActorContext = Depends(get_actor),
):
    return EmployeeService(db, actor).update(employee_id, data)


@router.delete("/{employee_id}", response_model=EmployeeResponse)
def delete_employee(
    employee_id: int,
    db: Session = Depends(get_db),
    actor: ActorContext = Depends(get_actor),
):
    return EmployeeService(db, actor).deactivate(employee_id)


@router.post("/reorder", response_model=SuccessResponse)
def reorder_employees(
    data: ReorderRequest,
    db: Session = Depends(get_db),
    actor: ActorContext = Depends(get_actor),
):
    EmployeeService(db, actor).reorder(data.items)
    return SuccessResponse()
