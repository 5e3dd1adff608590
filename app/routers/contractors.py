"""Contractors Router. Same shape as employees, also soft-deleted."""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List, Optional

from app.core.schemas import ActorContext, SuccessResponse
from app.database import get_db
from app.routers.deps import get_actor
from app.schemas.employee import ContractorCreate, ContractorResponse, ContractorUpdate, ReorderRequest
from app.services.staff_service import ContractorService

router = APIRouter(
    prefix="/contractors",
    tags=["contractors"]
)


@router.get("", response_model=List[ContractorResponse])
def list_contractors(
    active: Optional[bool] = True,
    db: Session = Depends(get_db),
):
    """Active contractors by default; ``active=false`` lists deactivated ones."""
    return ContractorService(db).list(active=active)


@router.get("/{contractor_id}", response_model=ContractorResponse)
def get_contractor(contractor_id: int, db: Session = Depends(get_db)):
    return ContractorService(db).get(contractor_id)


@router.post("", response_model=ContractorResponse)
def create_contractor(
    data: ContractorCreate,
    db: Session = Depends(get_db),
    actor: ActorContext = Depends(get_actor),
):
    return ContractorService(db, actor).create(data)


@router.put("/{contractor_id}", response_model=ContractorResponse)
def update_contractor(
    contractor_id: int,
    data: ContractorUpdate,
    db: Session = Depends(get_db),
    actor: ActorContext = Depends(get_actor),
):
    return ContractorService(db, actor).update(contractor_id, data)


@router.delete("/{contractor_id}", response_model=ContractorResponse)
def delete_contractor(
    contractor_id: int,
    db: Session = Depends(get_db),
    actor: ActorContext = Depends(get_actor),
):
    return ContractorService(db, actor).deactivate(contractor_id)


@router.post("/reorder", response_model=SuccessResponse)
def reorder_contractors(
    data: ReorderRequest,
    db: Session = Depends(get_db),
    actor: ActorContext = Depends(get_actor),
):
    ContractorService(db, actor).reorder(data.items)
    return SuccessResponse()
