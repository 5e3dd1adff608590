from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from app.core.schemas import ActorContext, SuccessResponse
from app.database import get_db
from app.routers.deps import get_actor
from app.schemas.budget import (
    CategoryReorderRequest,
    ExpenseCategoryCreate,
    ExpenseCategoryResponse,
    ExpenseCategoryUpdate,
)
from app.services.budget_service import ExpenseCategoryService

router = APIRouter(
    prefix="/expense-categories",
    tags=["expense-categories"]
)


@router.get("", response_model=List[ExpenseCategoryResponse])
def list_categories(active: bool = False, db: Session = Depends(get_db)):
    return ExpenseCategoryService(db).list_categories(active_only=active)


@router.post("", response_model=ExpenseCategoryResponse)
def create_category(
    data: ExpenseCategoryCreate,
    db: Session = Depends(get_db),
    actor: ActorContext = Depends(get_actor),
):
    return ExpenseCategoryService(db, actor).create_category(data)


@router.patch("/reorder", response_model=List[ExpenseCategoryResponse])
def reorder_categories(
    data: CategoryReorderRequest,
    db: Session = Depends(get_db),
    actor: ActorContext = Depends(get_actor),
):
    return ExpenseCategoryService(db, actor).reorder_categories(data.category_ids)


@router.put("/{category_id}", response_model=ExpenseCategoryResponse)
def update_category(
    category_id: int,
    data: ExpenseCategoryUpdate,
    db: Session = Depends(get_db),
    actor: ActorContext = Depends(get_actor),
):
    return ExpenseCategoryService(db, actor).update_category(category_id, data)


@router.delete("/{category_id}", response_model=SuccessResponse)
def delete_category(
    category_id: int,
    db: Session = Depends(get_db),
    actor: ActorContext = Depends(get_actor),
):
    ExpenseCategoryService(db, actor).delete_category(category_id)
    return SuccessResponse()
