"""
System Settings Router

Key/value administration plus ``/typed``, the validated configuration view.
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from app.core.schemas import ActorContext, SuccessResponse
from app.database import get_db
from app.routers.deps import get_actor
from app.schemas.settings import (
    SystemConfiguration,
    SystemSettingCreate,
    SystemSettingResponse,
    SystemSettingUpdate,
)
from app.services.settings_service import SettingsService

router = APIRouter(
    prefix="/settings",
    tags=["settings"]
)


@router.get("", response_model=List[SystemSettingResponse])
def list_settings(category: Optional[str] = None, db: Session = Depends(get_db)):
    service = SettingsService(db)
    if category:
        return service.get_settings_by_category(category)
    return service.get_all_settings()


@router.get("/typed", response_model=SystemConfiguration)
def get_typed_settings(db: Session = Depends(get_db)):
    return SettingsService(db).load_system_configuration()


@router.post("", response_model=SystemSettingResponse)
def create_setting(
    data: SystemSettingCreate,
    db: Session = Depends(get_db),
    actor: ActorContext = Depends(get_actor),
):
    return SettingsService(db, actor).create_setting(data)


@router.put("", response_model=SystemSettingResponse)
def update_setting(
    data: SystemSettingUpdate,
    key: str = Query(..., min_length=1),
    db: Session = Depends(get_db),
    actor: ActorContext = Depends(get_actor),
):
    return SettingsService(db, actor).update_setting(key, data.value)


@router.delete("", response_model=SuccessResponse)
def delete_setting(
    key: str = Query(..., min_length=1),
    db: Session = Depends(get_db),
    actor: ActorContext = Depends(get_actor),
):
    SettingsService(db, actor).delete_setting(key)
    return SuccessResponse()
