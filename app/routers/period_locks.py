from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional, Union

from app.core.exceptions import ValidationError
from app.core.schemas import ActorContext
from app.database import get_db
from app.routers.deps import get_actor, with_user
from app.schemas.period_lock import (
    PeriodLockAction,
    PeriodLockRequest,
    PeriodLockResponse,
    PeriodLockStatus,
)
from app.services.period_lock import PeriodLockService

router = APIRouter(
    prefix="/period-locks",
    tags=["period-locks"]
)


@router.get("", response_model=Union[PeriodLockStatus, List[PeriodLockResponse]])
def get_period_locks(
    year: Optional[int] = None,
    month: Optional[int] = Query(default=None, ge=1, le=12),
    db: Session = Depends(get_db),
):
    """
    With ``year`` and ``month``: the lock state of that one period.
    Without: every period that has ever been locked.
    """
    service = PeriodLockService(db)
    if year is None and month is None:
        return service.get_all_period_locks()
    if year is None or month is None:
        raise ValidationError("year and month must be given together")
    return PeriodLockStatus(year=year, month=month, is_locked=service.is_period_locked(year, month))


@router.post("", response_model=PeriodLockResponse)
def change_period_lock(
    data: PeriodLockRequest,
    db: Session = Depends(get_db),
    actor: ActorContext = Depends(get_actor),
):
    service = PeriodLockService(db, with_user(actor, data.user_id, data.user_name))
    if data.action == PeriodLockAction.LOCK:
        return service.lock_period(data.year, data.month, data.reason)
    return service.unlock_period(data.year, data.month, data.reason)
