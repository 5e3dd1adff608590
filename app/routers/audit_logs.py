from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from datetime import datetime
from typing import List, Optional

from app.core.config import settings
from app.database import get_db
from app.schemas.audit import AuditLogResponse
from app.services.audit import AuditService

router = APIRouter(
    prefix="/audit-logs",
    tags=["audit-logs"]
)


@router.get("", response_model=List[AuditLogResponse])
def list_audit_logs(
    entity_type: Optional[str] = None,
    entity_id: Optional[int] = None,
    action: Optional[str] = None,
    user_id: Optional[str] = None,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
    limit: int = Query(default=settings.audit_default_limit, ge=1, le=1000),
    db: Session = Depends(get_db),
):
    """Newest first. Snapshots are returned as parsed JSON."""
    return AuditService(db).list_logs(
        entity_type=entity_type,
        entity_id=entity_id,
        action=action,
        user_id=user_id,
        start_date=start_date,
        end_date=end_date,
        limit=limit,
    )
