import json
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Optional

from sqlalchemy import inspect as sa_inspect

from app.models.audit_log import AuditLog, AuditAction, AuditEntity
from app.services.base import BaseService


def json_default(value: Any):
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, Enum):
        return value.value
    return str(value)


def snapshot(obj: Any) -> Optional[Dict[str, Any]]:
    """
    Plain-dict, JSON-safe view of an ORM row, pydantic model or mapping.
    """
    if obj is None:
        return None
    if hasattr(obj, "model_dump"):
        raw = obj.model_dump()
    elif isinstance(obj, dict):
        raw = obj
    else:
        mapper = sa_inspect(obj).mapper
        raw = {attr.key: getattr(obj, attr.key) for attr in mapper.column_attrs}
    return json.loads(json.dumps(raw, default=json_default))


def compute_changes(old_data: Dict[str, Any], new_data: Dict[str, Any]) -> Dict[str, Dict[str, Any]]:
    """
    Shallow field-level diff. Every key of ``new_data`` whose value differs
    from ``old_data`` is reported as ``{"old": ..., "new": ...}``.
    """
    changes = {}
    for key, new_value in new_data.items():
        old_value = old_data.get(key)
        if old_value != new_value:
            changes[key] = {"old": old_value, "new": new_value}
    return changes


class AuditService(BaseService):
    def log_action(
        self,
        entity_type: str,
        entity_id: Optional[int],
        action: str,
        user_id: Optional[str] = None,
        user_name: Optional[str] = None,
        old_data: Any = None,
        new_data: Any = None,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> Optional[AuditLog]:
        """
        Append an audit entry and commit it.

        Best effort: callers commit their own mutation first, and any failure
        here is logged and swallowed so it can never undo that mutation.
        """
        try:
            old_snapshot = snapshot(old_data)
            new_snapshot = snapshot(new_data)
            changes = (
                compute_changes(old_snapshot, new_snapshot)
                if old_snapshot is not None and new_snapshot is not None
                else None
            )

            db_log = AuditLog(
                entity_type=entity_type.value if isinstance(entity_type, AuditEntity) else entity_type,
                entity_id=entity_id or 0,
                action=action.value if isinstance(action, AuditAction) else action,
                user_id=user_id,
                user_name=user_name,
                old_data=json.dumps(old_snapshot, ensure_ascii=False) if old_snapshot is not None else None,
                new_data=json.dumps(new_snapshot, ensure_ascii=False) if new_snapshot is not None else None,
                changes=json.dumps(changes, ensure_ascii=False) if changes is not None else None,
                ip_address=ip_address,
                user_agent=user_agent,
            )
            self.db.add(db_log)
            self.db.commit()
            return db_log
        except Exception as e:
            self._logger.error(f"FAILED TO AUDIT LOG: {e}", exc_info=True)
            try:
                self.db.rollback()
            except Exception:
                self._logger.exception("Rollback after audit failure also failed")
            return None

    def list_logs(
        self,
        entity_type: Optional[str] = None,
        entity_id: Optional[int] = None,
        action: Optional[str] = None,
        user_id: Optional[str] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        limit: int = 100,
    ):
        query = self.db.query(AuditLog)
        if entity_type:
            query = query.filter(AuditLog.entity_type == entity_type)
        if entity_id is not None:
            query = query.filter(AuditLog.entity_id == entity_id)
        if action:
            query = query.filter(AuditLog.action == action)
        if user_id:
            query = query.filter(AuditLog.user_id == user_id)
        if start_date:
            query = query.filter(AuditLog.timestamp >= start_date)
        if end_date:
            query = query.filter(AuditLog.timestamp <= end_date)
        return query.order_by(AuditLog.timestamp.desc(), AuditLog.id.desc()).limit(limit).all()
