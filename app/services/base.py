import logging
from typing import Any, Optional
from sqlalchemy.orm import Session

from app.core.schemas import ActorContext


class BaseService:
    """
    Common plumbing for the service layer: the request-scoped session, the
    acting user and a per-service logger.
    """

    def __init__(self, db: Session, actor: Optional[ActorContext] = None):
        self.db = db
        self.actor = actor or ActorContext()
        self._logger = logging.getLogger(self.__class__.__module__)

    def log_info(self, message: str, **extra):
        self._logger.info(message, extra=extra or None)

    def log_warning(self, message: str, **extra):
        self._logger.warning(message, extra=extra or None)

    def commit(self):
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

    def audit(self, entity_type: str, entity_id: Optional[int], action: str,
              old_data: Any = None, new_data: Any = None):
        # Imported lazily: AuditService itself derives from BaseService
        from app.services.audit import AuditService

        return AuditService(self.db).log_action(
            entity_type=entity_type,
            entity_id=entity_id,
            action=action,
            user_id=self.actor.user_id,
            user_name=self.actor.user_name,
            old_data=old_data,
            new_data=new_data,
            ip_address=self.actor.ip_address,
            user_agent=self.actor.user_agent,
        )
