"""
Period Lock Registry

One row per (year, month). A locked period rejects every financial write
(revenues, expenses) through ``validate_period_not_locked``. Only the most
recent lock and unlock events are kept on the row.
"""
from datetime import datetime, timezone
from typing import List, Optional

from app.core.exceptions import PeriodLockedError, PeriodStateError, ValidationError
from app.models.audit_log import AuditAction, AuditEntity
from app.models.period_lock import PeriodLock
from app.services.audit import snapshot
from app.services.base import BaseService


def _validate_period(year: int, month: int):
    if not 1 <= month <= 12:
        raise ValidationError(f"Invalid month: {month}")
    if year < 1900:
        raise ValidationError(f"Invalid year: {year}")


class PeriodLockService(BaseService):

    def get_period_lock(self, year: int, month: int, for_update: bool = False) -> Optional[PeriodLock]:
        query = self.db.query(PeriodLock).filter(
            PeriodLock.year == year,
            PeriodLock.month == month,
        )
        if for_update:
            query = query.with_for_update()
        return query.first()

    def is_period_locked(self, year: int, month: int) -> bool:
        return self.db.query(PeriodLock.id).filter(
            PeriodLock.year == year,
            PeriodLock.month == month,
            PeriodLock.is_locked.is_(True),
        ).first() is not None

    def get_all_period_locks(self) -> List[PeriodLock]:
        return self.db.query(PeriodLock).order_by(PeriodLock.year, PeriodLock.month).all()

    def get_locked_periods(self) -> List[PeriodLock]:
        return (
            self.db.query(PeriodLock)
            .filter(PeriodLock.is_locked.is_(True))
            .order_by(PeriodLock.year, PeriodLock.month)
            .all()
        )

    def validate_period_not_locked(self, year: int, month: int) -> None:
        """Single enforcement point for financial writes."""
        if self.is_period_locked(year, month):
            raise PeriodLockedError(year, month)

    def lock_period(self, year: int, month: int, reason: Optional[str] = None) -> PeriodLock:
        _validate_period(year, month)
        existing = self.get_period_lock(year, month, for_update=True)
        now = datetime.now(timezone.utc)

        if existing is not None and existing.is_locked:
            raise PeriodStateError(f"Period {month}/{year} is already locked")

        old_data = snapshot(existing)
        if existing is None:
            lock = PeriodLock(year=year, month=month)
            self.db.add(lock)
        else:
            lock = existing

        lock.is_locked = True
        lock.locked_by = self.actor.user_id
        lock.locked_by_name = self.actor.user_name
        lock.locked_at = now
        lock.lock_reason = reason
        lock.updated_at = now

        self.commit()
        self.db.refresh(lock)
        self.log_info(f"Period {month}/{year} locked", year=year, month=month, user_id=self.actor.user_id)

        self.audit(AuditEntity.PERIOD_LOCK, lock.id, AuditAction.LOCK, old_data=old_data, new_data=lock)
        return lock

    def unlock_period(self, year: int, month: int, reason: Optional[str]) -> PeriodLock:
        if reason is None or not reason.strip():
            raise ValidationError("A reason is required to unlock a period")

        existing = self.get_period_lock(year, month, for_update=True)
        if existing is None:
            raise PeriodStateError(f"Period {month}/{year} does not exist")
        if not existing.is_locked:
            raise PeriodStateError(f"Period {month}/{year} is not locked")

        old_data = snapshot(existing)
        now = datetime.now(timezone.utc)
        existing.is_locked = False
        existing.unlocked_by = self.actor.user_id
        existing.unlocked_by_name = self.actor.user_name
        existing.unlocked_at = now
        existing.unlock_reason = reason.strip()
        existing.updated_at = now

        self.commit()
        self.db.refresh(existing)
        self.log_info(f"Period {month}/{year} unlocked", year=year, month=month, user_id=self.actor.user_id)

        self.audit(AuditEntity.PERIOD_LOCK, existing.id, AuditAction.UNLOCK, old_data=old_data, new_data=existing)
        return existing
