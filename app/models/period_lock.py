from sqlalchemy import Column, Integer, String, Boolean, Text, DateTime, UniqueConstraint
from sqlalchemy.sql import func
from app.database import Base

class PeriodLock(Base):
    __tablename__ = "period_locks"
    __table_args__ = (
        UniqueConstraint("year", "month", name="uq_period_lock_year_month"),
    )

    id = Column(Integer, primary_key=True, index=True)
    year = Column(Integer, nullable=False)
    month = Column(Integer, nullable=False)
    is_locked = Column(Boolean, nullable=False, default=False)

    # Only the last lock/unlock event is retained
    locked_by = Column(String(64), nullable=True)
    locked_by_name = Column(String(255), nullable=True)
    locked_at = Column(DateTime(timezone=True), nullable=True)
    lock_reason = Column(Text, nullable=True)

    unlocked_by = Column(String(64), nullable=True)
    unlocked_by_name = Column(String(255), nullable=True)
    unlocked_at = Column(DateTime(timezone=True), nullable=True)
    unlock_reason = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
