from sqlalchemy import Column, Integer, String, Boolean, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.database import Base
import enum

class ReminderType(str, enum.Enum):
    RESIDENCE_EXPIRY = "residence_expiry"
    LEAVE_START = "leave_start"
    LEAVE_END = "leave_end"
    INSURANCE_PAYMENT = "insurance_payment"
    CONTRACT_RENEWAL = "contract_renewal"
    DOCUMENT_EXPIRY = "document_expiry"
    OTHER = "other"

class ReminderStatus(str, enum.Enum):
    OVERDUE = "overdue"
    DUE_SOON = "due_soon"
    PENDING = "pending"
    COMPLETED = "completed"

class Reminder(Base):
    __tablename__ = "reminders"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    type = Column(String(32), nullable=False, default=ReminderType.OTHER.value)
    employee_id = Column(Integer, ForeignKey("employees.id"), nullable=True, index=True)
    start_date = Column(DateTime(timezone=True), nullable=True)
    due_date = Column(DateTime(timezone=True), nullable=False, index=True)
    notes = Column(Text, nullable=True)
    is_completed = Column(Boolean, nullable=False, default=False, index=True)
    completed_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    employee = relationship("Employee")
