from sqlalchemy import Column, Integer, String, Text, DateTime
from sqlalchemy.sql import func
from app.database import Base
import enum

class AuditAction(str, enum.Enum):
    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    APPROVE = "APPROVE"
    REJECT = "REJECT"
    LOCK = "LOCK"
    UNLOCK = "UNLOCK"

class AuditEntity(str, enum.Enum):
    EMPLOYEE = "employee"
    CONTRACTOR = "contractor"
    PAYROLL = "payroll"
    CONTRACTOR_PAYROLL = "contractor_payroll"
    EXPENSE = "expense"
    REVENUE = "revenue"
    BUDGET = "budget"
    PERIOD_LOCK = "period_lock"
    LEAVE_SETTLEMENT = "leave_settlement"
    REMINDER = "reminder"
    USER = "user"
    EXPENSE_CATEGORY = "expense_category"
    SYSTEM_SETTING = "system_setting"

class AuditLog(Base):
    """Append-only. Rows are never updated or deleted."""
    __tablename__ = "audit_logs"

    id = Column(Integer, primary_key=True, index=True)
    entity_type = Column(String(64), nullable=False, index=True)
    entity_id = Column(Integer, nullable=False, index=True)
    action = Column(String(16), nullable=False, index=True)
    user_id = Column(String(64), nullable=True, index=True)
    user_name = Column(String(255), nullable=True)

    # JSON strings
    old_data = Column(Text, nullable=True)
    new_data = Column(Text, nullable=True)
    changes = Column(Text, nullable=True)

    ip_address = Column(String(64), nullable=True)
    user_agent = Column(Text, nullable=True)
    timestamp = Column(DateTime(timezone=True), server_default=func.now(), index=True)
