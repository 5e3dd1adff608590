from sqlalchemy import Column, Integer, String, Text, DateTime
from sqlalchemy.sql import func
from app.database import Base
import enum

class ApprovalOperation(str, enum.Enum):
    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"

class ApprovalStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"

class PendingApproval(Base):
    """
    Maker-checker queue entry.
    Lifecycle: pending -> approved | rejected (both terminal).
    """
    __tablename__ = "pending_approvals"

    id = Column(Integer, primary_key=True, index=True)
    entity_type = Column(String(64), nullable=False, index=True)
    entity_id = Column(Integer, nullable=True, index=True)
    operation = Column(String(16), nullable=False)

    # JSON snapshots
    request_data = Column(Text, nullable=False)
    current_data = Column(Text, nullable=True)

    status = Column(String(16), nullable=False, default=ApprovalStatus.PENDING.value, index=True)

    maker_id = Column(String(64), nullable=True)
    maker_name = Column(String(255), nullable=True)
    maker_comment = Column(Text, nullable=True)

    checker_id = Column(String(64), nullable=True)
    checker_name = Column(String(255), nullable=True)
    checker_comment = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    reviewed_at = Column(DateTime(timezone=True), nullable=True)
