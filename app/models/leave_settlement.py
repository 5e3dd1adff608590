from sqlalchemy import Column, Integer, String, Float, Boolean, Date, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.database import Base
import enum

class TicketsEntitlement(str, enum.Enum):
    EMPLOYEE = "employee"
    FAMILY4 = "family4"

class LeaveSettlement(Base):
    __tablename__ = "leave_settlements"

    id = Column(Integer, primary_key=True, index=True)
    employee_id = Column(Integer, ForeignKey("employees.id"), nullable=False, index=True)

    # Inputs
    join_date = Column(Date, nullable=False)
    leave_start_date = Column(Date, nullable=False)
    leave_end_date = Column(Date, nullable=True)
    leave_days = Column(Float, nullable=True)
    previous_balance_days = Column(Float, nullable=False, default=0.0)
    tickets_entitlement = Column(String(16), nullable=False, default=TicketsEntitlement.EMPLOYEE.value)
    visas_count = Column(Integer, nullable=False, default=0)
    deductions_amount = Column(Float, nullable=False, default=0.0)

    # Persisted calculation output (not recomputed on read)
    service_days = Column(Integer, nullable=False, default=0)
    accrued_days = Column(Float, nullable=False, default=0.0)
    balance_before_deduction = Column(Float, nullable=False, default=0.0)
    current_leave_days = Column(Float, nullable=False, default=0.0)
    balance_after_deduction = Column(Float, nullable=False, default=0.0)
    tickets_count = Column(Integer, nullable=False, default=1)
    net_payable = Column(Float, nullable=False, default=0.0)
    is_balance_sufficient = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    employee = relationship("Employee", back_populates="leave_settlements")
