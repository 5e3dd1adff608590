from sqlalchemy import Column, Integer, String, Float, Boolean, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.database import Base

class Employee(Base):
    __tablename__ = "employees"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    position = Column(String(255), nullable=True)
    base_salary = Column(Float, nullable=False, default=0.0)
    social_insurance = Column(Float, nullable=False, default=0.0)
    leave_balance = Column(Float, nullable=False, default=0.0)
    sort_order = Column(Integer, nullable=False, default=0)
    # Soft delete flag; rows are never physically removed
    is_active = Column(Boolean, nullable=False, default=True, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    payrolls = relationship("EmployeePayroll", back_populates="employee")
    leave_settlements = relationship("LeaveSettlement", back_populates="employee")

    def __repr__(self):
        return f"<Employee {self.id} {self.name}>"
