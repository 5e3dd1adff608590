"""
Leave settlement arithmetic.

Leave accrues at a fixed 30 days per 330 days worked (eleven months of work
earn one month of leave). Service length is broken down with 365-day years and
30-day months, which is the convention used by the HR policy rather than a
calendar-accurate decomposition.

Everything here is pure: no database access, no clock.
"""
import math
from datetime import date, datetime
from typing import Tuple, Union

from app.models.leave_settlement import TicketsEntitlement
from app.schemas.leave import LeaveCalculationInput, LeaveCalculationResult

ANNUAL_LEAVE_DAYS = 30
WORKING_DAYS_PER_YEAR = 330

DAYS_PER_YEAR = 365
DAYS_PER_MONTH = 30

EMPLOYEE_TICKETS = 1
FAMILY_TICKETS = 4  # employee + spouse + two children

SECONDS_PER_DAY = 86400

DateLike = Union[date, datetime]


def _as_datetime(value: DateLike) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime(value.year, value.month, value.day)


def round1(value: float) -> float:
    """Round half up to one decimal place."""
    return math.floor(value * 10 + 0.5) / 10


def days_between(start: DateLike, end: DateLike) -> int:
    """Whole days between two dates, order-insensitive; partial days count as a full day."""
    delta = _as_datetime(end) - _as_datetime(start)
    return math.ceil(abs(delta.total_seconds()) / SECONDS_PER_DAY)


def split_service_days(total_days: int) -> Tuple[int, int, int]:
    years, remaining = divmod(total_days, DAYS_PER_YEAR)
    months, days = divmod(remaining, DAYS_PER_MONTH)
    return years, months, days


def accrued_leave(service_days: float) -> float:
    return service_days * ANNUAL_LEAVE_DAYS / WORKING_DAYS_PER_YEAR


def tickets_for(entitlement: TicketsEntitlement) -> int:
    if TicketsEntitlement(entitlement) == TicketsEntitlement.EMPLOYEE:
        return EMPLOYEE_TICKETS
    return FAMILY_TICKETS


def calculate_leave_settlement(data: LeaveCalculationInput) -> LeaveCalculationResult:
    service_days = days_between(data.join_date, data.leave_start_date)
    years, months, days = split_service_days(service_days)

    accrued = accrued_leave(service_days)
    balance_before = accrued + data.previous_balance_days

    if data.leave_days is not None:
        current_leave = data.leave_days
    elif data.leave_end_date is not None:
        current_leave = days_between(data.leave_start_date, data.leave_end_date)
    else:
        current_leave = 0

    balance_after = balance_before - current_leave

    return LeaveCalculationResult(
        service_days=service_days,
        service_years=years,
        service_months=months,
        service_days_remainder=days,
        accrued_days=round1(accrued),
        balance_before_deduction=round1(balance_before),
        current_leave_days=round1(current_leave),
        balance_after_deduction=round1(balance_after),
        tickets_count=tickets_for(data.tickets_entitlement),
        visas_count=data.visas_count,
        # Tickets and visas are tracked as counts only; no pricing is applied
        net_payable=0.0 - data.deductions_amount,
        is_balance_sufficient=balance_after >= 0,
    )
