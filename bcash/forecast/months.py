"""Calendar-month helpers shared by the forecast engines."""
from datetime import date, datetime
from dateutil.relativedelta import relativedelta
from typing import List, Optional


def month_start(value: date) -> date:
    """First day of the month containing ``value``."""
    if isinstance(value, datetime):
        value = value.date()
    return value.replace(day=1)


def same_month(a: date, b: date) -> bool:
    return a.year == b.year and a.month == b.month


def anchor_month(start_month: Optional[date] = None) -> date:
    """Month the forecast horizon starts from (defaults to the current month)."""
    return month_start(start_month if start_month is not None else date.today())


def forecast_months(horizon_months: int, start_month: Optional[date] = None) -> List[date]:
    """
    First-of-month dates for each month in the horizon.

    A non-positive horizon yields an empty list.
    """
    anchor = anchor_month(start_month)
    return [anchor + relativedelta(months=i) for i in range(max(horizon_months, 0))]


def month_label(month: date) -> str:
    """Short display label, e.g. ``Jan 2026``."""
    return month.strftime("%b %Y")
