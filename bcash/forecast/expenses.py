"""
Expense accrual.

Decides how much of each expense lands in a projected month. Quarterly
and yearly expenses are keyed to fixed calendar months (quarter starts
and January), not to an offset from the expense's own start date.
"""
from datetime import date
from decimal import Decimal
from typing import Iterable

from bcash.forecast.months import month_start, same_month
from bcash.pipeline.models import Expense, ExpenseFrequency

ZERO = Decimal("0")

QUARTER_START_MONTHS = (1, 4, 7, 10)
YEAR_START_MONTH = 1


def is_active(expense: Expense, month: date) -> bool:
    """Whether ``month`` falls inside the expense's start/end window."""
    month = month_start(month)
    if month < month_start(expense.start_date):
        return False
    if expense.end_date is not None and month > month_start(expense.end_date):
        return False
    return True


def monthly_expense_amount(expense: Expense, month: date) -> Decimal:
    """Amount of ``expense`` accrued in ``month`` (zero if none)."""
    if not is_active(expense, month):
        return ZERO

    if expense.frequency == ExpenseFrequency.ONE_TIME:
        return expense.amount if same_month(month, expense.start_date) else ZERO
    if expense.frequency == ExpenseFrequency.MONTHLY:
        return expense.amount
    if expense.frequency == ExpenseFrequency.QUARTERLY:
        return expense.amount if month.month in QUARTER_START_MONTHS else ZERO
    if expense.frequency == ExpenseFrequency.YEARLY:
        return expense.amount if month.month == YEAR_START_MONTH else ZERO
    return ZERO


def total_monthly_expenses(expenses: Iterable[Expense], month: date) -> Decimal:
    """Sum of all expenses accrued in ``month``."""
    return sum((monthly_expense_amount(expense, month) for expense in expenses), ZERO)
