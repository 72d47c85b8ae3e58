"""
Revenue recognition for pipeline deals.

A deal's revenue schedule is resolved once into one of three shapes:

- ScheduledRevenue: explicit timeline entries, summed per calendar month
- SingleDateRevenue: no entries, full amount in the expected close month
- NoRevenue: lost deals, or deals with neither entries nor a close date

The projector then asks the schedule for each month's amount and applies
the scenario weighting on top.
"""
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional, Tuple, Union

from bcash.forecast.months import same_month
from bcash.forecast.probability import Scenario, probability_multiplier
from bcash.pipeline.models import Deal, TimelineEntry

ZERO = Decimal("0")


@dataclass(frozen=True)
class ScheduledRevenue:
    """Revenue spread across explicit timeline entries."""
    entries: Tuple[TimelineEntry, ...]

    def amount_for(self, month: date) -> Decimal:
        # Several entries in the same month are additive
        return sum(
            (entry.amount for entry in self.entries if same_month(entry.month, month)),
            ZERO,
        )


@dataclass(frozen=True)
class SingleDateRevenue:
    """Whole deal amount landing in the expected close month."""
    close_date: date
    amount: Decimal

    def amount_for(self, month: date) -> Decimal:
        return self.amount if same_month(self.close_date, month) else ZERO


@dataclass(frozen=True)
class NoRevenue:
    """Deal that never contributes."""

    def amount_for(self, month: date) -> Decimal:
        return ZERO


RevenueSchedule = Union[ScheduledRevenue, SingleDateRevenue, NoRevenue]


@dataclass(frozen=True)
class Contribution:
    """A deal's (possibly weighted) revenue for one month."""
    amount: Decimal
    attributed: bool  # True when the deal visibly contributed


def resolve_schedule(deal: Deal) -> RevenueSchedule:
    """Pick the revenue schedule for a deal: timeline entries win over the close date."""
    if deal.is_lost:
        return NoRevenue()
    if deal.timeline:
        return ScheduledRevenue(entries=deal.timeline)
    if deal.expected_close_date is not None:
        return SingleDateRevenue(close_date=deal.expected_close_date, amount=deal.amount)
    return NoRevenue()


def monthly_contribution(
    deal: Deal,
    month: date,
    scenario: Optional[Scenario],
    schedule: Optional[RevenueSchedule] = None,
) -> Contribution:
    """
    Revenue a deal contributes to ``month``.

    Args:
        deal: The deal being evaluated
        month: Any date inside the target month
        scenario: Scenario weighting to apply; None gives the unweighted amount
        schedule: Pre-resolved schedule for ``deal`` (resolved here if omitted)

    Returns:
        Contribution whose ``attributed`` flag is set only for a strictly
        positive amount, so a worst-case deal below the cutoff leaves no trace.
    """
    if schedule is None:
        schedule = resolve_schedule(deal)

    amount = schedule.amount_for(month)
    if scenario is not None and amount:
        amount = amount * probability_multiplier(scenario, deal.probability)

    return Contribution(amount=amount, attributed=amount > 0)
