"""
Cash flow scenario projector.

Simulates a month-by-month running balance for each scenario (best,
realistic, worst) from the sales pipeline and the expense ledger:

1. Revenue per month from deals, weighted by the scenario
2. Expenses per month from the accrual rules
3. Running balance starting from the supplied starting balance
4. Runway: index of the first month the balance reaches zero or below
5. Critical months: months whose revenue crosses the flagging threshold

Everything is computed on the fly from the inputs. Nothing is stored.
"""
import logging
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Tuple

from bcash.config import settings
from bcash.forecast.expenses import total_monthly_expenses
from bcash.forecast.months import forecast_months
from bcash.forecast.probability import SCENARIOS, Scenario
from bcash.forecast.revenue import RevenueSchedule, monthly_contribution, resolve_schedule
from bcash.money import format_money
from bcash.pipeline.models import Deal, Expense

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


class CriticalImpact(str, Enum):
    """How much attention a critical month needs."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"  # not produced while the flagging threshold equals the medium cutoff


# =============================================================================
# RESULT TYPES
# =============================================================================

@dataclass(frozen=True)
class DealContribution:
    """Revenue one deal contributed to a projected month."""
    id: str
    name: str
    amount: Decimal

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, "amount": format_money(self.amount)}


@dataclass(frozen=True)
class MonthlyProjection:
    """One projected month under one scenario."""
    month: date  # first day of month
    revenue: Decimal
    expenses: Decimal
    net: Decimal
    balance: Decimal
    deals: Tuple[DealContribution, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "month": self.month.isoformat(),
            "revenue": format_money(self.revenue),
            "expenses": format_money(self.expenses),
            "net": format_money(self.net),
            "balance": format_money(self.balance),
            "deals": [d.to_dict() for d in self.deals],
        }


@dataclass(frozen=True)
class CriticalMonth:
    """A month flagged for attention because of high expected revenue."""
    month: date
    reason: str
    impact: CriticalImpact

    def to_dict(self) -> Dict[str, Any]:
        return {
            "month": self.month.isoformat(),
            "reason": self.reason,
            "impact": self.impact.value,
        }


@dataclass(frozen=True)
class ScenarioProjection:
    """Full projection for a single scenario."""
    scenario: Scenario
    monthly: Tuple[MonthlyProjection, ...]
    total_revenue: Decimal
    total_expenses: Decimal
    runway_months: Optional[int]  # None = balance never reaches zero
    critical_months: Tuple[CriticalMonth, ...] = field(default_factory=tuple)

    @property
    def net_change(self) -> Decimal:
        return self.total_revenue - self.total_expenses

    @property
    def lowest_balance(self) -> Optional[Decimal]:
        if not self.monthly:
            return None
        return min(m.balance for m in self.monthly)

    @property
    def lowest_balance_month(self) -> Optional[date]:
        if not self.monthly:
            return None
        # min() keeps the first month on ties
        return min(self.monthly, key=lambda m: m.balance).month

    @property
    def low_runway(self) -> bool:
        return (
            self.runway_months is not None
            and self.runway_months < settings.LOW_RUNWAY_WARNING_MONTHS
        )

    def to_dict(self) -> Dict[str, Any]:
        lowest_balance = self.lowest_balance
        lowest_month = self.lowest_balance_month
        return {
            "scenario": self.scenario.value,
            "monthly": [m.to_dict() for m in self.monthly],
            "total_revenue": format_money(self.total_revenue),
            "total_expenses": format_money(self.total_expenses),
            "net_change": format_money(self.net_change),
            "runway_months": self.runway_months,
            "low_runway": self.low_runway,
            "lowest_balance": format_money(lowest_balance) if lowest_balance is not None else None,
            "lowest_balance_month": lowest_month.isoformat() if lowest_month else None,
            "critical_months": [c.to_dict() for c in self.critical_months],
        }


@dataclass(frozen=True)
class CashflowProjections:
    """Projections for all three scenarios from one starting balance."""
    best: ScenarioProjection
    realistic: ScenarioProjection
    worst: ScenarioProjection
    starting_balance: Decimal

    @property
    def scenarios(self) -> Dict[Scenario, ScenarioProjection]:
        return {
            Scenario.BEST: self.best,
            Scenario.REALISTIC: self.realistic,
            Scenario.WORST: self.worst,
        }

    def for_scenario(self, scenario: Scenario) -> ScenarioProjection:
        return self.scenarios[scenario]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "scenarios": {s.value: p.to_dict() for s, p in self.scenarios.items()},
            "starting_balance": format_money(self.starting_balance),
        }


# =============================================================================
# RUNWAY & CRITICAL MONTHS
# =============================================================================

def calculate_runway(monthly: Sequence[MonthlyProjection]) -> Optional[int]:
    """Index of the first month whose balance is at or below zero, else None."""
    for i, projection in enumerate(monthly):
        if projection.balance <= 0:
            return i
    return None


def _critical_reason(projection: MonthlyProjection) -> str:
    count = len(projection.deals)
    names = ", ".join(d.name for d in projection.deals)
    return f"{count} deal{'s' if count > 1 else ''}: {names}"


def identify_critical_months(
    monthly: Sequence[MonthlyProjection],
    threshold: Optional[Decimal] = None,
    high_impact_threshold: Optional[Decimal] = None,
) -> List[CriticalMonth]:
    """
    Flag months whose revenue reaches ``threshold``.

    Impact is HIGH at or above ``high_impact_threshold`` and MEDIUM
    otherwise. LOW is never produced while ``threshold`` is at or above
    the medium cutoff.
    """
    if threshold is None:
        threshold = Decimal(settings.CRITICAL_REVENUE_THRESHOLD)
    if high_impact_threshold is None:
        high_impact_threshold = Decimal(settings.HIGH_IMPACT_REVENUE_THRESHOLD)
    medium_impact_threshold = Decimal(settings.CRITICAL_REVENUE_THRESHOLD)

    critical = []
    for projection in monthly:
        if projection.revenue < threshold:
            continue

        if projection.revenue >= high_impact_threshold:
            impact = CriticalImpact.HIGH
        elif projection.revenue >= medium_impact_threshold:
            impact = CriticalImpact.MEDIUM
        else:
            impact = CriticalImpact.LOW

        critical.append(CriticalMonth(
            month=projection.month,
            reason=_critical_reason(projection),
            impact=impact,
        ))

    return critical


# =============================================================================
# PROJECTION
# =============================================================================

def _monthly_revenue(
    schedules: Sequence[Tuple[Deal, RevenueSchedule]],
    month: date,
    scenario: Scenario,
) -> Tuple[Decimal, List[DealContribution]]:
    """Weighted revenue for a month plus the deals that contributed to it."""
    revenue = ZERO
    contributing = []

    for deal, schedule in schedules:
        contribution = monthly_contribution(deal, month, scenario, schedule)
        if contribution.attributed:
            revenue += contribution.amount
            contributing.append(DealContribution(
                id=deal.id,
                name=deal.name,
                amount=contribution.amount,
            ))

    return revenue, contributing


def project_scenario(
    scenario: Scenario,
    deals: Sequence[Deal],
    expenses: Sequence[Expense],
    starting_balance: Decimal,
    months: Sequence[date],
    schedules: Optional[Sequence[Tuple[Deal, RevenueSchedule]]] = None,
) -> ScenarioProjection:
    """
    Run the running-balance simulation for one scenario.

    Args:
        scenario: Scenario weighting for deal revenue
        deals: Pipeline deals (timeline entries already attached)
        expenses: Expense ledger
        starting_balance: Cash on hand before the first projected month
        months: First-of-month dates to project, in order
        schedules: Pre-resolved (deal, schedule) pairs, resolved here if omitted

    Returns:
        ScenarioProjection with monthly rows, totals, runway and critical months
    """
    if schedules is None:
        schedules = [(deal, resolve_schedule(deal)) for deal in deals]

    monthly = []
    balance = starting_balance

    for month in months:
        revenue, contributing = _monthly_revenue(schedules, month, scenario)
        expense_amount = total_monthly_expenses(expenses, month)
        net = revenue - expense_amount
        balance += net

        monthly.append(MonthlyProjection(
            month=month,
            revenue=revenue,
            expenses=expense_amount,
            net=net,
            balance=balance,
            deals=tuple(contributing),
        ))

    total_revenue = sum((m.revenue for m in monthly), ZERO)
    total_expenses = sum((m.expenses for m in monthly), ZERO)
    runway = calculate_runway(monthly)
    critical = identify_critical_months(monthly)

    logger.debug(
        f"Scenario {scenario.value}: revenue={total_revenue} expenses={total_expenses} "
        f"runway={runway} critical_months={len(critical)}"
    )

    return ScenarioProjection(
        scenario=scenario,
        monthly=tuple(monthly),
        total_revenue=total_revenue,
        total_expenses=total_expenses,
        runway_months=runway,
        critical_months=tuple(critical),
    )


def calculate_cashflow_projections(
    deals: Sequence[Deal],
    expenses: Sequence[Expense],
    starting_balance: Optional[Any] = None,
    horizon_months: Optional[int] = None,
    start_month: Optional[date] = None,
) -> CashflowProjections:
    """
    Project cash flow for the best, realistic and worst scenarios.

    Args:
        deals: Pipeline deals; lost deals are ignored
        expenses: Expense ledger
        starting_balance: Cash on hand (defaults to settings.DEFAULT_STARTING_BALANCE)
        horizon_months: Months to project (defaults to settings.DEFAULT_FORECAST_MONTHS)
        start_month: First projected month (defaults to the current month)

    Returns:
        CashflowProjections holding one ScenarioProjection per scenario
    """
    if starting_balance is None:
        starting_balance = settings.DEFAULT_STARTING_BALANCE
    if horizon_months is None:
        horizon_months = settings.DEFAULT_FORECAST_MONTHS

    balance = Decimal(str(starting_balance))
    months = forecast_months(horizon_months, start_month)
    schedules = [(deal, resolve_schedule(deal)) for deal in deals]

    logger.info(
        f"Projecting cash flow: {len(deals)} deals, {len(expenses)} expenses, "
        f"{len(months)} months from {months[0].isoformat() if months else 'n/a'}"
    )

    projections = {
        scenario: project_scenario(scenario, deals, expenses, balance, months, schedules)
        for scenario in SCENARIOS
    }

    return CashflowProjections(
        best=projections[Scenario.BEST],
        realistic=projections[Scenario.REALISTIC],
        worst=projections[Scenario.WORST],
        starting_balance=balance,
    )
