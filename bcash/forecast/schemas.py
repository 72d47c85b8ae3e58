"""Forecast request and response schemas."""
from pydantic import BaseModel, Field
from datetime import date
from typing import Dict, List, Optional
from decimal import Decimal

from bcash.config import settings
from bcash.pipeline.schemas import DealIn, ExpenseIn


# =============================================================================
# Requests
# =============================================================================

class CashflowRequest(BaseModel):
    """Materialized pipeline and expense ledger to project."""
    deals: List[DealIn] = []
    expenses: List[ExpenseIn] = []
    starting_balance: Optional[Decimal] = None  # defaults to settings.DEFAULT_STARTING_BALANCE
    months: Optional[int] = Field(None, ge=1, le=settings.MAX_FORECAST_MONTHS)
    start_month: Optional[date] = None  # defaults to the current month


class TimelineRequest(BaseModel):
    """Deals to lay out on the revenue timeline."""
    deals: List[DealIn] = []
    months: Optional[int] = Field(None, ge=1, le=settings.MAX_FORECAST_MONTHS)
    start_month: Optional[date] = None


class PipelineSummaryRequest(BaseModel):
    deals: List[DealIn] = []


# =============================================================================
# Cash flow responses
# =============================================================================

class DealContributionResponse(BaseModel):
    """A deal's contribution to a projected month."""
    id: str
    name: str
    amount: str


class MonthlyProjectionResponse(BaseModel):
    """Projection for a single month."""
    month: str
    revenue: str
    expenses: str
    net: str
    balance: str
    deals: List[DealContributionResponse]


class CriticalMonthResponse(BaseModel):
    """A month flagged for high expected revenue."""
    month: str
    reason: str
    impact: str  # "high" | "medium" | "low"


class ScenarioProjectionResponse(BaseModel):
    """Projection for one scenario."""
    scenario: str
    monthly: List[MonthlyProjectionResponse]
    total_revenue: str
    total_expenses: str
    net_change: str
    runway_months: Optional[int]  # None = never runs out within the horizon
    low_runway: bool
    lowest_balance: Optional[str]
    lowest_balance_month: Optional[str]
    critical_months: List[CriticalMonthResponse]


class CashflowProjectionsResponse(BaseModel):
    """Best, realistic and worst case projections."""
    scenarios: Dict[str, ScenarioProjectionResponse]
    starting_balance: str


# =============================================================================
# Timeline responses
# =============================================================================

class TimelineDealResponse(BaseModel):
    id: str
    name: str
    amount: str
    stage: str


class TimelineMonthResponse(BaseModel):
    """Scheduled (unweighted) revenue for one month by stage."""
    month: str
    month_label: str
    confirmed: str
    very_likely: str
    hot: str
    medium: str
    long_shot: str
    total: str
    deals: List[TimelineDealResponse]
