"""Forecast module - scenario cash flow projections and revenue timeline."""
from bcash.forecast.engine import (
    CashflowProjections,
    ScenarioProjection,
    MonthlyProjection,
    calculate_cashflow_projections,
)
from bcash.forecast.probability import Scenario
from bcash.forecast.timeline import TimelineData, calculate_timeline_data

__all__ = [
    "CashflowProjections",
    "ScenarioProjection",
    "MonthlyProjection",
    "Scenario",
    "TimelineData",
    "calculate_cashflow_projections",
    "calculate_timeline_data",
]
