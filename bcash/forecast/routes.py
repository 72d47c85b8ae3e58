"""Forecast API routes.

Callers post already-loaded deals and expenses; nothing is read from or
written to storage here.
"""
import logging
from fastapi import APIRouter, HTTPException
from typing import List

from bcash.forecast.engine import calculate_cashflow_projections
from bcash.forecast.schemas import (
    CashflowProjectionsResponse,
    CashflowRequest,
    PipelineSummaryRequest,
    TimelineMonthResponse,
    TimelineRequest,
)
from bcash.forecast.timeline import calculate_timeline_data
from bcash.pipeline.schemas import PipelineSummaryResponse
from bcash.pipeline.summary import calculate_pipeline_summary

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/cashflow", response_model=CashflowProjectionsResponse)
async def get_cashflow_projections(data: CashflowRequest):
    """
    Project monthly cash balance under the best, realistic and worst scenarios.

    Args:
        data: Deals (with timeline entries), expenses, and optional
            starting balance, horizon and start month

    Returns:
        Per-scenario monthly projections with totals, runway and critical months
    """
    try:
        projections = calculate_cashflow_projections(
            deals=[deal.to_domain() for deal in data.deals],
            expenses=[expense.to_domain() for expense in data.expenses],
            starting_balance=data.starting_balance,
            horizon_months=data.months,
            start_month=data.start_month,
        )
        return projections.to_dict()
    except Exception as e:
        logger.exception("Failed to calculate cashflow projections")
        raise HTTPException(status_code=500, detail=f"Error calculating cashflow projections: {str(e)}")


@router.post("/timeline", response_model=List[TimelineMonthResponse])
async def get_timeline(data: TimelineRequest):
    """
    Get scheduled deal revenue per month, split by pipeline stage.

    Amounts are unweighted: this shows what is scheduled, not what is likely.
    """
    try:
        timeline = calculate_timeline_data(
            deals=[deal.to_domain() for deal in data.deals],
            horizon_months=data.months,
            start_month=data.start_month,
        )
        return [month.to_dict() for month in timeline]
    except Exception as e:
        logger.exception("Failed to calculate timeline data")
        raise HTTPException(status_code=500, detail=f"Error calculating timeline data: {str(e)}")


@router.post("/pipeline-summary", response_model=PipelineSummaryResponse)
async def get_pipeline_summary(data: PipelineSummaryRequest):
    """Get deal count, total and probability-weighted value per open stage."""
    try:
        summary = calculate_pipeline_summary([deal.to_domain() for deal in data.deals])
        return summary.to_dict()
    except Exception as e:
        logger.exception("Failed to calculate pipeline summary")
        raise HTTPException(status_code=500, detail=f"Error calculating pipeline summary: {str(e)}")
