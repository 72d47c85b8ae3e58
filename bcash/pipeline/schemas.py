"""Pydantic schemas for pipeline records submitted to the forecast API."""
from pydantic import BaseModel, Field, model_validator
from datetime import date
from typing import Optional, List
from decimal import Decimal

from bcash.pipeline.models import (
    Deal,
    Expense,
    ExpenseFrequency,
    Stage,
    TimelineEntry,
    default_probability,
)


class TimelineEntryIn(BaseModel):
    """Scheduled revenue for one month of a deal."""
    month: date  # any day inside the target month
    amount: Decimal = Field(..., gt=0, decimal_places=0)

    def to_domain(self) -> TimelineEntry:
        return TimelineEntry(month=self.month, amount=self.amount)


class DealIn(BaseModel):
    """A pipeline deal as loaded by the caller."""
    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, max_length=255)
    stage: Stage
    amount: Decimal = Field(..., gt=0, decimal_places=0)  # whole currency units
    probability: Optional[int] = Field(None, ge=0, le=100)  # defaults to the stage probability
    expected_close_date: Optional[date] = None
    timeline: List[TimelineEntryIn] = []

    def to_domain(self) -> Deal:
        probability = self.probability
        if probability is None:
            probability = default_probability(self.stage)

        return Deal(
            id=self.id,
            name=self.name,
            stage=self.stage,
            amount=self.amount,
            probability=probability,
            expected_close_date=self.expected_close_date,
            timeline=tuple(entry.to_domain() for entry in self.timeline),
        )


class ExpenseIn(BaseModel):
    """An expense as loaded by the caller."""
    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, max_length=255)
    amount: Decimal = Field(..., gt=0, decimal_places=0)
    frequency: ExpenseFrequency
    start_date: date
    end_date: Optional[date] = None  # None = ongoing
    category: Optional[str] = None

    @model_validator(mode="after")
    def check_end_after_start(self) -> "ExpenseIn":
        if self.end_date is not None and self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self

    def to_domain(self) -> Expense:
        return Expense(
            id=self.id,
            name=self.name,
            amount=self.amount,
            frequency=self.frequency,
            start_date=self.start_date,
            end_date=self.end_date,
            category=self.category,
        )


class StageSummaryResponse(BaseModel):
    """Count and value of open deals in one stage."""
    stage: str
    count: int
    total: str
    weighted: str


class PipelineSummaryResponse(BaseModel):
    """Pipeline value across all open stages."""
    stages: List[StageSummaryResponse]
    total_weighted: str
