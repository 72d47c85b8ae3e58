"""Pipeline module - deals, expenses and stage configuration."""
from bcash.pipeline.models import Deal, Expense, ExpenseFrequency, Stage, TimelineEntry
from bcash.pipeline.summary import PipelineSummary, calculate_pipeline_summary

__all__ = [
    "Deal",
    "Expense",
    "ExpenseFrequency",
    "Stage",
    "TimelineEntry",
    "PipelineSummary",
    "calculate_pipeline_summary",
]
