"""Shared test fixtures for BCash backend tests."""
import pytest
from datetime import date
from decimal import Decimal

from bcash.pipeline.models import Deal, Expense, ExpenseFrequency, Stage, TimelineEntry


@pytest.fixture
def start_month():
    """Fixed forecast anchor so projections are deterministic."""
    return date(2026, 1, 1)


@pytest.fixture
def make_deal():
    """Factory for deals with sensible defaults."""
    def _make_deal(
        id="deal_1",
        name="Acme Corp",
        stage=Stage.HOT,
        amount=100_000,
        probability=60,
        expected_close_date=None,
        timeline=(),
    ):
        return Deal(
            id=id,
            name=name,
            stage=stage,
            amount=Decimal(amount),
            probability=probability,
            expected_close_date=expected_close_date,
            timeline=tuple(
                TimelineEntry(month=month, amount=Decimal(entry_amount))
                for month, entry_amount in timeline
            ),
        )
    return _make_deal


@pytest.fixture
def make_expense():
    """Factory for expenses with sensible defaults."""
    def _make_expense(
        id="exp_1",
        name="Office rent",
        amount=100_000,
        frequency=ExpenseFrequency.MONTHLY,
        start_date=date(2026, 1, 1),
        end_date=None,
        category=None,
    ):
        return Expense(
            id=id,
            name=name,
            amount=Decimal(amount),
            frequency=frequency,
            start_date=start_date,
            end_date=end_date,
            category=category,
        )
    return _make_expense
