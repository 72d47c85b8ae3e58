"""
Revenue timeline by pipeline stage.

Answers "what revenue is scheduled, and when" rather than "what is
likely": deal amounts are taken unweighted and grouped into one bucket
per open stage for each month of the horizon.
"""
import logging
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Any, Dict, List, Optional, Sequence, Tuple

from bcash.config import settings
from bcash.forecast.months import forecast_months, month_label
from bcash.forecast.revenue import monthly_contribution, resolve_schedule
from bcash.money import format_money
from bcash.pipeline.models import Deal, Stage

logger = logging.getLogger(__name__)

ZERO = Decimal("0")

# Every stage must appear here; lost deals have no bucket
STAGE_BUCKETS: Dict[Stage, Optional[str]] = {
    Stage.CONFIRMED: "confirmed",
    Stage.VERY_LIKELY: "very_likely",
    Stage.HOT: "hot",
    Stage.MEDIUM: "medium",
    Stage.LONG_SHOT: "long_shot",
    Stage.LOST: None,
}

BUCKET_NAMES: Tuple[str, ...] = tuple(b for b in STAGE_BUCKETS.values() if b is not None)


@dataclass(frozen=True)
class TimelineDeal:
    """A deal's unweighted revenue in one month."""
    id: str
    name: str
    amount: Decimal
    stage: Stage

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "amount": format_money(self.amount),
            "stage": self.stage.value,
        }


@dataclass(frozen=True)
class TimelineData:
    """Scheduled revenue for one month, split by stage."""
    month: date
    month_label: str
    confirmed: Decimal = ZERO
    very_likely: Decimal = ZERO
    hot: Decimal = ZERO
    medium: Decimal = ZERO
    long_shot: Decimal = ZERO
    total: Decimal = ZERO
    deals: Tuple[TimelineDeal, ...] = field(default_factory=tuple)

    def bucket(self, stage: Stage) -> Decimal:
        """Bucket total for ``stage`` (always zero for lost)."""
        name = STAGE_BUCKETS[stage]
        return getattr(self, name) if name is not None else ZERO

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "month": self.month.isoformat(),
            "month_label": self.month_label,
        }
        for name in BUCKET_NAMES:
            data[name] = format_money(getattr(self, name))
        data["total"] = format_money(self.total)
        data["deals"] = [d.to_dict() for d in self.deals]
        return data


def calculate_timeline_data(
    deals: Sequence[Deal],
    horizon_months: Optional[int] = None,
    start_month: Optional[date] = None,
) -> List[TimelineData]:
    """
    Build the per-month, per-stage revenue timeline.

    Args:
        deals: Pipeline deals (timeline entries already attached)
        horizon_months: Months to cover (defaults to settings.DEFAULT_FORECAST_MONTHS)
        start_month: First month (defaults to the current month)

    Returns:
        One TimelineData per month, in order
    """
    if horizon_months is None:
        horizon_months = settings.DEFAULT_FORECAST_MONTHS

    months = forecast_months(horizon_months, start_month)
    open_deals = [(deal, resolve_schedule(deal)) for deal in deals if not deal.is_lost]

    timeline = []
    for month in months:
        buckets = {name: ZERO for name in BUCKET_NAMES}
        total = ZERO
        contributing = []

        for deal, schedule in open_deals:
            contribution = monthly_contribution(deal, month, None, schedule)
            if not contribution.attributed:
                continue

            buckets[STAGE_BUCKETS[deal.stage]] += contribution.amount
            total += contribution.amount
            contributing.append(TimelineDeal(
                id=deal.id,
                name=deal.name,
                amount=contribution.amount,
                stage=deal.stage,
            ))

        timeline.append(TimelineData(
            month=month,
            month_label=month_label(month),
            total=total,
            deals=tuple(contributing),
            **buckets,
        ))

    logger.debug(f"Built revenue timeline: {len(open_deals)} open deals over {len(months)} months")

    return timeline
