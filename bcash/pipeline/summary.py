"""Pipeline summary: deal count, total and weighted value per open stage."""
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Sequence, Tuple

from bcash.money import format_money
from bcash.pipeline.models import ACTIVE_STAGES, Deal, Stage

ZERO = Decimal("0")


@dataclass(frozen=True)
class StageSummary:
    stage: Stage
    count: int
    total: Decimal
    weighted: Decimal  # amount x probability / 100

    def to_dict(self) -> Dict[str, Any]:
        return {
            "stage": self.stage.value,
            "count": self.count,
            "total": format_money(self.total),
            "weighted": format_money(self.weighted),
        }


@dataclass(frozen=True)
class PipelineSummary:
    stages: Tuple[StageSummary, ...]
    total_weighted: Decimal

    def by_stage(self, stage: Stage) -> StageSummary:
        for summary in self.stages:
            if summary.stage == stage:
                return summary
        raise KeyError(stage)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "stages": [s.to_dict() for s in self.stages],
            "total_weighted": format_money(self.total_weighted),
        }


def calculate_pipeline_summary(deals: Sequence[Deal]) -> PipelineSummary:
    """
    Summarise open deals by stage.

    Lost deals are excluded. Every open stage is reported, in display
    order, with zeros when it has no deals.
    """
    counts = {stage: 0 for stage in ACTIVE_STAGES}
    totals = {stage: ZERO for stage in ACTIVE_STAGES}
    weighted = {stage: ZERO for stage in ACTIVE_STAGES}

    for deal in deals:
        if deal.is_lost:
            continue
        counts[deal.stage] += 1
        totals[deal.stage] += deal.amount
        weighted[deal.stage] += deal.amount * Decimal(deal.probability) / Decimal(100)

    stages = tuple(
        StageSummary(
            stage=stage,
            count=counts[stage],
            total=totals[stage],
            weighted=weighted[stage],
        )
        for stage in ACTIVE_STAGES
    )

    return PipelineSummary(
        stages=stages,
        total_weighted=sum((s.weighted for s in stages), ZERO),
    )
