"""
Pipeline domain types.

Deals and expenses arrive already materialized from the caller's data
store. The forecast engine only reads them, so they are modelled as
immutable dataclasses rather than ORM rows.
"""
from enum import Enum
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Dict, Optional, Tuple


# =============================================================================
# ENUMS
# =============================================================================

class Stage(str, Enum):
    """Pipeline position of a deal."""
    CONFIRMED = "confirmed"
    VERY_LIKELY = "very_likely"
    HOT = "hot"
    MEDIUM = "medium"
    LONG_SHOT = "long_shot"
    LOST = "lost"


class ExpenseFrequency(str, Enum):
    """How often an expense is paid."""
    ONE_TIME = "one_time"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    YEARLY = "yearly"


# =============================================================================
# STAGE CONFIGURATION
# =============================================================================

@dataclass(frozen=True)
class StageConfig:
    """Conventional defaults for a pipeline stage."""
    stage: Stage
    default_probability: int  # 0-100
    display_order: int


STAGE_CONFIGS: Dict[Stage, StageConfig] = {
    Stage.CONFIRMED: StageConfig(Stage.CONFIRMED, default_probability=100, display_order=1),
    Stage.VERY_LIKELY: StageConfig(Stage.VERY_LIKELY, default_probability=80, display_order=2),
    Stage.HOT: StageConfig(Stage.HOT, default_probability=60, display_order=3),
    Stage.MEDIUM: StageConfig(Stage.MEDIUM, default_probability=40, display_order=4),
    Stage.LONG_SHOT: StageConfig(Stage.LONG_SHOT, default_probability=20, display_order=5),
    Stage.LOST: StageConfig(Stage.LOST, default_probability=0, display_order=6),
}

# Stages that can still produce revenue, in display order
ACTIVE_STAGES: Tuple[Stage, ...] = tuple(
    config.stage
    for config in sorted(STAGE_CONFIGS.values(), key=lambda c: c.display_order)
    if config.stage != Stage.LOST
)


def default_probability(stage: Stage) -> int:
    """Default win probability (0-100) for a stage."""
    return STAGE_CONFIGS[stage].default_probability


# =============================================================================
# RECORDS
# =============================================================================

@dataclass(frozen=True)
class TimelineEntry:
    """A scheduled revenue amount for one deal in one calendar month."""
    month: date  # day of month is ignored
    amount: Decimal


@dataclass(frozen=True)
class Deal:
    """
    A sales pipeline deal.

    If ``timeline`` has entries they define when revenue lands; otherwise
    the full ``amount`` lands in the month of ``expected_close_date``.
    """
    id: str
    name: str
    stage: Stage
    amount: Decimal
    probability: int  # 0-100
    expected_close_date: Optional[date] = None
    timeline: Tuple[TimelineEntry, ...] = field(default_factory=tuple)

    def __post_init__(self):
        # Accept any iterable of entries but store an immutable tuple
        object.__setattr__(self, "timeline", tuple(self.timeline))

    @property
    def is_lost(self) -> bool:
        return self.stage == Stage.LOST


@dataclass(frozen=True)
class Expense:
    """A recurring or one-off cost."""
    id: str
    name: str
    amount: Decimal
    frequency: ExpenseFrequency
    start_date: date
    end_date: Optional[date] = None  # None = ongoing
    category: Optional[str] = None
