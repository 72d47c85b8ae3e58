"""
Scenario probability model.

Each scenario turns a deal's stated win probability into the share of
its revenue that is counted:

- BEST: every open deal closes in full
- REALISTIC: revenue weighted linearly by probability
- WORST: only deals at or above the "very likely" cutoff count, in full
"""
from enum import Enum
from decimal import Decimal
from typing import Optional, Tuple

from bcash.config import settings


class Scenario(str, Enum):
    """Conversion-rate assumption applied to the whole pipeline."""
    BEST = "best"
    REALISTIC = "realistic"
    WORST = "worst"


SCENARIOS: Tuple[Scenario, ...] = (Scenario.BEST, Scenario.REALISTIC, Scenario.WORST)

FULL = Decimal("1")
NONE = Decimal("0")


def probability_multiplier(
    scenario: Scenario,
    deal_probability: int,
    worst_case_cutoff: Optional[int] = None,
) -> Decimal:
    """
    Weight in [0, 1] applied to a deal's revenue under ``scenario``.

    Args:
        scenario: Scenario being projected
        deal_probability: Deal win probability, 0-100
        worst_case_cutoff: Minimum probability counted in the worst case
            (defaults to settings.WORST_CASE_PROBABILITY_CUTOFF)
    """
    if scenario == Scenario.BEST:
        return FULL
    if scenario == Scenario.REALISTIC:
        return Decimal(deal_probability) / Decimal(100)
    if scenario == Scenario.WORST:
        if worst_case_cutoff is None:
            worst_case_cutoff = settings.WORST_CASE_PROBABILITY_CUTOFF
        return FULL if deal_probability >= worst_case_cutoff else NONE
    return NONE
