"""Tests for the pipeline summary and stage configuration."""

from decimal import Decimal

from bcash.pipeline.models import ACTIVE_STAGES, STAGE_CONFIGS, Stage, default_probability
from bcash.pipeline.summary import calculate_pipeline_summary


class TestStageConfig:
    """Tests for stage defaults."""

    def test_default_probabilities(self):
        assert default_probability(Stage.CONFIRMED) == 100
        assert default_probability(Stage.VERY_LIKELY) == 80
        assert default_probability(Stage.HOT) == 60
        assert default_probability(Stage.MEDIUM) == 40
        assert default_probability(Stage.LONG_SHOT) == 20
        assert default_probability(Stage.LOST) == 0

    def test_every_stage_configured(self):
        assert set(STAGE_CONFIGS) == set(Stage)

    def test_active_stages_in_display_order(self):
        assert ACTIVE_STAGES == (
            Stage.CONFIRMED,
            Stage.VERY_LIKELY,
            Stage.HOT,
            Stage.MEDIUM,
            Stage.LONG_SHOT,
        )


class TestPipelineSummary:
    """Tests for calculate_pipeline_summary."""

    def test_counts_totals_and_weighted(self, make_deal):
        deals = [
            make_deal(id="h1", stage=Stage.HOT, amount=100_000, probability=60),
            make_deal(id="h2", stage=Stage.HOT, amount=50_000, probability=50),
            make_deal(id="c1", stage=Stage.CONFIRMED, amount=200_000, probability=100),
        ]
        summary = calculate_pipeline_summary(deals)

        hot = summary.by_stage(Stage.HOT)
        assert hot.count == 2
        assert hot.total == Decimal(150_000)
        assert hot.weighted == Decimal(85_000)

        assert summary.by_stage(Stage.CONFIRMED).weighted == Decimal(200_000)
        assert summary.total_weighted == Decimal(285_000)

    def test_lost_deals_excluded(self, make_deal):
        deals = [make_deal(id="x", stage=Stage.LOST, amount=500_000, probability=0)]
        summary = calculate_pipeline_summary(deals)

        assert [s.stage for s in summary.stages] == list(ACTIVE_STAGES)
        assert all(s.count == 0 for s in summary.stages)
        assert summary.total_weighted == 0

    def test_to_dict(self, make_deal):
        summary = calculate_pipeline_summary([make_deal(stage=Stage.MEDIUM, amount=10_000, probability=40)])
        data = summary.to_dict()

        assert data["stages"][3]["stage"] == "medium"
        assert data["stages"][3]["count"] == 1
        assert data["stages"][3]["weighted"] == "4000"
        assert data["total_weighted"] == "4000"
