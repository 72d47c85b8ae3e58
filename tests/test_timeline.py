"""Tests for the revenue timeline by stage."""

import pytest
from datetime import date
from decimal import Decimal

from bcash.forecast.timeline import BUCKET_NAMES, STAGE_BUCKETS, calculate_timeline_data
from bcash.pipeline.models import ACTIVE_STAGES, Stage


@pytest.fixture
def pipeline(make_deal):
    return [
        make_deal(id="c1", name="Confirmed Co", stage=Stage.CONFIRMED, amount=300_000,
                  probability=100, expected_close_date=date(2026, 1, 20)),
        make_deal(id="v1", name="Very Likely AB", stage=Stage.VERY_LIKELY, amount=200_000,
                  probability=80, timeline=[(date(2026, 1, 1), 50_000), (date(2026, 1, 15), 25_000),
                                            (date(2026, 2, 1), 125_000)]),
        make_deal(id="h1", name="Hot Lead", stage=Stage.HOT, amount=150_000,
                  probability=60, expected_close_date=date(2026, 1, 5)),
        make_deal(id="m1", name="Maybe Ltd", stage=Stage.MEDIUM, amount=90_000,
                  probability=40, expected_close_date=date(2026, 2, 1)),
        make_deal(id="l1", name="Long Shot Inc", stage=Stage.LONG_SHOT, amount=800_000,
                  probability=20, expected_close_date=date(2026, 1, 1)),
        make_deal(id="x1", name="Gone Away", stage=Stage.LOST, amount=999_000,
                  probability=0, expected_close_date=date(2026, 1, 1)),
    ]


class TestStageBuckets:
    """Tests for the stage -> bucket table."""

    def test_every_stage_mapped(self):
        assert set(STAGE_BUCKETS) == set(Stage)

    def test_lost_has_no_bucket(self):
        assert STAGE_BUCKETS[Stage.LOST] is None

    def test_open_stages_have_distinct_buckets(self):
        assert len(BUCKET_NAMES) == len(ACTIVE_STAGES) == 5
        assert len(set(BUCKET_NAMES)) == 5


class TestCalculateTimelineData:
    """Tests for calculate_timeline_data."""

    def test_one_entry_per_month(self, pipeline, start_month):
        timeline = calculate_timeline_data(pipeline, horizon_months=6, start_month=start_month)
        assert [t.month for t in timeline] == [date(2026, m, 1) for m in range(1, 7)]
        assert timeline[0].month_label == "Jan 2026"

    def test_buckets_use_unweighted_amounts(self, pipeline, start_month):
        january = calculate_timeline_data(pipeline, horizon_months=1, start_month=start_month)[0]

        assert january.confirmed == Decimal(300_000)
        assert january.very_likely == Decimal(75_000)
        assert january.hot == Decimal(150_000)
        assert january.medium == Decimal(0)
        # Probability is ignored: 20% deal counts in full
        assert january.long_shot == Decimal(800_000)

    def test_lost_excluded(self, pipeline, start_month):
        timeline = calculate_timeline_data(pipeline, horizon_months=3, start_month=start_month)
        for month in timeline:
            assert "x1" not in [d.id for d in month.deals]
            assert month.bucket(Stage.LOST) == 0

    def test_total_equals_bucket_sum(self, pipeline, start_month):
        timeline = calculate_timeline_data(pipeline, horizon_months=12, start_month=start_month)
        for month in timeline:
            assert month.total == sum(month.bucket(stage) for stage in ACTIVE_STAGES)
            assert month.total == sum(d.amount for d in month.deals)

    def test_one_record_per_deal_per_month(self, pipeline, start_month):
        """Several entries in one month collapse into a single deal record."""
        january = calculate_timeline_data(pipeline, horizon_months=1, start_month=start_month)[0]
        very_likely = [d for d in january.deals if d.id == "v1"]
        assert len(very_likely) == 1
        assert very_likely[0].amount == Decimal(75_000)
        assert very_likely[0].stage == Stage.VERY_LIKELY

    def test_months_without_revenue_are_empty(self, pipeline, start_month):
        march = calculate_timeline_data(pipeline, horizon_months=3, start_month=start_month)[2]
        assert march.total == 0
        assert march.deals == ()

    @pytest.mark.parametrize("horizon", [0, -1])
    def test_non_positive_horizon(self, pipeline, horizon, start_month):
        assert calculate_timeline_data(pipeline, horizon_months=horizon, start_month=start_month) == []

    def test_to_dict(self, pipeline, start_month):
        february = calculate_timeline_data(pipeline, horizon_months=2, start_month=start_month)[1]
        data = february.to_dict()

        assert data["month"] == "2026-02-01"
        assert data["month_label"] == "Feb 2026"
        assert data["very_likely"] == "125000"
        assert data["medium"] == "90000"
        assert data["total"] == "215000"
        assert {d["stage"] for d in data["deals"]} == {"very_likely", "medium"}
