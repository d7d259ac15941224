"""
Tests for the combined projection summary.
"""

import pytest

from app.models.runway import MAX_WITHDRAWAL_YEARS
from app.models.snapshot import Liabilities
from app.services.projection_service import ProjectionSummary, build_projection_summary


class TestBuildProjectionSummary:
    """Test the summary of all engine results."""

    def test_default_snapshot_summary(self, snapshot):
        """The default plan is on track to the cap in every scenario."""
        summary = build_projection_summary(snapshot)

        assert isinstance(summary, ProjectionSummary)
        assert summary.investable_assets == 325000.0
        assert summary.total_assets == 325000.0
        assert summary.net_worth == 325000.0
        assert summary.monthly_ssa_check == pytest.approx(3000.0)
        assert summary.net_monthly_withdrawal == pytest.approx(2640.0)
        assert summary.total_net_monthly_income == pytest.approx(5640.0)
        assert (summary.runway.low, summary.runway.mid, summary.runway.high) == (115, 115, 115)
        assert summary.on_track is True
        assert summary.ending_balance > 0

    def test_claiming_analysis_included_when_waiting(self, snapshot):
        """A 45-year-old claiming at 67 gets a claim-at-62 comparison."""
        analysis = build_projection_summary(snapshot).claiming_analysis

        assert analysis is not None
        assert analysis.claim_now_age == 62
        assert analysis.claim_wait_age == 67
        assert analysis.break_even_age >= 67

    def test_claiming_analysis_absent_after_claiming_age(self, make_snapshot):
        """No claiming analysis once the user is past the claiming age."""
        summary = build_projection_summary(make_snapshot(age=68, retirement_age=68))
        assert summary.claiming_analysis is None

    def test_claiming_comparison_present(self, snapshot):
        """The 62 versus 70 comparison is always included."""
        comparison = build_projection_summary(snapshot).claiming_comparison
        assert comparison.until_age == 75
        assert comparison.early_advantage > 0

    def test_illiquid_assets_do_not_change_runway(self, snapshot):
        """A house raises net worth but not the runway."""
        with_house = snapshot.model_copy(
            update={
                "assets": snapshot.assets.model_copy(update={"home": 600000.0}),
                "liabilities": Liabilities(mortgage=200000.0),
            }
        )

        base = build_projection_summary(snapshot)
        summary = build_projection_summary(with_house)

        assert summary.net_worth == 725000.0
        assert summary.total_liabilities == 200000.0
        assert summary.runway == base.runway
        assert summary.ending_balance == pytest.approx(base.ending_balance)

    def test_shortfall_not_on_track(self, make_snapshot):
        """A plan that runs dry before the expected life is flagged."""
        snapshot = make_snapshot(
            investable=100000.0, monthly_withdrawal=5000.0, ssa_monthly=0.0
        )

        summary = build_projection_summary(snapshot)

        assert summary.runway.mid < snapshot.expected_life
        assert summary.on_track is False
        assert summary.ending_balance == 0.0

    def test_mid_trajectory_matches_runway(self, snapshot, make_snapshot):
        """The balance path covers exactly the years the mid runway simulates."""
        summary = build_projection_summary(snapshot)
        assert len(summary.mid_trajectory) == MAX_WITHDRAWAL_YEARS
        assert all(balance > 0 for balance in summary.mid_trajectory)

        short = build_projection_summary(
            make_snapshot(investable=100000.0, monthly_withdrawal=5000.0, ssa_monthly=0.0)
        )
        assert short.runway.mid == 65 + len(short.mid_trajectory) - 1
        assert short.mid_trajectory[-1] <= 0

    def test_serializes_to_json(self, snapshot):
        """The summary dumps to JSON-friendly data."""
        data = build_projection_summary(snapshot).model_dump(mode="json")

        assert data["runway"] == {"low": 115, "mid": 115, "high": 115}
        assert "early_advantage" in data["claiming_comparison"]
        assert isinstance(data["mid_trajectory"], list)
