"""
Projection summary for a snapshot.

Runs every engine function on one snapshot and collects the results the
presentation layer shows: totals, monthly income, runway per scenario,
the mid-scenario balance path, ending balance and the Social Security
claiming analysis.
"""

import logging
from typing import List, Optional

from pydantic import BaseModel, Field

from app.models.benefit_curve import monthly_ssa_check
from app.models.claiming_strategy import (
    ClaimingAnalysis,
    ClaimingComparison,
    analyze_claiming_strategy,
    compare_claiming_extremes,
)
from app.models.ending_balance import project_ending_balance
from app.models.runway import (
    RunwayScenarios,
    project_runway_scenarios,
    project_trajectory,
)
from app.models.snapshot import Snapshot

logger = logging.getLogger(__name__)


class ProjectionSummary(BaseModel):
    """Everything computed from one snapshot."""

    investable_assets: float
    total_assets: float
    total_liabilities: float
    net_worth: float
    monthly_ssa_check: float = Field(..., description="SSA check at the claiming age")
    net_monthly_withdrawal: float = Field(..., description="Withdrawal after tax")
    total_net_monthly_income: float
    runway: RunwayScenarios
    mid_trajectory: List[float] = Field(
        ..., description="Year-end balances from retirement under the mid return"
    )
    on_track: bool = Field(
        ..., description="Mid-scenario runway reaches the expected life"
    )
    ending_balance: float = Field(..., ge=0)
    claiming_analysis: Optional[ClaimingAnalysis] = None
    claiming_comparison: ClaimingComparison


def build_projection_summary(snapshot: Snapshot) -> ProjectionSummary:
    """
    Compute the full projection summary for ``snapshot``.

    Args:
        snapshot: Financial snapshot

    Returns:
        ProjectionSummary: Results of all projections
    """
    ssa_check = monthly_ssa_check(snapshot)
    net_withdrawal = snapshot.net_monthly_withdrawal
    runway = project_runway_scenarios(snapshot)

    summary = ProjectionSummary(
        investable_assets=snapshot.investable_assets,
        total_assets=snapshot.total_assets,
        total_liabilities=snapshot.total_liabilities,
        net_worth=snapshot.net_worth,
        monthly_ssa_check=ssa_check,
        net_monthly_withdrawal=net_withdrawal,
        total_net_monthly_income=net_withdrawal + ssa_check,
        runway=runway,
        mid_trajectory=project_trajectory(snapshot, snapshot.roi_scenarios.mid).tolist(),
        on_track=runway.mid >= snapshot.expected_life,
        ending_balance=project_ending_balance(snapshot),
        claiming_analysis=analyze_claiming_strategy(snapshot),
        claiming_comparison=compare_claiming_extremes(snapshot),
    )

    logger.debug(
        f"Projection: runway {runway.low}/{runway.mid}/{runway.high}, "
        f"ending balance {summary.ending_balance:.2f}, on track {summary.on_track}"
    )
    return summary
