"""Snapshot model and projection engine for retirement runway planning."""

from .snapshot import (
    Assets,
    AssetsPatch,
    Liabilities,
    LiabilitiesPatch,
    RoiScenarios,
    RoiScenariosPatch,
    Snapshot,
    SnapshotPatch,
    apply_patch,
    default_snapshot,
    merge_with_defaults,
)
from .benefit_curve import (
    EARLIEST_CLAIMING_AGE,
    FULL_RETIREMENT_AGE,
    LATEST_CLAIMING_AGE,
    benefit_multiplier,
    monthly_benefit,
    monthly_ssa_check,
)
from .runway import (
    MAX_WITHDRAWAL_YEARS,
    RunwayScenarios,
    accumulate,
    annual_ssa_income,
    project_runway,
    project_runway_scenarios,
    project_trajectory,
)
from .ending_balance import project_ending_balance
from .claiming_strategy import (
    BREAK_EVEN_HORIZON,
    ClaimingAnalysis,
    ClaimingComparison,
    analyze_claiming_strategy,
    claim_now_age,
    compare_claiming_extremes,
    cumulative_cash,
    find_break_even,
)

__all__ = [
    "Snapshot",
    "SnapshotPatch",
    "Assets",
    "AssetsPatch",
    "Liabilities",
    "LiabilitiesPatch",
    "RoiScenarios",
    "RoiScenariosPatch",
    "apply_patch",
    "default_snapshot",
    "merge_with_defaults",
    "EARLIEST_CLAIMING_AGE",
    "FULL_RETIREMENT_AGE",
    "LATEST_CLAIMING_AGE",
    "benefit_multiplier",
    "monthly_benefit",
    "monthly_ssa_check",
    "MAX_WITHDRAWAL_YEARS",
    "RunwayScenarios",
    "accumulate",
    "annual_ssa_income",
    "project_runway",
    "project_runway_scenarios",
    "project_trajectory",
    "project_ending_balance",
    "BREAK_EVEN_HORIZON",
    "ClaimingAnalysis",
    "ClaimingComparison",
    "analyze_claiming_strategy",
    "claim_now_age",
    "compare_claiming_extremes",
    "cumulative_cash",
    "find_break_even",
]
