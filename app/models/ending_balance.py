"""Projected investable balance at the expected end of life."""

from .runway import accumulate, annual_ssa_income
from .snapshot import Snapshot


def project_ending_balance(snapshot: Snapshot) -> float:
    """
    Balance left at ``expected_life`` under the mid return scenario.

    Uses the same yearly rules as the runway projection but runs for exactly
    ``expected_life - retirement_age`` retirement years.

    Returns:
        The final balance, or 0.0 if assets go negative at any point
    """
    return_rate_percent = snapshot.roi_scenarios.mid
    annual_return = return_rate_percent / 100
    annual_inflation = snapshot.inflation_rate / 100

    assets, annual_withdrawal = accumulate(snapshot, return_rate_percent)

    for year in range(snapshot.expected_life - snapshot.retirement_age):
        current_age = snapshot.retirement_age + year
        ssa_income = annual_ssa_income(snapshot, current_age)

        assets = assets * (1 + annual_return) + ssa_income - annual_withdrawal
        annual_withdrawal = annual_withdrawal * (1 + annual_inflation)

        if assets < 0:
            return 0.0

    return max(assets, 0.0)
