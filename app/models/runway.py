"""
Runway projection: how long investable assets last.

The simulation runs on whole years in two phases. During accumulation
(today until retirement) assets compound and the withdrawal target inflates.
During withdrawal, each year assets grow, Social Security is added once the
claiming age is reached, and the inflated withdrawal is taken out.
"""

from typing import List, Tuple

import numpy as np
from numpy.typing import NDArray
from pydantic import BaseModel, ConfigDict, Field

from .benefit_curve import monthly_ssa_check
from .snapshot import Snapshot

# Hard cap on simulated retirement years, independent of expected_life
MAX_WITHDRAWAL_YEARS = 50


class RunwayScenarios(BaseModel):
    """Runway age under each return scenario."""

    model_config = ConfigDict(frozen=True)

    low: int = Field(..., description="Runway age at the low return")
    mid: int = Field(..., description="Runway age at the mid return")
    high: int = Field(..., description="Runway age at the high return")


def accumulate(snapshot: Snapshot, return_rate_percent: float) -> Tuple[float, float]:
    """
    Run the accumulation phase.

    Args:
        snapshot: Financial snapshot
        return_rate_percent: Annual return in percent

    Returns:
        Tuple of (investable assets at retirement, annual withdrawal at retirement)
    """
    annual_return = return_rate_percent / 100
    annual_inflation = snapshot.inflation_rate / 100

    assets = snapshot.investable_assets
    annual_withdrawal = snapshot.monthly_withdrawal * 12

    # range() of a negative span is empty
    for _ in range(snapshot.retirement_age - snapshot.age):
        assets = assets * (1 + annual_return)
        annual_withdrawal = annual_withdrawal * (1 + annual_inflation)

    return assets, annual_withdrawal


def annual_ssa_income(snapshot: Snapshot, current_age: int) -> float:
    """
    Social Security received during the year the user is ``current_age``.

    Zero before the claiming age. COLA compounds from today, not from the
    claiming date.
    """
    if current_age < snapshot.ssa_claiming_age:
        return 0.0
    years_of_cola = current_age - snapshot.age
    annual_inflation = snapshot.inflation_rate / 100
    return monthly_ssa_check(snapshot) * 12 * (1 + annual_inflation) ** years_of_cola


def _withdrawal_balances(snapshot: Snapshot, return_rate_percent: float) -> List[float]:
    """End-of-year balances until depletion or the year cap."""
    annual_return = return_rate_percent / 100
    annual_inflation = snapshot.inflation_rate / 100
    assets, annual_withdrawal = accumulate(snapshot, return_rate_percent)

    balances: List[float] = []
    while assets > 0 and len(balances) < MAX_WITHDRAWAL_YEARS:
        current_age = snapshot.retirement_age + len(balances)
        ssa_income = annual_ssa_income(snapshot, current_age)

        assets = assets * (1 + annual_return) + ssa_income - annual_withdrawal
        annual_withdrawal = annual_withdrawal * (1 + annual_inflation)
        balances.append(assets)

    return balances


def project_runway(snapshot: Snapshot, return_rate_percent: float) -> int:
    """
    Age at which investable assets run out.

    Args:
        snapshot: Financial snapshot
        return_rate_percent: Annual return in percent (may be zero or negative)

    Returns:
        The retirement age plus the number of full years survived, capped at
        ``retirement_age + MAX_WITHDRAWAL_YEARS``
    """
    balances = _withdrawal_balances(snapshot, return_rate_percent)
    years_survived = sum(1 for balance in balances if balance > 0)
    return snapshot.retirement_age + years_survived


def project_runway_scenarios(snapshot: Snapshot) -> RunwayScenarios:
    """Runway age under the low, mid and high return scenarios."""
    scenarios = snapshot.roi_scenarios
    return RunwayScenarios(
        low=project_runway(snapshot, scenarios.low),
        mid=project_runway(snapshot, scenarios.mid),
        high=project_runway(snapshot, scenarios.high),
    )


def project_trajectory(
    snapshot: Snapshot, return_rate_percent: float
) -> NDArray[np.float64]:
    """
    Year-end balances for each simulated retirement year.

    Follows exactly the years ``project_runway`` simulates: the last entry is
    the first non-positive balance, unless the year cap was reached first.
    """
    return np.array(_withdrawal_balances(snapshot, return_rate_percent), dtype=np.float64)
