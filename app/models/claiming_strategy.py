"""
Social Security claiming strategy analysis.

Compares claiming as early as possible ("now") with waiting until the
snapshot's claiming age ("wait"): the income given up by waiting, the age at
which cumulative income from waiting catches up, and whether the user
expects to live past that age.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field

from .benefit_curve import (
    EARLIEST_CLAIMING_AGE,
    LATEST_CLAIMING_AGE,
    benefit_multiplier,
)
from .snapshot import Snapshot

BREAK_EVEN_HORIZON = 100


class ClaimingAnalysis(BaseModel):
    """Claim-now versus claim-later comparison."""

    model_config = ConfigDict(frozen=True)

    claim_now_age: int = Field(..., description="Earliest age the user can claim")
    claim_wait_age: int = Field(..., description="Chosen (later) claiming age")
    income_forgone: float = Field(
        ..., ge=0, description="Benefits given up between the two ages"
    )
    break_even_age: int = Field(
        ..., description="First age cumulative waiting income is ahead"
    )
    crosses_over: bool = Field(
        ..., description="False if waiting never catches up by the horizon"
    )
    waiting_worth_it: bool = Field(
        ..., description="Whether expected life extends past the break-even age"
    )


class ClaimingComparison(BaseModel):
    """Cumulative benefits by a given age when claiming at 62 versus 70."""

    model_config = ConfigDict(frozen=True)

    until_age: int
    claim_early_total: float
    claim_late_total: float

    @computed_field  # type: ignore[prop-decorator]
    @property
    def early_advantage(self) -> float:
        """Extra cash collected by claiming at 62 (negative if 70 is ahead)."""
        return self.claim_early_total - self.claim_late_total


def claim_now_age(snapshot: Snapshot) -> int:
    """The earliest age the user can still claim, from today."""
    return min(max(snapshot.age, EARLIEST_CLAIMING_AGE), LATEST_CLAIMING_AGE)


def _annual_benefit(snapshot: Snapshot, claim_age: int, age: int) -> float:
    annual_inflation = snapshot.inflation_rate / 100
    base_check = snapshot.ssa_monthly * benefit_multiplier(claim_age) * 12
    return base_check * (1 + annual_inflation) ** (age - snapshot.age)


def cumulative_cash(snapshot: Snapshot, claim_age: int, until_age: int) -> float:
    """
    Total benefits received from ``claim_age`` up to, not including, ``until_age``.

    Each year's check is the claim-age benefit inflated from today.
    """
    return sum(
        (_annual_benefit(snapshot, claim_age, age) for age in range(claim_age, until_age)),
        0.0,
    )


def find_break_even(snapshot: Snapshot) -> Optional[int]:
    """
    Age at which cumulative income from waiting overtakes claiming now.

    Returns:
        None if the claiming age is not later than the earliest possible
        claim; otherwise the first age where waiting is strictly ahead, or
        ``BREAK_EVEN_HORIZON`` if that never happens
    """
    now_age = claim_now_age(snapshot)
    wait_age = snapshot.ssa_claiming_age
    if wait_age <= now_age:
        return None

    now_total = 0.0
    wait_total = 0.0
    for age in range(now_age, BREAK_EVEN_HORIZON + 1):
        now_total += _annual_benefit(snapshot, now_age, age)
        if age >= wait_age:
            wait_total += _annual_benefit(snapshot, wait_age, age)
        if wait_total > now_total:
            return age

    return BREAK_EVEN_HORIZON


def analyze_claiming_strategy(snapshot: Snapshot) -> Optional[ClaimingAnalysis]:
    """Full claim-now versus wait analysis, or None when there is nothing to wait for."""
    break_even_age = find_break_even(snapshot)
    if break_even_age is None:
        return None

    now_age = claim_now_age(snapshot)
    wait_age = snapshot.ssa_claiming_age
    crosses_over = (
        break_even_age < BREAK_EVEN_HORIZON
        or cumulative_cash(snapshot, wait_age, BREAK_EVEN_HORIZON + 1)
        > cumulative_cash(snapshot, now_age, BREAK_EVEN_HORIZON + 1)
    )

    return ClaimingAnalysis(
        claim_now_age=now_age,
        claim_wait_age=wait_age,
        income_forgone=cumulative_cash(snapshot, now_age, wait_age),
        break_even_age=break_even_age,
        crosses_over=crosses_over,
        waiting_worth_it=snapshot.expected_life > break_even_age,
    )


def compare_claiming_extremes(snapshot: Snapshot, until_age: int = 75) -> ClaimingComparison:
    """Cash collected by ``until_age`` when claiming at 62 versus 70."""
    return ClaimingComparison(
        until_age=until_age,
        claim_early_total=cumulative_cash(snapshot, EARLIEST_CLAIMING_AGE, until_age),
        claim_late_total=cumulative_cash(snapshot, LATEST_CLAIMING_AGE, until_age),
    )
