"""
Social Security benefit multiplier by claiming age.

A simplified policy approximating early-retirement reductions and delayed
retirement credits: 70% of the full benefit at 62, 100% at full retirement
age (67), 124% at 70, linear in between and flat outside that range.
"""

import numpy as np

from .snapshot import Snapshot

EARLIEST_CLAIMING_AGE = 62
FULL_RETIREMENT_AGE = 67
LATEST_CLAIMING_AGE = 70

# (age, multiplier) knots; about 6%/yr before 67 and 8%/yr after
_CURVE_AGES = np.array(
    [EARLIEST_CLAIMING_AGE, FULL_RETIREMENT_AGE, LATEST_CLAIMING_AGE], dtype=float
)
_CURVE_MULTIPLIERS = np.array([0.70, 1.00, 1.24])


def benefit_multiplier(claim_age: float) -> float:
    """
    Fraction of the full-retirement-age benefit paid when claiming at ``claim_age``.

    Fractional ages interpolate linearly; ages outside 62-70 saturate at the
    boundary multipliers.
    """
    return float(np.interp(claim_age, _CURVE_AGES, _CURVE_MULTIPLIERS))


def monthly_benefit(ssa_monthly: float, claim_age: float) -> float:
    """Monthly check for a reference (age 67) benefit claimed at ``claim_age``."""
    return ssa_monthly * benefit_multiplier(claim_age)


def monthly_ssa_check(snapshot: Snapshot) -> float:
    """Monthly check at the snapshot's chosen claiming age, in today's dollars."""
    return monthly_benefit(snapshot.ssa_monthly, snapshot.ssa_claiming_age)
