"""
Pydantic models for the financial snapshot.

The snapshot is the single input record of the projection engine. It is
immutable: edits are expressed as a ``SnapshotPatch`` and applied with
``apply_patch``, which returns a new snapshot.
"""

import math
import re
from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator


# Upper bound on every age field
MAX_AGE = 120

# Leading decimal number of a form string, as a browser number parser reads it
_NUMERIC_PREFIX = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def utc_now() -> datetime:
    """Current time in UTC."""
    return datetime.now(timezone.utc)


class RoiScenarios(BaseModel):
    """Annual return assumptions in percent (low <= mid <= high by convention)."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    low: float = Field(default=3.0, description="Pessimistic annual return (%)")
    mid: float = Field(default=5.0, description="Expected annual return (%)")
    high: float = Field(default=7.0, description="Optimistic annual return (%)")


class Assets(BaseModel):
    """Asset balances. Only the liquid accounts are used in projections."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    four_oh_one_k: float = Field(default=250000.0, description="401(k) balance")
    ira: float = Field(default=50000.0, description="IRA balance")
    savings: float = Field(default=25000.0, description="Cash savings")
    other: float = Field(default=0.0, description="Other liquid investments")
    home: float = Field(default=0.0, description="Home value (not investable)")
    car: float = Field(default=0.0, description="Vehicle value (not investable)")

    @property
    def investable_total(self) -> float:
        """Liquid assets that compound and fund withdrawals."""
        return self.four_oh_one_k + self.ira + self.savings + self.other

    @property
    def total(self) -> float:
        """All assets, including illiquid ones."""
        return self.investable_total + self.home + self.car


class Liabilities(BaseModel):
    """Outstanding debts, subtracted from total assets for net worth."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    mortgage: float = Field(default=0.0, ge=0, description="Mortgage balance")
    car_loan: float = Field(default=0.0, ge=0, description="Auto loan balance")
    credit_cards: float = Field(default=0.0, ge=0, description="Credit card debt")
    other: float = Field(default=0.0, ge=0, description="Other debts")

    @property
    def total(self) -> float:
        return self.mortgage + self.car_loan + self.credit_cards + self.other


class Snapshot(BaseModel):
    """A user's complete financial state for one projection."""

    model_config = ConfigDict(frozen=True, extra="ignore", allow_inf_nan=False)

    age: int = Field(default=45, ge=0, le=MAX_AGE, description="Current age")
    retirement_age: int = Field(
        default=65, ge=0, le=MAX_AGE, description="Planned retirement age"
    )
    expected_life: int = Field(
        default=90, ge=0, le=MAX_AGE, description="Age the savings should last to"
    )
    ssa_claiming_age: int = Field(
        default=67, ge=62, le=70, description="Age Social Security is claimed"
    )
    ssa_monthly: float = Field(
        default=3000.0, ge=0, description="Monthly benefit at full retirement age (67)"
    )
    monthly_budget: float = Field(
        default=5000.0, ge=0, description="Target monthly spending"
    )
    monthly_withdrawal: float = Field(
        default=3000.0, ge=0, description="Gross monthly withdrawal from investments"
    )
    tax_rate: float = Field(
        default=12.0, ge=0, lt=100, description="Tax rate on withdrawals (%)"
    )
    roi_scenarios: RoiScenarios = Field(default_factory=RoiScenarios)
    inflation_rate: float = Field(default=3.0, description="Annual inflation (%)")
    assets: Assets = Field(default_factory=Assets)
    liabilities: Liabilities = Field(default_factory=Liabilities)
    has_seen_splash: bool = Field(
        default=False, description="Whether the privacy notice was acknowledged"
    )
    last_updated: datetime = Field(default_factory=utc_now)

    @property
    def investable_assets(self) -> float:
        return self.assets.investable_total

    @property
    def total_assets(self) -> float:
        return self.assets.total

    @property
    def total_liabilities(self) -> float:
        return self.liabilities.total

    @property
    def net_worth(self) -> float:
        return self.total_assets - self.total_liabilities

    @property
    def net_monthly_withdrawal(self) -> float:
        """Monthly withdrawal after tax."""
        return self.monthly_withdrawal * (1 - self.tax_rate / 100)


def _coerce_float(value: Any) -> Any:
    """
    Parse form input the way the browser form does.

    Strings are read up to the end of their leading number ("12abc" is 12).
    Anything with no leading number, or that parses to NaN or infinity,
    counts as zero. Non-string values are left for field validation.
    """
    if not isinstance(value, str):
        return value
    match = _NUMERIC_PREFIX.match(value.strip())
    if match is None:
        return 0.0
    number = float(match.group())
    return number if math.isfinite(number) else 0.0


def _coerce_int(value: Any) -> Any:
    value = _coerce_float(value)
    # inf and nan are rejected by int validation instead
    if isinstance(value, float) and math.isfinite(value):
        return int(value)
    return value


class RoiScenariosPatch(BaseModel):
    """Partial update for ``RoiScenarios``."""

    low: Optional[float] = None
    mid: Optional[float] = None
    high: Optional[float] = None

    @field_validator("*", mode="before")
    @classmethod
    def coerce_numbers(cls, v):
        return _coerce_float(v)


class AssetsPatch(BaseModel):
    """Partial update for ``Assets``."""

    four_oh_one_k: Optional[float] = None
    ira: Optional[float] = None
    savings: Optional[float] = None
    other: Optional[float] = None
    home: Optional[float] = None
    car: Optional[float] = None

    @field_validator("*", mode="before")
    @classmethod
    def coerce_numbers(cls, v):
        return _coerce_float(v)


class LiabilitiesPatch(BaseModel):
    """Partial update for ``Liabilities``."""

    mortgage: Optional[float] = None
    car_loan: Optional[float] = None
    credit_cards: Optional[float] = None
    other: Optional[float] = None

    @field_validator("*", mode="before")
    @classmethod
    def coerce_numbers(cls, v):
        return _coerce_float(v)


class SnapshotPatch(BaseModel):
    """
    A partial snapshot. Only the fields that were explicitly set are applied.

    Numeric values may arrive as form strings; unparseable input becomes 0.
    """

    model_config = ConfigDict(extra="forbid")

    age: Optional[int] = None
    retirement_age: Optional[int] = None
    expected_life: Optional[int] = None
    ssa_claiming_age: Optional[int] = None
    ssa_monthly: Optional[float] = None
    monthly_budget: Optional[float] = None
    monthly_withdrawal: Optional[float] = None
    tax_rate: Optional[float] = None
    inflation_rate: Optional[float] = None
    roi_scenarios: Optional[RoiScenariosPatch] = None
    assets: Optional[AssetsPatch] = None
    liabilities: Optional[LiabilitiesPatch] = None
    has_seen_splash: Optional[bool] = None

    @field_validator("age", "retirement_age", "expected_life", "ssa_claiming_age", mode="before")
    @classmethod
    def coerce_int_fields(cls, v):
        return _coerce_int(v)

    @field_validator(
        "ssa_monthly",
        "monthly_budget",
        "monthly_withdrawal",
        "tax_rate",
        "inflation_rate",
        mode="before",
    )
    @classmethod
    def coerce_float_fields(cls, v):
        return _coerce_float(v)


def deep_merge(base: Mapping[str, Any], overrides: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Merge ``overrides`` over ``base`` recursively.

    Nested mappings are merged key by key; any other value in ``overrides``
    replaces the one in ``base``. Neither input is modified.
    """
    merged: Dict[str, Any] = dict(base)
    for key, value in overrides.items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def default_snapshot(now: Optional[datetime] = None) -> Snapshot:
    """The snapshot a first-time user starts from."""
    return Snapshot(last_updated=now or utc_now())


def merge_with_defaults(
    data: Mapping[str, Any],
    now: Optional[datetime] = None,
    reject_unknown: bool = False,
) -> Snapshot:
    """
    Build a snapshot from previously saved data.

    Saved data may predate fields added since; those fields, including nested
    ones under ``assets``, ``liabilities`` and ``roi_scenarios``, take their
    default values. Unknown top-level keys are dropped, or reported as
    validation errors when ``reject_unknown`` is set (client input).

    Raises:
        pydantic.ValidationError: If a value is out of range, or on an
            unknown key with ``reject_unknown``
    """
    unknown = [key for key in data if key not in Snapshot.model_fields]
    if unknown and reject_unknown:
        raise ValidationError.from_exception_data(
            Snapshot.__name__,
            [{"type": "extra_forbidden", "loc": (key,), "input": data[key]} for key in unknown],
        )

    defaults = default_snapshot(now).model_dump()
    known = {key: value for key, value in data.items() if key in Snapshot.model_fields}
    return Snapshot.model_validate(deep_merge(defaults, known))


def apply_patch(
    snapshot: Snapshot, patch: SnapshotPatch, updated_at: Optional[datetime] = None
) -> Snapshot:
    """
    Return a new snapshot with ``patch`` applied and ``last_updated`` stamped.

    Args:
        snapshot: The current snapshot (left unchanged)
        patch: Fields to change
        updated_at: Timestamp of the edit; defaults to now

    Returns:
        Snapshot: The updated snapshot

    Raises:
        pydantic.ValidationError: If the result violates a field constraint
    """
    changes = patch.model_dump(exclude_unset=True, exclude_none=True)
    merged = deep_merge(snapshot.model_dump(), changes)
    merged["last_updated"] = updated_at or utc_now()
    return Snapshot.model_validate(merged)
