from __future__ import annotations

import math
from typing import Iterator

from pydantic import BaseModel, ConfigDict

from fire_dashboard.constants import (
    DEFAULT_HORIZON_YEARS,
    MAX_MONTHS_TO_TARGET,
    MONTHS_PER_YEAR,
    ZERO_RATE_EPSILON,
)
from fire_dashboard.domain.trajectory import Phase, SimulationState

NAN = float("nan")
INF = float("inf")


# -----------------------------
# Rates and closed-form figures
# -----------------------------


def monthly_rate(annual_return_pct: float) -> float:
    """Monthly compounding rate equivalent to an annual percent return.

    Returns NaN when the annual return is -100% or worse.
    """
    r_annual = annual_return_pct / 100
    if r_annual <= -1:
        return NAN
    return (1 + r_annual) ** (1 / MONTHS_PER_YEAR) - 1


def future_value(
    current_assets: float,
    monthly_contribution: float,
    annual_return_pct: float,
    months: int,
) -> float:
    """
    Lump sum plus equal end-of-month contributions, compounded monthly.

        FV = P0 * (1 + r)^n + PMT * ((1 + r)^n - 1) / r
    """
    if months <= 0:
        return current_assets
    if not (
        math.isfinite(current_assets)
        and math.isfinite(monthly_contribution)
        and math.isfinite(annual_return_pct)
    ):
        return NAN

    r = monthly_rate(annual_return_pct)
    if not math.isfinite(r):
        return NAN

    if abs(r) < ZERO_RATE_EPSILON:
        return current_assets + monthly_contribution * months

    try:
        growth = (1 + r) ** months
    except OverflowError:
        growth = INF
    # zero terms stay zero when growth overflows (0 * inf is NaN)
    lump = current_assets * growth if current_assets else 0.0
    annuity = monthly_contribution * (growth - 1) / r if monthly_contribution else 0.0
    return lump + annuity


def fire_number(target_assets: float, safety_margin_pct: float) -> float:
    """Target assets inflated by the safety buffer."""
    return target_assets * (1 + safety_margin_pct / 100)


def monthly_spend_estimate(
    target_assets: float, withdrawal_rate_pct: float, safety_margin_pct: float
) -> float:
    """
    Sustainable monthly spend derived from the unbuffered target.

    Dividing by the margin factor keeps the buffered part of the FIRE number
    out of the spendable amount.
    """
    rate = withdrawal_rate_pct / 100
    margin = 1 + safety_margin_pct / 100
    if rate <= 0 or margin <= 0:
        return NAN
    return target_assets * rate / MONTHS_PER_YEAR / margin


def annual_spend_estimate(
    target_assets: float, withdrawal_rate_pct: float, safety_margin_pct: float
) -> float:
    monthly = monthly_spend_estimate(target_assets, withdrawal_rate_pct, safety_margin_pct)
    if not math.isfinite(monthly):
        return NAN
    return monthly * MONTHS_PER_YEAR


def base_target(annual_spend: float, withdrawal_rate_pct: float) -> float:
    """Unbuffered target implied by an annual spend at the given withdrawal rate."""
    rate = withdrawal_rate_pct / 100
    if rate <= 0:
        return NAN
    return annual_spend / rate


def progress_pct(current_assets: float, fire_target: float) -> float:
    if not math.isfinite(fire_target) or fire_target <= 0:
        return NAN
    return current_assets / fire_target * 100


def remaining_gap(current_assets: float, fire_target: float) -> float:
    if not math.isfinite(fire_target):
        return NAN
    return fire_target - current_assets


def total_contribution(monthly_contribution: float, months: int) -> float:
    return monthly_contribution * months


def months_to_target(
    target: float,
    current_assets: float,
    monthly_contribution: float,
    annual_return_pct: float,
) -> float:
    """
    Smallest whole number of months until the balance reaches ``target``.

    Solves the annuity future-value equation for n:

        n = ln((T + PMT/r) / (P0 + PMT/r)) / ln(1 + r)

    Returns NaN when the question is undefined and +inf when the target is
    unreachable (including anything beyond MAX_MONTHS_TO_TARGET).
    """
    if not math.isfinite(target) or target <= 0:
        return NAN

    r = monthly_rate(annual_return_pct)
    if not math.isfinite(r):
        return NAN

    if current_assets >= target:
        return 0

    if abs(r) < ZERO_RATE_EPSILON:
        if monthly_contribution <= 0:
            return INF
        n = (target - current_assets) / monthly_contribution
        if not math.isfinite(n):
            return INF
        months = math.ceil(n)
    else:
        denom = current_assets + monthly_contribution / r
        if denom <= 0:
            return INF

        rhs = (target + monthly_contribution / r) / denom
        if rhs <= 1:
            return 0

        n = math.log(rhs) / math.log(1 + r)
        # n < 0: a shrinking balance converging below the target
        if not math.isfinite(n) or n < 0:
            return INF
        months = math.ceil(n)

    return INF if months > MAX_MONTHS_TO_TARGET else months


# -----------------------------
# Year-by-year trajectory
# -----------------------------


class TrajectoryPoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    year: int
    assets: float  # value at the start of the year
    target: float
    phase: Phase


class Trajectory:
    """
    Restartable view over the yearly simulation.

    Every iteration re-runs the simulation from ``current_assets``; nothing is
    computed until the caller iterates.
    """

    def __init__(
        self,
        current_assets: float,
        monthly_contribution: float,
        annual_return_pct: float,
        withdrawal_rate_pct: float,
        target: float,
        horizon_years: int = DEFAULT_HORIZON_YEARS,
    ) -> None:
        self.current_assets = current_assets
        self.monthly_contribution = monthly_contribution
        self.annual_return_pct = annual_return_pct
        self.withdrawal_rate_pct = withdrawal_rate_pct
        self.target = target
        self.horizon_years = max(0, horizon_years)

    def __len__(self) -> int:
        return self.horizon_years + 1

    def __iter__(self) -> Iterator[TrajectoryPoint]:
        r = monthly_rate(self.annual_return_pct)
        withdrawal_rate = self.withdrawal_rate_pct / 100
        state = SimulationState.start(self.current_assets, self.target)

        for year in range(self.horizon_years + 1):
            yield TrajectoryPoint(
                year=year, assets=state.assets, target=self.target, phase=state.phase
            )

            for _ in range(MONTHS_PER_YEAR):
                if state.depleted:
                    break
                state.advance_month(r, self.monthly_contribution, withdrawal_rate)


def build_trajectory(
    current_assets: float,
    monthly_contribution: float,
    annual_return_pct: float,
    withdrawal_rate_pct: float,
    target: float,
    horizon_years: int = DEFAULT_HORIZON_YEARS,
) -> Trajectory:
    """Samples for years 0..horizon_years inclusive, growth against a flat target."""
    return Trajectory(
        current_assets=current_assets,
        monthly_contribution=monthly_contribution,
        annual_return_pct=annual_return_pct,
        withdrawal_rate_pct=withdrawal_rate_pct,
        target=target,
        horizon_years=horizon_years,
    )


__all__ = [
    "monthly_rate",
    "future_value",
    "fire_number",
    "monthly_spend_estimate",
    "annual_spend_estimate",
    "base_target",
    "progress_pct",
    "remaining_gap",
    "total_contribution",
    "months_to_target",
    "TrajectoryPoint",
    "Trajectory",
    "build_trajectory",
]
