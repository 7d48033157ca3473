"""Derived figures for the dashboard and forecast calculators."""

from __future__ import annotations

import math
from typing import List

from fire_dashboard.constants import DEFAULT_HORIZON_YEARS
from fire_dashboard.core.formatting import (
    format_percent,
    format_time_to_target,
    format_won,
    metric,
)
from fire_dashboard.core.inputs import clamp
from fire_dashboard.core.projection import (
    annual_spend_estimate,
    base_target,
    build_trajectory,
    fire_number,
    future_value,
    monthly_spend_estimate,
    months_to_target,
    progress_pct,
    remaining_gap,
    total_contribution,
)
from fire_dashboard.models import DashboardInputs, ForecastInputs
from fire_dashboard.schemas.dashboard import (
    ChartPoint,
    DashboardResponse,
    ForecastResponse,
)


def build_chart(inputs: DashboardInputs, target: float, horizon_years: int) -> List[ChartPoint]:
    """Growth-vs-target series; empty when there is no usable target."""
    if not math.isfinite(target) or target <= 0:
        return []

    trajectory = build_trajectory(
        current_assets=inputs.currentAssets,
        monthly_contribution=inputs.monthlyContribution,
        annual_return_pct=inputs.annualReturnPct,
        withdrawal_rate_pct=inputs.withdrawalRatePct,
        target=target,
        horizon_years=horizon_years,
    )
    return [
        ChartPoint(
            year=point.year,
            assets=point.assets if math.isfinite(point.assets) else None,
            target=point.target,
            phase=point.phase,
        )
        for point in trajectory
    ]


def summarize_dashboard(
    inputs: DashboardInputs, horizon_years: int = DEFAULT_HORIZON_YEARS
) -> DashboardResponse:
    """Compute every figure the dashboard page shows for one set of inputs."""
    record = inputs.to_projection_input()

    target = fire_number(record.targetAssets, record.safetyMarginPct)
    monthly_spend = monthly_spend_estimate(
        record.targetAssets, record.withdrawalRatePct, record.safetyMarginPct
    )
    annual_spend = annual_spend_estimate(
        record.targetAssets, record.withdrawalRatePct, record.safetyMarginPct
    )
    progress = progress_pct(record.currentAssets, target)
    months = months_to_target(
        target,
        record.currentAssets,
        record.monthlyContribution,
        record.annualReturnPct,
    )

    return DashboardResponse(
        inputs=inputs,
        fireNumber=metric(target),
        monthlySpend=metric(monthly_spend),
        annualSpend=metric(annual_spend),
        baseTarget=metric(base_target(annual_spend, record.withdrawalRatePct)),
        progressPct=metric(progress, format_percent),
        progressBarPct=clamp(progress if math.isfinite(progress) else 0.0, 0, 100),
        gap=metric(remaining_gap(record.currentAssets, target)),
        monthsToTarget=metric(months, format_time_to_target),
        chart=build_chart(inputs, target, horizon_years),
    )


def summarize_forecast(inputs: ForecastInputs) -> ForecastResponse:
    """Future value of the current assets plus monthly contributions."""
    record = inputs.to_projection_input()
    months = record.durationMonths

    return ForecastResponse(
        inputs=inputs,
        months=months,
        futureValue=metric(
            future_value(
                record.currentAssets,
                record.monthlyContribution,
                record.annualReturnPct,
                months,
            )
        ),
        totalContribution=metric(total_contribution(record.monthlyContribution, months)),
    )
