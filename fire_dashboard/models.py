from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from fire_dashboard.constants import ANNUAL_RETURN_PCT_RANGE, SAFETY_MARGIN_PCT_RANGE
from fire_dashboard.core.edit_buffer import commit_percent_text
from fire_dashboard.core.inputs import (
    DurationUnit,
    clamp,
    duration_to_months,
    sanitize_amount,
    sanitize_whole_amount,
)


class ProjectionInput(BaseModel):
    """Flat record handed to the projection engine for one computation."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    currentAssets: float = 0.0
    monthlyContribution: float = 0.0
    annualReturnPct: float = 0.0
    durationMonths: int = Field(default=0, ge=0)
    targetAssets: float = 0.0
    withdrawalRatePct: float = 4.0
    safetyMarginPct: float = 0.0


def _amount(value: Any) -> float:
    return max(0.0, sanitize_amount(value))


def _percent(cls: type, value: Any, info: ValidationInfo, bounds: tuple) -> float:
    # Typed text commits like a percent field losing focus; bad text keeps the default.
    if isinstance(value, str):
        return commit_percent_text(value, cls.model_fields[info.field_name].default, bounds)
    return clamp(sanitize_amount(value), *bounds)


class DashboardInputs(BaseModel):
    model_config = ConfigDict(extra="forbid", validate_assignment=True, allow_inf_nan=False)

    targetAssets: float = 825_000_000
    currentAssets: float = 10_000_000
    withdrawalRatePct: float = 4
    safetyMarginPct: float = 10
    monthlyContribution: float = 1_500_000
    annualReturnPct: float = 8

    @field_validator("targetAssets", "currentAssets", "monthlyContribution", mode="before")
    @classmethod
    def non_negative_amount(cls, v: Any) -> float:
        return _amount(v)

    @field_validator("annualReturnPct", mode="before")
    @classmethod
    def clamp_return(cls, v: Any, info: ValidationInfo) -> float:
        return _percent(cls, v, info, ANNUAL_RETURN_PCT_RANGE)

    @field_validator("safetyMarginPct", mode="before")
    @classmethod
    def clamp_margin(cls, v: Any, info: ValidationInfo) -> float:
        return _percent(cls, v, info, SAFETY_MARGIN_PCT_RANGE)

    def to_projection_input(self) -> ProjectionInput:
        return ProjectionInput(
            currentAssets=self.currentAssets,
            monthlyContribution=self.monthlyContribution,
            annualReturnPct=self.annualReturnPct,
            targetAssets=self.targetAssets,
            withdrawalRatePct=self.withdrawalRatePct,
            safetyMarginPct=self.safetyMarginPct,
        )


class ForecastInputs(BaseModel):
    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)

    currentAssets: float = 100_000_000
    monthlyContribution: float = 1_500_000
    annualReturnPct: float = 8
    durationValue: float = 10
    durationUnit: DurationUnit = "years"

    @field_validator("currentAssets", "monthlyContribution", mode="before")
    @classmethod
    def whole_amount(cls, v: Any) -> float:
        return max(0.0, sanitize_whole_amount(v))

    @field_validator("durationValue", mode="before")
    @classmethod
    def non_negative_duration(cls, v: Any) -> float:
        return _amount(v)

    @field_validator("annualReturnPct", mode="before")
    @classmethod
    def clamp_return(cls, v: Any, info: ValidationInfo) -> float:
        return _percent(cls, v, info, ANNUAL_RETURN_PCT_RANGE)

    @property
    def months(self) -> int:
        return duration_to_months(self.durationValue, self.durationUnit)

    def to_projection_input(self) -> ProjectionInput:
        return ProjectionInput(
            currentAssets=self.currentAssets,
            monthlyContribution=self.monthlyContribution,
            annualReturnPct=self.annualReturnPct,
            durationMonths=self.months,
        )
