"""Data contracts for the dashboard and forecast calculators."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from fire_dashboard.domain.trajectory import Phase
from fire_dashboard.models import DashboardInputs, ForecastInputs
from fire_dashboard.schemas.metric import MetricValue


class DashboardRequest(DashboardInputs):
    """Dashboard inputs plus an optional chart horizon."""

    horizonYears: Optional[int] = Field(
        default=None, ge=1, le=100, description="Years to simulate for the chart."
    )

    def to_inputs(self) -> DashboardInputs:
        return DashboardInputs.model_validate(self.model_dump(exclude={"horizonYears"}))


class ChartPoint(BaseModel):
    """One start-of-year sample on the growth chart."""

    year: int = Field(..., ge=0)
    assets: Optional[float]
    target: float
    phase: Phase


class DashboardResponse(BaseModel):
    model_config = ConfigDict(extra="forbid")

    inputs: DashboardInputs
    fireNumber: MetricValue
    monthlySpend: MetricValue
    annualSpend: MetricValue
    baseTarget: MetricValue
    progressPct: MetricValue
    progressBarPct: float = Field(..., ge=0, le=100)
    gap: MetricValue
    monthsToTarget: MetricValue
    chart: List[ChartPoint]


class ForecastRequest(ForecastInputs):
    pass


class ForecastResponse(BaseModel):
    model_config = ConfigDict(extra="forbid")

    inputs: ForecastInputs
    months: int = Field(..., ge=0)
    futureValue: MetricValue
    totalContribution: MetricValue
