"""Health-check and defaults payloads."""

from typing import List, Tuple

from pydantic import BaseModel

from fire_dashboard.models import DashboardInputs, ForecastInputs


class PingResponse(BaseModel):
    message: str
    version: str


class InputOptions(BaseModel):
    withdrawalRatePct: List[float]
    annualReturnPctRange: Tuple[float, float]
    safetyMarginPctRange: Tuple[float, float]
    durationUnits: List[str]


class DefaultsResponse(BaseModel):
    storageKey: str
    horizonYears: int
    dashboard: DashboardInputs
    forecast: ForecastInputs
    options: InputOptions
