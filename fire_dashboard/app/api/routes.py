"""HTTP routes for the Flask API."""

from http import HTTPStatus
from typing import Any, Dict

from flask import Blueprint, current_app, jsonify, request
from loguru import logger
from pydantic import ValidationError

from fire_dashboard import __version__
from fire_dashboard.config import AppConfig
from fire_dashboard.constants import (
    ANNUAL_RETURN_PCT_RANGE,
    SAFETY_MARGIN_PCT_RANGE,
    WITHDRAWAL_RATE_OPTIONS,
)
from fire_dashboard.core.dashboard import summarize_dashboard, summarize_forecast
from fire_dashboard.core.persistence import InputSnapshotStore
from fire_dashboard.schemas.dashboard import DashboardRequest, ForecastRequest
from fire_dashboard.schemas.meta import DefaultsResponse, InputOptions, PingResponse

api_bp = Blueprint("api", __name__)


def _config() -> AppConfig:
    return current_app.config["FIRE_DASHBOARD"]


def _snapshots() -> InputSnapshotStore:
    return current_app.config["INPUT_SNAPSHOTS"]


@api_bp.errorhandler(ValidationError)
def _handle_validation_error(exc: ValidationError):
    """Convert Pydantic validation errors into JSON responses."""
    logger.debug(f"Rejected payload on {request.path}: {exc.error_count()} error(s)")
    # Rejected input may itself be NaN or infinity, so it is not echoed back.
    errors = exc.errors(include_url=False, include_context=False, include_input=False)
    return jsonify({"detail": errors}), HTTPStatus.UNPROCESSABLE_ENTITY


@api_bp.get("/ping")
def ping() -> Any:
    """Health-check endpoint."""
    response = PingResponse(message="pong", version=__version__)
    return jsonify(response.model_dump())


@api_bp.get("/defaults")
def defaults() -> Any:
    """Starting inputs: the stored dashboard snapshot and the forecast defaults."""
    config = _config()
    response = DefaultsResponse(
        storageKey=config.storage_key,
        horizonYears=config.horizon_years,
        dashboard=_snapshots().inputs,
        forecast=config.forecast_defaults,
        options=InputOptions(
            withdrawalRatePct=list(WITHDRAWAL_RATE_OPTIONS),
            annualReturnPctRange=ANNUAL_RETURN_PCT_RANGE,
            safetyMarginPctRange=SAFETY_MARGIN_PCT_RANGE,
            durationUnits=["months", "years"],
        ),
    )
    return jsonify(response.model_dump())


@api_bp.get("/inputs")
def get_inputs() -> Any:
    """Current dashboard input snapshot."""
    return jsonify(_snapshots().inputs.model_dump())


@api_bp.put("/inputs")
def put_inputs() -> Any:
    """Apply changed dashboard fields and persist the snapshot."""
    raw_payload = request.get_json(force=True, silent=False)
    if not isinstance(raw_payload, dict):
        return (
            jsonify({"detail": "Expected a JSON object of dashboard fields."}),
            HTTPStatus.UNPROCESSABLE_ENTITY,
        )

    inputs = _snapshots().update(**raw_payload)
    logger.debug(f"Input snapshot updated: {', '.join(raw_payload) or 'no fields'}")
    return jsonify(inputs.model_dump())


@api_bp.post("/calc/dashboard")
def dashboard() -> Any:
    """FIRE number, spend estimate, time to target and the growth chart."""
    raw_payload: Dict[str, Any] = request.get_json(force=True, silent=False)
    payload = DashboardRequest.model_validate(raw_payload)
    horizon = payload.horizonYears or _config().horizon_years
    logger.debug(f"Dashboard request, horizon {horizon} years")

    result = summarize_dashboard(payload.to_inputs(), horizon_years=horizon)
    return jsonify(result.model_dump(mode="json"))


@api_bp.post("/calc/forecast")
def forecast() -> Any:
    """Projected assets after the requested contribution period."""
    raw_payload: Dict[str, Any] = request.get_json(force=True, silent=False)
    payload = ForecastRequest.model_validate(raw_payload)
    logger.debug(f"Forecast request over {payload.months} months")

    result = summarize_forecast(payload)
    return jsonify(result.model_dump(mode="json"))
