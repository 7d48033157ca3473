from __future__ import annotations

from math import isclose

import pytest
from flask.testing import FlaskClient

from fire_dashboard.app import create_app
from fire_dashboard.config import AppConfig
from fire_dashboard.constants import DEFAULT_HORIZON_YEARS, STORAGE_KEY
from fire_dashboard.core.formatting import UNREACHABLE_TEXT
from fire_dashboard.models import DashboardInputs


def dashboard_payload() -> dict:
    return DashboardInputs().model_dump()


def test_dashboard_with_defaults(client: FlaskClient):
    resp = client.post("/api/calc/dashboard", json=dashboard_payload())

    assert resp.status_code == 200
    body = resp.get_json()

    assert isclose(body["fireNumber"]["value"], 907_500_000)
    assert body["fireNumber"]["display"] == "907,500,000 KRW"
    assert isclose(body["monthlySpend"]["value"], 2_500_000)
    assert isclose(body["annualSpend"]["value"], 30_000_000)
    assert isclose(body["baseTarget"]["value"], 750_000_000)
    assert isclose(body["progressPct"]["value"], 10_000_000 / 907_500_000 * 100)
    assert body["progressPct"]["display"] == "1.1 %"
    assert isclose(body["gap"]["value"], 897_500_000)

    months = body["monthsToTarget"]
    assert months["status"] == "ok"
    assert months["value"] > 0
    assert months["display"].endswith("months")

    chart = body["chart"]
    assert len(chart) == DEFAULT_HORIZON_YEARS + 1
    assert chart[0]["year"] == 0
    assert chart[0]["assets"] == 10_000_000
    assert chart[0]["phase"] == "accumulating"
    assert all(isclose(point["target"], 907_500_000) for point in chart)
    assert chart[-1]["phase"] == "decumulating"


def test_dashboard_sanitizes_and_clamps_inputs(client: FlaskClient):
    payload = dashboard_payload()
    payload.update(currentAssets="20,000,000", annualReturnPct=80, safetyMarginPct=-5)

    body = client.post("/api/calc/dashboard", json=payload).get_json()

    assert body["inputs"]["currentAssets"] == 20_000_000
    assert body["inputs"]["annualReturnPct"] == 50
    assert body["inputs"]["safetyMarginPct"] == 0
    assert isclose(body["fireNumber"]["value"], 825_000_000)


def test_unreachable_target_is_not_a_number(client: FlaskClient):
    payload = dashboard_payload()
    payload.update(currentAssets=0, monthlyContribution=0)

    body = client.post("/api/calc/dashboard", json=payload).get_json()

    assert body["monthsToTarget"] == {
        "value": None,
        "status": "unreachable",
        "display": UNREACHABLE_TEXT,
    }


def test_zero_target_leaves_figures_undefined(client: FlaskClient):
    payload = dashboard_payload()
    payload.update(targetAssets=0)

    body = client.post("/api/calc/dashboard", json=payload).get_json()

    assert body["progressPct"]["status"] == "undefined"
    assert body["progressBarPct"] == 0
    assert body["monthsToTarget"]["status"] == "undefined"
    assert body["monthsToTarget"]["display"] == "-"
    assert body["chart"] == []


def test_zero_withdrawal_rate_leaves_spend_undefined(client: FlaskClient):
    payload = dashboard_payload()
    payload.update(withdrawalRatePct=0)

    body = client.post("/api/calc/dashboard", json=payload).get_json()

    assert body["monthlySpend"]["status"] == "undefined"
    assert body["annualSpend"]["status"] == "undefined"
    assert body["baseTarget"]["status"] == "undefined"
    assert body["fireNumber"]["status"] == "ok"


def test_progress_bar_is_capped(client: FlaskClient):
    payload = dashboard_payload()
    payload.update(currentAssets=2_000_000_000)

    body = client.post("/api/calc/dashboard", json=payload).get_json()

    assert body["progressPct"]["value"] > 100
    assert body["progressBarPct"] == 100
    assert body["monthsToTarget"]["value"] == 0


def test_horizon_override(client: FlaskClient):
    payload = dashboard_payload()
    payload["horizonYears"] = 10

    body = client.post("/api/calc/dashboard", json=payload).get_json()
    assert len(body["chart"]) == 11
    assert "horizonYears" not in body["inputs"]


def test_invalid_payload_returns_422(client: FlaskClient):
    bad_rate = client.post("/api/calc/dashboard", json={"withdrawalRatePct": "four"})
    unknown = client.post("/api/calc/dashboard", json={"foo": 1})
    bad_horizon = client.post("/api/calc/dashboard", json={"horizonYears": 0})

    for resp in (bad_rate, unknown, bad_horizon):
        assert resp.status_code == 422
        assert "detail" in resp.get_json()


def test_defaults_endpoint_reflects_config():
    config = AppConfig(
        log_level="WARNING",
        horizon_years=30,
        dashboard_defaults=DashboardInputs(targetAssets=1_000_000_000),
    )
    with create_app(config).test_client() as client:
        body = client.get("/api/defaults").get_json()
        chart = client.post("/api/calc/dashboard", json=dashboard_payload()).get_json()["chart"]

    assert body["storageKey"] == STORAGE_KEY
    assert body["horizonYears"] == 30
    assert body["dashboard"]["targetAssets"] == 1_000_000_000
    assert body["forecast"]["durationUnit"] == "years"
    assert body["options"]["withdrawalRatePct"][0] == 3
    assert body["options"]["annualReturnPctRange"] == [-50, 50]
    assert len(chart) == 31


@pytest.mark.parametrize(
    "body",
    [
        '{"withdrawalRatePct": NaN}',
        '{"withdrawalRatePct": Infinity}',
        '{"withdrawalRatePct": -Infinity}',
        '{"withdrawalRatePct": 1e400}',
    ],
)
def test_non_finite_withdrawal_rate_returns_422(client: FlaskClient, body: str):
    resp = client.post("/api/calc/dashboard", data=body, content_type="application/json")
    text = resp.get_data(as_text=True)

    assert resp.status_code == 422
    assert "NaN" not in text
    assert "Infinity" not in text


def test_non_finite_amounts_are_sanitized(client: FlaskClient):
    resp = client.post(
        "/api/calc/dashboard",
        data='{"currentAssets": NaN, "annualReturnPct": Infinity, "safetyMarginPct": 1e400}',
        content_type="application/json",
    )
    text = resp.get_data(as_text=True)

    assert resp.status_code == 200
    assert "NaN" not in text
    assert "Infinity" not in text
    assert resp.get_json()["inputs"]["currentAssets"] == 0
