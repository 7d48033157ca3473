from __future__ import annotations

from math import isclose

from flask.testing import FlaskClient

from fire_dashboard.core.projection import future_value


def test_forecast_with_defaults(client: FlaskClient):
    resp = client.post("/api/calc/forecast", json={})

    assert resp.status_code == 200
    body = resp.get_json()

    assert body["months"] == 120
    assert isclose(body["futureValue"]["value"], future_value(100_000_000, 1_500_000, 8, 120))
    assert body["totalContribution"]["value"] == 180_000_000
    assert body["totalContribution"]["display"] == "180,000,000 KRW"


def test_forecast_in_months(client: FlaskClient):
    body = client.post(
        "/api/calc/forecast",
        json={
            "currentAssets": 1_000_000,
            "monthlyContribution": 100_000,
            "annualReturnPct": 0,
            "durationValue": 18.4,
            "durationUnit": "months",
        },
    ).get_json()

    assert body["months"] == 18
    assert body["futureValue"]["value"] == 1_000_000 + 100_000 * 18


def test_zero_duration_returns_current_assets(client: FlaskClient):
    body = client.post(
        "/api/calc/forecast", json={"currentAssets": 5_000_000, "durationValue": 0}
    ).get_json()

    assert body["months"] == 0
    assert body["futureValue"]["value"] == 5_000_000
    assert body["totalContribution"]["value"] == 0


def test_return_is_clamped(client: FlaskClient):
    body = client.post(
        "/api/calc/forecast", json={"annualReturnPct": -300, "durationValue": 1}
    ).get_json()

    assert body["inputs"]["annualReturnPct"] == -50
    assert body["futureValue"]["status"] == "ok"


def test_unknown_unit_returns_422(client: FlaskClient):
    resp = client.post("/api/calc/forecast", json={"durationUnit": "weeks"})
    assert resp.status_code == 422


def test_very_long_forecast_of_nothing_is_zero(client: FlaskClient):
    body = client.post(
        "/api/calc/forecast",
        json={"currentAssets": 0, "monthlyContribution": 0, "durationValue": 1_000_000},
    ).get_json()

    assert body["months"] == 12_000_000
    assert body["futureValue"] == {"value": 0.0, "status": "ok", "display": "0 KRW"}


def test_non_finite_forecast_values_never_reach_the_response(client: FlaskClient):
    resp = client.post(
        "/api/calc/forecast",
        data='{"currentAssets": Infinity, "monthlyContribution": NaN, "durationValue": 1e400}',
        content_type="application/json",
    )
    text = resp.get_data(as_text=True)

    assert resp.status_code == 200
    assert "NaN" not in text
    assert "Infinity" not in text
    assert resp.get_json()["months"] == 0


def test_forecast_amount_text_keeps_digits(client: FlaskClient):
    body = client.post(
        "/api/calc/forecast",
        json={"currentAssets": "1.5", "monthlyContribution": "0", "durationValue": 0},
    ).get_json()

    assert body["inputs"]["currentAssets"] == 15
    assert body["futureValue"]["value"] == 15
