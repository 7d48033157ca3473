from __future__ import annotations

import pytest
from flask.testing import FlaskClient

from fire_dashboard.app import create_app
from fire_dashboard.config import AppConfig


@pytest.fixture()
def app_config() -> AppConfig:
    return AppConfig(log_level="WARNING")


@pytest.fixture()
def client(app_config: AppConfig) -> FlaskClient:
    app = create_app(app_config)
    with app.test_client() as test_client:
        yield test_client
