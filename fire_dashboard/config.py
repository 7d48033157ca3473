import json
import os
import sys
from typing import Any, Dict, List, Optional

from loguru import logger
from pydantic import BaseModel, Field, field_validator

from fire_dashboard.constants import DEFAULT_HORIZON_YEARS, STORAGE_KEY
from fire_dashboard.models import DashboardInputs, ForecastInputs

CONFIG_ENV_VAR = "FIRE_DASHBOARD_CONFIG"

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)


class ConfigurationError(Exception):
    """Raised when the configuration file cannot be loaded or parsed."""


class AppConfig(BaseModel):
    """Application settings; every field has a working default."""

    cors_origins: List[str] = Field(
        default_factory=lambda: [
            "http://localhost:3000",
            "http://localhost:5173",
            "http://127.0.0.1:3000",
            "http://127.0.0.1:5173",
        ]
    )
    log_level: str = Field("INFO", description="Minimum level for the stderr sink.")
    storage_key: str = STORAGE_KEY
    storage_path: Optional[str] = Field(
        None, description="SQLite file for the input snapshot; kept in memory when unset."
    )
    horizon_years: int = Field(DEFAULT_HORIZON_YEARS, ge=1, le=100)
    dashboard_defaults: DashboardInputs = Field(default_factory=DashboardInputs)
    forecast_defaults: ForecastInputs = Field(default_factory=ForecastInputs)

    @field_validator("log_level")
    @classmethod
    def known_level(cls, v: str) -> str:
        level = v.upper()
        try:
            logger.level(level)
        except ValueError as e:
            raise ValueError(f"unknown log level '{v}'") from e
        return level


def configure_logging(level: str = "INFO") -> None:
    logger.remove()  # Remove default handler
    logger.add(sys.stderr, format=LOG_FORMAT, level=level, colorize=True)


def load_config_from_json(file_path: str) -> Dict[str, Any]:
    """Loads and returns the configuration dictionary from a JSON file."""
    if not os.path.exists(file_path):
        raise ConfigurationError(f"Configuration file not found at: {file_path}")

    try:
        with open(file_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Error parsing JSON file '{file_path}': {e}") from e
    except OSError as e:
        raise ConfigurationError(f"Error reading config file '{file_path}': {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Configuration file '{file_path}' must hold a JSON object")
    return data


def load_config(file_path: Optional[str] = None) -> AppConfig:
    """
    Build the app config from ``file_path``, the FIRE_DASHBOARD_CONFIG
    environment variable, or defaults when neither is set.
    """
    file_path = file_path or os.environ.get(CONFIG_ENV_VAR)
    if not file_path:
        return AppConfig()

    logger.info(f"Loading configuration from: {file_path}")
    return AppConfig.model_validate(load_config_from_json(file_path))
