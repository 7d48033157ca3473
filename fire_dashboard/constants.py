# constants.py

MONTHS_PER_YEAR: int = 12

# Monthly rates smaller than this are treated as exactly zero.
ZERO_RATE_EPSILON: float = 1e-12

# 200 years; anything further out is reported as unreachable.
MAX_MONTHS_TO_TARGET: int = 2400

DEFAULT_HORIZON_YEARS: int = 40

STORAGE_KEY: str = "fire_dashboard_v1"

ANNUAL_RETURN_PCT_RANGE: tuple[float, float] = (-50.0, 50.0)
SAFETY_MARGIN_PCT_RANGE: tuple[float, float] = (0.0, 100.0)
WITHDRAWAL_RATE_OPTIONS: tuple[float, ...] = (3, 3.5, 4, 4.5, 5, 5.5, 6, 6.5, 7)
