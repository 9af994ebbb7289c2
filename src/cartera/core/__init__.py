"""Core utilities and shared functionality."""

from cartera.core.timezone import (
    now_local,
    today_local,
    parse_iso_date,
    DEFAULT_TZ_NAME,
)
from cartera.core.exceptions import (
    AppError,
    ValidationError,
    NotFoundError,
    SnapshotError,
)
from cartera.core.periods import (
    Period,
    PERIOD_PRESETS,
    resolve_period,
    resolve_range,
)

__all__ = [
    "now_local",
    "today_local",
    "parse_iso_date",
    "DEFAULT_TZ_NAME",
    "AppError",
    "ValidationError",
    "NotFoundError",
    "SnapshotError",
    "Period",
    "PERIOD_PRESETS",
    "resolve_period",
    "resolve_range",
]
