from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from enum import Enum
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

HORIZON = 6
MONTH_LABELS = [f"Month {i}" for i in range(1, HORIZON + 1)]

REQUIRED_COLUMNS = ("sales_date", "product_description", "quantity_sold")


class InvalidValuePolicy(str, Enum):
    """How rows with an unparsable quantity are treated. Unparsable dates are always dropped."""

    ZERO_FILL = "zero-fill-invalid-numeric"
    DROP_ROWS = "drop-invalid-rows"


class HorizonMode(str, Enum):
    CALENDAR_MONTH_REUSE = "calendar-month-reuse"
    ROLLING = "rolling-horizon-from-last-observed-month"


@dataclass
class ForecastSettings:
    epochs: int = 50
    hidden_units: int = 10
    learning_rate: float = 0.001
    seed: Optional[int] = None
    invalid_policy: InvalidValuePolicy = InvalidValuePolicy.ZERO_FILL
    horizon_mode: HorizonMode = HorizonMode.CALENDAR_MONTH_REUSE

    def __post_init__(self):
        self.invalid_policy = InvalidValuePolicy(self.invalid_policy)
        self.horizon_mode = HorizonMode(self.horizon_mode)
        if int(self.epochs) < 1:
            raise ValueError(f"epochs must be at least 1, got {self.epochs}")
        self.epochs = int(self.epochs)

    @classmethod
    def from_env(cls, environ=None) -> "ForecastSettings":
        """Build settings from SALES_FORECAST_* variables, falling back to the defaults."""
        env = os.environ if environ is None else environ
        seed = env.get("SALES_FORECAST_SEED", "").strip()
        return cls(
            epochs=_int_from_env(env, "SALES_FORECAST_EPOCHS", cls.epochs),
            seed=int(seed) if seed else None,
            invalid_policy=env.get("SALES_FORECAST_INVALID_POLICY", InvalidValuePolicy.ZERO_FILL.value),
            horizon_mode=env.get("SALES_FORECAST_HORIZON_MODE", HorizonMode.CALENDAR_MONTH_REUSE.value),
        )


def _int_from_env(env, name: str, default: int) -> int:
    raw = env.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def configure_logging(level: Optional[str] = None) -> None:
    level = level or os.getenv("SALES_FORECAST_LOG_LEVEL", "INFO")
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
