from __future__ import annotations

import os
from dataclasses import dataclass

TRUTHY = {"1", "true", "yes", "on"}


def _flag(name: str) -> bool:
    return str(os.getenv(name, "")).strip().lower() in TRUTHY


@dataclass(frozen=True)
class Settings:
    horizon_years: int = 60
    default_age: int = 30
    strict_projection: bool = False
    log_level: str = "INFO"
    port: int = 8000


def load_settings() -> Settings:
    """Reads runtime settings from the environment.

    Env vars:
      NETWORTH_HORIZON_YEARS=60       -> length of a freshly created plan
      NETWORTH_DEFAULT_AGE=30         -> user age of a freshly created plan
      NETWORTH_STRICT_PROJECTION=1    -> raise ProjectionError instead of returning a zeroed result
      NETWORTH_LOG_LEVEL=INFO         -> root log level for the API entry point
      NETWORTH_PORT=8000              -> port for `python -m networth.backend`
    """

    return Settings(
        horizon_years=int(os.getenv("NETWORTH_HORIZON_YEARS", 60)),
        default_age=int(os.getenv("NETWORTH_DEFAULT_AGE", 30)),
        strict_projection=_flag("NETWORTH_STRICT_PROJECTION"),
        log_level=os.getenv("NETWORTH_LOG_LEVEL", "INFO").upper(),
        port=int(os.getenv("NETWORTH_PORT", 8000)),
    )
