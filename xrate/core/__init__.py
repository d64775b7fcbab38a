from .config import (
    ACCESS_KEY_ENV_VAR,
    RateFetcherConfig,
    Settings,
    get_settings,
    settings,
)
from .logging import init_logging

__all__ = [
    "ACCESS_KEY_ENV_VAR",
    "RateFetcherConfig",
    "Settings",
    "get_settings",
    "settings",
    "init_logging",
]
