from .core.env import Env, get_env, pick
from .core.logging import JsonFormatter, setup_logging
from .settings import StoreSettings, get_settings

__all__ = [
    "Env",
    "JsonFormatter",
    "StoreSettings",
    "get_env",
    "get_settings",
    "pick",
    "setup_logging",
]
