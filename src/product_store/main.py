"""ASGI entry point: ``uvicorn product_store.main:app`` (settings from the environment)."""

from product_store.api.fastapi import create_app
from product_store.app import get_settings, setup_logging

_settings = get_settings()
setup_logging(level=_settings.log_level, fmt=_settings.log_format)

app = create_app(_settings)
