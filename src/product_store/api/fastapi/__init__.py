from __future__ import annotations

import logging

from fastapi import FastAPI

from product_store.app.core.env import get_env
from product_store.app.settings import StoreSettings, get_settings
from product_store.products import CursorPaginator, FileProductStore, IdMatch

from .middleware import CatchAllExceptionMiddleware, RequestSizeLimitMiddleware, register_error_handlers
from .routers import ROUTERS

logger = logging.getLogger(__name__)


def build_store(settings: StoreSettings) -> FileProductStore:
    if settings.data_dir is None:
        raise RuntimeError(
            "No data directory configured; set PRODUCT_STORE_DATA_DIR or pass --data-dir."
        )
    return FileProductStore(
        settings.data_dir,
        extension=settings.file_extension,
        indent=settings.json_indent,
        id_match=IdMatch(settings.id_match),
    )


def create_app(
        settings: StoreSettings | None = None,
        *,
        store: FileProductStore | None = None,
) -> FastAPI:
    """
    Build the product store API.

    Args:
        settings: Store settings; read from the environment when omitted.
        store: Pre-built store (tests inject one with a deterministic id factory).
            Built from ``settings.data_dir`` when omitted.
    """
    settings = settings or get_settings()
    store = store or build_store(settings)

    app = FastAPI(title=settings.title, version=settings.version)
    app.state.settings = settings
    app.state.store = store
    app.state.paginator = CursorPaginator(store, start_sentinel=settings.cursor_start_sentinel)

    app.add_middleware(RequestSizeLimitMiddleware, max_bytes=settings.max_body_bytes)
    app.add_middleware(CatchAllExceptionMiddleware)
    register_error_handlers(app)

    for router in ROUTERS:
        app.include_router(router)

    logger.info(
        f"{settings.version} version of {settings.title} initialized "
        f"[env: {get_env()}, data_dir: {store.root}, id_match: {store.id_match}]"
    )
    return app


__all__ = ["build_store", "create_app"]
