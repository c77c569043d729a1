from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from product_store.app.settings import StoreSettings
from product_store.products import CursorPaginator, FileProductStore


def get_store(request: Request) -> FileProductStore:
    return request.app.state.store  # type: ignore[attr-defined]


def get_paginator(request: Request) -> CursorPaginator:
    return request.app.state.paginator  # type: ignore[attr-defined]


def get_store_settings(request: Request) -> StoreSettings:
    return request.app.state.settings  # type: ignore[attr-defined]


StoreDep = Annotated[FileProductStore, Depends(get_store)]
PaginatorDep = Annotated[CursorPaginator, Depends(get_paginator)]
SettingsDep = Annotated[StoreSettings, Depends(get_store_settings)]
