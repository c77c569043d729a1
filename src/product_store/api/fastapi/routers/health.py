from __future__ import annotations

from fastapi import APIRouter

router = APIRouter(tags=["internal"])


@router.get("/ping", include_in_schema=False)
def ping() -> dict:
    return {"status": "ok"}
