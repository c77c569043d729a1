"""Product endpoints.

Every successful call answers 202 Accepted. Store errors and undecodable
bodies become 400 responses through the registered error handlers.

Example:
    ```bash
    curl -X POST http://localhost:8080/products \\
      -H "Content-Type: application/json" \\
      -d '[{"name": "Shirt", "options": [{"sku": "SH-1"}]}]'

    curl "http://localhost:8080/products/page?channel_product_code=0&limit=10"
    ```
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Body, Query, Response, status

from product_store.exceptions import ValidationError
from product_store.products import Product, validate_products

from ..dependencies import PaginatorDep, SettingsDep, StoreDep

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Products"])

NEXT_CURSOR_HEADER = "X-Next-Cursor"


def _parse_limit(raw: Optional[str], default: int) -> int:
    if raw is None or raw == "":
        return default
    try:
        limit = int(raw)
    except ValueError:
        raise ValidationError("invalid limit") from None
    if limit < 0:
        raise ValidationError("invalid limit")
    return limit


@router.post("/products", response_model=list[Product], status_code=status.HTTP_202_ACCEPTED)
def put_products(store: StoreDep, products: list[Product] = Body(...)) -> list[Product]:
    """Create or overwrite products, returning them with generated ids filled in."""
    # Validate the whole batch before anything touches disk.
    validate_products(products)
    return store.put(products)


@router.get("/products", response_model=list[Product], status_code=status.HTTP_202_ACCEPTED)
def get_products(store: StoreDep, ids: list[str] = Body(...)) -> list[Product]:
    """Fetch products by id, in request order. One missing id fails the request."""
    return store.get(ids)


@router.get("/products/page", response_model=list[Product], status_code=status.HTTP_202_ACCEPTED)
def get_products_page(
    response: Response,
    paginator: PaginatorDep,
    settings: SettingsDep,
    channel_product_code: Optional[str] = Query(
        None, description="Cursor: id of the last product on the previous page"
    ),
    limit: Optional[str] = Query(None, description="Maximum number of products to return"),
) -> list[Product]:
    page = paginator.paginate(
        cursor=channel_product_code or settings.cursor_start_sentinel,
        limit=_parse_limit(limit, settings.default_page_limit),
    )
    if page.next_cursor:
        response.headers[NEXT_CURSOR_HEADER] = page.next_cursor
    return list(page.items)


@router.delete("/products", status_code=status.HTTP_202_ACCEPTED)
def delete_products(store: StoreDep, ids: list[str] = Body(...)) -> None:
    removed = store.delete(ids)
    logger.debug("Delete request for %d id(s) removed %d file(s)", len(ids), len(removed))
    return None


@router.delete("/clean", status_code=status.HTTP_202_ACCEPTED)
def clean_products(store: StoreDep) -> None:
    """Remove every product file from the store."""
    store.clear()
    return None
