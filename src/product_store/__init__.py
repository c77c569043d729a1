"""File-backed product document store with a FastAPI front end."""

from . import app, products

from .exceptions import NotFoundError, ProductStoreError, StorageIOError, ValidationError
from .products import (
    CursorPaginator,
    FileProductStore,
    IdMatch,
    Page,
    Product,
    ProductImage,
    ProductOption,
    new_id,
    validate_product,
    validate_products,
)

__all__ = [
    # Modules
    "app",
    "products",
    # Errors
    "ProductStoreError",
    "ValidationError",
    "NotFoundError",
    "StorageIOError",
    # Core
    "CursorPaginator",
    "FileProductStore",
    "IdMatch",
    "Page",
    "Product",
    "ProductImage",
    "ProductOption",
    "new_id",
    "validate_product",
    "validate_products",
]
