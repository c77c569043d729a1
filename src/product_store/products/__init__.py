"""Product records: models, validation, file-backed storage and pagination."""

from .ids import IdFactory, new_id
from .models import Product, ProductImage, ProductOption
from .paginator import START_OF_LIST, CursorPaginator, Page
from .store import DEFAULT_EXTENSION, FileProductStore, IdMatch
from .validation import validate_product, validate_products

__all__ = [
    "CursorPaginator",
    "DEFAULT_EXTENSION",
    "FileProductStore",
    "IdFactory",
    "IdMatch",
    "Page",
    "Product",
    "ProductImage",
    "ProductOption",
    "START_OF_LIST",
    "new_id",
    "validate_product",
    "validate_products",
]
