from __future__ import annotations

from typing import Iterable

from product_store.exceptions import ValidationError

from .models import Product

NAME_REQUIRED = "name required"
OPTION_REQUIRED = "at least one option required"


def validate_product(product: Product) -> None:
    if not product.name:
        raise ValidationError(NAME_REQUIRED)
    if not product.options:
        raise ValidationError(OPTION_REQUIRED)


def validate_products(products: Iterable[Product]) -> None:
    """Validate a batch in order, raising the first failure."""
    for product in products:
        validate_product(product)
