from __future__ import annotations


class ProductStoreError(Exception):
    """Base class for every error the product store reports to callers."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ProductStoreError):
    """Malformed or incomplete input (record, id, limit or request payload)."""


class NotFoundError(ProductStoreError):
    def __init__(self, message: str, *, product_id: str | None = None):
        super().__init__(message)
        self.product_id = product_id


class StorageIOError(ProductStoreError):
    """Filesystem failure on read, write, remove or walk."""

    def __init__(self, message: str, *, path: str | None = None):
        super().__init__(message)
        self.path = path
