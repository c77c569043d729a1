"""Product record models.

Field order matters: it is the order used when a product is written to disk
and returned over HTTP (``name, id, options, images``).
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .ids import IdFactory


class ProductOption(BaseModel):
    """A purchasable variant of a product."""

    model_config = ConfigDict(extra="ignore")

    sku: str = Field(default="", description="Stock keeping unit")
    id: str = Field(default="", description="Option ID, generated when empty")

    @field_validator("sku", "id", mode="before")
    @classmethod
    def null_as_empty(cls, value: Any) -> Any:
        return "" if value is None else value


class ProductImage(BaseModel):
    model_config = ConfigDict(extra="ignore")

    url: str = Field(default="", description="Image location")
    id: str = Field(default="", description="Image ID, generated when empty")

    @field_validator("url", "id", mode="before")
    @classmethod
    def null_as_empty(cls, value: Any) -> Any:
        return "" if value is None else value


class Product(BaseModel):
    """A product record, persisted as one JSON file named after its ``id``."""

    model_config = ConfigDict(extra="ignore")

    name: str = Field(default="", description="Product name (required)")
    id: str = Field(default="", description="Product ID, generated when empty")
    options: list[ProductOption] = Field(
        default_factory=list, description="At least one option is required"
    )
    images: list[ProductImage] = Field(default_factory=list)

    @field_validator("name", "id", mode="before")
    @classmethod
    def null_as_empty_str(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("options", "images", mode="before")
    @classmethod
    def null_as_empty_list(cls, value: Any) -> Any:
        return [] if value is None else value

    def with_ids(self, id_factory: IdFactory) -> "Product":
        """Return a deep copy with every missing product/option/image id filled in."""
        populated = self.model_copy(deep=True)
        if not populated.id:
            populated.id = id_factory()
        for option in populated.options:
            if not option.id:
                option.id = id_factory()
        for image in populated.images:
            if not image.id:
                image.id = id_factory()
        return populated
