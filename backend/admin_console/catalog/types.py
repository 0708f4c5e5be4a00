"""Catalog form types.

ProductDraft validates the create/update payload before it leaves the
console; the product service still owns pricing and stock authority.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from pydantic import BaseModel, Field, field_validator

from admin_console.service.types import Product

DEFAULT_CATEGORY = "IT girl"


class VariantDraft(BaseModel):
    """One size/stock row of the product form."""

    size: str = Field(min_length=1)
    stock: int = Field(default=0, ge=0)

    @field_validator("size")
    @classmethod
    def normalize_size(cls, v: str) -> str:
        v = v.strip().upper()
        if not v:
            raise ValueError("size must not be blank")
        return v


class ProductDraft(BaseModel):
    """Validated product form."""

    product_name: str = Field(min_length=1)
    description: str = ""
    category: str = DEFAULT_CATEGORY
    regular_price: Decimal = Field(ge=Decimal("0"))
    variants: list[VariantDraft] = Field(min_length=1)
    images: list[str] = Field(default_factory=list)
    is_new_arrival: bool = False
    is_suggested: bool = False
    suggested_items: list[str] = Field(default_factory=list)

    @field_validator("product_name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("product_name must not be blank")
        return v

    @field_validator("images")
    @classmethod
    def drop_blank_images(cls, v: list[str]) -> list[str]:
        return [img.strip() for img in v if img and img.strip()]

    @field_validator("variants")
    @classmethod
    def validate_unique_sizes(cls, v: list[VariantDraft]) -> list[VariantDraft]:
        sizes = [variant.size for variant in v]
        if len(sizes) != len(set(sizes)):
            raise ValueError(f"duplicate variant sizes: {sizes}")
        return v

    @classmethod
    def from_product(cls, product: Product) -> ProductDraft:
        """Prefill the form from an existing catalog entry."""
        return cls(
            product_name=product.name,
            description=product.description,
            category=product.category or DEFAULT_CATEGORY,
            regular_price=product.price,
            variants=[VariantDraft(size=v.size, stock=v.stock) for v in product.variants]
            or [VariantDraft(size="S")],
            images=list(product.images),
            is_new_arrival=product.is_new_arrival,
            is_suggested=product.is_suggested,
            suggested_items=list(product.suggested_items),
        )

    def to_payload(self) -> dict[str, Any]:
        """Wire-format body for POST/PUT /products."""
        return {
            "productName": self.product_name,
            "description": self.description,
            "category": self.category,
            "regularPrice": float(self.regular_price),
            "isNewArrival": self.is_new_arrival,
            "isSuggested": self.is_suggested,
            "variants": [{"size": v.size, "stock": v.stock} for v in self.variants],
            "images": list(self.images),
            "suggestedItems": list(self.suggested_items),
        }
