"""Product catalog package."""

from admin_console.catalog.catalog_manager import CatalogManager
from admin_console.catalog.types import DEFAULT_CATEGORY, ProductDraft, VariantDraft

__all__ = ["DEFAULT_CATEGORY", "CatalogManager", "ProductDraft", "VariantDraft"]
