"""Product repository interface."""

from __future__ import annotations

from abc import abstractmethod
from collections.abc import Iterable
from uuid import UUID

from catalog.domain.models.products import CreateProductProps, Product

from .base import Repository

SORTABLE_FIELDS = ("name", "created_at")
DEFAULT_SORT = "created_at"
DEFAULT_SORT_DIR = "desc"


def resolve_product_sort(sort: str | None, sort_dir: str | None) -> tuple[str, str]:
    """Ordering every product backend applies for the given search input.

    A missing or non-allow-listed field falls back to created_at descending;
    for a valid field any direction other than "asc" means descending.
    """
    if sort is None or sort not in SORTABLE_FIELDS:
        return DEFAULT_SORT, DEFAULT_SORT_DIR
    if sort_dir is not None and sort_dir.lower() == "asc":
        return sort, "asc"
    return sort, "desc"


class ProductsRepository(Repository[Product, CreateProductProps]):
    """Read/write interface for Product entities.

    find_by_name and conflicting_name match the name exactly (case-sensitive);
    only search() filtering is case-insensitive.
    """

    sortable_fields: tuple[str, ...] = SORTABLE_FIELDS

    @abstractmethod
    async def find_by_name(self, name: str) -> Product:
        """Return the product with this name.  Raises NotFoundError."""

    @abstractmethod
    async def find_all_by_ids(self, product_ids: Iterable[UUID]) -> list[Product]:
        """Return the products found for these ids; misses are silently omitted."""

    @abstractmethod
    async def conflicting_name(self, name: str) -> None:
        """Raise ConflictError if a product already uses this name."""
