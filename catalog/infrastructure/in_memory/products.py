"""In-memory implementation of ProductsRepository.

Backs unit tests and default wiring.  Search semantics match
SqlProductRepository: case-insensitive substring filter on name and
created_at-descending ordering when no valid sort field is given.
"""

from __future__ import annotations

from collections.abc import Iterable
from uuid import UUID

from catalog.domain.errors import ConflictError, NotFoundError
from catalog.domain.models.products import CreateProductProps, Product
from catalog.domain.repositories.in_memory import InMemoryRepository
from catalog.domain.repositories.products import (
    SORTABLE_FIELDS,
    ProductsRepository,
    resolve_product_sort,
)


def filter_by_name(items: list[Product], filter_: str) -> list[Product]:
    needle = filter_.lower()
    return [item for item in items if needle in item.name.lower()]


class InMemoryProductRepository(
    InMemoryRepository[Product, CreateProductProps],
    ProductsRepository,
):
    entity_name = "Product"

    def __init__(self) -> None:
        super().__init__(
            entity_factory=Product.from_props,
            filter_by=filter_by_name,
            sortable_fields=SORTABLE_FIELDS,
        )

    async def find_by_name(self, name: str) -> Product:
        for item in self.items:
            if item.name == name:
                return item
        raise NotFoundError(f"Product not found using name {name}", key=name)

    async def find_all_by_ids(self, product_ids: Iterable[UUID]) -> list[Product]:
        by_id = {item.id: item for item in self.items}
        return [by_id[product_id] for product_id in product_ids if product_id in by_id]

    async def conflicting_name(self, name: str) -> None:
        if any(item.name == name for item in self.items):
            raise ConflictError(f"Name already used by another product: {name}", key=name)

    def _apply_sort(
        self,
        items: list[Product],
        sort: str | None,
        sort_dir: str | None,
    ) -> tuple[list[Product], str | None, str | None]:
        return super()._apply_sort(items, *resolve_product_sort(sort, sort_dir))
