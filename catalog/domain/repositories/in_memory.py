"""In-memory repository with the generic search pipeline.

InMemoryRepository owns a plain list of entities and implements the full
Repository contract over it.  search() runs three stages, each consuming the
previous stage's output:

  1. filter:   injected strategy; skipped entirely for a None/empty token
  2. sort:     allow-listed field only, on a copy, stable
  3. paginate: 1-based page → [start, start + per_page) slice

Specializations supply the filter strategy and the sortable-field allow-list
and may override _apply_sort to substitute a default ordering.

Not thread-safe: update() and delete() look the entity up and then mutate
the list with no lock held across the two steps.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import Generic, TypeVar
from uuid import UUID

from catalog.domain.errors import NotFoundError
from catalog.domain.models.base import Entity

from .base import C, Repository, SearchInput, SearchOutput

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Entity)

FilterStrategy = Callable[[list[E], str], list[E]]


class InMemoryRepository(Repository[E, C], Generic[E, C]):
    """Repository over an owned, ordered list of entities."""

    entity_name = "Model"

    def __init__(
        self,
        entity_factory: Callable[[C], E],
        filter_by: FilterStrategy[E],
        sortable_fields: Iterable[str] = (),
    ) -> None:
        self.items: list[E] = []
        self.sortable_fields: tuple[str, ...] = tuple(sortable_fields)
        self._entity_factory = entity_factory
        self._filter_by = filter_by

    def create(self, props: C) -> E:
        return self._entity_factory(props)

    async def insert(self, entity: E) -> E:
        self.items.append(entity)
        return entity

    async def find_by_id(self, id: UUID) -> E:
        return self.items[self._index_of(id)]

    async def update(self, entity: E) -> E:
        index = self._index_of(entity.id)
        self.items[index] = entity
        return entity

    async def delete(self, id: UUID) -> None:
        del self.items[self._index_of(id)]

    async def search(self, params: SearchInput) -> SearchOutput[E]:
        page, per_page, sort, sort_dir, filter_ = params.resolve()
        logger.debug(
            "search %s: page=%s per_page=%s sort=%s sort_dir=%s filter=%r",
            self.entity_name, page, per_page, sort, sort_dir, filter_,
        )

        filtered = self._apply_filter(self.items, filter_)
        ordered, applied_sort, applied_dir = self._apply_sort(filtered, sort, sort_dir)
        paginated = self._apply_paginate(ordered, page, per_page)

        return SearchOutput(
            items=paginated,
            total=len(filtered),
            current_page=page,
            per_page=per_page,
            sort=applied_sort,
            sort_dir=applied_dir,
            filter=filter_,
        )

    # ------------------------------------------------------------------ #
    # Pipeline stages                                                      #
    # ------------------------------------------------------------------ #

    def _apply_filter(self, items: list[E], filter_: str | None) -> list[E]:
        if not filter_:
            return items
        return self._filter_by(items, filter_)

    def _apply_sort(
        self,
        items: list[E],
        sort: str | None,
        sort_dir: str | None,
    ) -> tuple[list[E], str | None, str | None]:
        """Return (ordered items, applied sort field, applied direction).

        An unknown or missing field leaves the items untouched and reports
        no ordering.  Any direction other than "asc" sorts descending.
        """
        if sort is None or sort not in self.sortable_fields:
            return items, None, None

        direction = "asc" if sort_dir is not None and sort_dir.lower() == "asc" else "desc"
        ordered = sorted(
            items,
            key=lambda item: getattr(item, sort),
            reverse=direction == "desc",
        )
        return ordered, sort, direction

    @staticmethod
    def _apply_paginate(items: list[E], page: int, per_page: int) -> list[E]:
        start = (page - 1) * per_page
        return items[start:start + per_page]

    def _index_of(self, id: UUID) -> int:
        for index, item in enumerate(self.items):
            if item.id == id:
                return index
        raise NotFoundError(f"{self.entity_name} not found using ID {id}", key=id)
