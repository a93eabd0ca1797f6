"""Generic repository base interface.

Repository[T, C] is the root abstraction for all data-access interfaces in
this domain layer.  The in-memory search engine lives next to it
(in_memory.py); persisted implementations live in
catalog/infrastructure/persistence/ and are wired at the application boundary.

Design notes:
  - All methods except create() are async so the in-memory and SQL backends
    stay interchangeable.  create() only synthesizes an entity.
  - T is the domain model type (never an ORM row or DTO); C is its creation
    input type.
  - Lookups that miss raise NotFoundError, they never return None.
  - search() never raises on malformed pagination or sort input; values are
    normalized by SearchInput.resolve().
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, NamedTuple, TypeVar
from uuid import UUID

from pydantic import BaseModel, ConfigDict

T = TypeVar("T")
C = TypeVar("C")

DEFAULT_PAGE = 1
DEFAULT_PER_PAGE = 15


class ResolvedSearch(NamedTuple):
    page: int
    per_page: int
    sort: str | None
    sort_dir: str | None
    filter: str | None


class SearchInput(BaseModel):
    """Search parameters as received from a caller.  Every field is optional."""

    model_config = ConfigDict(frozen=True)

    page: int | None = None
    per_page: int | None = None
    sort: str | None = None
    sort_dir: str | None = None
    filter: str | None = None

    def resolve(self) -> ResolvedSearch:
        """Apply defaults.  Missing or non-positive page/per_page fall back."""
        page = self.page if self.page is not None and self.page >= 1 else DEFAULT_PAGE
        per_page = (
            self.per_page
            if self.per_page is not None and self.per_page >= 1
            else DEFAULT_PER_PAGE
        )
        return ResolvedSearch(page, per_page, self.sort, self.sort_dir, self.filter)


class SearchOutput(BaseModel, Generic[T]):
    """One page of search results.

    total counts the entities that survived filtering, before pagination.
    sort and sort_dir echo the ordering actually applied, which is not
    necessarily what the caller asked for.
    """

    items: list[T]
    total: int
    current_page: int
    per_page: int
    sort: str | None
    sort_dir: str | None
    filter: str | None


class Repository(ABC, Generic[T, C]):
    """Abstract CRUD-plus-search interface for a domain entity."""

    @abstractmethod
    def create(self, props: C) -> T:
        """Build a new entity (fresh id and timestamps) without persisting it."""

    @abstractmethod
    async def insert(self, entity: T) -> T:
        """Persist a fully-formed entity and return it unchanged."""

    @abstractmethod
    async def find_by_id(self, id: UUID) -> T:
        """Return the entity with the given id.  Raises NotFoundError."""

    @abstractmethod
    async def update(self, entity: T) -> T:
        """Replace the stored record with the same id.  Raises NotFoundError."""

    @abstractmethod
    async def delete(self, id: UUID) -> None:
        """Remove the entity with the given id.  Raises NotFoundError."""

    @abstractmethod
    async def search(self, params: SearchInput) -> SearchOutput[T]:
        """Filter, sort and paginate.  Never raises on malformed input."""
