"""Domain repository interfaces.

Abstractions are defined with abc.ABC and @abstractmethod; the in-memory
search engine lives alongside them.  Persisted implementations live in
catalog/infrastructure/persistence/.

Import from this package rather than individual modules.
"""

from .base import Repository, SearchInput, SearchOutput
from .in_memory import InMemoryRepository
from .products import ProductsRepository

__all__ = [
    "Repository",
    "SearchInput",
    "SearchOutput",
    "InMemoryRepository",
    "ProductsRepository",
]
