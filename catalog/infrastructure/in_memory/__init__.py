"""In-process repository implementations."""

from .products import InMemoryProductRepository

__all__ = ["InMemoryProductRepository"]
