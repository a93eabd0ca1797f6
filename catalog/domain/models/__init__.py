"""Domain model package.

All domain objects are Pydantic models with no ORM or infrastructure
dependencies.  Import from this package rather than individual modules.
"""

from .base import Entity
from .products import CreateProductProps, Product

__all__ = [
    "Entity",
    "CreateProductProps",
    "Product",
]
