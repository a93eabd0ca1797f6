"""ORM model registry: imports every model module so each mapper class is
registered with Base.metadata before Alembic or SQLAlchemy runs.
"""

from catalog.infrastructure.persistence.models.products import Product

__all__ = [
    "Product",
]
