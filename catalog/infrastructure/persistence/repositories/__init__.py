"""Concrete SQLAlchemy repository implementations.

Exports the SqlRepository classes and the get_repositories() factory for
wiring at the application boundary.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from .products import SqlProductRepository


@dataclass
class Repositories:
    """All repository instances bound to a single AsyncSession."""

    products: SqlProductRepository


def get_repositories(session: AsyncSession) -> Repositories:
    """Construct all repositories bound to the given session.

    Intended for use as a request-scoped dependency:

        async with AsyncSessionLocal() as session:
            async with session.begin():
                repos = get_repositories(session)
                product = await repos.products.find_by_id(product_id)
    """
    return Repositories(
        products=SqlProductRepository(session),
    )


__all__ = [
    "SqlProductRepository",
    "Repositories",
    "get_repositories",
]
