"""SQLAlchemy implementation of ProductsRepository.

Filtering, ordering and pagination run server-side but follow the in-memory
semantics exactly: ILIKE substring match on name, the shared allow-list with
created_at-descending fallback, OFFSET (page - 1) * per_page / LIMIT per_page.
id breaks ordering ties so OFFSET pages never overlap.

SQLAlchemy errors never leave this module: a unique-name violation becomes
ConflictError, any other constraint violation (e.g. a duplicate id) becomes a
ConflictError keyed by id, a lost connection becomes StorageUnavailableError.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.engine import Result
from sqlalchemy.exc import IntegrityError, InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.base import Executable

from catalog.domain.errors import ConflictError, NotFoundError, StorageUnavailableError
from catalog.domain.models.products import CreateProductProps
from catalog.domain.models.products import Product as DomainProduct
from catalog.domain.repositories.base import SearchInput, SearchOutput
from catalog.domain.repositories.products import ProductsRepository, resolve_product_sort
from catalog.infrastructure.persistence.models.products import Product as OrmProduct

logger = logging.getLogger(__name__)

NAME_CONSTRAINT = "uq_products_name"


class SqlProductRepository(ProductsRepository):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    @staticmethod
    def _to_domain(row: OrmProduct) -> DomainProduct:
        return DomainProduct(
            id=row.id,
            name=row.name,
            price=row.price,
            quantity=row.quantity,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )

    @staticmethod
    def _to_row(entity: DomainProduct) -> OrmProduct:
        return OrmProduct(
            id=entity.id,
            name=entity.name,
            price=entity.price,
            quantity=entity.quantity,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )

    def create(self, props: CreateProductProps) -> DomainProduct:
        return DomainProduct.from_props(props)

    async def insert(self, entity: DomainProduct) -> DomainProduct:
        self._session.add(self._to_row(entity))
        await self._flush(entity)
        return entity

    async def find_by_id(self, id: UUID) -> DomainProduct:
        return self._to_domain(await self._get(id))

    async def update(self, entity: DomainProduct) -> DomainProduct:
        row = await self._get(entity.id)
        row.name = entity.name
        row.price = entity.price
        row.quantity = entity.quantity
        row.created_at = entity.created_at
        row.updated_at = entity.updated_at
        await self._flush(entity)
        return entity

    async def delete(self, id: UUID) -> None:
        row = await self._get(id)
        with self._storage_errors("delete"):
            await self._session.delete(row)
            await self._session.flush()

    async def find_by_name(self, name: str) -> DomainProduct:
        row = await self._scalar_one_or_none(
            select(OrmProduct).where(OrmProduct.name == name)
        )
        if row is None:
            raise NotFoundError(f"Product not found using name {name}", key=name)
        return self._to_domain(row)

    async def find_all_by_ids(self, product_ids: Iterable[UUID]) -> list[DomainProduct]:
        ids = list(product_ids)
        if not ids:
            return []
        result = await self._execute(select(OrmProduct).where(OrmProduct.id.in_(ids)))
        by_id = {row.id: self._to_domain(row) for row in result.scalars()}
        # Keep the caller's order, like the in-memory implementation.
        return [by_id[product_id] for product_id in ids if product_id in by_id]

    async def conflicting_name(self, name: str) -> None:
        row = await self._scalar_one_or_none(
            select(OrmProduct.id).where(OrmProduct.name == name)
        )
        if row is not None:
            raise ConflictError(f"Name already used by another product: {name}", key=name)

    async def search(self, params: SearchInput) -> SearchOutput[DomainProduct]:
        page, per_page, sort, sort_dir, filter_ = params.resolve()
        order_field, order_dir = resolve_product_sort(sort, sort_dir)
        column = getattr(OrmProduct, order_field)

        criteria = []
        if filter_:
            criteria.append(OrmProduct.name.icontains(filter_, autoescape=True))

        count_stmt = select(func.count()).select_from(OrmProduct).where(*criteria)
        ordering = column.asc() if order_dir == "asc" else column.desc()
        page_stmt = (
            select(OrmProduct)
            .where(*criteria)
            .order_by(ordering, OrmProduct.id.asc())
            .offset((page - 1) * per_page)
            .limit(per_page)
        )
        logger.debug(
            "search products: page=%s per_page=%s order=%s %s filter=%r",
            page, per_page, order_field, order_dir, filter_,
        )

        total = (await self._execute(count_stmt)).scalar_one()
        result = await self._execute(page_stmt)
        return SearchOutput(
            items=[self._to_domain(row) for row in result.scalars()],
            total=total,
            current_page=page,
            per_page=per_page,
            sort=order_field,
            sort_dir=order_dir,
            filter=filter_,
        )

    # ------------------------------------------------------------------ #
    # Session helpers                                                      #
    # ------------------------------------------------------------------ #

    async def _get(self, id: UUID) -> OrmProduct:
        row = await self._scalar_one_or_none(select(OrmProduct).where(OrmProduct.id == id))
        if row is None:
            raise NotFoundError(f"Product not found using ID {id}", key=id)
        return row

    async def _scalar_one_or_none(self, stmt: Executable):
        result = await self._execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    @contextmanager
    def _storage_errors(operation: str) -> Iterator[None]:
        try:
            yield
        except (OperationalError, InterfaceError) as exc:
            logger.warning("products %s failed: %s", operation, exc)
            raise StorageUnavailableError("Product storage unavailable") from exc

    async def _execute(self, stmt: Executable) -> Result:
        with self._storage_errors("query"):
            return await self._session.execute(stmt)

    async def _flush(self, entity: DomainProduct) -> None:
        try:
            with self._storage_errors("flush"):
                await self._session.flush()
        except IntegrityError as exc:
            logger.warning("products write rejected by constraint: %s", exc.orig)
            if NAME_CONSTRAINT in str(exc.orig):
                raise ConflictError(
                    f"Name already used by another product: {entity.name}", key=entity.name
                ) from exc
            raise ConflictError(
                f"Product already exists using ID {entity.id}", key=entity.id
            ) from exc
