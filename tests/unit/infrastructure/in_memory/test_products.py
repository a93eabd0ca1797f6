"""Tests for InMemoryProductRepository: domain lookups and product search defaults."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from uuid import uuid4

import pytest

from catalog.domain.errors import ConflictError, NotFoundError
from catalog.domain.models.products import CreateProductProps, Product
from catalog.domain.repositories.base import SearchInput
from catalog.domain.repositories.products import ProductsRepository
from catalog.infrastructure.in_memory import InMemoryProductRepository

_BASE_TIME = datetime(2026, 1, 1, tzinfo=timezone.utc)


def _product(**overrides):
    defaults = dict(name="Keyboard", price=Decimal("149.90"), quantity=10)
    defaults.update(overrides)
    return Product(**defaults)


def _products(*names):
    # created_at increases with position so insertion order == oldest first
    return [
        _product(name=name, created_at=_BASE_TIME + timedelta(seconds=i))
        for i, name in enumerate(names)
    ]


def test_is_a_products_repository():
    assert isinstance(InMemoryProductRepository(), ProductsRepository)


def test_create_builds_product_from_props():
    props = CreateProductProps(name="Mouse", price=Decimal("20.00"), quantity=3)
    product = InMemoryProductRepository().create(props)
    assert isinstance(product, Product)
    assert product.name == "Mouse"


async def test_find_by_id_not_found_message_names_product():
    missing = uuid4()
    with pytest.raises(NotFoundError, match=f"Product not found using ID {missing}"):
        await InMemoryProductRepository().find_by_id(missing)


# --- find_by_name ---

async def test_find_by_name_raises_when_not_found():
    with pytest.raises(NotFoundError, match="Product not found using name a name") as exc_info:
        await InMemoryProductRepository().find_by_name("a name")
    assert exc_info.value.key == "a name"


async def test_find_by_name_returns_product():
    repo = InMemoryProductRepository()
    product = await repo.insert(_product(name="Product 1"))
    assert await repo.find_by_name("Product 1") is product


async def test_find_by_name_is_exact_match():
    repo = InMemoryProductRepository()
    await repo.insert(_product(name="Product 1"))
    with pytest.raises(NotFoundError):
        await repo.find_by_name("product 1")


# --- conflicting_name ---

async def test_conflicting_name_raises_when_name_taken():
    repo = InMemoryProductRepository()
    await repo.insert(_product(name="Product 1"))
    with pytest.raises(ConflictError, match="Name already used by another product: Product 1") as exc_info:
        await repo.conflicting_name("Product 1")
    assert exc_info.value.key == "Product 1"


async def test_conflicting_name_returns_none_when_free():
    repo = InMemoryProductRepository()
    await repo.insert(_product(name="Product 1"))
    assert await repo.conflicting_name("Product 2") is None


# --- find_all_by_ids ---

async def test_find_all_by_ids_returns_empty_when_none_found():
    repo = InMemoryProductRepository()
    await repo.insert(_product())
    assert await repo.find_all_by_ids([uuid4(), uuid4()]) == []


async def test_find_all_by_ids_omits_misses():
    repo = InMemoryProductRepository()
    first, second = _products("A", "B")
    await repo.insert(first)
    await repo.insert(second)
    result = await repo.find_all_by_ids([second.id, uuid4(), first.id])
    assert result == [second, first]


async def test_find_all_by_ids_accepts_empty_input():
    assert await InMemoryProductRepository().find_all_by_ids([]) == []


# --- filter ---

def test_apply_filter_returns_items_when_filter_is_none():
    items = _products("Product 1")
    assert InMemoryProductRepository()._apply_filter(items, None) is items


def test_apply_filter_matches_name_substring_case_insensitively():
    items = _products("Test", "TEST", "fake", "a tESt b")
    result = InMemoryProductRepository()._apply_filter(items, "TEST")
    assert result == [items[0], items[1], items[3]]


# --- sort ---

def test_apply_sort_defaults_to_created_at_desc():
    items = _products("a", "b", "c")
    result, sort, sort_dir = InMemoryProductRepository()._apply_sort(items, None, None)
    assert result == [items[2], items[1], items[0]]
    assert (sort, sort_dir) == ("created_at", "desc")


def test_apply_sort_unknown_field_falls_back_to_created_at_desc():
    items = _products("a", "b", "c")
    result, sort, sort_dir = InMemoryProductRepository()._apply_sort(items, "price", "asc")
    assert result == [items[2], items[1], items[0]]
    assert (sort, sort_dir) == ("created_at", "desc")


def test_apply_sort_by_name():
    items = _products("b", "a", "c")
    repo = InMemoryProductRepository()
    result, _, _ = repo._apply_sort(items, "name", "asc")
    assert result == [items[1], items[0], items[2]]
    result, _, _ = repo._apply_sort(items, "name", None)
    assert result == [items[2], items[0], items[1]]


# --- search ---

async def test_search_defaults_order_newest_first():
    repo = InMemoryProductRepository()
    repo.items = _products(*[f"Product {i}" for i in range(16)])
    result = await repo.search(SearchInput())
    assert result.total == 16
    assert result.per_page == 15
    assert result.current_page == 1
    assert len(result.items) == 15
    assert result.items[0] is repo.items[-1]
    assert (result.sort, result.sort_dir, result.filter) == ("created_at", "desc", None)


async def test_search_filter_sort_and_paginate():
    repo = InMemoryProductRepository()
    repo.items = _products("test", "a", "TEST", "TeSt")
    result = await repo.search(
        SearchInput(page=1, per_page=2, sort="name", sort_dir="asc", filter="test")
    )
    assert [item.name for item in result.items] == ["TEST", "TeSt"]
    assert result.total == 3
    assert result.filter == "test"


async def test_search_pages_by_name():
    repo = InMemoryProductRepository()
    repo.items = _products("b", "a", "d", "e", "c")
    page_1 = await repo.search(SearchInput(page=1, per_page=2, sort="name", sort_dir="asc"))
    page_2 = await repo.search(SearchInput(page=2, per_page=2, sort="name", sort_dir="asc"))
    assert [item.name for item in page_1.items] == ["a", "b"]
    assert [item.name for item in page_2.items] == ["c", "d"]
