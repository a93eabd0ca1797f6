"""Product domain model.

Pure domain objects, no ORM or persistence concerns.
"""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from .base import Entity


class CreateProductProps(BaseModel):
    """Creation input for a product; identifier and timestamps are not accepted here."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    price: Decimal = Field(ge=0, decimal_places=2)
    quantity: int = Field(ge=0)


class Product(Entity):
    """A catalog product.

    name is the business key: conflicting_name() on the repository guards
    its uniqueness.  price is stored as NUMERIC(10, 2).
    """

    name: str = Field(min_length=1)
    price: Decimal = Field(ge=0, decimal_places=2)
    quantity: int = Field(ge=0)

    @classmethod
    def create(cls, name: str, price: Decimal, quantity: int) -> Product:
        """Named constructor, generates a fresh id and timestamps."""
        return cls(name=name, price=price, quantity=quantity)

    @classmethod
    def from_props(cls, props: CreateProductProps) -> Product:
        return cls(**props.model_dump())
