"""Base entity shared by every catalog aggregate."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Self
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Entity(BaseModel):
    """A record with a unique identifier and creation/update timestamps.

    Entities are immutable; an update is expressed as a new instance that
    replaces the stored record wholesale (see ``Entity.revise``).
    """

    model_config = ConfigDict(frozen=True)

    id: UUID = Field(default_factory=uuid4)
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

    def revise(self, **changes: object) -> Self:
        """Return a validated copy with ``changes`` applied and ``updated_at`` refreshed.

        Raises pydantic.ValidationError when the changes break a field constraint.
        """
        return type(self).model_validate(
            {**self.model_dump(), **changes, "updated_at": _utcnow()}
        )
