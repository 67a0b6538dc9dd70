"""Brand, Category and PaymentMethod lookup schemas (all share one shape)."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from consignment.schemas.common import CamelModel


class LookupCreate(CamelModel):
    name: str = Field(min_length=1)
    active: bool = True


class LookupUpdate(CamelModel):
    name: str | None = Field(default=None, min_length=1)
    active: bool | None = None


class LookupOut(CamelModel):
    id: str
    name: str
    active: bool
    created_at: datetime
