"""User Pydantic schemas. Password hashes never leave the service layer."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import Field

from consignment.schemas.common import CamelModel

UserRole = Literal["admin", "staff", "readOnly"]


class UserCreate(CamelModel):
    email: str = Field(pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    name: str = Field(min_length=2)
    password: str = Field(min_length=6)
    role: UserRole | None = None
    active: bool | None = None


class UserUpdate(CamelModel):
    email: str | None = Field(default=None, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    name: str | None = Field(default=None, min_length=2)
    password: str | None = Field(default=None, min_length=6)
    role: UserRole | None = None
    active: bool | None = None


class UserOut(CamelModel):
    id: str
    email: str
    name: str
    role: str
    active: bool
    created_at: datetime
    last_login_at: datetime | None = None
