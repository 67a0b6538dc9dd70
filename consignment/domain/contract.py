"""SQLAlchemy ORM models for consignment Contracts and their Templates.

A contract stores ``item_snapshots``: a JSON copy of each consigned item's
pricing and condition at the moment the contract was created. Later edits to
the items never reach the contract.
"""

from __future__ import annotations

from typing import Any, Optional

from sqlalchemy import JSON, Boolean, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from consignment.db.base import Base
from consignment.domain.mixins import CreatedAtMixin, UUIDPrimaryKeyMixin

# Contracts in these states are binding and cannot be deleted
LOCKED_CONTRACT_STATUSES = frozenset({"active", "final"})


class ContractTemplate(Base, UUIDPrimaryKeyMixin, CreatedAtMixin):
    __tablename__ = "contract_template"

    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    terms_text: Mapped[str] = mapped_column(Text, nullable=False)
    is_default: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False, index=True)


class Contract(Base, UUIDPrimaryKeyMixin, CreatedAtMixin):
    __tablename__ = "contract"

    vendor_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("vendor.id"), nullable=False, index=True
    )
    template_id: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey("contract_template.id"), nullable=True
    )
    # "draft" | "active" | "final"
    status: Mapped[str] = mapped_column(String(20), default="draft", nullable=False, index=True)
    terms_text: Mapped[str] = mapped_column(Text, nullable=False)
    item_snapshots: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)
    pdf_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
