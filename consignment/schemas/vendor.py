"""Vendor and Client Pydantic schemas (request DTOs and response models)."""


from datetime import datetime
from typing import Literal

from consignment.schemas.common import CamelModel

AccountType = Literal["Ahorros", "Corriente"]

class VendorCreate(CamelModel):
    name: str | None = None
    phone: str | None = None
    email: str | None = None
    tax_id: str | None = None
    bank_account_number: str | None = None
    bank_name: str | None = None
    account_type: AccountType | None = None

class VendorUpdate(VendorCreate):
    pass

class VendorOut(CamelModel):
    id: str
    name: str | None = None
    phone: str | None = None
    email: str | None = None
    tax_id: str | None = None
    bank_account_number: str | None = None
    bank_name: str | None = None
    account_type: str | None = None
    created_at: datetime

class ClientCreate(CamelModel):
    name: str | None = None
    phone: str | None = None
    email: str | None = None
    billing_addr: str | None = None
    id_number: str | None = None

class ClientOut(ClientCreate):
    id: str
    created_at: datetime

class ClientUpdate(ClientCreate):
    pass
