"""Vendor and Client repositories."""


from consignment.domain.vendor import Client, Vendor
from consignment.repositories.base import BaseRepository


class VendorRepository(BaseRepository[Vendor]):
    model = Vendor


class ClientRepository(BaseRepository[Client]):
    model = Client
