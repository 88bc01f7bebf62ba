from .client_repository import ClientRepository
from .list_source import ListSource

__all__ = [
    "ClientRepository",
    "ListSource",
]
