from .client import (
    ClientCreate,
    ClientUpdate,
    ClientListItem,
    ClientDetail,
    ClientAdminView,
    ClientPage,
)

__all__ = [
    "ClientCreate",
    "ClientUpdate",
    "ClientListItem",
    "ClientDetail",
    "ClientAdminView",
    "ClientPage",
]
