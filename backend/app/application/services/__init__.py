from .client_service import ClientService
from .client_admin_service import ClientAdminService

__all__ = [
    "ClientService",
    "ClientAdminService",
]
