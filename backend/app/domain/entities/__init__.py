from .client import Client, utc_now
from .listing import ListQuery, PageResult

__all__ = [
    "Client",
    "utc_now",
    "ListQuery",
    "PageResult",
]
