from .debounce import Debouncer, asyncio_timer
from .engine import (
    ListActions,
    ListEngine,
    ListState,
    ListStatus,
    PagerInfo,
    Row,
    RowMapper,
    pager_window,
)

__all__ = [
    "Debouncer",
    "asyncio_timer",
    "ListActions",
    "ListEngine",
    "ListState",
    "ListStatus",
    "PagerInfo",
    "Row",
    "RowMapper",
    "pager_window",
]
