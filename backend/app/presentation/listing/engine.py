"""Generic list engine — paging, single-column filtering, selection and CRUD action dispatch.

The engine knows nothing about the entity it lists. It asks a ListSource
for pages, turns each record into a Row through a RowMapper, and forwards
view/edit/new/delete requests to optional callbacks. One engine instance
drives one screen and never has two page loads in flight.
"""

import logging
import math
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from app.application.interfaces import ListSource
from app.domain.entities import ListQuery
from app.domain.exceptions import LoadError
from app.presentation.listing.debounce import Debouncer, TimerFactory

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Row:
    """What the presentation layer renders for one record."""

    id: int
    cells: list[Any] = field(default_factory=list)


class RowMapper(ABC):
    """Per-entity projection from a fetched record to a Row."""

    @abstractmethod
    def map_row(self, record: Any) -> Row:
        ...


@dataclass
class ListActions:
    """Optional per-entity callbacks wired into the engine.

    ``on_edit`` and ``on_new`` return True when they changed data; ``on_delete``
    returns False when the user backed out. Either way a change triggers a
    reload of the current page.
    """

    on_view: Callable[[int], Awaitable[None]] | None = None
    on_edit: Callable[[int], Awaitable[bool]] | None = None
    on_new: Callable[[], Awaitable[bool]] | None = None
    on_delete: Callable[[int], Awaitable[bool | None]] | None = None


class ListStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"


@dataclass
class ListState:
    """In-memory state of one list screen. Never persisted."""

    page: int = 1
    page_size: int = 20
    total: int = 0
    filter_column: str | None = None
    filter_text: str = ""
    selected_id: int | None = None
    loading: bool = False
    rows: list[Row] = field(default_factory=list)
    error: LoadError | None = None

    @property
    def status(self) -> ListStatus:
        return ListStatus.LOADING if self.loading else ListStatus.IDLE


@dataclass(frozen=True)
class PagerInfo:
    """Pager display values for the current page."""

    page: int
    start: int
    end: int
    total: int
    prev_disabled: bool
    next_disabled: bool

    @property
    def label(self) -> str:
        return f"{self.start}-{self.end} of {self.total}"


def pager_window(page: int, page_size: int, total: int) -> PagerInfo:
    """Visible range and pager button states for ``page`` of ``total`` items."""
    start = 0 if total == 0 else (page - 1) * page_size + 1
    end = min(page * page_size, total)
    return PagerInfo(
        page=page,
        start=start,
        end=end,
        total=total,
        prev_disabled=page <= 1,
        next_disabled=end >= total,
    )


class ListEngine:
    """Controller for a paginated, filterable list of one entity type."""

    def __init__(
        self,
        source: ListSource,
        mapper: RowMapper,
        actions: ListActions | None = None,
        *,
        page_size: int = 20,
        default_column: str | None = None,
        debounce_seconds: float = 0.25,
        timer: TimerFactory | None = None,
        on_change: Callable[[ListState], None] | None = None,
    ):
        if page_size < 1:
            raise ValueError("page_size must be at least 1")
        self._source = source
        self._mapper = mapper
        self._actions = actions or ListActions()
        self._on_change = on_change
        self._pending_text = ""
        self._debouncer = Debouncer(debounce_seconds, self._apply_pending_text, timer=timer)
        self.state = ListState(page_size=page_size, filter_column=default_column)

    # ── Derived state ──────────────────────────────────────────────

    @property
    def query(self) -> ListQuery:
        return ListQuery(
            page=self.state.page,
            page_size=self.state.page_size,
            filter_column=self.state.filter_column,
            filter_text=self.state.filter_text,
        )

    @property
    def max_page(self) -> int:
        return max(1, math.ceil(self.state.total / self.state.page_size))

    @property
    def pager(self) -> PagerInfo:
        return pager_window(self.state.page, self.state.page_size, self.state.total)

    @property
    def actions_enabled(self) -> bool:
        """View, edit and delete need a selected row; new is always available."""
        return self.state.selected_id is not None

    @property
    def debouncer(self) -> Debouncer:
        return self._debouncer

    # ── Loading ────────────────────────────────────────────────────

    async def load_page(self) -> bool:
        """Fetch the current page. Returns False when a load was already in flight."""
        if self.state.loading:
            logger.debug("Page load dropped: another load is in flight")
            return False

        self.state.loading = True
        self.state.selected_id = None
        self._notify()

        query = self.query
        try:
            result = await self._source.fetch_page(query)
            rows = [self._mapper.map_row(item) for item in result.items]
        except Exception as exc:
            logger.exception("Failed to load page %d", query.page)
            self.state.rows = []
            self.state.error = LoadError(f"Could not load page {query.page}", cause=exc)
        else:
            self.state.total = result.total
            self.state.rows = rows
            self.state.error = None
            logger.debug("Loaded page %d: %d rows of %d", query.page, len(rows), result.total)
        finally:
            self.state.loading = False

        self._notify()
        if self.state.error is None and self.state.page > self.max_page:
            # the set shrank since the page was chosen; land on the last real page
            logger.debug("Page %d is past the end; moving to %d", self.state.page, self.max_page)
            self.state.page = self.max_page
            return await self.load_page()
        return True

    # ── Selection ──────────────────────────────────────────────────

    def select(self, row_id: int) -> bool:
        """Select a rendered row. Ids not on the current page clear the selection."""
        if any(row.id == row_id for row in self.state.rows):
            self.state.selected_id = row_id
            self._notify()
            return True
        self.clear_selection()
        return False

    def clear_selection(self) -> None:
        self.state.selected_id = None
        self._notify()

    # ── Filtering ──────────────────────────────────────────────────

    async def change_filter(self, column: str | None, text: str | None) -> bool:
        """Set both filter parts, go back to page 1 and reload."""
        self._debouncer.cancel()
        self.state.filter_column = column or None
        self.state.filter_text = text or ""
        self._pending_text = self.state.filter_text
        self.state.page = 1
        return await self.load_page()

    async def change_filter_column(self, column: str | None) -> bool:
        # text still waiting on the debounce is applied along with the new column
        return await self.change_filter(column, self._pending_text)

    def type_filter_text(self, text: str) -> None:
        """Record a keystroke; the reload fires after the quiet period."""
        self._pending_text = text or ""
        self._debouncer.schedule()

    async def submit_filter(self, text: str | None = None) -> bool:
        """Apply the filter text now, skipping the debounce."""
        if text is not None:
            self._pending_text = text
        self._debouncer.cancel()
        return await self._apply_pending_text()

    async def _apply_pending_text(self) -> bool:
        return await self.change_filter(self.state.filter_column, self._pending_text)

    # ── Paging ─────────────────────────────────────────────────────

    async def next_page(self) -> bool:
        if self.state.loading or self.state.page >= self.max_page:
            return False
        self.state.page += 1
        return await self.load_page()

    async def prev_page(self) -> bool:
        if self.state.loading or self.state.page <= 1:
            return False
        self.state.page -= 1
        return await self.load_page()

    # ── Actions ────────────────────────────────────────────────────

    async def view_selected(self) -> bool:
        row_id = self.state.selected_id
        if row_id is None or self._actions.on_view is None:
            return False
        await self._actions.on_view(row_id)
        return True

    async def open_row(self, row_id: int) -> bool:
        """Select a row and open its detail view in one step."""
        return self.select(row_id) and await self.view_selected()

    async def edit_selected(self) -> bool:
        row_id = self.state.selected_id
        if row_id is None or self._actions.on_edit is None:
            return False
        if await self._actions.on_edit(row_id):
            await self.load_page()
            return True
        return False

    async def delete_selected(self) -> bool:
        row_id = self.state.selected_id
        if row_id is None or self._actions.on_delete is None:
            return False
        if await self._actions.on_delete(row_id) is False:
            return False
        await self.load_page()
        return True

    async def new(self) -> bool:
        if self._actions.on_new is None:
            return False
        if await self._actions.on_new():
            await self.load_page()
            return True
        return False

    def _notify(self) -> None:
        if self._on_change is not None:
            self._on_change(self.state)
