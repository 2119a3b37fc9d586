"""Searchable, paginated view over persisted leads."""

import math
from typing import List, Optional, Protocol

from pydantic import BaseModel, ConfigDict, ValidationError

from ..errors import ConfigError, DatastoreError, QueryFailed
from ..models.leads import PersistedLead
from ..utils.log import get_logger

logger = get_logger("record_query")

DEFAULT_PAGE_SIZE = 50
SEARCH_FIELDS = ("company_name", "website_url", "funding_round")


class SupportsSelect(Protocol):
    def select(self, table: str, order_by: str = "created_at", descending: bool = True) -> List[dict]: ...


class Page(BaseModel):
    """One window of the filtered record set."""

    model_config = ConfigDict(frozen=True)

    items: List[PersistedLead]
    page_number: int
    page_size: int
    total_items: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_items / self.page_size)

    @property
    def first_index(self) -> int:
        """1-based position of the first row shown (0 when the page is empty)."""
        return (self.page_number - 1) * self.page_size + 1 if self.items else 0

    @property
    def last_index(self) -> int:
        return min(self.page_number * self.page_size, self.total_items) if self.items else 0

    @property
    def has_previous(self) -> bool:
        return self.page_number > 1

    @property
    def has_next(self) -> bool:
        return self.page_number < self.total_pages


def matches(lead: PersistedLead, term: str) -> bool:
    """Case-insensitive substring match on company name, website or funding round."""
    needle = term.lower()
    return any(needle in (getattr(lead, field) or "").lower() for field in SEARCH_FIELDS)


def clamp_page(page_number: int, total_pages: int) -> int:
    """Keep a requested page inside ``[1, total_pages]`` (1 when there are no pages)."""
    return max(1, min(page_number, max(total_pages, 1)))


def page_window(current: int, total_pages: int, width: int = 5) -> List[int]:
    """
    Page numbers for the navigation buttons.

    Shows the first ``width`` pages near the start, the last ``width`` near
    the end, and otherwise a window centred on ``current``.
    """
    if total_pages <= 0:
        return []
    count = min(width, total_pages)
    half = width // 2
    if current <= half + 1:
        start = 1
    elif current >= total_pages - half:
        start = total_pages - count + 1
    else:
        start = current - half
    return [n for n in range(start, start + count) if 1 <= n <= total_pages]


class RecordQueryView:
    """
    Client-side view over the ``leads`` table.

    ``load`` re-fetches the full set every time, newest first. ``search`` and
    ``page`` operate on that in-memory copy.
    """

    def __init__(self, store: SupportsSelect, table: str = "leads", page_size: int = DEFAULT_PAGE_SIZE):
        self.store = store
        self.table = table
        self.page_size = page_size
        self.records: List[PersistedLead] = []
        self.search_term = ""
        self.current_page = 1

    def load(self) -> List[PersistedLead]:
        """
        Fetch all persisted leads ordered by creation time, newest first.

        Raises:
            QueryFailed: When the fetch fails or a row cannot be read; no
                partial data is kept
        """
        try:
            rows = self.store.select(self.table, order_by="created_at", descending=True)
            records = [PersistedLead.model_validate(row) for row in rows]
        except (DatastoreError, ConfigError, ValidationError) as e:
            self.records = []
            logger.error("Fetch error: %s", e)
            raise QueryFailed("Failed to fetch data. Please try again.") from e

        self.records = records
        self.current_page = clamp_page(self.current_page, self.total_pages())
        logger.info("Fetched %d records from '%s'", len(self.records), self.table)
        return self.records

    def search(self, term: str) -> List[PersistedLead]:
        """Set the search term, reset to page 1 and return the filtered records."""
        self.search_term = term or ""
        self.current_page = 1
        return self.filtered()

    def filtered(self) -> List[PersistedLead]:
        if not self.search_term:
            return list(self.records)
        return [lead for lead in self.records if matches(lead, self.search_term)]

    def total_pages(self, page_size: Optional[int] = None) -> int:
        size = self.page_size if page_size is None else page_size
        return math.ceil(len(self.filtered()) / size)

    def page(self, page_number: Optional[int] = None, page_size: Optional[int] = None) -> Page:
        """
        Slice ``[(page-1)*size, page*size)`` of the filtered records.

        Out-of-range page numbers are not rejected; they give an empty page.
        """
        size = self.page_size if page_size is None else page_size
        if size < 1:
            raise ValueError("page_size must be at least 1")
        number = self.current_page if page_number is None else page_number
        filtered = self.filtered()
        start = (number - 1) * size
        items = filtered[start:start + size] if number >= 1 else []
        return Page(items=items, page_number=number, page_size=size, total_items=len(filtered))

    def go_to(self, page_number: int) -> Page:
        """Move the current page, clamped to the valid range, and return it."""
        self.current_page = clamp_page(page_number, self.total_pages())
        return self.page()
