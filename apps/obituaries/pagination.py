"""
Offset pagination for the obituary feed.

``Page`` is what the feed endpoint returns. ``InfiniteScrollController`` is
the client-side loop that consumes those pages: it watches scroll position,
requests the next fixed-size page and stops for good once a short page
comes back.

States::

    IDLE --(near bottom)--> FETCHING --(full page)--> IDLE
                                     --(short page)--> EXHAUSTED
                                     --(error)-------> IDLE   (cursor unchanged)
"""
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Generic, List, Sequence, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar('T')

DEFAULT_PAGE_SIZE = 10
DEFAULT_SCROLL_THRESHOLD = 100  # px from the bottom of the document


@dataclass(frozen=True)
class Page(Generic[T]):
    items: List[T]
    offset: int
    limit: int

    @property
    def has_more(self) -> bool:
        return len(self.items) >= self.limit

    @property
    def next_offset(self) -> int:
        return self.offset + self.limit


def normalize_window(limit: int, offset: int) -> tuple:
    """
    Coerce user-supplied limit/offset into a valid slice window. There is no
    upper bound on ``limit``: a full page always holds exactly ``limit`` rows.
    """
    limit = max(1, int(limit))
    offset = max(0, int(offset))
    return limit, offset


class ScrollState(str, Enum):
    IDLE = 'IDLE'
    FETCHING = 'FETCHING'
    EXHAUSTED = 'EXHAUSTED'


@dataclass
class InfiniteScrollController(Generic[T]):
    """
    Drives repeated ``fetch_page(limit, offset)`` calls from scroll events.

    Fetch errors are logged and swallowed so the next scroll event can retry.
    There is no de-duplication beyond the in-flight state.
    """
    fetch_page: Callable[[int, int], Sequence[T]]
    page_size: int = DEFAULT_PAGE_SIZE
    threshold: int = DEFAULT_SCROLL_THRESHOLD
    items: List[T] = field(default_factory=list)
    offset: int = 0
    state: ScrollState = ScrollState.IDLE

    @property
    def is_fetching(self) -> bool:
        return self.state == ScrollState.FETCHING

    @property
    def has_more(self) -> bool:
        return self.state != ScrollState.EXHAUSTED

    def near_bottom(self, scroll_top: int, scroll_height: int, client_height: int) -> bool:
        return scroll_height - scroll_top - client_height < self.threshold

    def on_scroll(self, scroll_top: int, scroll_height: int, client_height: int) -> bool:
        """
        Handle a scroll event. Returns True if it triggered a fetch.
        """
        if self.state != ScrollState.IDLE:
            return False
        if not self.near_bottom(scroll_top, scroll_height, client_height):
            return False
        self.load_more()
        return True

    def load_more(self) -> List[T]:
        """
        Fetch the page at the current cursor and append it.

        Returns the newly fetched items (empty when skipped or failed).
        """
        if self.state != ScrollState.IDLE:
            return []

        self.state = ScrollState.FETCHING
        try:
            page = list(self.fetch_page(self.page_size, self.offset))
        except Exception:
            logger.exception(f"Error fetching more data at offset {self.offset}")
            self.state = ScrollState.IDLE
            return []

        self.items.extend(page)
        self.offset += len(page)
        self.state = ScrollState.EXHAUSTED if len(page) < self.page_size else ScrollState.IDLE
        return page

    def refresh(self) -> List[T]:
        """Manual refresh: drop everything and load the first page again."""
        self.items = []
        self.offset = 0
        self.state = ScrollState.IDLE
        return self.load_more()
