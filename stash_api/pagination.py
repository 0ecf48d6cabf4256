"""Cursor pagination over Stash collection endpoints.

Collection responses look like:

    {"values": [...], "start": 0, "limit": 25, "size": 25,
     "isLastPage": false, "nextPageStart": 25}

The next request uses start=nextPageStart until isLastPage is true.
"""

from dataclasses import dataclass, field
from typing import Callable, Hashable, Iterator, TypeVar

from .errors import DecodeError

DEFAULT_PAGE_LIMIT = 25

T = TypeVar("T")
K = TypeVar("K", bound=Hashable)

FetchPage = Callable[[int, int], "Page"]


@dataclass
class Page:
    """One decoded page of a collection response."""

    values: list[dict] = field(default_factory=list)
    start: int = 0
    limit: int = 0
    size: int = 0
    is_last_page: bool = True
    next_page_start: int | None = None

    @classmethod
    def from_body(cls, body) -> "Page":
        if not isinstance(body, dict):
            raise DecodeError(f"expected a JSON object for a page, got {type(body).__name__}")
        values = body.get("values", [])
        if not isinstance(values, list):
            raise DecodeError("page 'values' is not a list")
        is_last_page = body.get("isLastPage")
        page = cls(
            values=values,
            start=_cursor_int(body, "start", 0),
            limit=_cursor_int(body, "limit", 0),
            size=_cursor_int(body, "size", len(values)),
            # restriction listings may omit the cursor entirely
            is_last_page=True if is_last_page is None else bool(is_last_page),
            next_page_start=_cursor_int(body, "nextPageStart", None),
        )
        if not page.is_last_page and (page.next_page_start is None or page.next_page_start <= page.start):
            raise DecodeError(
                f"page at start={page.start} is not the last page but nextPageStart={page.next_page_start}"
            )
        return page


def _cursor_int(body: dict, name: str, default):
    value = body.get(name)
    if value is None:
        return default
    # bool is an int subclass but never a valid cursor
    if isinstance(value, bool) or not isinstance(value, int):
        raise DecodeError(f"page '{name}' is not an integer: {value!r}")
    return value


def iter_pages(fetch_page: FetchPage, limit: int = DEFAULT_PAGE_LIMIT) -> Iterator[Page]:
    """Yield pages from start=0 until the server reports the last page."""
    start = 0
    while True:
        page = fetch_page(start, limit)
        yield page
        if page.is_last_page:
            return
        start = page.next_page_start


def collect_pages(
    fetch_page: FetchPage,
    decode: Callable[[dict], T],
    key: Callable[[T], K],
    limit: int = DEFAULT_PAGE_LIMIT,
) -> dict[K, T]:
    """Merge every page's items into one mapping keyed by key(item).

    The server guarantees keys are unique across a collection, so a later
    item with a repeated key replaces the earlier one. Any failing page
    aborts the whole fetch; no partial mapping is returned.
    """
    result: dict[K, T] = {}
    for page in iter_pages(fetch_page, limit):
        for raw in page.values:
            item = decode(raw)
            try:
                result[key(item)] = item
            except TypeError as e:
                raise DecodeError(f"unusable identity key in {raw!r}: {e}") from e
    return result


def collect_list(
    fetch_page: FetchPage,
    decode: Callable[[dict], T],
    limit: int = DEFAULT_PAGE_LIMIT,
) -> list[T]:
    """Like collect_pages but keeps items in server order."""
    return [decode(raw) for page in iter_pages(fetch_page, limit) for raw in page.values]
