"""
Paginated listing over a control-plane list/describe call.

A page fetcher is any callable that takes a continuation token and
returns a :class:`~logplane.base.models.Page`. Tokens are replayed in the
order the service hands them out and never persisted.
"""

from __future__ import annotations

from typing import Callable, Iterator, TypeVar

from logplane.base.exceptions import ResourceNotFoundError
from logplane.base.models import Page

T = TypeVar("T")

PageFetcher = Callable[[str | None], Page[T]]
PrefixPageFetcher = Callable[[str, str | None], Page[T]]


def paginate(fetch_page: PageFetcher[T]) -> Iterator[T]:
    """Yield every item from every page, starting with no token.

    Stops after the first page whose token is empty or missing. Items are
    yielded in page order and never deduplicated.
    """
    token: str | None = None
    while True:
        page = fetch_page(token)
        yield from page.items
        if page.is_last:
            return
        token = page.next_token


def list_all(fetch_page: PrefixPageFetcher[T], prefix: str | None = "") -> list[T]:
    """Collect the full result set for *prefix* across all pages.

    Args:
        fetch_page: Called as ``fetch_page(prefix, next_token)``.
        prefix: Name prefix; empty or ``None`` matches everything.

    Returns:
        All items in the order the pages returned them. If the fetch
        reports that the parent resource does not exist (for example the
        group was deleted while its streams were being listed) the result
        is an empty list.
    """
    prefix = prefix or ""
    try:
        return list(paginate(lambda token: fetch_page(prefix, token)))
    except ResourceNotFoundError:
        return []
