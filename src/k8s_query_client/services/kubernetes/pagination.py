"""Continue-token pagination for Kubernetes list calls."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from enum import StrEnum
from typing import Any, TypeAlias, TypeVar

import structlog
from pydantic import BaseModel, ConfigDict, Field

logger = structlog.get_logger()

PageFetcher: TypeAlias = Callable[[str | None], Any]
PageExtractor: TypeAlias = Callable[[Any], tuple[Sequence[Any], str | None]]

T = TypeVar("T")


class SelectorKind(StrEnum):
    """Grammar of a list selector."""

    LABEL = "label"
    FIELD = "field"


class ListOptions(BaseModel):
    """Per-call list parameters shared by every page of one list operation.

    The continue token is not part of the options; it is passed to
    ``to_request`` for each page so the options never change mid-call.
    """

    model_config = ConfigDict(frozen=True)

    selector_kind: SelectorKind
    selector: str
    limit: int = Field(gt=0)
    timeout_seconds: int = Field(ge=1)

    def to_request(self, cursor: str | None) -> dict[str, Any]:
        """Build keyword arguments for a kubernetes ``list_*`` call.

        ``timeout_seconds`` bounds the request on the API server and
        ``_request_timeout`` bounds it on the client, so a stalled connection
        cannot hold a page fetch open past the same budget.
        """
        return {
            f"{self.selector_kind.value}_selector": self.selector,
            "limit": self.limit,
            "timeout_seconds": self.timeout_seconds,
            "_continue": cursor,
            "_request_timeout": self.timeout_seconds,
        }


def items_and_continue(page: Any) -> tuple[Sequence[Any], str | None]:
    """Split a kubernetes ``V1*List`` into its items and continue token."""
    items = getattr(page, "items", None) or []
    metadata = getattr(page, "metadata", None)
    cursor = getattr(metadata, "_continue", None) if metadata is not None else None
    return items, cursor or None


def collect_pages(
    fetch_page: PageFetcher,
    convert: Callable[[Any], T],
    extract: PageExtractor = items_and_continue,
) -> list[T]:
    """Drive a paginated list call to completion.

    ``fetch_page`` is called with ``None`` for the first page and with the
    previous page's continue token afterwards, until a page comes back
    without one. Records from every page are converted and accumulated in
    order.

    Exceptions raised by ``fetch_page`` propagate unchanged; since the
    accumulator is local, a failure on any page discards everything fetched
    so far.

    Args:
        fetch_page: Issues one list request for the given continue token.
        convert: Maps one raw item to a result record.
        extract: Splits a page into items and next continue token.

    Returns:
        All records across all pages.
    """
    results: list[T] = []
    cursor: str | None = None
    pages = 0

    while True:
        page = fetch_page(cursor)
        items, cursor = extract(page)
        results.extend(convert(item) for item in items)
        pages += 1
        logger.debug("fetched_page", page=pages, items=len(items), has_more=bool(cursor))
        if not cursor:
            break

    return results
