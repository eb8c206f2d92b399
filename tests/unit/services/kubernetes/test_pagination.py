"""Unit tests for continue-token pagination."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any
from unittest.mock import MagicMock

import pytest
from kubernetes.client import V1PodList
from pydantic import ValidationError

from k8s_query_client.services.kubernetes.pagination import (
    ListOptions,
    SelectorKind,
    collect_pages,
    items_and_continue,
)


@pytest.mark.unit
@pytest.mark.kubernetes
class TestListOptions:
    """Test ListOptions."""

    def test_label_request(self) -> None:
        """Test a label selector request."""
        options = ListOptions(
            selector_kind=SelectorKind.LABEL, selector="app=web", limit=10, timeout_seconds=5
        )

        assert options.to_request(None) == {
            "label_selector": "app=web",
            "limit": 10,
            "timeout_seconds": 5,
            "_continue": None,
            "_request_timeout": 5,
        }

    def test_field_request_with_cursor(self) -> None:
        """Test a field selector request carrying a cursor."""
        options = ListOptions(
            selector_kind=SelectorKind.FIELD,
            selector="status.phase=Running",
            limit=1,
            timeout_seconds=1,
        )

        request = options.to_request("token-2")

        assert request["field_selector"] == "status.phase=Running"
        assert "label_selector" not in request
        assert request["_continue"] == "token-2"

    def test_to_request_does_not_mutate(self) -> None:
        """Test building a request leaves the options unchanged."""
        options = ListOptions(
            selector_kind=SelectorKind.LABEL, selector="app", limit=5, timeout_seconds=3
        )
        options.to_request("abc")

        assert options.to_request(None)["_continue"] is None

    def test_frozen(self) -> None:
        """Test options cannot be changed mid-call."""
        options = ListOptions(
            selector_kind=SelectorKind.LABEL, selector="app", limit=5, timeout_seconds=3
        )

        with pytest.raises(ValidationError):
            options.limit = 10  # type: ignore[misc]

    @pytest.mark.parametrize(("limit", "timeout"), [(0, 1), (1, 0)])
    def test_bounds(self, limit: int, timeout: int) -> None:
        """Test limit and timeout bounds."""
        with pytest.raises(ValidationError):
            ListOptions(
                selector_kind=SelectorKind.LABEL,
                selector="app",
                limit=limit,
                timeout_seconds=timeout,
            )


@pytest.mark.unit
@pytest.mark.kubernetes
class TestItemsAndContinue:
    """Test page splitting."""

    def test_with_cursor(self, page_factory: Callable[..., V1PodList]) -> None:
        """Test items and cursor are returned."""
        items, cursor = items_and_continue(page_factory(["a", "b"], "next"))

        assert list(items) == ["a", "b"]
        assert cursor == "next"

    def test_empty_cursor_is_none(self, page_factory: Callable[..., V1PodList]) -> None:
        """Test an empty continue token means no further pages."""
        _, cursor = items_and_continue(page_factory([], ""))

        assert cursor is None

    def test_missing_metadata(self) -> None:
        """Test a page without metadata ends pagination."""
        items, cursor = items_and_continue(V1PodList(items=[]))

        assert list(items) == []
        assert cursor is None


@pytest.mark.unit
@pytest.mark.kubernetes
class TestCollectPages:
    """Test the pagination driver."""

    def test_single_page(self, page_factory: Callable[..., V1PodList]) -> None:
        """Test a single page is fetched once with no cursor."""
        fetch = MagicMock(return_value=page_factory([1, 2]))

        assert collect_pages(fetch, str) == ["1", "2"]
        fetch.assert_called_once_with(None)

    def test_chains_cursors(self, page_factory: Callable[..., V1PodList]) -> None:
        """Test every page is requested with the previous page's cursor."""
        pages = {
            None: page_factory([1, 2], "c1"),
            "c1": page_factory([3], "c2"),
            "c2": page_factory([4, 5]),
        }
        seen: list[str | None] = []

        def fetch(cursor: str | None) -> Any:
            seen.append(cursor)
            return pages[cursor]

        assert collect_pages(fetch, lambda item: item * 10) == [10, 20, 30, 40, 50]
        assert seen == [None, "c1", "c2"]

    def test_empty_pages_still_follow_cursor(
        self, page_factory: Callable[..., V1PodList]
    ) -> None:
        """Test an empty page with a cursor does not end pagination."""
        fetch = MagicMock(side_effect=[page_factory([], "c1"), page_factory([7])])

        assert collect_pages(fetch, int) == [7]
        assert fetch.call_count == 2

    def test_failure_on_later_page_propagates(
        self, page_factory: Callable[..., V1PodList]
    ) -> None:
        """Test a failing page aborts the loop without returning partial results."""
        fetch = MagicMock(
            side_effect=[page_factory([1], "c1"), RuntimeError("page 2 failed"), page_factory([3])]
        )

        with pytest.raises(RuntimeError, match="page 2 failed"):
            collect_pages(fetch, int)

        assert fetch.call_count == 2

    def test_custom_extractor(self) -> None:
        """Test a custom extractor replaces the SDK page layout."""
        pages = iter([(["a"], "next"), (["b"], None)])

        result = collect_pages(lambda cursor: next(pages), str.upper, extract=lambda page: page)

        assert result == ["A", "B"]
