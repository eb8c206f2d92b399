"""Rich table with wrapping columns."""

from __future__ import annotations

from typing import Any

from rich.table import Table as RichTable


class Table(RichTable):
    """Rich Table whose columns wrap long text instead of truncating it.

    Pass ``overflow`` explicitly to ``add_column`` to opt out.
    """

    def add_column(self, *args: Any, **kwargs: Any) -> None:
        """Add a column with ``overflow="fold"`` unless told otherwise."""
        kwargs.setdefault("overflow", "fold")
        super().add_column(*args, **kwargs)
