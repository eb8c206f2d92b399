"""Output formatters for query results.

Each formatter renders summary records as a rich table, JSON or YAML.
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from collections.abc import Sequence
from enum import StrEnum
from typing import Any

import yaml
from pydantic import BaseModel
from rich.console import Console
from rich.markup import escape

from k8s_query_client.cli.output.table import Table


class OutputFormat(StrEnum):
    """Supported output formats."""

    TABLE = "table"
    JSON = "json"
    YAML = "yaml"


def _dump(record: Any) -> Any:
    if isinstance(record, BaseModel):
        return record.model_dump(mode="json", exclude_none=True)
    return record


class RecordFormatter(ABC):
    """Abstract base class for record formatters."""

    def __init__(self, console: Console) -> None:
        self.console = console

    @abstractmethod
    def format_resource(self, resource: Any, title: str = "") -> None:
        """Render a single record."""

    @abstractmethod
    def format_list(
        self,
        resources: Sequence[Any],
        columns: list[tuple[str, str]],
        title: str = "",
    ) -> None:
        """Render a list of records."""

    def _print_raw(self, text: str) -> None:
        self.console.print(text, markup=False, highlight=False, soft_wrap=True)


class TableFormatter(RecordFormatter):
    """Rich table output."""

    def format_resource(self, resource: Any, title: str = "") -> None:
        """Render a record as a field/value table."""
        table = Table(title=title or "Resource Details", show_header=True)
        table.add_column("Field", style="cyan", no_wrap=True)
        table.add_column("Value", style="green")

        for field, value in _dump(resource).items():
            table.add_row(field, escape(self._format_value(value)))
        if getattr(resource, "age", None):
            table.add_row("age", resource.age)

        self.console.print(table)

    def format_list(
        self,
        resources: Sequence[Any],
        columns: list[tuple[str, str]],
        title: str = "",
    ) -> None:
        """Render records as one row each, using ``columns`` (attribute, header)."""
        table = Table(title=title, show_header=True)
        for _attr, header in columns:
            style = "cyan" if header.lower() in ("name", "namespace") else None
            table.add_column(header, style=style)

        for resource in resources:
            table.add_row(
                *(escape(self._format_cell(getattr(resource, attr, None))) for attr, _ in columns)
            )

        self.console.print(table)
        self.console.print(f"\n[dim]Total: {len(resources)} resources[/dim]")

    def _format_value(self, value: Any) -> str:
        if isinstance(value, dict | list):
            return json.dumps(value, indent=2) if value else "-"
        if value is None:
            return "-"
        return str(value)

    def _format_cell(self, value: Any) -> str:
        if isinstance(value, dict):
            return ",".join(f"{k}={v}" for k, v in value.items()) or "-"
        if isinstance(value, list):
            if not value:
                return "-"
            items = [str(v) for v in value[:3]]
            result = ", ".join(items)
            if len(value) > 3:
                result += f" (+{len(value) - 3})"
            return result
        if isinstance(value, bool):
            return "Yes" if value else "No"
        if value is None:
            return "-"
        return str(value)


class JsonFormatter(RecordFormatter):
    """JSON output."""

    def format_resource(self, resource: Any, title: str = "") -> None:
        self._print_raw(json.dumps(_dump(resource), indent=2, default=str))

    def format_list(
        self,
        resources: Sequence[Any],
        columns: list[tuple[str, str]],
        title: str = "",
    ) -> None:
        data = [_dump(r) for r in resources]
        self._print_raw(json.dumps({"data": data, "total": len(data)}, indent=2, default=str))


class YamlFormatter(RecordFormatter):
    """YAML output."""

    def format_resource(self, resource: Any, title: str = "") -> None:
        self._print_raw(yaml.safe_dump(_dump(resource), default_flow_style=False, sort_keys=False))

    def format_list(
        self,
        resources: Sequence[Any],
        columns: list[tuple[str, str]],
        title: str = "",
    ) -> None:
        data = [_dump(r) for r in resources]
        self._print_raw(yaml.safe_dump(data, default_flow_style=False, sort_keys=False))


def get_formatter(format_type: OutputFormat, console: Console | None = None) -> RecordFormatter:
    """Return the formatter for ``format_type``."""
    formatters: dict[OutputFormat, type[RecordFormatter]] = {
        OutputFormat.TABLE: TableFormatter,
        OutputFormat.JSON: JsonFormatter,
        OutputFormat.YAML: YamlFormatter,
    }
    return formatters.get(format_type, TableFormatter)(console or Console())
