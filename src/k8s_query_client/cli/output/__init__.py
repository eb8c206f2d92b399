"""CLI output utilities.

Usage:
    from k8s_query_client.cli.output import OutputFormat, get_formatter

    formatter = get_formatter(OutputFormat.TABLE, console)
    formatter.format_list(pods, POD_COLUMNS, title="Pods")
"""

from k8s_query_client.cli.output.formatters import (
    JsonFormatter,
    OutputFormat,
    RecordFormatter,
    TableFormatter,
    YamlFormatter,
    get_formatter,
)
from k8s_query_client.cli.output.table import Table

__all__ = [
    "JsonFormatter",
    "OutputFormat",
    "RecordFormatter",
    "Table",
    "TableFormatter",
    "YamlFormatter",
    "get_formatter",
]
