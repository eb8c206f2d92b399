"""Argument validation for Kubernetes queries.

Every check raises ``QueryValidationError`` naming the offending field, so a
rejected call never reaches the API server. Selector grammars follow the
Kubernetes apimachinery parsers closely enough to reject anything the server
would refuse to parse.
"""

from __future__ import annotations

import os
import re
from datetime import timedelta
from pathlib import Path
from typing import Any

from k8s_query_client.integrations.kubernetes.exceptions import QueryValidationError

MIN_TIMEOUT = timedelta(seconds=1)

_DNS_LABEL = r"[a-z0-9](?:[-a-z0-9]*[a-z0-9])?"
_DNS_SUBDOMAIN_RE = re.compile(rf"^{_DNS_LABEL}(?:\.{_DNS_LABEL})*$")
_QUALIFIED_NAME = r"[A-Za-z0-9](?:[-A-Za-z0-9_.]{0,61}[A-Za-z0-9])?"
_QUALIFIED_NAME_RE = re.compile(rf"^{_QUALIFIED_NAME}$")
_LABEL_VALUE_RE = re.compile(rf"^(?:{_QUALIFIED_NAME})?$")
_MAX_PREFIX_LENGTH = 253

_TOKEN = r"[^\s!=<>(),]+"
_NOT_EXISTS_RE = re.compile(rf"^!\s*(?P<key>{_TOKEN})$")
_SET_RE = re.compile(rf"^(?P<key>{_TOKEN})\s+(?P<op>notin|in)\s*\((?P<values>[^()]*)\)$")
_BINARY_RE = re.compile(rf"^(?P<key>{_TOKEN})\s*(?P<op>==|!=|=|>|<)\s*(?P<value>[^\s!=<>(),]*)$")
_EXISTS_RE = re.compile(rf"^(?P<key>{_TOKEN})$")

_FIELD_PATH_RE = re.compile(r"^[A-Za-z0-9][-A-Za-z0-9_.]*$")
_FIELD_OPERATORS = ("!=", "==", "=")
_FIELD_ESCAPABLE = {"\\", ",", "="}


def require(value: Any, field: str) -> None:
    """Reject empty strings, ``None`` and zero values.

    Raises:
        QueryValidationError: If the value is empty.
    """
    if value is None or value == "" or (isinstance(value, int | float) and value == 0):
        raise QueryValidationError(field, "value is required")


def require_min_duration(
    value: Any,
    field: str = "timeout",
    minimum: timedelta = MIN_TIMEOUT,
) -> None:
    """Reject durations shorter than ``minimum``.

    Raises:
        QueryValidationError: If the value is not a timedelta or is too short.
    """
    if not isinstance(value, timedelta):
        raise QueryValidationError(field, f"must be a duration, got {type(value).__name__}")
    if value == timedelta(0):
        raise QueryValidationError(field, "value is required")
    if value < minimum:
        raise QueryValidationError(
            field,
            f"must be at least {minimum.total_seconds():g}s, got {value.total_seconds():g}s",
        )


def require_positive(value: Any, field: str = "limit") -> None:
    """Reject anything but an integer greater than zero.

    Raises:
        QueryValidationError: If the value is not a positive integer.
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise QueryValidationError(field, f"must be an integer, got {type(value).__name__}")
    if value == 0:
        raise QueryValidationError(field, "value is required")
    if value < 0:
        raise QueryValidationError(field, f"must be greater than 0, got {value}")


def require_regular_file(path: str | os.PathLike[str] | None, field: str) -> Path:
    """Check that ``path`` names an existing regular file.

    Returns:
        The path as a ``Path``.

    Raises:
        QueryValidationError: If the path is empty, missing or not a file.
    """
    if path is None or os.fspath(path) == "":
        raise QueryValidationError(field, "value is required")
    resolved = Path(path).expanduser()
    if not resolved.exists():
        raise QueryValidationError(field, f"path does not exist: {resolved}")
    if not resolved.is_file():
        raise QueryValidationError(field, f"not a regular file: {resolved}")
    return resolved


def require_label_selector(value: Any, field: str = "label selector") -> None:
    """Validate a label selector such as ``app=web,tier in (frontend,backend)``.

    Raises:
        QueryValidationError: If the selector is empty or malformed.
    """
    require(value, field)
    if not isinstance(value, str):
        raise QueryValidationError(field, f"must be a string, got {type(value).__name__}")
    for requirement in _split_requirements(value, field):
        _check_label_requirement(requirement, field)


def require_field_selector(value: Any, field: str = "field selector") -> None:
    """Validate a field selector such as ``status.phase=Running,metadata.name!=x``.

    Raises:
        QueryValidationError: If the selector is empty or malformed.
    """
    require(value, field)
    if not isinstance(value, str):
        raise QueryValidationError(field, f"must be a string, got {type(value).__name__}")
    for term in _split_unescaped(value):
        _check_field_term(term.strip(), field)


def _split_requirements(selector: str, field: str) -> list[str]:
    """Split a label selector on commas outside parentheses."""
    parts: list[str] = []
    depth = 0
    current: list[str] = []
    for char in selector:
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth < 0:
                raise QueryValidationError(field, f"unbalanced parentheses in {selector!r}")
        if char == "," and depth == 0:
            parts.append("".join(current))
            current = []
            continue
        current.append(char)
    if depth != 0:
        raise QueryValidationError(field, f"unbalanced parentheses in {selector!r}")
    parts.append("".join(current))
    return [part.strip() for part in parts]


def _check_label_requirement(requirement: str, field: str) -> None:
    if not requirement:
        raise QueryValidationError(field, "empty requirement")

    if match := _NOT_EXISTS_RE.match(requirement):
        _check_label_key(match["key"], field)
        return

    if match := _SET_RE.match(requirement):
        _check_label_key(match["key"], field)
        values = [v.strip() for v in match["values"].split(",")]
        if values == [""]:
            raise QueryValidationError(
                field, f"operator '{match['op']}' requires at least one value"
            )
        for value in values:
            _check_label_value(value, field)
        return

    if match := _BINARY_RE.match(requirement):
        _check_label_key(match["key"], field)
        value = match["value"]
        if match["op"] in (">", "<"):
            if not re.fullmatch(r"-?\d+", value):
                raise QueryValidationError(
                    field, f"operator '{match['op']}' requires an integer value, got {value!r}"
                )
            return
        _check_label_value(value, field)
        return

    if match := _EXISTS_RE.match(requirement):
        _check_label_key(match["key"], field)
        return

    raise QueryValidationError(field, f"unable to parse requirement {requirement!r}")


def _check_label_key(key: str, field: str) -> None:
    prefix, sep, name = key.rpartition("/")
    if sep:
        if not prefix or len(prefix) > _MAX_PREFIX_LENGTH or not _DNS_SUBDOMAIN_RE.match(prefix):
            raise QueryValidationError(field, f"invalid label key prefix {prefix!r}")
    if not _QUALIFIED_NAME_RE.match(name):
        raise QueryValidationError(field, f"invalid label key {key!r}")


def _check_label_value(value: str, field: str) -> None:
    if not _LABEL_VALUE_RE.match(value):
        raise QueryValidationError(field, f"invalid label value {value!r}")


def _split_unescaped(selector: str) -> list[str]:
    """Split a field selector on commas that are not backslash-escaped."""
    parts: list[str] = []
    current: list[str] = []
    escaped = False
    for char in selector:
        if escaped:
            current.append(char)
            escaped = False
        elif char == "\\":
            current.append(char)
            escaped = True
        elif char == ",":
            parts.append("".join(current))
            current = []
        else:
            current.append(char)
    parts.append("".join(current))
    return parts


def _check_field_term(term: str, field: str) -> None:
    if not term:
        raise QueryValidationError(field, "empty term")

    for operator in _FIELD_OPERATORS:
        key, sep, value = term.partition(operator)
        if sep:
            break
    else:
        raise QueryValidationError(field, f"term {term!r} has no operator (=, ==, !=)")

    if not _FIELD_PATH_RE.match(key.strip()):
        raise QueryValidationError(field, f"invalid field path {key.strip()!r}")
    _check_field_value(value, field)


def _check_field_value(value: str, field: str) -> None:
    escaped = False
    for char in value:
        if escaped:
            if char not in _FIELD_ESCAPABLE:
                raise QueryValidationError(field, f"invalid escape sequence '\\{char}'")
            escaped = False
        elif char == "\\":
            escaped = True
        elif char in (",", "="):
            raise QueryValidationError(field, f"unescaped {char!r} in value {value!r}")
    if escaped:
        raise QueryValidationError(field, f"trailing backslash in value {value!r}")
