"""Normalization filters applied to captured output before comparison."""

from __future__ import annotations

import re
from typing import Any, Callable, Protocol

from ..data import Data, DataFormat
from .pattern import normalize_text_to_pattern, normalize_value_to_pattern
from .redact import Redactions

ANSI_RE = re.compile(r"\x1B\[[0-?]*[ -/]*[@-~]")

TextFilter = Callable[[str], str]


class Filter(Protocol):
    """Transforms one :class:`Data` value into another."""

    def filter(self, data: Data) -> Data:
        ...


def strip_ansi(value: str) -> str:
    """Remove ANSI escape sequences."""

    return ANSI_RE.sub("", value)


def normalize_newlines(value: str) -> str:
    """Turn CRLF and lone CR line endings into LF."""

    return value.replace("\r\n", "\n").replace("\r", "\n")


def normalize_paths(value: str) -> str:
    """Use forward slashes as path separators."""

    return value.replace("\\", "/")


def _map_strings(value: Any, func: TextFilter) -> Any:
    if isinstance(value, str):
        return func(value)
    if isinstance(value, list):
        return [_map_strings(item, func) for item in value]
    if isinstance(value, dict):
        return {func(key): _map_strings(item, func) for key, item in value.items()}
    return value


def apply_text_filter(data: Data, func: TextFilter) -> Data:
    """Apply a text filter to text data, or to every string in tree data."""

    if data.format in (DataFormat.TEXT, DataFormat.TERM_SVG):
        return data.with_inner(func(data.inner))
    if data.format in (DataFormat.JSON, DataFormat.JSON_LINES):
        return data.with_inner(_map_strings(data.inner, func))
    return data


class NormalizeToExpected:
    """Adjust actual data to the wildcard syntax of ``pattern``.

    Text actuals are normalized line by line against the pattern's rendered
    text; json actuals are normalized structurally against a json pattern.
    Anything else passes through untouched.
    """

    def __init__(self, redactions: Redactions, pattern: Data) -> None:
        self.redactions = redactions
        self.pattern = pattern

    def filter(self, data: Data) -> Data:
        if data.format in (DataFormat.TEXT, DataFormat.TERM_SVG):
            rendered = self.pattern.render()
            if rendered is None:
                return data
            return data.with_inner(
                normalize_text_to_pattern(data.inner, rendered, self.redactions)
            )
        if data.format in (DataFormat.JSON, DataFormat.JSON_LINES):
            if self.pattern.format not in (DataFormat.JSON, DataFormat.JSON_LINES):
                return data
            return data.with_inner(
                normalize_value_to_pattern(data.inner, self.pattern.inner, self.redactions)
            )
        return data
