"""Exceptions for the filter subsystem."""

from __future__ import annotations


class FilterError(RuntimeError):
    """Base error for filter related failures."""


class RedactionError(FilterError):
    """Raised when a redaction cannot be registered."""
