"""Filter package exports."""

from .exceptions import FilterError, RedactionError
from .normalize import (
    Filter,
    NormalizeToExpected,
    apply_text_filter,
    normalize_newlines,
    normalize_paths,
    strip_ansi,
)
from .pattern import (
    INLINE_WILDCARD,
    KEY_WILDCARD,
    LINE_ELIDE,
    VALUE_WILDCARD,
    line_matches,
    normalize_text_to_pattern,
    normalize_value_to_pattern,
)
from .redact import LiteralMatcher, RegexMatcher, Redactions, builtin_redactions

__all__ = [
    "FilterError",
    "RedactionError",
    "Filter",
    "NormalizeToExpected",
    "apply_text_filter",
    "normalize_newlines",
    "normalize_paths",
    "strip_ansi",
    "INLINE_WILDCARD",
    "KEY_WILDCARD",
    "LINE_ELIDE",
    "VALUE_WILDCARD",
    "line_matches",
    "normalize_text_to_pattern",
    "normalize_value_to_pattern",
    "LiteralMatcher",
    "RegexMatcher",
    "Redactions",
    "builtin_redactions",
]
