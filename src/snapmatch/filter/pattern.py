"""Normalize actual output to the wildcard syntax of an expected pattern.

Built-in wildcards, on top of any :class:`Redactions` placeholders:

- ``...`` on a line of its own matches one or more complete lines
- ``[..]`` matches any run of characters within a line
- ``"{...}"`` as a list element matches a run of elements; as a dict value it
  matches any value
- a ``"..."`` key mapped to ``"{...}"`` accepts any keys the pattern does not
  list

Normalization never fails. Where actual stops matching, the rest of it is
copied through verbatim so a later equality check shows a useful diff.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from ..lines import split_keeping_terminators
from .redact import Redactions

logger = logging.getLogger(__name__)

LINE_ELIDE = "..."
INLINE_WILDCARD = "[..]"
KEY_WILDCARD = "..."
VALUE_WILDCARD = "{...}"


def is_line_elide(line: str) -> bool:
    return line == LINE_ELIDE + "\n" or line == LINE_ELIDE


def line_matches(line: str, pattern: str, redactions: Optional[Redactions] = None) -> bool:
    """Return True when ``line`` satisfies ``pattern``, honoring ``[..]``."""

    if line == pattern:
        return True
    if redactions is not None:
        pattern = redactions.clear(pattern)
        if line == pattern:
            return True

    first, *rest = pattern.split(INLINE_WILDCARD)
    if not line.startswith(first):
        return False
    remainder = line[len(first):]
    if not rest:
        return remainder == ""

    *interior, last = rest
    for section in interior:
        index = remainder.find(section)
        if index < 0:
            return False
        remainder = remainder[index + len(section):]
    # Empty trailing section means the pattern ended in [..]
    if not last:
        return True
    index = remainder.find(last)
    return index >= 0 and remainder[index + len(last):] == ""


def _find_anchor(
    lines: List[str], start: int, pattern_line: str, redactions: Redactions
) -> Optional[int]:
    for index in range(start, len(lines)):
        if line_matches(lines[index], pattern_line, redactions):
            return index
    return None


def normalize_text_to_pattern(
    actual: str, pattern: str, redactions: Optional[Redactions] = None
) -> str:
    """Rewrite ``actual`` into ``pattern``'s form for as long as they match."""

    if actual == pattern:
        return actual
    if redactions is None:
        redactions = Redactions()

    actual = redactions.redact(actual)
    actual_lines = split_keeping_terminators(actual)
    pattern_lines = split_keeping_terminators(pattern)

    normalized: List[str] = []
    actual_index = 0
    pattern_index = 0
    while pattern_index < len(pattern_lines):
        pattern_line = pattern_lines[pattern_index]
        pattern_index += 1

        if is_line_elide(pattern_line):
            if pattern_index == len(pattern_lines):
                # Trailing elision captures everything left
                normalized.append(pattern_line)
                actual_index = len(actual_lines)
                break
            anchor = _find_anchor(
                actual_lines, actual_index, pattern_lines[pattern_index], redactions
            )
            if anchor is None:
                logger.debug(
                    "Elision at pattern line %d found no anchor after actual line %d",
                    pattern_index,
                    actual_index,
                )
                break
            normalized.append(pattern_line)
            actual_index = anchor
            continue

        if actual_index >= len(actual_lines) or not line_matches(
            actual_lines[actual_index], pattern_line, redactions
        ):
            logger.debug(
                "Pattern line %d diverges from actual line %d", pattern_index, actual_index
            )
            break
        normalized.append(pattern_line)
        actual_index += 1

    normalized.extend(actual_lines[actual_index:])
    return "".join(normalized)


def _json_equal(left: Any, right: Any) -> bool:
    if isinstance(left, bool) or isinstance(right, bool):
        return type(left) is type(right) and left == right
    if isinstance(left, (int, float)) and isinstance(right, (int, float)):
        return type(left) is type(right) and left == right
    if isinstance(left, dict) and isinstance(right, dict):
        return left.keys() == right.keys() and all(
            _json_equal(value, right[key]) for key, value in left.items()
        )
    if isinstance(left, list) and isinstance(right, list):
        return len(left) == len(right) and all(
            _json_equal(a, b) for a, b in zip(left, right)
        )
    return left == right


def _is_value_wildcard(value: Any) -> bool:
    return isinstance(value, str) and value == VALUE_WILDCARD


def _split_runs(pattern: List[Any]) -> List[List[Any]]:
    runs: List[List[Any]] = [[]]
    for element in pattern:
        if _is_value_wildcard(element):
            runs.append([])
        else:
            runs[-1].append(element)
    return runs


def _normalize_list(actual: List[Any], pattern: List[Any], redactions: Redactions) -> List[Any]:
    runs = _split_runs(pattern)
    normalized: List[Any] = []
    cursor = 0
    for index, run in enumerate(runs):
        if run:
            segment = actual[cursor:cursor + len(run)]
            normalized.extend(
                _normalize_value(item, expected, redactions)
                for item, expected in zip(segment, run)
            )
            cursor += len(segment)

        if index + 1 == len(runs):
            break
        following = runs[index + 1]
        if not following:
            normalized.append(VALUE_WILDCARD)
            cursor = len(actual)
            break

        anchor = next(
            (
                position
                for position in range(cursor, len(actual))
                if _json_equal(actual[position], following[0])
            ),
            None,
        )
        if anchor is None:
            logger.debug("No element after index %d matches %r", cursor, following[0])
            break
        normalized.append(VALUE_WILDCARD)
        cursor = anchor

    normalized.extend(actual[cursor:])
    return normalized


def _normalize_dict(
    actual: Dict[str, Any], pattern: Dict[str, Any], redactions: Redactions
) -> Dict[str, Any]:
    has_key_wildcard = _is_value_wildcard(pattern.get(KEY_WILDCARD))
    normalized: Dict[str, Any] = {}
    for key, value in actual.items():
        key = redactions.redact(key)
        if key in pattern:
            normalized[key] = _normalize_value(value, pattern[key], redactions)
        elif has_key_wildcard:
            continue
        else:
            normalized[key] = value
    if has_key_wildcard:
        normalized[KEY_WILDCARD] = VALUE_WILDCARD
    return normalized


def _normalize_value(actual: Any, pattern: Any, redactions: Redactions) -> Any:
    if _is_value_wildcard(pattern):
        return VALUE_WILDCARD
    if isinstance(actual, str) and isinstance(pattern, str):
        return normalize_text_to_pattern(actual, pattern, redactions)
    if isinstance(actual, list) and isinstance(pattern, list):
        return _normalize_list(actual, pattern, redactions)
    if isinstance(actual, dict) and isinstance(pattern, dict):
        return _normalize_dict(actual, pattern, redactions)
    return actual


def normalize_value_to_pattern(
    actual: Any, pattern: Any, redactions: Optional[Redactions] = None
) -> Any:
    """Rewrite a JSON-like value into ``pattern``'s form where they match.

    ``actual`` is left untouched; lists and dicts in the result are new
    containers, while unmatched subtrees are shared with ``actual``.
    """

    if redactions is None:
        redactions = Redactions()
    return _normalize_value(actual, pattern, redactions)
