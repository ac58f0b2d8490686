"""Placeholder redaction for volatile output."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import PurePath
from typing import Dict, Iterable, List, Optional, Protocol, Set, Tuple, Union

from .exceptions import RedactionError

PLACEHOLDER_RE = re.compile(r"^\[[A-Z_]+\]$")
REDACTED_GROUP = "redacted"

BUILTIN_PATTERNS: Tuple[Tuple[str, str], ...] = (
    ("[TIMESTAMP]", r"\b\d{4}-\d{2}-\d{2}[ T]\d{2}:\d{2}:\d{2}(?:\.\d+)?(?:Z|[+-]\d{2}:\d{2})?\b"),
    ("[HEX]", r"\b0x[0-9a-fA-F]+\b"),
)


class Matcher(Protocol):
    """Something that can find a volatile span inside text."""

    def try_match(self, text: str) -> Optional[Tuple[int, int]]:
        ...


@dataclass(frozen=True)
class LiteralMatcher:
    """Matches an exact substring."""

    value: str

    def try_match(self, text: str) -> Optional[Tuple[int, int]]:
        index = text.find(self.value)
        if index < 0:
            return None
        return index, index + len(self.value)


@dataclass(frozen=True)
class RegexMatcher:
    """Matches a compiled regex.

    When the regex defines a ``redacted`` named group only that group's span
    is reported, letting the surrounding match act as context.
    """

    pattern: "re.Pattern[str]"

    def try_match(self, text: str) -> Optional[Tuple[int, int]]:
        match = self.pattern.search(text)
        if match is None:
            return None
        return self._span(match)

    def _span(self, match: "re.Match[str]") -> Tuple[int, int]:
        if REDACTED_GROUP in self.pattern.groupindex:
            return match.span(REDACTED_GROUP)
        return match.span()

    def substitute(self, text: str, placeholder: str) -> str:
        def _replace(match: "re.Match[str]") -> str:
            start, end = self._span(match)
            if start < 0:
                return match.group(0)
            whole = match.group(0)
            offset = match.start()
            return whole[: start - offset] + placeholder + whole[end - offset:]

        return self.pattern.sub(_replace, text)


RedactedValue = Union[str, PurePath, "re.Pattern[str]", LiteralMatcher, RegexMatcher]


def validate_placeholder(placeholder: str) -> str:
    """Return ``placeholder`` if it looks like ``[NAME]``."""

    if not placeholder.startswith("[") or not placeholder.endswith("]"):
        raise RedactionError(f"Placeholder `{placeholder}` is not enclosed in []")
    if not PLACEHOLDER_RE.match(placeholder):
        raise RedactionError(f"Placeholder `{placeholder}` can only use A-Z and _ inside []")
    return placeholder


def _to_matcher(value: RedactedValue) -> Optional[Union[LiteralMatcher, RegexMatcher]]:
    if isinstance(value, (LiteralMatcher, RegexMatcher)):
        return value
    if isinstance(value, re.Pattern):
        return RegexMatcher(value)
    if isinstance(value, PurePath):
        value = str(value)
    if isinstance(value, str):
        if not value:
            return None
        return LiteralMatcher(value)
    raise RedactionError(f"Unsupported redaction value: {value!r}")


class Redactions:
    """Ordered mapping of placeholder tokens to matchers.

    ``redact`` rewrites actual output so volatile substrings read as their
    placeholder; ``clear`` strips disabled placeholders out of a pattern.
    """

    def __init__(self, pairs: Optional[Iterable[Tuple[str, RedactedValue]]] = None) -> None:
        self._vars: Dict[str, Union[LiteralMatcher, RegexMatcher]] = {}
        self._unused: Set[str] = set()
        if pairs:
            self.extend(pairs)

    # ------------------------------------------------------------------ registration
    def insert(self, placeholder: str, value: RedactedValue) -> None:
        validate_placeholder(placeholder)
        matcher = _to_matcher(value)
        self.remove(placeholder)
        if matcher is None:
            self._unused.add(placeholder)
        else:
            self._vars[placeholder] = matcher

    def extend(self, pairs: Iterable[Tuple[str, RedactedValue]]) -> None:
        for placeholder, value in pairs:
            self.insert(placeholder, value)

    def remove(self, placeholder: str) -> None:
        self._vars.pop(placeholder, None)
        self._unused.discard(placeholder)

    def get(self, placeholder: str) -> Optional[Matcher]:
        return self._vars.get(placeholder)

    def placeholders(self) -> List[str]:
        return [*self._vars, *sorted(self._unused)]

    def __contains__(self, placeholder: object) -> bool:
        return placeholder in self._vars or placeholder in self._unused

    def __len__(self) -> int:
        return len(self._vars) + len(self._unused)

    def __repr__(self) -> str:
        return f"Redactions({self.placeholders()!r})"

    # ------------------------------------------------------------------ application
    def _ordered(self) -> List[Tuple[str, Union[LiteralMatcher, RegexMatcher]]]:
        literals = [
            (placeholder, matcher)
            for placeholder, matcher in self._vars.items()
            if isinstance(matcher, LiteralMatcher)
        ]
        literals.sort(key=lambda item: (-len(item[1].value), item[0]))
        regexes = [
            (placeholder, matcher)
            for placeholder, matcher in self._vars.items()
            if not isinstance(matcher, LiteralMatcher)
        ]
        return literals + regexes

    def redact(self, text: str) -> str:
        """Replace every recognized volatile substring with its placeholder."""

        if not self._vars:
            return text
        result = text
        for placeholder, matcher in self._ordered():
            if isinstance(matcher, LiteralMatcher):
                result = result.replace(matcher.value, placeholder)
            else:
                result = matcher.substitute(result, placeholder)
        return result

    def clear(self, pattern: str) -> str:
        """Strip disabled placeholders from ``pattern``."""

        if not self._unused or "[" not in pattern:
            return pattern
        result = pattern
        for placeholder in sorted(self._unused):
            result = result.replace(placeholder, "")
        return result


def builtin_redactions() -> Redactions:
    """Redactions for common log noise: timestamps and hex addresses."""

    return Redactions((placeholder, re.compile(regex)) for placeholder, regex in BUILTIN_PATTERNS)
