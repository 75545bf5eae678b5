"""Query compiler: boolean term patterns and regular expressions.

Boolean syntax (default):
- `foo bar`    both terms must occur (AND)
- `foo|bar`    either term must occur (OR group)
- `!foo`       term must not occur (NOT)

Matching is case-insensitive substring containment unless case-sensitive
matching is requested.
"""

import re
from dataclasses import dataclass, field
from typing import Protocol

from cc_history.errors import InvalidPatternError


@dataclass
class SearchPattern:
    """Parsed boolean pattern."""

    must_have: list[str] = field(default_factory=list)
    any_of: list[list[str]] = field(default_factory=list)
    must_not: list[str] = field(default_factory=list)


def parse_search_pattern(pattern: str, case_sensitive: bool = False) -> SearchPattern:
    """Split a pattern into AND / OR / NOT terms."""

    def fold(term: str) -> str:
        return term if case_sensitive else term.lower()

    parsed = SearchPattern()
    for token in pattern.split():
        if token.startswith("!"):
            term = token[1:]
            if term:
                parsed.must_not.append(fold(term))
        elif "|" in token:
            group = [fold(t) for t in token.split("|") if t]
            if group:
                parsed.any_of.append(group)
        else:
            parsed.must_have.append(fold(token))
    return parsed


def matches_pattern(content: str, pattern: SearchPattern, case_sensitive: bool = False) -> bool:
    """Evaluate a parsed pattern against rendered content."""
    if not case_sensitive:
        content = content.lower()

    if not all(term in content for term in pattern.must_have):
        return False
    if not all(any(term in content for term in group) for group in pattern.any_of):
        return False
    return not any(term in content for term in pattern.must_not)


class Matcher(Protocol):
    def __call__(self, content: str) -> bool: ...


class BooleanMatcher:
    def __init__(self, pattern: SearchPattern, case_sensitive: bool) -> None:
        self.pattern = pattern
        self.case_sensitive = case_sensitive

    def __call__(self, content: str) -> bool:
        return matches_pattern(content, self.pattern, self.case_sensitive)


class RegexMatcher:
    def __init__(self, regex: re.Pattern[str]) -> None:
        self.regex = regex

    def __call__(self, content: str) -> bool:
        return self.regex.search(content) is not None


def match_all(content: str) -> bool:
    return True


def compile_query(pattern: str, use_regex: bool = False, case_sensitive: bool = False) -> Matcher:
    """Compile a raw pattern into a matcher.

    Raises InvalidPatternError if a regex fails to compile.
    """
    if not pattern:
        return match_all

    if use_regex:
        flags = 0 if case_sensitive else re.IGNORECASE
        try:
            return RegexMatcher(re.compile(pattern, flags))
        except re.error as e:
            raise InvalidPatternError(f"Invalid regular expression: {e}") from e

    return BooleanMatcher(parse_search_pattern(pattern, case_sensitive), case_sensitive)
