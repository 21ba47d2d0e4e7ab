"""Pointcut expression matching for advice targeting."""

from __future__ import annotations

import functools
import re


def matches_pointcut(pattern: str, qualified_name: str) -> bool:
    """Check whether *qualified_name* matches a pointcut *pattern*.

    Pattern syntax
    --------------
    * ``*``  — matches exactly one dot-separated segment.
    * ``**`` — matches one or more segments (crosses dots).
    * Partial globs in a segment use fnmatch rules,
      e.g. ``log_*`` matches ``log_in``.
    * ``a || b`` — matches when either alternative matches. Repeating an
      alternative changes nothing.

    Examples
    --------
    >>> matches_pointcut("aspectdemo.*.*.log_in", "aspectdemo.service.UserService.log_in")
    True
    >>> matches_pointcut("**.UserService.*", "aspectdemo.service.UserService.log_out")
    True
    >>> matches_pointcut("**.UserService.log_*", "aspectdemo.service.UserService.log_in")
    True
    >>> matches_pointcut("*.log_in", "aspectdemo.service.UserService.log_in")
    False
    """
    return _pattern_to_regex(pattern).fullmatch(qualified_name) is not None


def split_alternatives(pattern: str) -> list[str]:
    """Split an ``||`` expression into its distinct alternatives, in order."""
    alternatives: list[str] = []
    for alt in pattern.split("||"):
        alt = alt.strip()
        if not alt:
            raise ValueError(f"Empty alternative in pointcut expression '{pattern}'")
        if alt not in alternatives:
            alternatives.append(alt)
    return alternatives


def _segment_to_regex(seg: str) -> str:
    """Convert a single pattern segment to a regex fragment."""
    if seg == "**":
        return r"(?:[^.]+\.)*[^.]+"
    if seg == "*":
        return r"[^.]+"

    parts: list[str] = []
    for ch in seg:
        if ch == "*":
            parts.append("[^.]*")
        elif ch == "?":
            parts.append("[^.]")
        else:
            parts.append(re.escape(ch))
    return "".join(parts)


@functools.lru_cache(maxsize=256)
def _pattern_to_regex(pattern: str) -> re.Pattern[str]:
    """Compile a (possibly ``||``-combined) pointcut into one regex."""
    branches = []
    for alt in split_alternatives(pattern):
        branches.append(r"\.".join(_segment_to_regex(seg) for seg in alt.split(".")))
    return re.compile("|".join(f"(?:{b})" for b in branches))
