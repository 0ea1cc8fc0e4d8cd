"""Compilation of ``regex`` and ``glob`` filter operands to Python patterns."""

from __future__ import annotations

import math
import re
from typing import Any

from .ast import UNDEFINED
from .exceptions import InvalidPatternError

_REGEX_FLAGS: dict[str, int] = {
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
    "s": re.DOTALL,
    # Global, sticky and unicode have no meaning for a single search.
    "g": 0,
    "y": 0,
    "u": 0,
}

_STAR = "[^/]*"
_QMARK = "[^/]"
_GLOBSTAR_DIR = "(?:[^/]*/)*"
_GLOBSTAR_TAIL = ".*"


def prepare_regex(pattern: str) -> re.Pattern[str]:
    """
    Compile a ``/body/flags`` literal (or a bare pattern) to a regex.

    The first escaped backslash in the body is unescaped, as filter
    values arrive JSON-encoded.
    """
    body, flags = pattern, ""
    if pattern.startswith("/") and pattern.rfind("/") > 0:
        end = pattern.rfind("/")
        body, flags = pattern[1:end], pattern[end + 1 :]
        body = body.replace("\\\\", "\\", 1)

    re_flags = 0
    for flag in flags:
        if flag not in _REGEX_FLAGS:
            raise InvalidPatternError(pattern, "regex", f"unknown flag {flag!r}")
        re_flags |= _REGEX_FLAGS[flag]

    try:
        return re.compile(body, re_flags)
    except re.error as exc:
        raise InvalidPatternError(pattern, "regex", str(exc)) from exc


def glob_to_regex(glob: str) -> re.Pattern[str]:
    """
    Convert a minimatch-style glob to an anchored regex.

    ``*`` and ``?`` stay within a path segment, a ``**`` segment spans
    any number of segments, ``[...]`` and ``{a,b}`` are supported.
    """
    alternatives = [_translate_path(alt, glob) for alt in _expand_braces(glob, glob)]
    try:
        return re.compile("^(?:" + "|".join(alternatives) + ")$")
    except re.error as exc:
        raise InvalidPatternError(glob, "glob", str(exc)) from exc


def to_text(value: Any) -> str | None:
    """
    Textual form used for pattern tests; ``None`` when the field is absent.

    Follows script-style string coercion: lists join their items with
    ``,`` (null items become empty), whole floats drop the fraction.
    """
    if value is UNDEFINED:
        return None
    return _coerce(value)


def _coerce(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if isinstance(value, (list, tuple)):
        return ",".join(
            "" if item is None or item is UNDEFINED else _coerce(item) for item in value
        )
    if isinstance(value, dict):
        return "[object Object]"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer():
            return str(int(value))
    return str(value)


# -- glob internals ----------------------------------------------------------


def _expand_braces(pattern: str, original: str) -> list[str]:
    start = _find_brace_group(pattern, original)
    if start is None:
        return [pattern]
    open_idx, close_idx, options = start
    prefix, suffix = pattern[:open_idx], pattern[close_idx + 1 :]
    expanded: list[str] = []
    for option in options:
        expanded.extend(_expand_braces(prefix + option + suffix, original))
    return expanded


def _find_brace_group(
    pattern: str, original: str
) -> tuple[int, int, list[str]] | None:
    """Locate the first ``{...}`` group holding a top-level comma."""
    i = 0
    while i < len(pattern):
        ch = pattern[i]
        if ch == "\\":
            i += 2
            continue
        if ch == "{":
            depth, options, current = 0, [], []
            j = i + 1
            while j < len(pattern):
                c = pattern[j]
                if c == "\\" and j + 1 < len(pattern):
                    current.append(pattern[j : j + 2])
                    j += 2
                    continue
                if c == "{":
                    depth += 1
                elif c == "}":
                    if depth == 0:
                        break
                    depth -= 1
                elif c == "," and depth == 0:
                    options.append("".join(current))
                    current = []
                    j += 1
                    continue
                current.append(c)
                j += 1
            else:
                raise InvalidPatternError(original, "glob", "unterminated '{'")
            if options:
                options.append("".join(current))
                return i, j, options
            # No comma: a literal brace group, keep scanning after it.
            i = j + 1
            continue
        i += 1
    return None


def _translate_path(pattern: str, original: str) -> str:
    segments = pattern.split("/")
    parts: list[str] = []
    for index, segment in enumerate(segments):
        last = index == len(segments) - 1
        if segment == "**":
            parts.append(_GLOBSTAR_TAIL if last else _GLOBSTAR_DIR)
            continue
        parts.append(_translate_segment(segment, original) + ("" if last else "/"))
    return "".join(parts)


def _translate_segment(segment: str, original: str) -> str:
    out: list[str] = []
    i = 0
    while i < len(segment):
        ch = segment[i]
        if ch == "\\":
            if i + 1 < len(segment):
                out.append(re.escape(segment[i + 1]))
                i += 2
            else:
                out.append(re.escape("\\"))
                i += 1
        elif ch == "*":
            out.append(_STAR)
            while i < len(segment) and segment[i] == "*":
                i += 1
        elif ch == "?":
            out.append(_QMARK)
            i += 1
        elif ch == "[":
            char_class, i = _translate_class(segment, i, original)
            out.append(char_class)
        else:
            out.append(re.escape(ch))
            i += 1
    return "".join(out)


def _translate_class(segment: str, start: int, original: str) -> tuple[str, int]:
    i = start + 1
    negate = i < len(segment) and segment[i] in "!^"
    if negate:
        i += 1
    body: list[str] = []
    # A leading ']' is a literal member of the class.
    if i < len(segment) and segment[i] == "]":
        body.append("\\]")
        i += 1
    while i < len(segment) and segment[i] != "]":
        ch = segment[i]
        if ch == "\\" and i + 1 < len(segment):
            body.append(re.escape(segment[i + 1]))
            i += 2
            continue
        body.append("\\" + ch if ch in "[^" else ch)
        i += 1
    if i >= len(segment):
        raise InvalidPatternError(original, "glob", "unterminated '['")
    return f"[{'^' if negate else ''}{''.join(body)}]", i + 1
