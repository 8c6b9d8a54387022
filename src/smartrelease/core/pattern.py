"""Wildcard substitution and compilation of asset patterns.

A pattern such as ``app-{major}.{minor}-linux.tar.gz`` is turned into a
compiled regular expression by a sequence of passes. Each pass takes the
pattern string and returns a new one:

1. components decomposed from the tag replace their ``{name}`` tokens
2. ``{tag}`` is replaced by the literal tag
3. explicit overrides (``?major=3``) replace their tokens
4. unresolved tokens are removed, when ``clear_unknown`` is set
5. the result is escaped, unless regex mode is enabled

Passes 1 and 2 skip every name that has an override, so an override always
wins over the decomposed value of the same name. Overrides run last so that
their values are inserted verbatim and never expanded again.
"""

from collections.abc import Mapping
import re

from smartrelease.core.errors import InvalidRegex, PatternTooLong
from smartrelease.core.version import decompose
from smartrelease.models.version import VersionComponents


TOKEN_PATTERN = re.compile(r"\{\w*\}")

COMPONENT_NAMES = ("major", "minor", "patch", "pre")
OVERRIDE_NAMES = COMPONENT_NAMES + ("tag",)


def token(name: str) -> str:
    """Wildcard token for ``name``, e.g. ``{major}``."""
    return "{" + name + "}"


def stripped_length(pattern: str) -> int:
    """Length of the pattern with every wildcard token removed."""
    return len(TOKEN_PATTERN.sub("", pattern))


def check_pattern_length(pattern: str, max_pattern_len: int) -> None:
    """Raise PatternTooLong if the pattern, minus its tokens, is too long.

    A negative ``max_pattern_len`` disables the check.
    """
    if max_pattern_len > -1 and stripped_length(pattern) > max_pattern_len:
        raise PatternTooLong(
            f"Pattern / last url path must not exceed {max_pattern_len} characters"
        )


def substitute_overrides(pattern: str, overrides: Mapping[str, str | None]) -> str:
    """Replace tokens that have an explicit override value, in a single pass."""

    def replace(match: re.Match) -> str:
        name = match.group(0)[1:-1]
        value = overrides.get(name) if name in OVERRIDE_NAMES else None
        return match.group(0) if value is None else value

    return TOKEN_PATTERN.sub(replace, pattern)


def substitute_components(
    pattern: str,
    components: VersionComponents,
    skip: Mapping[str, str | None] | None = None,
) -> str:
    """Replace component tokens with decomposed values.

    Names with a value in ``skip`` are left alone.
    """
    skip = skip or {}
    for name, value in components.as_dict().items():
        if value is not None and skip.get(name) is None:
            pattern = pattern.replace(token(name), value)
    return pattern


def substitute_tag(pattern: str, tag: str) -> str:
    """Replace ``{tag}`` with the literal tag."""
    return pattern.replace(token("tag"), tag)


def clear_unknown_tokens(pattern: str) -> str:
    """Delete every remaining wildcard token."""
    return TOKEN_PATTERN.sub("", pattern)


def expand(
    pattern: str,
    tag: str,
    overrides: Mapping[str, str | None] | None = None,
    clear_unknown: bool = True,
) -> str:
    """Run the substitution passes and return the expanded pattern text."""
    overrides = overrides or {}
    result = substitute_components(pattern, decompose(tag), skip=overrides)
    if overrides.get("tag") is None:
        result = substitute_tag(result, tag)
    result = substitute_overrides(result, overrides)
    if clear_unknown:
        result = clear_unknown_tokens(result)
    return result


def compile_pattern(
    pattern: str,
    tag: str,
    overrides: Mapping[str, str | None] | None = None,
    clear_unknown: bool = True,
    enable_regex: bool = False,
    max_pattern_len: int = 70,
) -> re.Pattern:
    """Expand a wildcard pattern for ``tag`` and compile it.

    Raises:
        PatternTooLong: the pattern is longer than ``max_pattern_len``
        InvalidRegex: regex mode is on and the expanded text doesn't compile
    """
    check_pattern_length(pattern, max_pattern_len)

    expanded = expand(pattern, tag, overrides, clear_unknown)
    if not enable_regex:
        expanded = re.escape(expanded)

    try:
        return re.compile(expanded)
    except re.error as e:
        raise InvalidRegex(f"Invalid pattern '{expanded}': {e}") from e
