"""Heuristic decomposition of release tags into version components."""

import re

from smartrelease.models.version import VersionComponents


# Best-effort, not semver: "2021-05-01" yields major=2021, minor=05, patch=01.
TAG_PATTERN = re.compile(
    r"(?P<major>\d+)"
    r"(?:[._-](?P<minor>\d+)"
    r"(?:[._-](?P<patch>\d+))?"
    r"(?:[._-]?(?P<pre>[A-Za-z0-9]+))?)?"
)


def decompose(tag: str) -> VersionComponents:
    """Split a tag into major/minor/patch/pre using the first match only."""
    match = TAG_PATTERN.search(tag)
    if match is None:
        return VersionComponents()
    return VersionComponents(**match.groupdict())
