"""Selecting the release asset matched by a compiled pattern."""

import re

from smartrelease.core.errors import NoMatchingAsset
from smartrelease.models.release import Asset


def match_asset(matcher: re.Pattern, assets: list[Asset], reverse: bool = False) -> Asset:
    """Return the first asset whose name contains a match.

    Assets are scanned in the order the platform returned them, or backwards
    when ``reverse`` is set.
    """
    ordered = reversed(assets) if reverse else assets
    for asset in ordered:
        if matcher.search(asset.name):
            return asset
    raise NoMatchingAsset("No matching asset was found")


def find_download_url(matcher: re.Pattern, assets: list[Asset], reverse: bool = False) -> str:
    """Download URL of the first matching asset."""
    return match_asset(matcher, assets, reverse).download_url
