"""Shared fixtures."""

import pytest

from smartrelease.models.release import Asset, Release


def make_release(tag: str, *names: str) -> Release:
    assets = [
        Asset(name=name, download_url=f"https://example.com/download/{tag}/{name}")
        for name in names
    ]
    return Release(tag_name=tag, assets=assets)


@pytest.fixture
def release() -> Release:
    return make_release(
        "v2.5.0",
        "app-2.5.0-linux-amd64.tar.gz",
        "app-2.5.0-darwin-arm64.zip",
        "app-2.5.zip",
        "checksums.txt",
    )
