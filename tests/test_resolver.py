"""Tests for the resolver."""

import asyncio
from unittest.mock import AsyncMock

import pytest

from smartrelease.core.config import SmartReleaseConfig
from smartrelease.core.errors import InvalidParameter, NoMatchingAsset, PatternTooLong
from smartrelease.core.resolver import Resolver, ResolveQuery
from smartrelease.models.release import ReleaseSource


class TestResolveQuery:
    """Tests for query parsing."""

    def test_defaults(self):
        query = ResolveQuery.from_mapping({})
        assert query.clear_unknown is True
        assert query.reverse is False
        assert query.overrides == {"major": None, "minor": None, "patch": None, "pre": None, "tag": None}

    def test_flags_and_overrides(self):
        query = ResolveQuery.from_mapping(
            {"clear_unknown": "false", "reverse": "true", "major": "7", "tag": "nightly"}
        )
        assert query.clear_unknown is False
        assert query.reverse is True
        assert query.overrides["major"] == "7"
        assert query.overrides["tag"] == "nightly"

    def test_invalid_boolean(self):
        with pytest.raises(InvalidParameter) as exc_info:
            ResolveQuery.from_mapping({"reverse": "sometimes"})
        assert exc_info.value.status == 400


class TestResolve:
    """Tests for Resolver.resolve()."""

    def test_resolves_url(self, release):
        url = Resolver(SmartReleaseConfig()).resolve(release, "app-{major}.{minor}.zip")
        assert url == "https://example.com/download/v2.5.0/app-2.5.zip"

    def test_reverse(self, release):
        url = Resolver(SmartReleaseConfig()).resolve(release, "app-{tag}", ResolveQuery(tag="2.5"))
        assert url.endswith("app-2.5.0-linux-amd64.tar.gz")

        url = Resolver(SmartReleaseConfig()).resolve(
            release, "app-{tag}", ResolveQuery(tag="2.5", reverse=True)
        )
        assert url.endswith("app-2.5.zip")

    def test_override(self, release):
        url = Resolver(SmartReleaseConfig()).resolve(
            release, "app-{major}.{minor}.{patch}-darwin", ResolveQuery(major="2")
        )
        assert url.endswith("app-2.5.0-darwin-arm64.zip")

    def test_regex_mode_from_config(self, release):
        resolver = Resolver(SmartReleaseConfig(enable_regex=True))
        url = resolver.resolve(release, r"linux-(amd|arm)64\.tar\.gz$")
        assert url.endswith("app-2.5.0-linux-amd64.tar.gz")

    def test_regex_text_is_literal_by_default(self, release):
        with pytest.raises(NoMatchingAsset):
            Resolver(SmartReleaseConfig()).resolve(release, r"linux-(amd|arm)64")

    def test_length_limit_from_config(self, release):
        with pytest.raises(PatternTooLong):
            Resolver(SmartReleaseConfig(max_pattern_len=5)).resolve(release, "checksums")


class TestResolveRemote:
    """Tests for Resolver.resolve_remote()."""

    def test_fetches_then_resolves(self, release):
        client = AsyncMock()
        client.get_latest_release.return_value = release
        source = ReleaseSource.github("o", "r")

        url = asyncio.run(
            Resolver(SmartReleaseConfig()).resolve_remote(source, "checksums", client=client)
        )

        assert url.endswith("checksums.txt")
        client.get_latest_release.assert_awaited_once_with(source)

    def test_length_check_runs_before_fetch(self):
        """Test that an oversized pattern never reaches the upstream."""
        client = AsyncMock()
        resolver = Resolver(SmartReleaseConfig(max_pattern_len=3))

        with pytest.raises(PatternTooLong):
            asyncio.run(resolver.resolve_remote(ReleaseSource.github("o", "r"), "abcd", client=client))
        client.get_latest_release.assert_not_called()
