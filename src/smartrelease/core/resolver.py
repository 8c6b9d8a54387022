"""Resolve a pattern against a release into a download URL."""

from collections.abc import Mapping
from dataclasses import dataclass
import logging

from smartrelease.core.config import SmartReleaseConfig, parse_bool
from smartrelease.core.errors import InvalidParameter
from smartrelease.core.matcher import find_download_url
from smartrelease.core.pattern import OVERRIDE_NAMES, check_pattern_length, compile_pattern
from smartrelease.core.releases import ReleaseClient
from smartrelease.models.release import Release, ReleaseSource

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolveQuery:
    """Per-request options."""

    clear_unknown: bool = True
    reverse: bool = False
    major: str | None = None
    minor: str | None = None
    patch: str | None = None
    pre: str | None = None
    tag: str | None = None

    @classmethod
    def from_mapping(cls, params: Mapping[str, str]) -> "ResolveQuery":
        """Parse query string parameters.

        Raises:
            InvalidParameter: ``clear_unknown`` or ``reverse`` isn't a boolean
        """
        flags = {}
        for name, default in (("clear_unknown", True), ("reverse", False)):
            raw = params.get(name)
            if raw is None:
                flags[name] = default
                continue
            value = parse_bool(raw)
            if value is None:
                raise InvalidParameter(f"Query parameter '{name}' must be a boolean, got '{raw}'")
            flags[name] = value

        overrides = {name: params.get(name) for name in OVERRIDE_NAMES}
        return cls(**flags, **overrides)

    @property
    def overrides(self) -> dict[str, str | None]:
        return {name: getattr(self, name) for name in OVERRIDE_NAMES}


class Resolver:
    """Drives pattern compilation and asset matching for one request at a time.

    Holds nothing but the immutable config, so a single instance serves
    concurrent requests.
    """

    def __init__(self, config: SmartReleaseConfig):
        self.config = config

    def check(self, pattern: str) -> None:
        """Length check, run before any upstream request."""
        check_pattern_length(pattern, self.config.max_pattern_len)

    def resolve(self, release: Release, pattern: str, query: ResolveQuery | None = None) -> str:
        """Return the download URL of the asset in ``release`` matching ``pattern``."""
        query = query or ResolveQuery()
        matcher = compile_pattern(
            pattern,
            release.tag_name,
            overrides=query.overrides,
            clear_unknown=query.clear_unknown,
            enable_regex=self.config.enable_regex,
            max_pattern_len=self.config.max_pattern_len,
        )
        url = find_download_url(matcher, release.assets, reverse=query.reverse)
        logger.debug("Pattern %r matched %s for tag %s", matcher.pattern, url, release.tag_name)
        return url

    def client(self, **kwargs) -> ReleaseClient:
        """Create a release client using the configured timeouts."""
        return ReleaseClient(
            connect_timeout=self.config.connect_timeout,
            total_timeout=self.config.total_timeout,
            https_only=self.config.https_only,
            **kwargs,
        )

    async def resolve_remote(
        self,
        source: ReleaseSource,
        pattern: str,
        query: ResolveQuery | None = None,
        client: ReleaseClient | None = None,
    ) -> str:
        """Fetch the latest release of ``source`` and resolve ``pattern`` against it."""
        self.check(pattern)
        if client is not None:
            release = await client.get_latest_release(source)
        else:
            async with self.client() as own_client:
                release = await own_client.get_latest_release(source)
        return self.resolve(release, pattern, query)
