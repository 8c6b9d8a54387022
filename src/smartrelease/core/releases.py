"""Client for fetching the latest release from GitHub and Gitea."""

import asyncio
import logging

import httpx

from smartrelease import __version__
from smartrelease.core.errors import UpstreamUnavailable
from smartrelease.models.release import GITHUB, Release, ReleaseSource

logger = logging.getLogger(__name__)

USER_AGENT = f"smartrelease/{__version__}"

GITHUB_HEADERS = {
    "Accept": "application/vnd.github+json",
    "X-GitHub-Api-Version": "2022-11-28",
}
GITEA_HEADERS = {"Content-Type": "application/json"}


class ReleaseClient:
    """Fetches latest-release data with bounded connect and total timeouts."""

    def __init__(
        self,
        connect_timeout: float = 3.0,
        total_timeout: float = 5.0,
        https_only: bool = True,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.total_timeout = total_timeout
        self.https_only = https_only
        self.client = httpx.AsyncClient(
            headers={"User-Agent": USER_AGENT},
            timeout=httpx.Timeout(total_timeout, connect=connect_timeout),
            transport=transport,
        )

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        await self.aclose()

    async def aclose(self) -> None:
        await self.client.aclose()

    async def get_latest_release(self, source: ReleaseSource) -> Release:
        """Get the latest release of ``source``.

        Raises:
            UpstreamUnavailable: network error, timeout, bad status or a
                response that can't be decoded into a release
        """
        try:
            return await asyncio.wait_for(self._fetch(source), timeout=self.total_timeout)
        except (asyncio.TimeoutError, httpx.TimeoutException) as e:
            raise UpstreamUnavailable(
                f"Timed out fetching release for {source.slug} from {source.host}",
                timeout=True,
            ) from e
        except httpx.HTTPError as e:
            raise UpstreamUnavailable(
                f"Failed to fetch release for {source.slug} from {source.host}: {e}"
            ) from e
        except (httpx.InvalidURL, ValueError) as e:
            # Malformed host: bad port, invalid IDNA label or control characters
            raise UpstreamUnavailable(f"Invalid release URL for host {source.host!r}: {e}") from e

    async def _fetch(self, source: ReleaseSource) -> Release:
        if source.platform == GITHUB:
            response = await self.client.get(source.api_url(), headers=GITHUB_HEADERS)
        else:
            response = await self.client.get(
                source.api_url(https=self.https_only),
                params={"limit": 1},
                headers=GITEA_HEADERS,
            )

        if response.status_code == 404:
            raise UpstreamUnavailable(f"No release found for {source.slug} on {source.host}")
        if response.status_code == 403:
            raise UpstreamUnavailable(f"{source.host} API rate limit exceeded")
        response.raise_for_status()

        logger.debug("Fetched release data for %s from %s", source.slug, response.url)
        return self._decode(source, response)

    def _decode(self, source: ReleaseSource, response: httpx.Response) -> Release:
        try:
            data = response.json()
            if source.platform != GITHUB:
                if not data:
                    raise UpstreamUnavailable(f"No release found for {source.slug} on {source.host}")
                data = data[0]
            return Release.from_api_response(data)
        except (ValueError, KeyError, TypeError, IndexError) as e:
            raise UpstreamUnavailable(
                f"Could not decode release data for {source.slug}: {e}"
            ) from e
