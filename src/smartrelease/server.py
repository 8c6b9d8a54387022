"""HTTP server redirecting pattern requests to release assets, using aiohttp."""

import logging

from aiohttp import web
import httpx

from smartrelease.core.config import SmartReleaseConfig
from smartrelease.core.errors import CustomHostsDisabled, InvalidPlatform, SmartReleaseError
from smartrelease.core.releases import ReleaseClient
from smartrelease.core.resolver import Resolver, ResolveQuery
from smartrelease.models.release import GITEA, ReleaseSource

logger = logging.getLogger(__name__)

HOMEPAGE = "https://github.com/ByteDream/smartrelease"

# Failures answered with a redirect to the repository's releases page
FALLBACK_STATUSES = {400, 404, 502, 504}

_CLIENT_KEY = web.AppKey("release_client", ReleaseClient)


def fallback_location(path: str) -> str | None:
    """Releases page for a github or gitea request path.

    Paths under /custom never fall back.
    """
    if path.startswith("/favicon"):
        return None

    parts = path.split("/")
    if len(parts) < 4:
        return None
    if parts[1] == "github":
        return ReleaseSource.github(parts[2], parts[3]).release_page_url
    if parts[1] == "gitea":
        return ReleaseSource.gitea(parts[2], parts[3]).release_page_url
    return None


def client_ip(request: web.Request) -> str:
    """Address of the requesting client, preferring X-Forwarded-For."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.remote or "-"


class SmartReleaseServer:
    """Routes ``/github``, ``/gitea`` and ``/custom`` requests to the resolver."""

    def __init__(self, config: SmartReleaseConfig, transport: httpx.AsyncBaseTransport | None = None):
        self.config = config
        self.resolver = Resolver(config)
        self._transport = transport

    def create_app(self) -> web.Application:
        """Create the aiohttp application."""
        app = web.Application(middlewares=[self._error_middleware])
        app.router.add_get("/", self._index)
        app.router.add_get("/github/{user}/{repo}/{pattern:[^/]+}", self._github)
        app.router.add_get("/gitea/{user}/{repo}/{pattern:[^/]+}", self._gitea)
        app.router.add_get(
            "/custom/{host}/{platform}/{user}/{repo}/{pattern:[^/]+}", self._custom
        )
        app.on_startup.append(self._on_startup)
        app.on_cleanup.append(self._on_cleanup)
        return app

    def run(self) -> None:
        """Run the server until interrupted."""
        logger.info(
            "Started server on %s:%s with regex %s and a max pattern len of %s",
            self.config.host,
            self.config.port,
            "enabled" if self.config.enable_regex else "disabled",
            self.config.max_pattern_len,
        )
        web.run_app(
            self.create_app(),
            host=self.config.host,
            port=self.config.port,
            print=None,
        )

    async def _on_startup(self, app: web.Application) -> None:
        app[_CLIENT_KEY] = self.resolver.client(transport=self._transport)

    async def _on_cleanup(self, app: web.Application) -> None:
        await app[_CLIENT_KEY].aclose()

    @web.middleware
    async def _error_middleware(self, request: web.Request, handler) -> web.StreamResponse:
        try:
            return await handler(request)
        except SmartReleaseError as e:
            status, message = e.status, e.message
        except web.HTTPNotFound as e:
            status, message = e.status, e.reason

        logger.info("%s %s: got %s (%s)", client_ip(request), request.path, status, message)

        location = fallback_location(request.path) if status in FALLBACK_STATUSES else None
        if location:
            raise web.HTTPFound(location)
        return web.Response(status=status, text=message)

    async def _index(self, request: web.Request) -> web.StreamResponse:
        raise web.HTTPFound(HOMEPAGE)

    async def _github(self, request: web.Request) -> web.StreamResponse:
        info = request.match_info
        source = ReleaseSource.github(info["user"], info["repo"])
        return await self._redirect(request, source)

    async def _gitea(self, request: web.Request) -> web.StreamResponse:
        info = request.match_info
        source = ReleaseSource.gitea(info["user"], info["repo"])
        return await self._redirect(request, source)

    async def _custom(self, request: web.Request) -> web.StreamResponse:
        if not self.config.enable_custom_hosts:
            raise CustomHostsDisabled("Custom hosts are disabled")

        info = request.match_info
        if info["platform"] != GITEA:
            raise InvalidPlatform(f"Invalid platform '{info['platform']}' for custom host")
        source = ReleaseSource.gitea(info["user"], info["repo"], host=info["host"])
        return await self._redirect(request, source)

    async def _redirect(self, request: web.Request, source: ReleaseSource) -> web.StreamResponse:
        query = ResolveQuery.from_mapping(request.query)
        url = await self.resolver.resolve_remote(
            source,
            request.match_info["pattern"],
            query,
            client=request.app[_CLIENT_KEY],
        )
        raise web.HTTPFound(url)
