"""Release data models for GitHub and Gitea."""

from dataclasses import dataclass, field


GITHUB = "github"
GITEA = "gitea"


@dataclass
class Asset:
    """A downloadable file attached to a release."""

    name: str
    download_url: str

    @classmethod
    def from_api_response(cls, data: dict) -> "Asset":
        """Create Asset from a GitHub or Gitea API response."""
        return cls(name=data["name"], download_url=data["browser_download_url"])


@dataclass
class Release:
    """A release tag and its assets, in the order the platform lists them."""

    tag_name: str
    assets: list[Asset] = field(default_factory=list)

    @classmethod
    def from_api_response(cls, data: dict) -> "Release":
        """Create Release from a GitHub or Gitea API response."""
        assets = [Asset.from_api_response(a) for a in data.get("assets") or []]
        return cls(tag_name=data["tag_name"], assets=assets)


@dataclass(frozen=True)
class ReleaseSource:
    """Where a release lives: platform, host and repository."""

    platform: str
    host: str
    user: str
    repo: str

    @classmethod
    def github(cls, user: str, repo: str) -> "ReleaseSource":
        """Source for a repository on github.com."""
        return cls(platform=GITHUB, host="github.com", user=user, repo=repo)

    @classmethod
    def gitea(cls, user: str, repo: str, host: str = "gitea.com") -> "ReleaseSource":
        """Source for a repository on a Gitea host."""
        return cls(platform=GITEA, host=host, user=user, repo=repo)

    @property
    def slug(self) -> str:
        """Repository in owner/repo form."""
        return f"{self.user}/{self.repo}"

    def api_url(self, https: bool = True) -> str:
        """URL of the endpoint returning the latest release."""
        if self.platform == GITHUB:
            return f"https://api.github.com/repos/{self.user}/{self.repo}/releases/latest"
        scheme = "https" if https else "http"
        return f"{scheme}://{self.host}/api/v1/repos/{self.user}/{self.repo}/releases"

    @property
    def release_page_url(self) -> str:
        """Human-facing releases page."""
        if self.platform == GITHUB:
            return f"https://github.com/{self.user}/{self.repo}/releases/latest"
        return f"https://{self.host}/{self.user}/{self.repo}/releases"
