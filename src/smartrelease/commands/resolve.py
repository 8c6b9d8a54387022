"""Resolve command implementation."""

import asyncio
from pathlib import Path

import click
from rich.console import Console

from smartrelease.core.config import SmartReleaseConfig
from smartrelease.core.errors import SmartReleaseError
from smartrelease.core.resolver import Resolver, ResolveQuery
from smartrelease.models.release import GITEA, GITHUB, ReleaseSource

console = Console()


def parse_repo_spec(spec: str) -> tuple[str, str]:
    """Parse an owner/repo spec into (owner, repo)."""
    parts = spec.strip("/").split("/")
    if len(parts) == 2 and all(parts):
        return parts[0], parts[1]
    raise click.BadParameter(f"Invalid repo spec: {spec}. Use 'owner/repo'.")


@click.command()
@click.argument("platform", type=click.Choice([GITHUB, GITEA]))
@click.argument("repo_spec")
@click.argument("pattern")
@click.option("--host", default=None, help="Gitea host (default: gitea.com)")
@click.option("--reverse", is_flag=True, help="Scan assets in reverse order")
@click.option("--keep-unknown", is_flag=True, help="Keep unresolved wildcards in the pattern")
@click.option("--major", default=None, help="Value for {major}")
@click.option("--minor", default=None, help="Value for {minor}")
@click.option("--patch", default=None, help="Value for {patch}")
@click.option("--pre", default=None, help="Value for {pre}")
@click.option("--tag", default=None, help="Value for {tag}")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="YAML config file",
)
def resolve(
    platform: str,
    repo_spec: str,
    pattern: str,
    host: str | None,
    reverse: bool,
    keep_unknown: bool,
    major: str | None,
    minor: str | None,
    patch: str | None,
    pre: str | None,
    tag: str | None,
    config_path: Path | None,
):
    """Print the download URL of the latest release asset matching PATTERN.

    REPO_SPEC is in owner/repo format.
    """
    owner, repo = parse_repo_spec(repo_spec)

    if platform == GITHUB:
        if host:
            raise click.BadParameter("--host is only supported for gitea", param_hint="--host")
        source = ReleaseSource.github(owner, repo)
    elif host:
        source = ReleaseSource.gitea(owner, repo, host=host)
    else:
        source = ReleaseSource.gitea(owner, repo)

    query = ResolveQuery(
        clear_unknown=not keep_unknown,
        reverse=reverse,
        major=major,
        minor=minor,
        patch=patch,
        pre=pre,
        tag=tag,
    )

    try:
        config = SmartReleaseConfig.load(config_path)
        url = asyncio.run(Resolver(config).resolve_remote(source, pattern, query))
    except SmartReleaseError as e:
        console.print(f"[red]Error:[/red] {e}")
        console.print(f"[dim]Releases: {source.release_page_url}[/dim]")
        raise SystemExit(1)
    except (OSError, ValueError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1)

    console.print(url, highlight=False, soft_wrap=True)
