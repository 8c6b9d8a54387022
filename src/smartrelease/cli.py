"""CLI entry point for smartrelease."""

import click
from dotenv import load_dotenv

from smartrelease import __version__
from smartrelease.commands import resolve, serve


@click.group()
@click.version_option(version=__version__, prog_name="smartrelease")
def main():
    """smartrelease - Redirect to release assets matched by a pattern.

    Patterns may contain {major}, {minor}, {patch}, {pre} and {tag}
    wildcards, filled in from the latest release tag.

    Examples:

        smartrelease serve --port 8080

        smartrelease resolve github junegunn/fzf "fzf-{major}.{minor}.{patch}-linux_amd64.tar.gz"
    """
    load_dotenv()


main.add_command(serve.serve)
main.add_command(resolve.resolve)


if __name__ == "__main__":
    main()
