"""Logging setup for the server and CLI."""

import logging

LOG_FORMAT = "[%(asctime)s] - %(levelname)s: %(message)s"


def configure_logging(verbose: bool = False) -> None:
    """Install the service log format on the root logger."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT)
    # Per-request access lines are replaced by our own error log
    logging.getLogger("aiohttp.access").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
