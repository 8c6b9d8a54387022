"""smartrelease - redirect to release assets matched by wildcard patterns."""

__version__ = "0.1.0"
