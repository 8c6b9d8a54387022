"""Errors raised while resolving a release asset.

Every error carries the HTTP status the server answers with. None of them is
retried: a request either resolves once or fails once.
"""


class SmartReleaseError(Exception):
    """Base error for smartrelease."""

    status = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class PatternTooLong(SmartReleaseError):
    """Pattern exceeds the configured length once wildcards are removed."""

    status = 414


class InvalidRegex(SmartReleaseError):
    """Substituted pattern is not a valid regular expression."""

    status = 400


class InvalidParameter(SmartReleaseError):
    """A query parameter could not be parsed."""

    status = 400


class NoMatchingAsset(SmartReleaseError):
    """No asset name matched the pattern."""

    status = 404


class InvalidPlatform(SmartReleaseError):
    """Platform is not supported on a custom host."""

    status = 400


class CustomHostsDisabled(SmartReleaseError):
    """Custom host routing is switched off."""

    status = 404


class UpstreamUnavailable(SmartReleaseError):
    """Release data could not be fetched or decoded."""

    status = 502

    def __init__(self, message: str, timeout: bool = False):
        super().__init__(message)
        self.timeout = timeout
        if timeout:
            self.status = 504
