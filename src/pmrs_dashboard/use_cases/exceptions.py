"""Use-case level exceptions.

These are upstream-fetch errors, not HTTP errors. The proxy use case
absorbs them into a failed envelope; nothing above it ever sees one.
"""


class UpstreamError(Exception):
    """Base class for every failure to obtain a JSON body from the upstream."""


class UpstreamUnavailableError(UpstreamError):
    """Raised when the upstream cannot be reached or does not answer in time."""


class UpstreamStatusError(UpstreamError):
    """Raised when the upstream answers with a non-2xx status."""

    def __init__(self, status_code: int, url: str) -> None:
        super().__init__(f"upstream returned HTTP {status_code} for {url}")
        self.status_code = status_code
        self.url = url


class MalformedUpstreamBodyError(UpstreamError):
    """Raised when the upstream body is not JSON, or is JSON ``null``."""
