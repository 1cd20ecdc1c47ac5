"""Error taxonomy for the Last.fm recent tracks integration."""

from __future__ import annotations


class RecentTracksError(Exception):
    """Base class; ``kind`` is the stable label used in logs and metrics."""

    kind = "unknown"


class FetchError(RecentTracksError):
    pass


class NoCredentialError(FetchError):
    kind = "no_credential"

    def __init__(self, message: str = "Last.fm API key is not configured") -> None:
        super().__init__(message)


class TransportError(FetchError):
    kind = "transport_failure"


class HttpStatusError(FetchError):
    kind = "http_status"

    def __init__(self, status_code: int) -> None:
        super().__init__(f"Last.fm responded with HTTP {status_code}")
        self.status_code = status_code


class BodyReadError(FetchError):
    kind = "body_read_failure"


class TransformError(RecentTracksError):
    pass


class MalformedPayloadError(TransformError):
    kind = "malformed_payload"


__all__ = [
    "RecentTracksError",
    "FetchError",
    "NoCredentialError",
    "TransportError",
    "HttpStatusError",
    "BodyReadError",
    "TransformError",
    "MalformedPayloadError",
]
