"""Last.fm recent listening activity: fetch, parse, display."""

from .errors import (
    BodyReadError,
    FetchError,
    HttpStatusError,
    MalformedPayloadError,
    NoCredentialError,
    TransformError,
    TransportError,
)
from .fetcher import fetch_recent_tracks
from .service import get_recent_display_tracks
from .time_ago import format_time_ago
from .transformer import NOW_PLAYING_LABEL, PLACEHOLDER_IMAGE_URL, TransformResult, transform

__all__ = [
    "BodyReadError",
    "FetchError",
    "HttpStatusError",
    "MalformedPayloadError",
    "NoCredentialError",
    "TransformError",
    "TransportError",
    "fetch_recent_tracks",
    "get_recent_display_tracks",
    "format_time_ago",
    "NOW_PLAYING_LABEL",
    "PLACEHOLDER_IMAGE_URL",
    "TransformResult",
    "transform",
]
