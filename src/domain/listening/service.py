import logging
import time
from datetime import datetime
from typing import Callable, List, Optional

from src.models.dto import DisplayTrack
from src.observability.metrics import (
    record_recent_tracks_failure,
    record_recent_tracks_request,
    record_skipped_entries,
)
from src.observability.tracing import start_span

from .errors import FetchError, TransformError
from .fetcher import DEFAULT_TIMEOUT_SECONDS, LASTFM_API_URL, fetch_recent_tracks
from .transformer import transform

logger = logging.getLogger(__name__)

DEFAULT_USER = "kkyowa"
DEFAULT_LIMIT = 10

Fetcher = Callable[..., str]


def get_recent_display_tracks(
    api_key: Optional[str],
    *,
    user: str = DEFAULT_USER,
    limit: int = DEFAULT_LIMIT,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
    api_url: str = LASTFM_API_URL,
    fetcher: Fetcher = fetch_recent_tracks,
    now: Optional[datetime] = None,
) -> List[DisplayTrack]:
    """Recently played tracks for ``user``, newest first.

    Never raises: a missing key disables the widget and every fetch or parse
    failure degrades to an empty list. Each absorbed failure is logged with
    its ``error_kind`` and counted in the recent tracks failure metric.
    """
    if not api_key or not api_key.strip():
        logger.debug("LAST_FM_KEY not configured; recent tracks widget disabled")
        return []

    started = time.monotonic()
    try:
        with start_span("lastfm.recent_tracks", lastfm_user=user, limit=limit):
            raw_text = fetcher(api_key, user, limit, api_url=api_url, timeout=timeout)
    except FetchError as exc:
        record_recent_tracks_request(time.monotonic() - started)
        _absorb(exc, user)
        return []
    except Exception as exc:
        record_recent_tracks_request(time.monotonic() - started)
        _absorb(exc, user, unexpected=True)
        return []
    record_recent_tracks_request(time.monotonic() - started)

    try:
        result = transform(raw_text, now=now)
    except TransformError as exc:
        _absorb(exc, user)
        return []
    except Exception as exc:
        _absorb(exc, user, unexpected=True)
        return []

    if result.skipped:
        record_skipped_entries(result.skipped)
        logger.info(
            "Skipped %s malformed Last.fm entries for %s",
            result.skipped,
            user,
            extra={"skipped": result.skipped, "lastfm_user": user},
        )
    return result.tracks


def _absorb(exc: Exception, user: str, unexpected: bool = False) -> None:
    kind = "unexpected" if unexpected else getattr(exc, "kind", "unknown")
    record_recent_tracks_failure(kind)
    logger.warning(
        "Recent tracks unavailable (%s): %s",
        kind,
        exc,
        exc_info=unexpected,
        extra={
            "error_kind": kind,
            "status_code": getattr(exc, "status_code", None),
            "lastfm_user": user,
        },
    )


__all__ = ["DEFAULT_USER", "DEFAULT_LIMIT", "get_recent_display_tracks"]
