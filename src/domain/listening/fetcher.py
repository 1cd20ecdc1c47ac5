import logging
import time
from typing import Optional

import requests

from .errors import BodyReadError, HttpStatusError, NoCredentialError, TransportError

logger = logging.getLogger(__name__)

LASTFM_API_URL = "https://ws.audioscrobbler.com/2.0/"
RECENT_TRACKS_METHOD = "user.getrecenttracks"
DEFAULT_TIMEOUT_SECONDS = 5.0
BODY_CHUNK_BYTES = 16 * 1024


def build_recent_tracks_params(api_key: str, user: str, limit: int) -> dict:
    return {
        "method": RECENT_TRACKS_METHOD,
        "user": user,
        "api_key": api_key,
        "format": "json",
        "limit": int(limit),
    }


def _read_body(response, deadline: float) -> str:
    chunks = []
    for chunk in response.iter_content(chunk_size=BODY_CHUNK_BYTES):
        if time.monotonic() > deadline:
            raise BodyReadError("Last.fm response body was still arriving when the timeout ran out")
        chunks.append(chunk)
    raw = b"".join(chunks)
    try:
        return raw.decode(response.encoding or "utf-8", errors="replace")
    except LookupError:
        return raw.decode("utf-8", errors="replace")


def fetch_recent_tracks(
    api_key: Optional[str],
    user: str,
    limit: int,
    *,
    api_url: str = LASTFM_API_URL,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
    session: Optional[requests.Session] = None,
) -> str:
    """Fetch the raw ``user.getrecenttracks`` response body.

    Performs exactly one GET with no retries. The body is returned as text
    without any JSON parsing; callers hand it to the transformer.

    ``timeout`` bounds the whole call. requests applies it to the connect
    wait and to each socket read separately, so the body is read in chunks
    against a deadline as well; a server trickling bytes cannot hold the
    page past it.

    Raises:
        NoCredentialError: ``api_key`` is missing or blank. No request is sent.
        TransportError: the request could not be sent or the connection failed
            (timeouts included).
        HttpStatusError: the response status is not 2xx. The body is not read.
        BodyReadError: a 2xx body could not be read to completion before the
            deadline.
    """
    if not api_key or not api_key.strip():
        raise NoCredentialError()

    params = build_recent_tracks_params(api_key.strip(), user, limit)
    http = session or requests
    deadline = time.monotonic() + timeout
    try:
        # stream=True defers the body download so read failures are distinguishable
        response = http.get(api_url, params=params, timeout=timeout, stream=True)
    except requests.RequestException as exc:
        raise TransportError(f"Last.fm request failed: {exc}") from exc

    with response:
        status = response.status_code
        if not 200 <= status < 300:
            raise HttpStatusError(status)
        try:
            text = _read_body(response, deadline)
        except requests.RequestException as exc:
            raise BodyReadError(f"Failed reading Last.fm response body: {exc}") from exc

    logger.debug("Last.fm returned %s characters for user %s", len(text), user)
    return text


__all__ = [
    "LASTFM_API_URL",
    "RECENT_TRACKS_METHOD",
    "DEFAULT_TIMEOUT_SECONDS",
    "build_recent_tracks_params",
    "fetch_recent_tracks",
]
