import json
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from pydantic import ValidationError

from src.models.dto import DisplayTrack

from .errors import MalformedPayloadError
from .lastfm_models import RawTrack, RecentTracksResponse
from .time_ago import format_time_ago

logger = logging.getLogger(__name__)

PLACEHOLDER_IMAGE_URL = "/static/img/track-placeholder.svg"
NOW_PLAYING_LABEL = "now playing"
IMAGE_SIZE = "small"


@dataclass
class TransformResult:
    tracks: List[DisplayTrack] = field(default_factory=list)
    # entries dropped because a required field was missing or mistyped
    skipped: int = 0


def select_image_url(track: RawTrack, size: str = IMAGE_SIZE) -> str:
    """Return the URL of the ``size`` image variant, or the placeholder."""
    wanted = size.strip().lower()
    for image in track.images:
        url = (image.url or "").strip()
        if (image.size or "").strip().lower() == wanted and url:
            return url
    return PLACEHOLDER_IMAGE_URL


def to_display_track(track: RawTrack, now: Optional[datetime] = None) -> DisplayTrack:
    if track.date is None:
        time_ago = NOW_PLAYING_LABEL
    else:
        time_ago = format_time_ago(track.date.uts, now)
    return DisplayTrack(
        artist=track.artist.text,
        album=track.album.text,
        name=track.name,
        image_url=select_image_url(track),
        time_ago=time_ago,
    )


def transform(raw_text: str, now: Optional[datetime] = None) -> TransformResult:
    """Turn a raw ``user.getrecenttracks`` body into display records.

    Entry order is preserved exactly as Last.fm returned it (newest first).
    An entry that fails validation on its own is skipped and counted; only a
    body that is not JSON or lacks ``recenttracks.track`` raises.
    """
    try:
        payload = json.loads(raw_text)
    except (TypeError, ValueError, RecursionError) as exc:
        raise MalformedPayloadError(f"Last.fm body is not valid JSON: {exc}") from exc

    try:
        response = RecentTracksResponse.model_validate(payload)
    except ValidationError as exc:
        raise MalformedPayloadError(
            f"Last.fm body does not match the recent tracks schema: {exc.error_count()} error(s)"
        ) from exc

    result = TransformResult()
    for index, entry in enumerate(response.recenttracks.tracks):
        try:
            raw_track = RawTrack.model_validate(entry)
        except ValidationError as exc:
            result.skipped += 1
            logger.debug("Skipping malformed Last.fm entry #%s: %s", index, exc)
            continue
        result.tracks.append(to_display_track(raw_track, now))
    return result


__all__ = [
    "PLACEHOLDER_IMAGE_URL",
    "NOW_PLAYING_LABEL",
    "TransformResult",
    "select_image_url",
    "to_display_track",
    "transform",
]
