"""Coarse "N units ago" labels for scrobble timestamps."""

from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Optional, Union

INVALID_TIMESTAMP_LABEL = "invalid timestamp"
JUST_NOW_LABEL = "just now"

_MINUTE = 60
_HOUR = 60 * _MINUTE
_DAY = 24 * _HOUR

_UNIX_SECONDS = re.compile(r"[+-]?[0-9]+")


def _parse_unix_seconds(uts: Union[int, str]) -> Optional[datetime]:
    if isinstance(uts, bool):
        return None
    if isinstance(uts, str):
        # plain ASCII decimal only; int() would also take "1_000" and other scripts' digits
        text = uts.strip()
        if not _UNIX_SECONDS.fullmatch(text):
            return None
        seconds = int(text)
    else:
        try:
            seconds = int(uts)
        except (TypeError, ValueError):
            return None
    try:
        return datetime.fromtimestamp(seconds, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return None


def format_time_ago(uts: Union[int, str], now: Optional[datetime] = None) -> str:
    """Render the time elapsed since ``uts`` (Unix seconds) as a short label.

    Buckets are evaluated in order: under a minute is "just now", then whole
    minutes, whole hours, and whole days. There is no weeks/months tier.
    Timestamps in the future (clock skew) count as zero elapsed time.
    Values that are not integers or fall outside the representable datetime
    range yield ``"invalid timestamp"``.
    """
    past = _parse_unix_seconds(uts)
    if past is None:
        return INVALID_TIMESTAMP_LABEL

    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    elapsed = max(0, int((now - past).total_seconds()))

    if elapsed < _MINUTE:
        return JUST_NOW_LABEL
    if elapsed < _HOUR:
        return f"{elapsed // _MINUTE} mins ago"
    if elapsed < _DAY:
        return f"{elapsed // _HOUR} hrs ago"
    return f"{elapsed // _DAY} days ago"


__all__ = ["format_time_ago", "INVALID_TIMESTAMP_LABEL", "JUST_NOW_LABEL"]
