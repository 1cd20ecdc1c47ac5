from __future__ import annotations

from typing import Optional

from flask import Blueprint, Response
from prometheus_client import Counter, Histogram, generate_latest

metrics_blueprint = Blueprint("metrics_bp", __name__)

CONTENT_TYPE_LATEST = "text/plain; version=0.0.4; charset=utf-8"

RECENT_TRACKS_REQUESTS = Counter(
    "homepage_recent_tracks_requests_total",
    "Total number of Last.fm recent tracks lookups attempted.",
)
RECENT_TRACKS_FAILURES = Counter(
    "homepage_recent_tracks_failures_total",
    "Recent tracks lookups that degraded to an empty list, by error kind.",
    ["kind"],
)
RECENT_TRACKS_SKIPPED = Counter(
    "homepage_recent_tracks_skipped_entries_total",
    "Last.fm entries dropped because they failed per-entry validation.",
)
RECENT_TRACKS_FETCH_TIME = Histogram(
    "homepage_recent_tracks_fetch_seconds",
    "Wall time of the outbound Last.fm request.",
    buckets=(0.1, 0.25, 0.5, 1, 2, 5, 10, float("inf")),
)


def record_recent_tracks_request(duration_seconds: Optional[float] = None) -> None:
    RECENT_TRACKS_REQUESTS.inc()
    if duration_seconds is not None:
        RECENT_TRACKS_FETCH_TIME.observe(duration_seconds)


def record_recent_tracks_failure(kind: str) -> None:
    RECENT_TRACKS_FAILURES.labels(kind=kind).inc()


def record_skipped_entries(count: int) -> None:
    if count > 0:
        RECENT_TRACKS_SKIPPED.inc(count)


@metrics_blueprint.route("/metrics")
def metrics_endpoint() -> Response:
    return Response(generate_latest(), mimetype=CONTENT_TYPE_LATEST)
