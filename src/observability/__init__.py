# noqa: D104 - package initialization
from .logging import configure_structured_logging  # noqa: F401
from .metrics import (  # noqa: F401
    metrics_blueprint,
    record_recent_tracks_failure,
    record_recent_tracks_request,
    record_skipped_entries,
)
from .tracing import init_tracing  # noqa: F401
