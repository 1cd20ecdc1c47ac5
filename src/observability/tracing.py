import contextlib
import os
from typing import ContextManager, Optional

from flask import Flask

try:
    from opentelemetry import trace
    from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
    from opentelemetry.instrumentation.flask import FlaskInstrumentor
    from opentelemetry.sdk.resources import Resource
    from opentelemetry.sdk.trace import TracerProvider
    from opentelemetry.sdk.trace.export import BatchSpanProcessor
except Exception:  # pragma: no cover - optional dependency
    trace = None  # type: ignore
    FlaskInstrumentor = None  # type: ignore

_TRACER_NAME = "homepage"


def init_tracing(app: Flask) -> bool:
    """Instrument the app when an OTLP endpoint is configured.

    Returns True when instrumentation was installed.
    """
    if FlaskInstrumentor is None:  # pragma: no cover - optional dependency
        return False

    endpoint = app.config.get("OTEL_EXPORTER_OTLP_ENDPOINT") or os.getenv(
        "OTEL_EXPORTER_OTLP_ENDPOINT"
    )
    if not endpoint:
        return False

    headers = app.config.get("OTEL_EXPORTER_OTLP_HEADERS") or os.getenv(
        "OTEL_EXPORTER_OTLP_HEADERS"
    )

    resource = Resource.create(
        {
            "service.name": app.config.get("OTEL_SERVICE_NAME", "homepage"),
        }
    )

    provider = TracerProvider(resource=resource)
    exporter = OTLPSpanExporter(
        endpoint=endpoint,
        headers=headers,
        insecure=app.config.get("OTEL_EXPORTER_OTLP_INSECURE", True),
    )
    provider.add_span_processor(BatchSpanProcessor(exporter))
    trace.set_tracer_provider(provider)

    FlaskInstrumentor().instrument_app(app)
    return True


def start_span(name: str, **attributes: Optional[object]) -> ContextManager:
    """Open a span around an outbound call; a no-op without OpenTelemetry."""
    if trace is None:  # pragma: no cover - optional dependency
        return contextlib.nullcontext()
    clean = {key: value for key, value in attributes.items() if value is not None}
    return trace.get_tracer(_TRACER_NAME).start_as_current_span(name, attributes=clean)
