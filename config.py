#!/usr/bin/env python
# config.py
import os

# This assumes config.py is at the root of your project
basedir = os.path.abspath(os.path.dirname(__file__))


def _get_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _get_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _get_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "t", "yes", "y", "on"}


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'change-me-in-production'

    # Last.fm recent tracks widget. No key means the widget is hidden.
    LAST_FM_KEY = os.environ.get('LAST_FM_KEY')
    LASTFM_API_URL = os.getenv('LASTFM_API_URL', 'https://ws.audioscrobbler.com/2.0/')
    LASTFM_USER = os.getenv('LASTFM_USER', 'kkyowa')
    LASTFM_LIMIT = _get_int('LASTFM_LIMIT', 10)
    # Upper bound on how long a page view waits for Last.fm
    LASTFM_TIMEOUT_SECONDS = _get_float('LASTFM_TIMEOUT_SECONDS', 5.0)

    # Page content
    BIRTH_DATE = os.getenv('BIRTH_DATE', '2005-04-24')
    DATA_DIR = os.getenv('DATA_DIR') or os.path.join(basedir, 'data')
    STATIC_DIR = os.path.join(basedir, 'static')
    ASSETS_DIR = os.path.join(basedir, 'assets')

    # Runtime behavior
    # Turn Flask debug on/off from env; default off to avoid noisy console
    DEBUG = _get_bool('DEBUG', False)
    # Control console logging; when disabled, logs go only to file
    ENABLE_CONSOLE_LOGS = _get_bool('ENABLE_CONSOLE_LOGS', False)
    PORT = _get_int('PORT', 3000)

    CONTENT_SECURITY_POLICY = os.getenv(
        'CONTENT_SECURITY_POLICY',
        "default-src 'self'; img-src 'self' https://lastfm.freetls.fastly.net data:",
    )

    # OpenTelemetry (optional)
    OTEL_EXPORTER_OTLP_ENDPOINT = os.getenv('OTEL_EXPORTER_OTLP_ENDPOINT')
    OTEL_EXPORTER_OTLP_HEADERS = os.getenv('OTEL_EXPORTER_OTLP_HEADERS')
    OTEL_EXPORTER_OTLP_INSECURE = _get_bool('OTEL_EXPORTER_OTLP_INSECURE', True)
    OTEL_SERVICE_NAME = os.getenv('OTEL_SERVICE_NAME', 'homepage')
